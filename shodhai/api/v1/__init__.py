"""API v1 Router."""
from fastapi import APIRouter

from shodhai.api.v1 import products, orders, customers, scan, dashboard

api_router = APIRouter(prefix="/api/v1")

# Include all route modules
api_router.include_router(products.router)
api_router.include_router(orders.router)
api_router.include_router(customers.router)
api_router.include_router(scan.router)
api_router.include_router(dashboard.router)

__all__ = ["api_router"]
