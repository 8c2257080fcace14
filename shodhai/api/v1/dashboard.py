"""
Dashboard API endpoints.
"""
from fastapi import APIRouter, Depends

from shodhai.api.deps import get_store
from shodhai.logic import analytics_summary, dashboard_summary, sales_by_day
from shodhai.schemas import AnalyticsSummary, DailySales, DashboardSummary
from shodhai.store import ShopStore

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def get_summary(store: ShopStore = Depends(get_store)):
    """Today's sales, profit, baki and low stock."""
    products, orders, customers = store.snapshot()
    return dashboard_summary(products, orders, customers)


@router.get("/analytics", response_model=AnalyticsSummary)
def get_analytics(store: ShopStore = Depends(get_store)):
    products, orders, customers = store.snapshot()
    return analytics_summary(products, orders, customers)


@router.get("/sales", response_model=list[DailySales])
def get_sales(store: ShopStore = Depends(get_store)):
    """Daily revenue series."""
    _, orders, _ = store.snapshot()
    return sales_by_day(orders)
