"""
Order ledger API endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends

from shodhai.api.deps import get_store
from shodhai.schemas import Order, OrderStatus, OrderUpdate
from shodhai.store import ShopStore

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.get("", response_model=list[Order])
def list_orders(
    customer_id: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    store: ShopStore = Depends(get_store)
):
    """List orders, newest first."""
    return store.list_orders(customer_id=customer_id, status=status)


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: str, store: ShopStore = Depends(get_store)):
    return store.get_order(order_id)


@router.patch("/{order_id}", response_model=Order)
def update_order(order_id: str, order_data: OrderUpdate, store: ShopStore = Depends(get_store)):
    """Change order or payment status. Line items cannot be edited."""
    return store.update_order(order_id, order_data)
