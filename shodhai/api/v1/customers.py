"""
Customer registry and baki API endpoints.
"""
from fastapi import APIRouter, Depends

from shodhai.api.deps import get_store
from shodhai.schemas import Customer, CustomerUpdate, Order, PaymentReceipt
from shodhai.store import ShopStore

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=list[Customer])
def list_customers(with_due: bool = False, store: ShopStore = Depends(get_store)):
    """List customers; **with_due** keeps only those with outstanding baki."""
    return store.list_customers(with_due_only=with_due)


@router.get("/{customer_id}", response_model=Customer)
def get_customer(customer_id: str, store: ShopStore = Depends(get_store)):
    return store.get_customer(customer_id)


@router.put("/{customer_id}", response_model=Customer)
def update_customer(customer_id: str, customer_data: CustomerUpdate, store: ShopStore = Depends(get_store)):
    return store.update_customer(customer_id, customer_data)


@router.get("/{customer_id}/orders", response_model=list[Order])
def customer_orders(customer_id: str, store: ShopStore = Depends(get_store)):
    store.get_customer(customer_id)
    return store.list_orders(customer_id=customer_id)


@router.post("/{customer_id}/payments", response_model=Customer)
def receive_payment(customer_id: str, payment: PaymentReceipt, store: ShopStore = Depends(get_store)):
    """Record money received; the due balance never goes below zero."""
    return store.receive_payment(customer_id, payment.amount)
