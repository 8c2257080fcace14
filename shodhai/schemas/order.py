"""
Pydantic schemas for orders and their line items.
"""
from typing import Optional
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class OrderStatus(str, Enum):
    """Fulfilment status of an order."""
    PROCESSING = "Processing"
    READY = "Ready"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentStatus(str, Enum):
    """Payment status of an order."""
    PAID = "Paid"
    PARTIAL = "Partial"
    DUE = "Due"


class OrderItem(BaseModel):
    """Line item snapshot; not a live reference to the product."""
    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    quantity: int = Field(..., ge=0)
    price: float = Field(..., ge=0)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class Order(BaseModel):
    """Order ledger entry."""
    model_config = ConfigDict(frozen=True)

    id: str
    customer_id: str
    customer_name: str
    items: tuple[OrderItem, ...] = ()
    total_amount: float = Field(default=0.0, ge=0)
    status: OrderStatus = OrderStatus.PROCESSING
    payment_status: PaymentStatus = PaymentStatus.PAID
    created_at: datetime


class OrderUpdate(BaseModel):
    """Schema for updating order status fields. Line items are immutable."""
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
