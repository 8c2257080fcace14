"""
Pydantic schemas for customers and their dues (baki).
"""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class Customer(BaseModel):
    """Customer registry entry."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    phone: str = ""
    address: str = ""
    order_history: tuple[str, ...] = ()
    current_due: float = Field(default=0.0, ge=0)

    @field_validator("current_due", mode="before")
    @classmethod
    def missing_due_is_zero(cls, value):
        return 0.0 if value is None else value


class CustomerUpdate(BaseModel):
    """Schema for editing customer contact details."""
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    address: Optional[str] = None


class PaymentReceipt(BaseModel):
    """Money received against a customer's due balance."""
    amount: float = Field(..., gt=0)
