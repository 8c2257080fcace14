"""
Pydantic schemas for AI scan results and reconciliation output.

Scan payloads come straight from the detection service, so they accept the
camelCase keys it emits as well as snake_case.
"""
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from shodhai.schemas.product import Product
from shodhai.schemas.order import Order, OrderItem


class ScanMode(str, Enum):
    """What was photographed."""
    PRODUCT = "product"
    BOOK = "book"


class ScanIntent(str, Enum):
    """Stock movement implied by a scan."""
    INCOMING = "Incoming"
    OUTGOING = "Outgoing"
    AUDIT = "Audit"


# Free-text intents the detection model is known to produce
_INTENT_SYNONYMS = {
    "incoming": ScanIntent.INCOMING,
    "purchase": ScanIntent.INCOMING,
    "restock": ScanIntent.INCOMING,
    "outgoing": ScanIntent.OUTGOING,
    "sale": ScanIntent.OUTGOING,
    "sales": ScanIntent.OUTGOING,
    "audit": ScanIntent.AUDIT,
}


class _ScanModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DetectedItem(_ScanModel):
    """One recognized line from a label or khata scan."""
    name: str
    brand: Optional[str] = None
    quantity: int = Field(default=1, ge=0)
    price: Optional[float] = None
    category: Optional[str] = None
    suggested_selling_price: Optional[float] = None
    confidence: float = 0.0
    existing_product_id: Optional[str] = None
    is_existing: bool = False

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value):
        # AI output sometimes carries null or fractional counts
        if value is None:
            return 1
        try:
            return max(0, int(round(float(value))))
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"quantity must be a finite number, got {value!r}")


class ScanResult(_ScanModel):
    """A reviewable draft produced by the detection service."""
    mode: ScanMode = ScanMode.BOOK
    intent: ScanIntent = ScanIntent.AUDIT
    items: list[DetectedItem] = Field(default_factory=list)
    summary: str = ""
    customer_name: Optional[str] = None
    due_amount: Optional[float] = None
    total_amount: Optional[float] = None

    @field_validator("intent", mode="before")
    @classmethod
    def normalize_intent(cls, value):
        if isinstance(value, ScanIntent):
            return value
        return _INTENT_SYNONYMS.get(str(value or "").strip().lower(), ScanIntent.AUDIT)


class ScanConfirmRequest(BaseModel):
    """Body of a scan confirmation."""
    scan: ScanResult
    customer_id: Optional[str] = None


class StockShortfall(BaseModel):
    """An outgoing quantity that exceeded stock and was clamped to zero."""
    product_id: str
    requested: int
    available: int


class ReconcileResult(BaseModel):
    """Output of one reconciliation."""
    updated_catalog: list[Product]
    new_order: Optional[Order] = None
    customer_due_delta: float = 0.0
    order_lines: list[OrderItem] = Field(default_factory=list)
    created_product_ids: list[str] = Field(default_factory=list)
    shortfalls: list[StockShortfall] = Field(default_factory=list)
