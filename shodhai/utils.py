"""Identifier, clock and price helpers shared by the stock logic."""
import itertools
import threading
import uuid
from datetime import datetime, timezone
from typing import Optional, Protocol

from .schemas.product import Category, DEFAULT_CATEGORY

COST_PRICE_RATIO = 0.8

_CATEGORY_LOOKUP = {c.value.lower(): c for c in Category}


class IdGenerator(Protocol):
    def new_id(self, prefix: str) -> str:
        ...


class UuidIdGenerator:
    """Random identifiers, unique across processes."""

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"


class SequentialIdGenerator:
    """
    Monotonic counter identifiers: p-scan-1, p-scan-2, ...
    One counter is shared by all prefixes so ids never repeat within a generator.
    """

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def new_id(self, prefix: str) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{prefix}-{n}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def derive_cost_price(suggested_selling_price: Optional[float]) -> float:
    """80% of the suggested selling price; 0 when nothing was suggested."""
    if not suggested_selling_price or suggested_selling_price < 0:
        return 0.0
    return suggested_selling_price * COST_PRICE_RATIO


def resolve_category(raw: Optional[str]) -> Category:
    """Map free-text category onto the fixed set, falling back to the first one."""
    if isinstance(raw, Category):
        return raw
    return _CATEGORY_LOOKUP.get((raw or "").strip().lower(), DEFAULT_CATEGORY)
