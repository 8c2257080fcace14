"""Shared test fixtures for all tests."""
import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient

from shodhai.api.deps import get_detection_service, get_store
from shodhai.main import app
from shodhai.schemas import (
    Category, Customer, DetectedItem, Order, OrderItem, OrderStatus, PaymentStatus,
    Product, ScanIntent, ScanMode, ScanResult
)
from shodhai.store import ShopStore
from shodhai.utils import SequentialIdGenerator
from shodhai.vision import DetectionService

FIXED_NOW = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)

ADMIN_AUTH = ("admin", "shodhai2025")


@pytest.fixture
def catalog():
    """Small catalog used across reconciliation and store tests."""
    return [
        Product(id="p1", name="Milk", category=Category.DAIRY, cost_price=85, selling_price=95, quantity=10, min_stock_level=5),
        Product(id="p2", name="Teer Soyabean Oil 5L", category=Category.COOKING_OIL, cost_price=780, selling_price=820, quantity=5, min_stock_level=10),
        Product(id="p3", name="ACI Salt 1kg", category=Category.SPICES, cost_price=35, selling_price=40, quantity=100, min_stock_level=20),
    ]


@pytest.fixture
def customers():
    return [
        Customer(id="c1", name="Rahim Store", phone="01711223344", address="Dhanmondi, Dhaka"),
        Customer(id="c2", name="Mayer Doa General Store", phone="01855667788", address="Mirpur 10, Dhaka",
                 order_history=("ord-102",), current_due=540),
    ]


@pytest.fixture
def orders():
    return [
        Order(
            id="ord-102",
            customer_id="c2",
            customer_name="Mayer Doa General Store",
            items=(OrderItem(product_id="p2", name="Teer Soyabean Oil 5L", quantity=2, price=820),),
            total_amount=1640,
            status=OrderStatus.PROCESSING,
            payment_status=PaymentStatus.PARTIAL,
            created_at=FIXED_NOW
        ),
    ]


@pytest.fixture
def id_generator():
    return SequentialIdGenerator()


@pytest.fixture
def store(catalog, orders, customers, id_generator):
    """Fresh shop state with deterministic ids and clock."""
    return ShopStore(catalog, orders, customers, id_generator=id_generator, clock=lambda: FIXED_NOW)


def _make_scan(intent, *items, **kwargs) -> ScanResult:
    """Build a scan result from (name, quantity, existing_product_id) tuples or DetectedItems."""
    detected = []
    for item in items:
        if isinstance(item, DetectedItem):
            detected.append(item)
        else:
            name, qty, pid = item
            detected.append(DetectedItem(name=name, quantity=qty, existing_product_id=pid, is_existing=pid is not None))
    return ScanResult(mode=kwargs.pop("mode", ScanMode.BOOK), intent=intent, items=detected, **kwargs)


class FakeDetectionService(DetectionService):
    """Returns a canned scan and records what it was asked."""

    def __init__(self, result: ScanResult):
        self.result = result
        self.calls = []

    async def detect(self, image, mode, mime_type="image/jpeg"):
        self.calls.append((image, mode, mime_type))
        return self.result


@pytest.fixture
def fake_detector():
    return FakeDetectionService(_make_scan(
        ScanIntent.OUTGOING,
        ("milk", 2, None),
        ("Mystery Biscuit", 3, None),
        customer_name="Rahim Store"
    ))


@pytest.fixture
def client(store, fake_detector):
    """Test client bound to the fixture store and a fake detector."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_detection_service] = lambda: fake_detector
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_scan():
    """Factory for scan results."""
    return _make_scan


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def auth():
    """Basic auth credentials for API tests."""
    return ADMIN_AUTH
