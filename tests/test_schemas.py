"""Tests for scan and domain schema validation."""
import pytest
from pydantic import ValidationError

from shodhai.schemas import (
    Customer, DetectedItem, Product, ProductResponse, ScanIntent, ScanMode, ScanResult
)


class TestScanResultParsing:
    """Scan payloads arrive in the detection service's camelCase shape."""

    def test_accepts_camel_case_keys(self):
        scan = ScanResult.model_validate({
            "mode": "book",
            "intent": "Outgoing",
            "customerName": "Rahim Store",
            "dueAmount": 200,
            "totalAmount": 500,
            "items": [{
                "name": "Milk",
                "quantity": 2,
                "existingProductId": "1",
                "isExisting": True,
                "suggestedSellingPrice": 95
            }]
        })
        assert scan.customer_name == "Rahim Store"
        assert scan.due_amount == 200
        assert scan.items[0].existing_product_id == "1"
        assert scan.items[0].suggested_selling_price == 95

    def test_accepts_snake_case_keys(self):
        scan = ScanResult(intent=ScanIntent.INCOMING, due_amount=10)
        assert scan.due_amount == 10
        assert scan.mode == ScanMode.BOOK

    @pytest.mark.parametrize("raw,expected", [
        ("Incoming", ScanIntent.INCOMING),
        ("outgoing", ScanIntent.OUTGOING),
        ("Sale", ScanIntent.OUTGOING),
        ("purchase", ScanIntent.INCOMING),
        ("AUDIT", ScanIntent.AUDIT),
        ("something else", ScanIntent.AUDIT),
        (None, ScanIntent.AUDIT),
    ])
    def test_intent_normalization(self, raw, expected):
        assert ScanResult.model_validate({"intent": raw}).intent == expected

    def test_dumps_camel_case_by_alias(self):
        scan = ScanResult(intent=ScanIntent.AUDIT, customer_name="X")
        assert "customerName" in scan.model_dump(by_alias=True)


class TestDetectedItemLeniency:

    def test_missing_quantity_defaults_to_one(self):
        assert DetectedItem.model_validate({"name": "Milk", "quantity": None}).quantity == 1

    def test_fractional_quantity_is_rounded(self):
        assert DetectedItem(name="Milk", quantity=2.6).quantity == 3

    def test_negative_quantity_is_floored(self):
        assert DetectedItem(name="Milk", quantity=-4).quantity == 0

    def test_infinite_quantity_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            ScanResult.model_validate_json('{"intent": "Incoming", "items": [{"name": "a", "quantity": 1e400}]}')

    def test_non_numeric_quantity_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            DetectedItem.model_validate({"name": "Milk", "quantity": [2]})


class TestDomainRecords:

    def test_product_is_frozen(self):
        product = Product(id="p1", name="Milk", quantity=3)
        with pytest.raises(ValidationError):
            product.quantity = 5

    def test_product_rejects_negative_quantity(self):
        with pytest.raises(ValidationError):
            Product(id="p1", name="Milk", quantity=-1)

    @pytest.mark.parametrize("quantity,min_level,status", [
        (0, 5, "out_of_stock"),
        (5, 5, "low_stock"),
        (6, 5, "in_stock"),
    ])
    def test_stock_status(self, quantity, min_level, status):
        product = Product(id="p1", name="Milk", quantity=quantity, min_stock_level=min_level)
        response = ProductResponse.from_product(product)
        assert response.stock_status == status
        assert response.is_low_stock == (status != "in_stock")

    def test_customer_missing_due_is_zero(self):
        assert Customer(id="c1", name="Rahim", current_due=None).current_due == 0
