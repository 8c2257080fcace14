"""Tests for in-memory shop state and scan application."""
import pytest

from shodhai.error_handlers import DuplicateResourceError, ResourceNotFoundError
from shodhai.schemas import (
    Category, CustomerUpdate, OrderStatus, OrderUpdate, PaymentStatus,
    ProductCreate, ProductUpdate, ScanIntent
)
from shodhai.store import ShopStore


class TestCatalog:
    """Tests for product CRUD."""

    def test_add_product_assigns_id(self, store):
        product = store.add_product(ProductCreate(name="Ghee 500g", category=Category.DAIRY, selling_price=650))
        assert product.id == "p-1"
        assert store.get_product("p-1").name == "Ghee 500g"

    def test_add_duplicate_name_raises(self, store):
        with pytest.raises(DuplicateResourceError):
            store.add_product(ProductCreate(name="  milk "))
        assert len(store.list_products()) == 3

    def test_update_only_changes_given_fields(self, store):
        updated = store.update_product("p1", ProductUpdate(selling_price=100))
        assert updated.selling_price == 100
        assert updated.quantity == 10
        assert updated.name == "Milk"

    def test_delete_product(self, store):
        store.delete_product("p3")
        with pytest.raises(ResourceNotFoundError):
            store.get_product("p3")

    def test_missing_product_raises(self, store):
        with pytest.raises(ResourceNotFoundError):
            store.update_product("nope", ProductUpdate(quantity=1))

    def test_search_and_filters(self, store):
        assert [p.id for p in store.list_products(q="salt")] == ["p3"]
        assert [p.id for p in store.list_products(category=Category.COOKING_OIL)] == ["p2"]
        assert [p.id for p in store.list_products(low_stock_only=True)] == ["p2"]


class TestOrdersAndCustomers:

    def test_update_order_status(self, store):
        order = store.update_order("ord-102", OrderUpdate(status=OrderStatus.DELIVERED, payment_status=PaymentStatus.PAID))
        assert order.status == OrderStatus.DELIVERED
        assert order.payment_status == PaymentStatus.PAID
        assert order.total_amount == 1640

    def test_update_missing_order_raises(self, store):
        with pytest.raises(ResourceNotFoundError):
            store.update_order("missing", OrderUpdate(status=OrderStatus.READY))

    def test_receive_payment_reduces_due(self, store):
        assert store.receive_payment("c2", 200).current_due == 340

    def test_receive_payment_floors_at_zero(self, store):
        assert store.receive_payment("c2", 10_000).current_due == 0

    def test_update_customer_contact(self, store):
        customer = store.update_customer("c1", CustomerUpdate(phone="01700000000"))
        assert customer.phone == "01700000000"
        assert customer.name == "Rahim Store"

    def test_list_customers_with_due(self, store):
        assert [c.id for c in store.list_customers(with_due_only=True)] == ["c2"]

    def test_select_customer_by_name_else_first(self, store):
        assert store.select_customer("mayer doa general store").id == "c2"
        assert store.select_customer("Unknown Shop").id == "c1"
        assert store.select_customer(None).id == "c1"


class TestApplyScan:
    """Tests for committing reconciliation results."""

    def test_outgoing_scan_commits_everything(self, store, make_scan, fixed_now):
        scan = make_scan(ScanIntent.OUTGOING, ("Milk", 3, "p1"), customer_name="Mayer Doa General Store", due_amount=100)

        result = store.apply_scan(scan)

        assert store.get_product("p1").quantity == 7
        orders = store.list_orders()
        assert orders[0].id == result.new_order.id
        assert orders[0].created_at == fixed_now
        customer = store.get_customer("c2")
        assert customer.current_due == 640
        assert customer.order_history == ("ord-102", result.new_order.id)

    def test_explicit_customer_id_wins(self, store, make_scan):
        scan = make_scan(ScanIntent.OUTGOING, ("Milk", 1, "p1"), customer_name="Mayer Doa General Store")

        result = store.apply_scan(scan, customer_id="c1")

        assert result.new_order.customer_id == "c1"
        assert store.get_customer("c2").order_history == ("ord-102",)

    def test_incoming_scan_adds_new_products(self, store, make_scan):
        scan = make_scan(ScanIntent.INCOMING, ("Milk", 5, "p1"), ("Ghee", 2, None))

        result = store.apply_scan(scan)

        assert store.get_product("p1").quantity == 15
        assert store.get_product(result.created_product_ids[0]).name == "Ghee"
        assert len(store.list_orders()) == 1

    def test_audit_scan_changes_nothing(self, store, make_scan):
        before = store.snapshot()
        scan = make_scan(ScanIntent.AUDIT, ("Milk", 5, "p1"))

        store.apply_scan(scan)
        store.apply_scan(scan)

        assert store.snapshot() == before

    def test_outgoing_without_customers_raises(self, catalog, make_scan):
        store = ShopStore(products=catalog)
        scan = make_scan(ScanIntent.OUTGOING, ("Milk", 1, "p1"))

        with pytest.raises(ResourceNotFoundError):
            store.apply_scan(scan)
        assert store.get_product("p1").quantity == 10

    def test_unknown_customer_id_raises(self, store, make_scan):
        scan = make_scan(ScanIntent.OUTGOING, ("Milk", 1, "p1"))

        with pytest.raises(ResourceNotFoundError):
            store.apply_scan(scan, customer_id="c99")
