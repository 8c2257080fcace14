"""Demo shop data loaded when SEED_DEMO_DATA is enabled."""
from datetime import datetime, timedelta, timezone

from .schemas import (
    Category, Customer, Order, OrderItem, OrderStatus, PaymentStatus, Product
)


def demo_products() -> list[Product]:
    return [
        Product(id="1", name="Fresh Milk 1L", category=Category.DAIRY, cost_price=85, selling_price=95, quantity=50, min_stock_level=10),
        Product(id="2", name="Teer Soyabean Oil 5L", category=Category.COOKING_OIL, cost_price=780, selling_price=820, quantity=5, min_stock_level=10),
        Product(id="3", name="PRAN Frooto 250ml", category=Category.BEVERAGES, cost_price=22, selling_price=25, quantity=120, min_stock_level=24),
        Product(id="4", name="Chashi Aromatic Rice 5kg", category=Category.RICE, cost_price=550, selling_price=620, quantity=30, min_stock_level=5),
        Product(id="5", name="ACI Salt 1kg", category=Category.SPICES, cost_price=35, selling_price=40, quantity=100, min_stock_level=20),
    ]


def demo_customers() -> list[Customer]:
    return [
        Customer(id="c1", name="Rahim Store", phone="01711223344", address="Dhanmondi, Dhaka", order_history=("ord-101",), current_due=0),
        Customer(id="c2", name="Mayer Doa General Store", phone="01855667788", address="Mirpur 10, Dhaka", order_history=("ord-102",), current_due=540),
        Customer(id="c3", name="Popular Super Shop", phone="01922334455", address="Banani, Dhaka", current_due=2100),
    ]


def demo_orders(now: datetime = None) -> list[Order]:
    now = now or datetime.now(timezone.utc)
    return [
        Order(
            id="ord-102",
            customer_id="c2",
            customer_name="Mayer Doa General Store",
            items=(OrderItem(product_id="2", name="Teer Soyabean Oil 5L", quantity=2, price=820),),
            total_amount=1640,
            status=OrderStatus.PROCESSING,
            payment_status=PaymentStatus.PARTIAL,
            created_at=now - timedelta(hours=5)
        ),
        Order(
            id="ord-101",
            customer_id="c1",
            customer_name="Rahim Store",
            items=(OrderItem(product_id="1", name="Fresh Milk 1L", quantity=10, price=95),),
            total_amount=950,
            status=OrderStatus.DELIVERED,
            payment_status=PaymentStatus.PAID,
            created_at=now - timedelta(days=2)
        ),
    ]
