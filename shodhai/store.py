"""
In-memory shop state: catalog, order ledger and customer registry.

Every mutation runs under one lock, so a reconciliation result is applied as
a single swap (catalog replaced, order prepended, due delta added) and no
reader sees a half-applied scan.
"""
import threading
from datetime import datetime
from typing import Callable, Iterable, Optional

from .error_handlers import DuplicateResourceError, ResourceNotFoundError
from .logging_config import get_logger
from .reconcile import reconcile
from .schemas import (
    Category, Customer, CustomerUpdate, Order, OrderStatus, OrderUpdate, Product,
    ProductCreate, ProductUpdate, ReconcileResult, ScanIntent, ScanResult
)
from .utils import IdGenerator, UuidIdGenerator, utcnow

logger = get_logger("store")


class ShopStore:
    """Session state of one shop."""

    def __init__(
        self,
        products: Iterable[Product] = (),
        orders: Iterable[Order] = (),
        customers: Iterable[Customer] = (),
        id_generator: Optional[IdGenerator] = None,
        clock: Callable[[], datetime] = utcnow
    ):
        self._products: list[Product] = list(products)
        self._orders: list[Order] = list(orders)
        self._customers: list[Customer] = list(customers)
        self._ids = id_generator or UuidIdGenerator()
        self._clock = clock
        self._lock = threading.RLock()

    # ---------------------------------------------------------------- products

    def list_products(
        self,
        q: Optional[str] = None,
        category: Optional[Category] = None,
        low_stock_only: bool = False
    ) -> list[Product]:
        with self._lock:
            products = list(self._products)
        if q:
            needle = q.strip().lower()
            products = [p for p in products if needle in p.name.lower() or needle in p.category.value.lower()]
        if category:
            products = [p for p in products if p.category == category]
        if low_stock_only:
            products = [p for p in products if p.is_low_stock]
        return products

    def get_product(self, product_id: str) -> Product:
        with self._lock:
            for p in self._products:
                if p.id == product_id:
                    return p
        raise ResourceNotFoundError("Product", product_id)

    def add_product(self, data: ProductCreate) -> Product:
        with self._lock:
            wanted = data.name.strip().lower()
            if any(p.name.strip().lower() == wanted for p in self._products):
                raise DuplicateResourceError("Product", "name", data.name)
            taken = {p.id for p in self._products}
            new_id = self._ids.new_id("p")
            while new_id in taken:
                new_id = self._ids.new_id("p")
            product = Product(id=new_id, **data.model_dump())
            self._products.append(product)
        logger.info(f"[STOCK] Added product_id={product.id} name='{product.name}'")
        return product

    def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            idx = self._product_index(product_id)
            product = Product(**{**self._products[idx].model_dump(), **changes})
            self._products[idx] = product
        logger.info(f"[STOCK] Updated product_id={product_id} fields={sorted(changes)}")
        return product

    def delete_product(self, product_id: str) -> None:
        with self._lock:
            idx = self._product_index(product_id)
            del self._products[idx]
        logger.info(f"[STOCK] Deleted product_id={product_id}")

    def _product_index(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise ResourceNotFoundError("Product", product_id)

    # ------------------------------------------------------------------ orders

    def list_orders(self, customer_id: Optional[str] = None, status: Optional[OrderStatus] = None) -> list[Order]:
        with self._lock:
            orders = list(self._orders)
        if customer_id:
            orders = [o for o in orders if o.customer_id == customer_id]
        if status:
            orders = [o for o in orders if o.status == status]
        return orders

    def get_order(self, order_id: str) -> Order:
        with self._lock:
            for o in self._orders:
                if o.id == order_id:
                    return o
        raise ResourceNotFoundError("Order", order_id)

    def update_order(self, order_id: str, data: OrderUpdate) -> Order:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            for i, o in enumerate(self._orders):
                if o.id == order_id:
                    order = o.model_copy(update=changes)
                    self._orders[i] = order
                    break
            else:
                raise ResourceNotFoundError("Order", order_id)
        logger.info(f"[ORDER] Updated order_id={order_id} fields={sorted(changes)}")
        return order

    # --------------------------------------------------------------- customers

    def list_customers(self, with_due_only: bool = False) -> list[Customer]:
        with self._lock:
            customers = list(self._customers)
        if with_due_only:
            customers = [c for c in customers if c.current_due > 0]
        return customers

    def get_customer(self, customer_id: str) -> Customer:
        with self._lock:
            return self._customers[self._customer_index(customer_id)]

    def update_customer(self, customer_id: str, data: CustomerUpdate) -> Customer:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            idx = self._customer_index(customer_id)
            customer = self._customers[idx].model_copy(update=changes)
            self._customers[idx] = customer
        return customer

    def receive_payment(self, customer_id: str, amount: float) -> Customer:
        """Reduce a customer's baki by amount, never below zero."""
        with self._lock:
            idx = self._customer_index(customer_id)
            current = self._customers[idx]
            customer = current.model_copy(update={"current_due": max(0.0, current.current_due - amount)})
            self._customers[idx] = customer
        logger.info(
            f"[BAKI] Received {amount} from customer_id={customer_id}, "
            f"due {current.current_due} -> {customer.current_due}"
        )
        return customer

    def select_customer(self, customer_name: Optional[str] = None) -> Optional[Customer]:
        """Customer named on the scan if registered, else the first customer."""
        with self._lock:
            if customer_name:
                wanted = customer_name.strip().lower()
                for c in self._customers:
                    if c.name.strip().lower() == wanted:
                        return c
            return self._customers[0] if self._customers else None

    def _customer_index(self, customer_id: str) -> int:
        for i, c in enumerate(self._customers):
            if c.id == customer_id:
                return i
        raise ResourceNotFoundError("Customer", customer_id)

    # -------------------------------------------------------------------- scan

    def apply_scan(self, scan: ScanResult, customer_id: Optional[str] = None) -> ReconcileResult:
        """
        Reconcile a confirmed scan against the current catalog and commit it.

        The customer is the one given by id, else the one named on the scan,
        else the first registered customer.
        """
        with self._lock:
            if customer_id:
                customer = self.get_customer(customer_id)
            else:
                customer = self.select_customer(scan.customer_name)

            if customer is None and scan.intent == ScanIntent.OUTGOING and scan.items:
                raise ResourceNotFoundError("Customer", scan.customer_name or "default")

            result = reconcile(
                self._products,
                scan,
                customer,
                id_generator=self._ids,
                clock=self._clock
            )

            self._products = list(result.updated_catalog)
            if result.new_order is not None:
                order = result.new_order
                self._orders.insert(0, order)
                idx = self._customer_index(order.customer_id)
                current = self._customers[idx]
                self._customers[idx] = current.model_copy(update={
                    "order_history": current.order_history + (order.id,),
                    "current_due": current.current_due + result.customer_due_delta
                })

        logger.info(
            f"[SCAN] Applied {scan.intent.value} scan: items={len(scan.items)}, "
            f"created_products={len(result.created_product_ids)}, "
            f"order={result.new_order.id if result.new_order else None}"
        )
        return result

    # ---------------------------------------------------------------- snapshot

    def snapshot(self) -> tuple[list[Product], list[Order], list[Customer]]:
        with self._lock:
            return list(self._products), list(self._orders), list(self._customers)
