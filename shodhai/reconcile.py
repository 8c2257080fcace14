"""
Stock reconciliation: merge a confirmed scan into the catalog.

Incoming scans restock, outgoing scans sell (and produce one order), audit
scans only confirm presence. The catalog passed in is never mutated; the
caller swaps in ``ReconcileResult.updated_catalog`` and applies the order and
due delta itself.
"""
from datetime import datetime
from typing import Callable, Optional, Sequence

from .logging_config import get_logger
from .schemas import (
    Customer, DetectedItem, Order, OrderItem, OrderStatus, PaymentStatus,
    Product, ReconcileResult, ScanIntent, ScanResult, StockShortfall
)
from .utils import IdGenerator, UuidIdGenerator, derive_cost_price, resolve_category, utcnow

logger = get_logger("reconcile")

DEFAULT_MIN_STOCK_LEVEL = 5
PRODUCT_ID_PREFIX = "p-scan"
ORDER_ID_PREFIX = "ord-ai"
UNNAMED_PRODUCT = "Unnamed item"
MAX_NAME_LENGTH = 500


def _fresh_id(id_generator: IdGenerator, prefix: str, taken: set) -> str:
    new_id = id_generator.new_id(prefix)
    while new_id in taken:
        new_id = id_generator.new_id(prefix)
    taken.add(new_id)
    return new_id


def _product_from_item(item: DetectedItem, product_id: str) -> Product:
    suggested = item.suggested_selling_price
    name = (item.name or "").strip()[:MAX_NAME_LENGTH] or UNNAMED_PRODUCT
    selling_price = suggested if suggested and suggested > 0 else 0.0
    return Product(
        id=product_id,
        name=name,
        category=resolve_category(item.category),
        cost_price=derive_cost_price(suggested),
        selling_price=selling_price,
        quantity=item.quantity,
        min_stock_level=DEFAULT_MIN_STOCK_LEVEL
    )


def reconcile(
    catalog: Sequence[Product],
    scan_result: ScanResult,
    default_customer: Optional[Customer],
    id_generator: Optional[IdGenerator] = None,
    clock: Callable[[], datetime] = utcnow
) -> ReconcileResult:
    """
    Apply a scan result to a catalog snapshot.

    Items are processed in order. An item whose ``existing_product_id`` is in
    the catalog moves that product's stock (Incoming adds, Outgoing subtracts
    floored at zero, Audit leaves it); any other item becomes a new product.
    Every item yields one order line priced at the product's selling price.

    An order is created only for Outgoing scans with at least one line. Its
    payment status is Due when the scan carries a non-zero due amount, and
    that amount is reported as ``customer_due_delta``.

    Args:
        catalog: Current products; ids must be unique
        scan_result: Reviewed scan to apply
        default_customer: Customer billed for an Outgoing scan
        id_generator: Source of new product and order ids
        clock: Source of the order timestamp

    Returns:
        ReconcileResult with the replacement catalog and proposed changes
    """
    id_generator = id_generator or UuidIdGenerator()
    intent = scan_result.intent

    updated = list(catalog)
    index_by_id = {p.id: i for i, p in enumerate(updated)}
    taken_ids = set(index_by_id)

    lines: list[OrderItem] = []
    created: list[str] = []
    shortfalls: list[StockShortfall] = []

    for item in scan_result.items:
        idx = index_by_id.get(item.existing_product_id) if item.existing_product_id else None

        if idx is not None:
            product = updated[idx]
            if intent == ScanIntent.INCOMING:
                product = product.model_copy(update={"quantity": product.quantity + item.quantity})
            elif intent == ScanIntent.OUTGOING:
                if item.quantity > product.quantity:
                    shortfalls.append(StockShortfall(
                        product_id=product.id,
                        requested=item.quantity,
                        available=product.quantity
                    ))
                    logger.warning(
                        f"[STOCK] Oversold product_id={product.id}: requested={item.quantity}, "
                        f"available={product.quantity}; clamped to 0"
                    )
                product = product.model_copy(update={"quantity": max(0, product.quantity - item.quantity)})
            updated[idx] = product
        else:
            product = _product_from_item(item, _fresh_id(id_generator, PRODUCT_ID_PREFIX, taken_ids))
            index_by_id[product.id] = len(updated)
            updated.append(product)
            created.append(product.id)
            logger.info(f"[STOCK] Created product_id={product.id} from scanned item '{item.name}'")

        lines.append(OrderItem(
            product_id=product.id,
            name=product.name,
            quantity=item.quantity,
            price=product.selling_price
        ))

    new_order = None
    due_delta = 0.0
    if intent == ScanIntent.OUTGOING and lines:
        if default_customer is None:
            raise ValueError("An outgoing scan needs a customer to bill")

        due = scan_result.due_amount
        # Zero or negative dues are treated as absent
        due = due if due and due > 0 else 0.0
        new_order = Order(
            id=id_generator.new_id(ORDER_ID_PREFIX),
            customer_id=default_customer.id,
            customer_name=default_customer.name,
            items=tuple(lines),
            total_amount=sum(line.subtotal for line in lines),
            status=OrderStatus.PROCESSING,
            payment_status=PaymentStatus.DUE if due > 0 else PaymentStatus.PAID,
            created_at=clock()
        )
        due_delta = due
        logger.info(
            f"[ORDER] Created order_id={new_order.id} for customer_id={default_customer.id}, "
            f"lines={len(lines)}, total={new_order.total_amount}, due_delta={due_delta}"
        )

    return ReconcileResult(
        updated_catalog=updated,
        new_order=new_order,
        customer_due_delta=due_delta,
        order_lines=lines,
        created_product_ids=created,
        shortfalls=shortfalls
    )
