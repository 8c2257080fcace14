"""Dashboard and analytics read models computed from a store snapshot."""
from datetime import date, datetime
from typing import Optional, Sequence

import pandas as pd

from .schemas import (
    AnalyticsSummary, CategoryDistribution, Customer, DailySales, DashboardSummary,
    LowStockItem, MarginRank, Order, OrderStatus, Product, TopItem
)
from .utils import utcnow

TOP_MARGIN_COUNT = 6
TURNOVER_FACTOR = 1.5

_LINE_COLUMNS = ["order_id", "day", "product_id", "name", "quantity", "price"]


def _orders_frame(orders: Sequence[Order]) -> pd.DataFrame:
    """One row per non-cancelled order."""
    rows = [
        {"order_id": o.id, "day": o.created_at.date(), "total": o.total_amount}
        for o in orders if o.status != OrderStatus.CANCELLED
    ]
    return pd.DataFrame(rows, columns=["order_id", "day", "total"])


def _lines_frame(orders: Sequence[Order]) -> pd.DataFrame:
    """One row per line of every non-cancelled order."""
    rows = [
        {
            "order_id": o.id,
            "day": o.created_at.date(),
            "product_id": line.product_id,
            "name": line.name,
            "quantity": line.quantity,
            "price": line.price,
        }
        for o in orders if o.status != OrderStatus.CANCELLED
        for line in o.items
    ]
    return pd.DataFrame(rows, columns=_LINE_COLUMNS)


def _products_frame(products: Sequence[Product]) -> pd.DataFrame:
    rows = [
        {
            "product_id": p.id,
            "name": p.name,
            "category": p.category.value,
            "cost_price": p.cost_price,
            "selling_price": p.selling_price,
            "quantity": p.quantity,
        }
        for p in products
    ]
    return pd.DataFrame(rows, columns=["product_id", "name", "category", "cost_price", "selling_price", "quantity"])


def _line_costs(lines: pd.DataFrame, products: pd.DataFrame) -> pd.DataFrame:
    """Lines joined with the current cost price; lines of unknown products drop out."""
    costs = products[["product_id", "cost_price"]]
    return lines.merge(costs, on="product_id", how="inner")


def dashboard_summary(
    products: Sequence[Product],
    orders: Sequence[Order],
    customers: Sequence[Customer],
    today: Optional[date] = None,
    now: Optional[datetime] = None
) -> DashboardSummary:
    """Today's sales and profit, baki totals and low stock."""
    now = now or utcnow()
    today = today or now.date()

    order_df = _orders_frame(orders)
    todays_orders = order_df[order_df["day"] == today]
    today_sales = float(todays_orders["total"].sum()) if not todays_orders.empty else 0.0

    lines = _lines_frame(orders)
    todays_lines = lines[lines["day"] == today]

    today_profit = 0.0
    top_item = None
    if not todays_lines.empty:
        costed = _line_costs(todays_lines, _products_frame(products))
        if not costed.empty:
            today_profit = float(((costed["price"] - costed["cost_price"]) * costed["quantity"]).sum())

        per_product = (
            todays_lines.groupby("product_id", sort=False)
            .agg(name=("name", "first"), quantity=("quantity", "sum"))
            .sort_values("quantity", ascending=False, kind="stable")
        )
        best = per_product.iloc[0]
        top_item = TopItem(name=str(best["name"]), quantity=int(best["quantity"]))

    owing = [c for c in customers if c.current_due > 0]
    low_stock = [p for p in products if p.is_low_stock]

    return DashboardSummary(
        today_sales=today_sales,
        today_profit=today_profit,
        today_orders=int(len(todays_orders)),
        top_item=top_item,
        total_dues=sum(c.current_due for c in owing),
        customers_with_due=[c.id for c in owing],
        low_stock_count=len(low_stock),
        low_stock_items=[
            LowStockItem(product_id=p.id, name=p.name, quantity=p.quantity, min_stock_level=p.min_stock_level)
            for p in low_stock
        ],
        last_updated=now
    )


def analytics_summary(
    products: Sequence[Product],
    orders: Sequence[Order],
    customers: Sequence[Customer]
) -> AnalyticsSummary:
    """Revenue, margin, retention and inventory figures over the whole ledger."""
    order_df = _orders_frame(orders)
    product_df = _products_frame(products)

    total_revenue = float(order_df["total"].sum()) if not order_df.empty else 0.0
    average_transaction = total_revenue / len(order_df) if len(order_df) else 0.0

    repeat = sum(1 for c in customers if len(c.order_history) > 1)
    retention_rate = repeat / len(customers) * 100 if customers else 0.0

    costed = _line_costs(_lines_frame(orders), product_df)
    total_cost = float((costed["cost_price"] * costed["quantity"]).sum()) if not costed.empty else 0.0
    gross_margin = (total_revenue - total_cost) / total_revenue * 100 if total_revenue > 0 else 0.0

    categories: list[CategoryDistribution] = []
    inventory_value = 0.0
    top_margins: list[MarginRank] = []
    if not product_df.empty:
        product_df["stock_value"] = product_df["cost_price"] * product_df["quantity"]
        inventory_value = float(product_df["stock_value"].sum())

        grouped = product_df.groupby("category", sort=False).agg(
            quantity=("quantity", "sum"), stock_value=("stock_value", "sum")
        )
        categories = [
            CategoryDistribution(category=str(cat), quantity=int(row["quantity"]), stock_value=float(row["stock_value"]))
            for cat, row in grouped.iterrows()
        ]

        priced = product_df[product_df["selling_price"] > 0].copy()
        priced["unit_profit"] = priced["selling_price"] - priced["cost_price"]
        priced["margin_percent"] = priced["unit_profit"] / priced["selling_price"] * 100
        priced = priced.sort_values("margin_percent", ascending=False, kind="stable").head(TOP_MARGIN_COUNT)
        top_margins = [
            MarginRank(name=row["name"], margin_percent=float(row["margin_percent"]), unit_profit=float(row["unit_profit"]))
            for _, row in priced.iterrows()
        ]

    turnover_rate = total_cost / inventory_value * TURNOVER_FACTOR if inventory_value > 0 else 0.0

    return AnalyticsSummary(
        total_revenue=total_revenue,
        average_transaction=average_transaction,
        retention_rate=retention_rate,
        gross_margin=gross_margin,
        inventory_value=inventory_value,
        turnover_rate=turnover_rate,
        categories=categories,
        top_margins=top_margins
    )


def sales_by_day(orders: Sequence[Order]) -> list[DailySales]:
    """Daily revenue, oldest day first."""
    order_df = _orders_frame(orders)
    if order_df.empty:
        return []
    daily = order_df.groupby("day")["total"].sum().sort_index()
    return [DailySales(date=day.isoformat(), amount=float(amount)) for day, amount in daily.items()]
