"""
Pydantic schemas for Dashboard endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel


class LowStockItem(BaseModel):
    """Product at or below its minimum stock level."""
    product_id: str
    name: str
    quantity: int
    min_stock_level: int


class TopItem(BaseModel):
    """Best selling item of a period."""
    name: str
    quantity: int


class DashboardSummary(BaseModel):
    """Dashboard summary with key metrics."""
    # Sales metrics
    today_sales: float
    today_profit: float
    today_orders: int
    top_item: Optional[TopItem] = None

    # Baki metrics
    total_dues: float
    customers_with_due: list[str]

    # Stock metrics
    low_stock_count: int
    low_stock_items: list[LowStockItem]

    # Time info
    last_updated: datetime


class CategoryDistribution(BaseModel):
    """Units and stock value per category."""
    category: str
    quantity: int
    stock_value: float


class MarginRank(BaseModel):
    """Per-product margin entry."""
    name: str
    margin_percent: float
    unit_profit: float


class AnalyticsSummary(BaseModel):
    """Business analytics over the full order ledger."""
    total_revenue: float
    average_transaction: float
    retention_rate: float
    gross_margin: float
    inventory_value: float
    turnover_rate: float
    categories: list[CategoryDistribution]
    top_margins: list[MarginRank]


class DailySales(BaseModel):
    """Revenue for one calendar day."""
    date: str
    amount: float


class HealthCheck(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: datetime
