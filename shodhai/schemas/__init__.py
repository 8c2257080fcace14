"""
Pydantic schemas for request/response validation.
"""
from shodhai.schemas.product import (
    Category, DEFAULT_CATEGORY, ProductBase, ProductCreate, ProductUpdate,
    Product, ProductResponse
)
from shodhai.schemas.order import (
    OrderStatus, PaymentStatus, OrderItem, Order, OrderUpdate
)
from shodhai.schemas.customer import Customer, CustomerUpdate, PaymentReceipt
from shodhai.schemas.scan import (
    ScanMode, ScanIntent, DetectedItem, ScanResult, ScanConfirmRequest,
    StockShortfall, ReconcileResult
)
from shodhai.schemas.dashboard import (
    LowStockItem, TopItem, DashboardSummary, CategoryDistribution,
    MarginRank, AnalyticsSummary, DailySales, HealthCheck
)

__all__ = [
    # Product schemas
    "Category", "DEFAULT_CATEGORY", "ProductBase", "ProductCreate", "ProductUpdate",
    "Product", "ProductResponse",

    # Order schemas
    "OrderStatus", "PaymentStatus", "OrderItem", "Order", "OrderUpdate",

    # Customer schemas
    "Customer", "CustomerUpdate", "PaymentReceipt",

    # Scan schemas
    "ScanMode", "ScanIntent", "DetectedItem", "ScanResult", "ScanConfirmRequest",
    "StockShortfall", "ReconcileResult",

    # Dashboard schemas
    "LowStockItem", "TopItem", "DashboardSummary", "CategoryDistribution",
    "MarginRank", "AnalyticsSummary", "DailySales", "HealthCheck",
]
