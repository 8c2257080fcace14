"""
Pydantic schemas for catalog products.
"""
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class Category(str, Enum):
    """Fixed product categories. The first member is the fallback."""
    DAIRY = "Dairy"
    COOKING_OIL = "Cooking Oil"
    BEVERAGES = "Beverages"
    RICE = "Rice"
    SPICES = "Spices"
    SNACKS = "Snacks"
    PERSONAL_CARE = "Personal Care"


DEFAULT_CATEGORY = list(Category)[0]


class ProductBase(BaseModel):
    """Base product schema."""
    name: str = Field(..., min_length=1, max_length=500)
    category: Category = DEFAULT_CATEGORY
    cost_price: float = Field(default=0.0, ge=0)
    selling_price: float = Field(default=0.0, ge=0)
    quantity: int = Field(default=0, ge=0)
    min_stock_level: int = Field(default=5, ge=0)


class ProductCreate(ProductBase):
    """Schema for manual product entry."""


class ProductUpdate(BaseModel):
    """Schema for updating a product. Only provided fields change."""
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    category: Optional[Category] = None
    cost_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    quantity: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)


class Product(ProductBase):
    """Catalog product snapshot."""
    model_config = ConfigDict(frozen=True)

    id: str

    @property
    def is_low_stock(self) -> bool:
        """Check if product stock is at or below its minimum level."""
        return self.quantity <= self.min_stock_level

    @property
    def stock_status(self) -> str:
        """Get human-readable stock status."""
        if self.quantity == 0:
            return "out_of_stock"
        elif self.is_low_stock:
            return "low_stock"
        else:
            return "in_stock"


class ProductResponse(ProductBase):
    """Product with its derived stock flags."""
    id: str
    is_low_stock: bool
    stock_status: str

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            **product.model_dump(),
            is_low_stock=product.is_low_stock,
            stock_status=product.stock_status
        )
