"""
Product catalog API endpoints.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from shodhai.api.deps import get_store
from shodhai.schemas import Category, ProductCreate, ProductResponse, ProductUpdate
from shodhai.store import ShopStore

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=list[ProductResponse])
def list_products(
    q: Optional[str] = Query(None, description="Search in name or category"),
    category: Optional[Category] = None,
    low_stock: bool = False,
    store: ShopStore = Depends(get_store)
):
    """
    List catalog products.

    - **q**: Case-insensitive search
    - **category**: Filter by category
    - **low_stock**: Only products at or below their minimum level
    """
    products = store.list_products(q=q, category=category, low_stock_only=low_stock)
    return [ProductResponse.from_product(p) for p in products]


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(product_data: ProductCreate, store: ShopStore = Depends(get_store)):
    """Add a product by manual entry."""
    return ProductResponse.from_product(store.add_product(product_data))


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, store: ShopStore = Depends(get_store)):
    return ProductResponse.from_product(store.get_product(product_id))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(product_id: str, product_data: ProductUpdate, store: ShopStore = Depends(get_store)):
    """
    Update a product.

    Only provided fields will be updated.
    """
    return ProductResponse.from_product(store.update_product(product_id, product_data))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: str, store: ShopStore = Depends(get_store)):
    store.delete_product(product_id)
