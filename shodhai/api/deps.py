"""Shared FastAPI dependencies: auth, shop store, detection backend."""
import secrets
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from shodhai.config import settings
from shodhai.seed import demo_customers, demo_orders, demo_products
from shodhai.store import ShopStore
from shodhai.vision import DetectionService, create_detection_service

security = HTTPBasic()


def verify_auth(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    correct_username = secrets.compare_digest(credentials.username, settings.admin_username)
    correct_password = secrets.compare_digest(credentials.password, settings.admin_password)
    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


@lru_cache()
def get_store() -> ShopStore:
    """Process-wide shop state."""
    if settings.seed_demo_data:
        return ShopStore(demo_products(), demo_orders(), demo_customers())
    return ShopStore()


@lru_cache()
def get_detection_service() -> DetectionService:
    return create_detection_service(settings)
