"""Scan detection backend base class and factory."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from shodhai.schemas import ScanMode, ScanResult

if TYPE_CHECKING:
    from shodhai.config import Settings


class DetectionService(ABC):
    """Turns a photo of a product label or khata page into a draft scan."""

    @abstractmethod
    async def detect(self, image: bytes, mode: ScanMode, mime_type: str = "image/jpeg") -> ScanResult:
        """
        Detect items in one image.

        The result is unmatched: existing_product_id is filled in afterwards
        against the live catalog.
        """
        ...


def create_detection_service(settings: "Settings") -> DetectionService:
    """Create the detection backend from configuration."""
    from .gemini import GeminiDetectionService

    return GeminiDetectionService(
        api_key=settings.gemini_api_key or "",
        model=settings.gemini_model,
    )
