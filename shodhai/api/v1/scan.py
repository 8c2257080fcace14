"""
Scan API endpoints: detect items in a photo, then confirm them into stock.
"""
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from shodhai.api.deps import get_detection_service, get_store
from shodhai.config import settings
from shodhai.logging_config import get_logger
from shodhai.match import attach_matches
from shodhai.schemas import ReconcileResult, ScanConfirmRequest, ScanMode, ScanResult
from shodhai.store import ShopStore
from shodhai.vision import DetectionService

logger = get_logger("api.scan")

router = APIRouter(prefix="/scan", tags=["Scan"])

ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}


@router.post("/analyze", response_model=ScanResult)
async def analyze_scan(
    file: UploadFile = File(...),
    mode: ScanMode = Query(ScanMode.PRODUCT),
    store: ShopStore = Depends(get_store),
    detector: DetectionService = Depends(get_detection_service)
):
    """
    Detect items in an uploaded photo and match them to the catalog.

    The result is a draft for the user to review before confirming.
    """
    content_type = file.content_type or "image/jpeg"
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported image type: {content_type}"
        )

    image = await file.read()
    if not image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty image upload")
    if len(image) > settings.max_upload_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image exceeds {settings.max_upload_size_mb}MB"
        )

    detected = await detector.detect(image, mode, mime_type=content_type)
    matched = attach_matches(detected, store.list_products(), score_cutoff=settings.match_score_cutoff)
    logger.info(
        f"[SCAN] Analyzed {mode.value} image: items={len(matched.items)}, "
        f"matched={sum(1 for i in matched.items if i.is_existing)}"
    )
    return matched


@router.post("/confirm", response_model=ReconcileResult)
def confirm_scan(request: ScanConfirmRequest, store: ShopStore = Depends(get_store)):
    """
    Apply a reviewed scan to stock.

    Outgoing scans also create an order and add any due amount to the
    customer's baki.
    """
    return store.apply_scan(request.scan, customer_id=request.customer_id)
