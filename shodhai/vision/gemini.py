"""Gemini API backend for label and khata detection."""
import json

from pydantic import ValidationError

from shodhai.error_handlers import DetectionError
from shodhai.logging_config import get_logger
from shodhai.schemas import DetectedItem, ScanIntent, ScanMode, ScanResult

from . import DetectionService

logger = get_logger("vision.gemini")

LABEL_PROMPT = """\
Identify this product, its brand, and suggested category. This is for a Bangladeshi FMCG store.
Reply with a JSON object only:
{"name": "...", "brand": "...", "category": "...", "suggestedSellingPrice": 0, "confidence": 0.0}
Prices are in Taka.
"""

BOOK_PROMPT = """\
Read this handwritten account book (khata) page.
Extract:
1. List of products (name, quantity, unit price, category).
2. Customer name (if written).
3. Due / dena amount (if written).
4. Whether this is a Sale (Outgoing) or Purchase (Incoming).
Reply with a JSON object only:
{"intent": "Incoming|Outgoing", "customerName": "...", "dueAmount": 0, "totalAmount": 0,
 "summary": "...", "items": [{"name": "...", "quantity": 1, "price": 0, "category": "..."}]}
"""

BOOK_ITEM_BRAND = "Local"
BOOK_ITEM_CONFIDENCE = 0.9
FALLBACK_CATEGORY = "General"


class GeminiDetectionService(DetectionService):
    """Detect scan items using Google Gemini's vision capability."""

    def __init__(self, api_key: str = "", model: str = "gemini-2.0-flash") -> None:
        self._api_key = api_key
        self._model = model

    async def detect(self, image: bytes, mode: ScanMode, mime_type: str = "image/jpeg") -> ScanResult:
        if not self._api_key:
            raise DetectionError("Gemini API key is not configured. Set GEMINI_API_KEY.")

        import google.generativeai as genai

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(
            self._model,
            generation_config={"response_mime_type": "application/json"}
        )
        prompt = LABEL_PROMPT if mode == ScanMode.PRODUCT else BOOK_PROMPT

        logger.info(f"[SCAN] Sending {mode.value} image ({len(image)} bytes) to {self._model}")
        try:
            response = await model.generate_content_async([{"mime_type": mime_type, "data": image}, prompt])
            text = response.text
        except Exception as e:
            logger.error(f"[SCAN] Gemini request failed: {e}")
            raise DetectionError("detection service request failed", original_error=str(e)) from e

        if mode == ScanMode.PRODUCT:
            return parse_label_response(text)
        return parse_book_response(text)


def _load_json(text: str) -> dict:
    """Parse a JSON object, tolerating a Markdown code fence around it."""
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [l for l in lines[1:] if not l.strip().startswith("```")]
        cleaned = "\n".join(lines)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise DetectionError("response is not valid JSON", original_error=str(e)) from e
    if not isinstance(data, dict):
        raise DetectionError("response is not a JSON object", original_error=cleaned[:200])
    return data


def parse_label_response(text: str) -> ScanResult:
    """A product label becomes an Audit scan of one unit."""
    data = _load_json(text)
    if not data.get("name"):
        raise DetectionError("label response has no product name", original_error=str(data)[:200])
    try:
        item = DetectedItem.model_validate({
            **data,
            "quantity": 1,
            "category": data.get("category") or FALLBACK_CATEGORY,
        })
    except ValidationError as e:
        raise DetectionError("label response has unexpected shape", original_error=str(e)) from e

    return ScanResult(
        mode=ScanMode.PRODUCT,
        intent=ScanIntent.AUDIT,
        items=[item],
        summary=f"Product: {item.name}"
    )


def parse_book_response(text: str) -> ScanResult:
    """A khata page keeps the model's intent, customer and amounts."""
    data = _load_json(text)
    raw_items = data.get("items") or []
    if not isinstance(raw_items, list):
        raise DetectionError("book response items is not a list", original_error=str(raw_items)[:200])

    items = []
    for raw in raw_items:
        if not isinstance(raw, dict) or not raw.get("name"):
            logger.warning(f"[SCAN] Skipping unreadable khata line: {raw!r}")
            continue
        items.append({
            **raw,
            "brand": BOOK_ITEM_BRAND,
            "confidence": BOOK_ITEM_CONFIDENCE,
            "category": raw.get("category") or FALLBACK_CATEGORY,
        })

    try:
        return ScanResult.model_validate({**data, "mode": ScanMode.BOOK.value, "items": items})
    except ValidationError as e:
        raise DetectionError("book response has unexpected shape", original_error=str(e)) from e
