"""Runtime client for the receipt OCR backend (non-HTTP-server side)."""

import base64
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from shelflife.runtime.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 60.0


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


@dataclass(frozen=True)
class OCRResult:
    """OCR backend answer: raw text, or items the backend already parsed."""

    text: str = ""
    line_items: list[dict[str, Any]] = field(default_factory=list)


def guess_mime_type(image_path: Path) -> str:
    return "image/png" if image_path.suffix.lower() == ".png" else "image/jpeg"


def _post_receipt(client: httpx.Client, ocr_url: str, payload: dict[str, str]) -> dict[str, Any]:
    health = client.get(f"{ocr_url}/health")
    if health.status_code != 200:
        raise OCRServiceUnavailable(f"OCR service health check failed: {health.status_code}")

    start_time = time.time()
    response = client.post(f"{ocr_url}/api/parse-receipt", json=payload)
    logger.info("OCR service returned in %.2f seconds", time.time() - start_time)

    if response.status_code != 200:
        # Response body may contain receipt text; keep it out of INFO logs.
        logger.error("OCR service error: %s", response.status_code)
        logger.debug("OCR service error body: %s", response.text)
        raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise OCRServiceUnavailable("OCR service returned invalid JSON") from e
    if not isinstance(data, dict):
        raise OCRServiceUnavailable("OCR service returned an unexpected payload")
    return data


def fetch_receipt_text(
    image_path: Path,
    ocr_url: str,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> OCRResult:
    """
    Send a receipt image to the OCR backend and return its text.

    Checks ``GET /health`` first, then posts ``{base64Image, mimeType}`` to
    ``/api/parse-receipt``.

    Args:
        image_path: Receipt photo (JPEG or PNG)
        ocr_url: Backend base URL, e.g. http://localhost:3000
        client: Optional httpx client; one is created and closed if omitted
        timeout: Request timeout in seconds for a created client

    Raises:
        OCRServiceUnavailable: if the backend is unreachable or answers with an error
    """
    ocr_url = ocr_url.rstrip("/")
    logger.info("Sending receipt to OCR service at %s...", ocr_url)

    payload = {
        "base64Image": base64.b64encode(image_path.read_bytes()).decode("ascii"),
        "mimeType": guess_mime_type(image_path),
    }

    owns_client = client is None
    http = client if client is not None else httpx.Client(timeout=timeout)
    try:
        data = _post_receipt(http, ocr_url, payload)
    except httpx.RequestError as e:
        logger.error("Failed to connect to OCR service: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e
    finally:
        if owns_client:
            http.close()

    text = data.get("text")
    line_items = data.get("lineItems")
    return OCRResult(
        text=text if isinstance(text, str) else "",
        line_items=[item for item in line_items if isinstance(item, dict)] if isinstance(line_items, list) else [],
    )
