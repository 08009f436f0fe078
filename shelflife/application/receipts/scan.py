"""Receipt scan workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Literal

from shelflife.domain.receipt import ParsedReceipt, ReceiptLineItem
from shelflife.receipt.parser_settings import ReceiptParserSettings
from shelflife.receipt.receipt_text_parser import parse_receipt
from shelflife.runtime import get_logger, load_receipt_parser_settings
from shelflife.runtime.ocr_client import OCRServiceUnavailable, fetch_receipt_text

logger = get_logger(__name__)

ScanStatus = Literal[
    "file_not_found",
    "ocr_unavailable",
    "no_text",
    "parsed",
]


@dataclass(frozen=True)
class ReceiptScanRequest:
    """Inputs for running receipt scan workflow."""

    source_path: Path
    # None means source_path already holds OCR text; otherwise it is an image for this backend
    ocr_url: str | None = None
    settings: ReceiptParserSettings | None = None


@dataclass(frozen=True)
class ReceiptScanResult:
    """Outcome from receipt scan workflow."""

    status: ScanStatus
    parsed: ParsedReceipt | None = None
    error: str | None = None


def items_from_backend(line_items: list[dict[str, Any]]) -> list[ReceiptLineItem]:
    """Convert items the OCR backend parsed itself; missing quantity/price become 1/0."""
    items: list[ReceiptLineItem] = []
    for raw in line_items:
        name = str(raw.get("name") or "").strip()
        if not name:
            continue
        try:
            quantity = int(raw.get("quantity") or 1)
        except (TypeError, ValueError):
            quantity = 1
        try:
            price = Decimal(str(raw.get("price") or 0))
        except InvalidOperation:
            price = Decimal("0")
        items.append(ReceiptLineItem(name=name, price=max(price, Decimal("0")), quantity=max(quantity, 1)))
    return items


def run_receipt_scan(request: ReceiptScanRequest) -> ReceiptScanResult:
    """Run scan flow: (OCR) -> parse -> review data."""
    if not request.source_path.exists():
        return ReceiptScanResult(
            status="file_not_found",
            error=f"Receipt file not found: {request.source_path}",
        )

    settings = request.settings or load_receipt_parser_settings()

    if request.ocr_url is None:
        text = request.source_path.read_text(encoding="utf-8", errors="replace")
    else:
        try:
            ocr_result = fetch_receipt_text(request.source_path, request.ocr_url)
        except OCRServiceUnavailable as exc:
            return ReceiptScanResult(status="ocr_unavailable", error=str(exc))

        text = ocr_result.text
        if not text.strip() and ocr_result.line_items:
            logger.info("OCR backend returned %d pre-parsed items", len(ocr_result.line_items))
            return ReceiptScanResult(
                status="parsed",
                parsed=ParsedReceipt(items=items_from_backend(ocr_result.line_items)),
            )

    if not text.strip():
        return ReceiptScanResult(
            status="no_text",
            error="Could not extract meaningful text from the receipt. Try a clearer photo.",
        )

    parsed = parse_receipt(text, settings)
    logger.info("Parsed %d items from %s", len(parsed.items), request.source_path.name)
    return ReceiptScanResult(status="parsed", parsed=parsed)
