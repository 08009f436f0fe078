"""Receipt review workflows: manual line selection and final confirmation."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from shelflife.domain.receipt import ReceiptLineItem, ReceiptWarning
from shelflife.receipt.parser_settings import ReceiptParserSettings
from shelflife.receipt.reconcile import TotalReconciliation, reconcile_total, review_warnings
from shelflife.receipt.selection import parse_selected_lines
from shelflife.runtime import load_receipt_parser_settings

SelectionStatus = Literal["no_selection", "parsed"]
ConfirmationStatus = Literal["confirmed", "total_mismatch"]


@dataclass(frozen=True)
class ManualSelectionRequest:
    """Checklist lines plus the indexes the user ticked."""

    lines: list[str]
    selected: list[int]
    settings: ReceiptParserSettings | None = None


@dataclass(frozen=True)
class ManualSelectionResult:
    status: SelectionStatus
    items: list[ReceiptLineItem] = field(default_factory=list)


def run_manual_selection(request: ManualSelectionRequest) -> ManualSelectionResult:
    """Parse the ticked checklist lines into items; out-of-range indexes are ignored."""
    chosen = sorted({i for i in request.selected if 0 <= i < len(request.lines)})
    selected_lines = [request.lines[i] for i in chosen]
    if not selected_lines:
        return ManualSelectionResult(status="no_selection")

    settings = request.settings or load_receipt_parser_settings()
    items = parse_selected_lines(selected_lines, settings.build_patterns())
    return ManualSelectionResult(status="parsed", items=items)


@dataclass(frozen=True)
class ReviewConfirmationRequest:
    """Final (possibly hand-edited) items and the total detected on the receipt."""

    items: list[ReceiptLineItem]
    detected_total: Decimal | None = None
    settings: ReceiptParserSettings | None = None


@dataclass(frozen=True)
class ReviewConfirmationResult:
    status: ConfirmationStatus
    items: list[ReceiptLineItem]
    reconciliation: TotalReconciliation | None = None
    warnings: list[ReceiptWarning] = field(default_factory=list)


def run_review_confirmation(request: ReviewConfirmationRequest) -> ReviewConfirmationResult:
    """
    Check edited items against the detected total before they are committed.

    A mismatch is advisory: callers may still commit ``result.items`` after
    the user confirms.
    """
    settings = request.settings or load_receipt_parser_settings()
    reconciliation = reconcile_total(
        request.items,
        request.detected_total,
        absolute_tolerance=settings.absolute_tolerance,
        relative_tolerance=settings.relative_tolerance,
    )
    warnings = review_warnings(
        request.items,
        reconciliation,
        currency_symbol=settings.display_currency,
        high_quantity_threshold=settings.high_quantity_threshold,
    )
    status: ConfirmationStatus = "confirmed"
    if reconciliation is not None and not reconciliation.matches:
        status = "total_mismatch"
    return ReviewConfirmationResult(
        status=status,
        items=list(request.items),
        reconciliation=reconciliation,
        warnings=warnings,
    )
