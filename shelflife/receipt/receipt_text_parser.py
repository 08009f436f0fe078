"""Parse raw receipt OCR text into line items.

This is a best-effort parser - results should be reviewed before they are
added to the pantry. Malformed input never raises; an empty item list is
the only failure signal.
"""

from __future__ import annotations

from shelflife.domain.receipt import ParsedReceipt, ReceiptLineItem

from .parser_settings import ReceiptParserSettings
from .reconcile import reconcile_total, review_warnings
from .selection import build_line_selection
from .text_parser import (
    ReceiptPatterns,
    default_receipt_patterns,
    detect_receipt_total,
    filter_receipt_lines,
    parse_receipt_lines,
    parse_receipt_lines_detailed,
    split_receipt_lines,
)

__all__ = [
    "filter_receipt_lines",
    "parse_receipt",
    "parse_receipt_text",
]


def parse_receipt_text(text: str, patterns: ReceiptPatterns | None = None) -> list[ReceiptLineItem]:
    """
    Extract deduplicated line items from raw OCR text.

    Args:
        text: OCR output with ``\\n`` or ``\\r\\n`` line breaks
        patterns: Pattern table; defaults to £/€/$ with a dot separator

    Returns:
        Items in first-seen order; empty when nothing looks like an item
    """
    return parse_receipt_lines(split_receipt_lines(text), patterns or default_receipt_patterns())


def parse_receipt(text: str, settings: ReceiptParserSettings | None = None) -> ParsedReceipt:
    """
    Parse OCR text into everything the review step needs.

    Runs the item parser, the total detector and the line-selection filter
    over the same lines, then attaches review warnings.
    """
    if settings is None:
        settings = ReceiptParserSettings()
    patterns = settings.build_patterns()

    lines = split_receipt_lines(text)
    outcome = parse_receipt_lines_detailed(lines, patterns)
    total = detect_receipt_total(lines, patterns)
    selection = build_line_selection(text, patterns)

    reconciliation = reconcile_total(
        outcome.items,
        total,
        absolute_tolerance=settings.absolute_tolerance,
        relative_tolerance=settings.relative_tolerance,
    )
    warnings = review_warnings(
        outcome.items,
        reconciliation,
        currency_symbol=settings.display_currency,
        high_quantity_threshold=settings.high_quantity_threshold,
    )

    return ParsedReceipt(
        items=outcome.items,
        total=total,
        lines=selection.lines,
        preselected=selection.preselected,
        skipped=outcome.skipped,
        warnings=warnings,
        raw_text=text,
    )
