"""Composable receipt text parser components."""

from .dedupe import dedup_key, dedupe_items
from .fields_parser import detect_receipt_total
from .items_text_parser import (
    DEFAULT_STRATEGIES,
    ParseOutcome,
    StrategyResult,
    parse_receipt_lines,
    parse_receipt_lines_detailed,
)
from .line_classifier import (
    filter_receipt_lines,
    is_ignored_line,
    preselect_priced_lines,
    rejection_reason,
    split_receipt_lines,
)
from .patterns import (
    ReceiptParserConfigError,
    ReceiptPatterns,
    build_receipt_patterns,
    default_receipt_patterns,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "ParseOutcome",
    "ReceiptParserConfigError",
    "ReceiptPatterns",
    "StrategyResult",
    "build_receipt_patterns",
    "dedup_key",
    "dedupe_items",
    "default_receipt_patterns",
    "detect_receipt_total",
    "filter_receipt_lines",
    "is_ignored_line",
    "parse_receipt_lines",
    "parse_receipt_lines_detailed",
    "preselect_priced_lines",
    "rejection_reason",
    "split_receipt_lines",
]
