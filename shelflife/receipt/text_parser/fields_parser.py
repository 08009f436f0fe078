"""Receipt-level field extraction (stated total)."""

import re
from decimal import Decimal

from .patterns import ReceiptPatterns, default_receipt_patterns

_TOTAL_KEYWORD = re.compile(r"total", re.IGNORECASE)


def detect_receipt_total(lines: list[str], patterns: ReceiptPatterns | None = None) -> Decimal | None:
    """
    Return the amount on the first line mentioning "total" that carries a price.

    Scans unfiltered lines. "SUBTOTAL £20.00" counts when it comes first, the
    value is only used to warn about a mismatched item sum.
    """
    if patterns is None:
        patterns = default_receipt_patterns()
    for line in lines:
        if not _TOTAL_KEYWORD.search(line):
            continue
        price = patterns.find_price(line)
        if price is not None:
            return price.amount
    return None
