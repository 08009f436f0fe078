"""Collapse repeated receipt line items."""

import re

from shelflife.domain.receipt import ReceiptLineItem

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def dedup_key(item: ReceiptLineItem) -> str:
    """Normalized name plus 2-decimal price, e.g. "semiskimmedmilk-1.50"."""
    return f"{_NON_ALNUM.sub('', item.name.lower())}-{item.price:.2f}"


def dedupe_items(items: list[ReceiptLineItem]) -> tuple[list[ReceiptLineItem], list[ReceiptLineItem]]:
    """
    Keep the first item for each dedup key.

    Two genuinely different purchases with the same name and price (two
    cartons of the same milk) also collapse to one. OCR often repeats a line,
    and the review step lets the user bump the quantity back up.

    Returns:
        Tuple of (kept, dropped) in receipt order
    """
    seen: set[str] = set()
    kept: list[ReceiptLineItem] = []
    dropped: list[ReceiptLineItem] = []
    for item in items:
        key = dedup_key(item)
        if key in seen:
            dropped.append(item)
            continue
        seen.add(key)
        kept.append(item)
    return kept, dropped
