"""Manual line selection: the review checklist and parsing the lines a user ticked."""

import re
from dataclasses import dataclass, field
from decimal import Decimal

from shelflife.domain.receipt import ReceiptLineItem

from .text_parser import (
    ReceiptPatterns,
    default_receipt_patterns,
    filter_receipt_lines,
    parse_receipt_lines,
    preselect_priced_lines,
    split_receipt_lines,
)
from .text_parser.items_text_parser import clean_item_name

UNKNOWN_ITEM_NAME = "Unknown Item"

_LEADING_QUANTITY = re.compile(r"^(\d+)\s+(.+)")


@dataclass(frozen=True)
class LineSelection:
    """Checklist offered when automatic parsing needs a human: lines plus pre-ticked indexes."""

    lines: list[str] = field(default_factory=list)
    preselected: list[int] = field(default_factory=list)


def build_line_selection(text: str, patterns: ReceiptPatterns | None = None) -> LineSelection:
    """Filter OCR text down to candidate lines; lines with a price start ticked."""
    if patterns is None:
        patterns = default_receipt_patterns()
    lines = filter_receipt_lines(split_receipt_lines(text), patterns)
    return LineSelection(lines=lines, preselected=preselect_priced_lines(lines, patterns))


def _parse_selected_line(line: str, patterns: ReceiptPatterns) -> ReceiptLineItem:
    price = patterns.find_price(line)
    if price is not None:
        name = (line[: price.start] + " " + line[price.end :]).strip()
        amount = price.amount
    else:
        name = line.strip()
        amount = Decimal("0")

    quantity = 1
    match = _LEADING_QUANTITY.match(name)
    if match:
        quantity = int(match.group(1)) or 1
        name = match.group(2)

    return ReceiptLineItem(name=clean_item_name(name) or UNKNOWN_ITEM_NAME, price=amount, quantity=quantity)


def parse_selected_lines(lines: list[str], patterns: ReceiptPatterns | None = None) -> list[ReceiptLineItem]:
    """
    Turn user-selected receipt lines into items.

    The selection is first run through the regular parser as one block of
    text. When that finds nothing, every selected line becomes an item on
    its own: a price if one is present (else 0), a leading quantity, and
    "Unknown Item" when no name is left. The user picked these lines, so
    none of them are dropped.
    """
    if patterns is None:
        patterns = default_receipt_patterns()
    selected = [line.strip() for line in lines if line.strip()]
    if not selected:
        return []

    items = parse_receipt_lines(selected, patterns)
    if items:
        return items
    return [_parse_selected_line(line, patterns) for line in selected]
