"""Text-line based receipt item extraction.

Each strategy looks at one line (and the line after it) and either claims
the line or passes. Strategies run in order and the first claim wins:

1. same-line:  "2 x Milk £1.50"
2. two-line:   "Bread" followed by "£1.20"
3. name-only:  "Fresh Bananas" with no price anywhere near it (price 0)
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import Decimal

from shelflife.domain.receipt import ReceiptLineItem, SkippedLine

from .dedupe import dedupe_items
from .line_classifier import rejection_reason
from .patterns import HAS_LETTER, HAS_WORD, ReceiptPatterns, default_receipt_patterns

logger = logging.getLogger(f"shelflife_local.{__name__}")

_LEADING_MULTIPLIER = re.compile(r"^\d+\s*[x×]\s*", re.IGNORECASE)
_EDGE_NON_LETTERS = re.compile(r"^[\W\d_]+|[\W\d_]+$")
_WHITESPACE_RUN = re.compile(r"\s+")
_NUMERIC_ONLY = re.compile(r"^\d+$")
_PRODUCT_CODE = re.compile(r"^\d{4,}$")


@dataclass(frozen=True)
class StrategyResult:
    """A strategy's claim on the current line.

    ``item`` is None when the strategy owns the line but could not build a
    valid item from it; ``consumed`` counts the lines taken, current included.
    """

    item: ReceiptLineItem | None
    consumed: int = 1
    reason: str | None = None


Strategy = Callable[[str, str | None, ReceiptPatterns], StrategyResult | None]


@dataclass
class ParseOutcome:
    """Items kept plus an audit trail of every line that produced nothing."""

    items: list[ReceiptLineItem] = field(default_factory=list)
    skipped: list[SkippedLine] = field(default_factory=list)


def extract_quantity(text: str, patterns: ReceiptPatterns) -> tuple[int, str]:
    """Split a leading or trailing quantity off an item name; default quantity is 1."""
    text = text.strip()
    for quantity_pattern in patterns.quantity:
        match = quantity_pattern.pattern.match(text)
        if match:
            quantity = int(match.group(quantity_pattern.quantity_group)) or 1
            return quantity, match.group(quantity_pattern.name_group).strip()
    return 1, text


def clean_item_name(name: str) -> str:
    """Drop leftover "2 x " multipliers and collapse whitespace."""
    name = _LEADING_MULTIPLIER.sub("", name.strip())
    return _WHITESPACE_RUN.sub(" ", name).strip()


def starts_with_product_code(line: str, patterns: ReceiptPatterns) -> bool:
    """Return True if the first token is a barcode/SKU rather than a quantity."""
    tokens = line.split()
    if not tokens or not _PRODUCT_CODE.match(tokens[0]):
        return False
    return int(tokens[0]) > patterns.product_code_min_value


def _quantity_and_name(line: str, text: str, patterns: ReceiptPatterns) -> tuple[int, str]:
    quantity, name = extract_quantity(text, patterns)
    if starts_with_product_code(line, patterns):
        quantity = 1
    return quantity, name


def _is_priced_name(name: str) -> bool:
    return len(name) > 1 and HAS_LETTER.search(name) is not None


def same_line_strategy(line: str, next_line: str | None, patterns: ReceiptPatterns) -> StrategyResult | None:
    """Name and price on one line. Claims every line that carries a price."""
    price = patterns.find_price(line)
    if price is None:
        return None

    remainder = (line[: price.start] + " " + line[price.end :]).strip()
    quantity, name = _quantity_and_name(line, remainder, patterns)
    name = clean_item_name(_EDGE_NON_LETTERS.sub("", name))

    if not _is_priced_name(name) or price.amount <= 0:
        return StrategyResult(item=None, reason="priced_line_without_name")
    return StrategyResult(item=ReceiptLineItem(name=name, price=price.amount, quantity=quantity))


def two_line_strategy(line: str, next_line: str | None, patterns: ReceiptPatterns) -> StrategyResult | None:
    """Name on this line, price on the next one; both lines are consumed."""
    if next_line is None or not HAS_LETTER.search(line):
        return None
    price = patterns.find_price(next_line)
    if price is None:
        return None
    # "TOTAL £45.00" must never price the line above it
    if rejection_reason(next_line, patterns) is not None:
        return None

    quantity, name = _quantity_and_name(line, line, patterns)
    name = clean_item_name(name)
    if not _is_priced_name(name) or price.amount <= 0:
        return None
    return StrategyResult(item=ReceiptLineItem(name=name, price=price.amount, quantity=quantity), consumed=2)


def name_only_strategy(line: str, next_line: str | None, patterns: ReceiptPatterns) -> StrategyResult | None:
    """Item name with no price found; price is left at 0 for manual entry."""
    if not HAS_LETTER.search(line) or len(line) <= 2:
        return None

    quantity, name = _quantity_and_name(line, line, patterns)
    name = clean_item_name(name)
    if len(name) <= 2 or not HAS_WORD.search(name) or _NUMERIC_ONLY.match(name):
        return StrategyResult(item=None, reason="not_an_item_name")
    return StrategyResult(item=ReceiptLineItem(name=name, price=Decimal("0"), quantity=quantity))


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    same_line_strategy,
    two_line_strategy,
    name_only_strategy,
)


def parse_receipt_lines_detailed(
    lines: list[str],
    patterns: ReceiptPatterns | None = None,
    strategies: tuple[Strategy, ...] = DEFAULT_STRATEGIES,
) -> ParseOutcome:
    """
    Extract line items from receipt lines, recording why other lines were dropped.

    This is heuristic-based and best effort: a line that no strategy can turn
    into an item is skipped, never raised on.

    Args:
        lines: Trimmed, non-empty receipt lines in receipt order
        patterns: Pattern table; defaults to £/€/$ with a dot separator
        strategies: Ordered line-shape strategies, first claim wins

    Returns:
        ParseOutcome with deduplicated items in first-seen order
    """
    if patterns is None:
        patterns = default_receipt_patterns()

    candidates: list[ReceiptLineItem] = []
    skipped: list[SkippedLine] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        next_line = lines[i + 1] if i + 1 < len(lines) else None

        reason = rejection_reason(line, patterns)
        if reason is not None:
            skipped.append(SkippedLine(line=line, reason=reason))
            i += 1
            continue

        result: StrategyResult | None = None
        for strategy in strategies:
            result = strategy(line, next_line, patterns)
            if result is not None:
                break

        if result is None:
            skipped.append(SkippedLine(line=line, reason="unclassified"))
            i += 1
            continue

        if result.item is not None:
            candidates.append(result.item)
        else:
            skipped.append(SkippedLine(line=line, reason=result.reason or "unclassified"))
        i += result.consumed

    items, duplicates = dedupe_items(candidates)
    skipped.extend(SkippedLine(line=item.name, reason="duplicate") for item in duplicates)

    logger.debug(
        "Parsed %d receipt lines: %d items, %d duplicates, %d skipped",
        len(lines),
        len(items),
        len(duplicates),
        len(skipped) - len(duplicates),
    )
    return ParseOutcome(items=items, skipped=skipped)


def parse_receipt_lines(lines: list[str], patterns: ReceiptPatterns | None = None) -> list[ReceiptLineItem]:
    """Extract deduplicated line items from receipt lines."""
    return parse_receipt_lines_detailed(lines, patterns).items
