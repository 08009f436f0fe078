"""Pattern tables shared by the receipt line classifier and item parser.

All regular expressions are compiled once into an immutable ReceiptPatterns
value. Currency symbols and the decimal separator are build inputs, so a
receipt from another locale only needs a different table.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache

DEFAULT_CURRENCY_SYMBOLS = ("£", "€", "$")
DEFAULT_DECIMAL_SEPARATOR = "."
# Leading numbers above this are barcodes/SKUs, never quantities
DEFAULT_PRODUCT_CODE_MIN_VALUE = 1000

LETTER = r"[^\W\d_]"
HAS_LETTER = re.compile(LETTER)
HAS_WORD = re.compile(LETTER + r"{2,}")

# Summary keywords that mark noise only when an amount follows them,
# e.g. "TOTAL £45.00", "Card Payment 12.00", "Change Due £0.00"
FINANCIAL_SUMMARY_KEYWORDS = (
    r"sub[\s-]*total",
    r"total",
    r"balance",
    r"discount",
    r"change",
    r"payment",
    r"cash",
    r"card",
    r"visa",
    r"master\s*card",
    r"vat",
    r"tax",
)

# Only these words may sit between a summary keyword and its amount
SUMMARY_FILLER_WORDS = (
    r"due",
    r"paid",
    r"payment",
    r"amount",
    r"to\s+pay",
)

BOILERPLATE_PHRASES = (
    r"contactless",
    r"chip\s*(?:&|and)\s*pin",
    r"thank\s*you",
    r"thanks",
    r"receipts?",
    r"customer\s+copy",
    r"merchant\s+copy",
    r"service\s+charge",
    r"tips?",
    r"gratuity",
)

CONTACT_PREFIXES = (
    r"store",
    r"branch",
    r"location",
    r"address",
    r"since",
    r"plc",
    r"ltd",
    r"limited",
)

OPERATIONAL_PREFIXES = (
    r"delivery",
    r"takeaway",
    r"collection",
    r"offers?",
    r"promotions?",
    r"loyalty",
    r"points",
    r"rewards?",
    r"cashier",
    r"operator",
    r"till",
    r"terminal",
    r"ref",
    r"order\s*(?:#|no\b)",
    r"transaction",
    r"auth\s*code",
)

COLUMN_HEADER_WORDS = (
    r"amounts?",
    r"quantit(?:y|ies)",
    r"prices?",
    r"items?",
    r"descriptions?",
    r"opening",
    r"closing",
    r"balance",
    r"accounts?",
)


class ReceiptParserConfigError(ValueError):
    """Raised when a pattern table cannot be built from the given settings."""


@dataclass(frozen=True)
class IgnoreRule:
    """A named rejection rule; the name is reported for skipped lines."""

    reason: str
    pattern: re.Pattern[str]


@dataclass(frozen=True)
class QuantityPattern:
    """A quantity shape such as "2 x Milk" or "Milk qty 2"."""

    pattern: re.Pattern[str]
    quantity_group: int
    name_group: int


@dataclass(frozen=True)
class PriceMatch:
    amount: Decimal
    start: int
    end: int


# Checked in order, first match wins
QUANTITY_PATTERNS = (
    # "2 x Milk", "2x Milk"
    QuantityPattern(re.compile(r"^(\d+)\s*[x×]\s+(.+)$", re.IGNORECASE), 1, 2),
    # "2 Milk"
    QuantityPattern(re.compile(r"^(\d+)\s+(.+)$"), 1, 2),
    # "Milk x 2", "Milk x2"
    QuantityPattern(re.compile(r"^(.+?)\s+[x×]\s*(\d+)$", re.IGNORECASE), 2, 1),
    # "Milk qty 2", "Milk QTY: 2"
    QuantityPattern(re.compile(r"^(.+?)\s+qty\s*:?\s*(\d+)$", re.IGNORECASE), 2, 1),
)


@dataclass(frozen=True)
class ReceiptPatterns:
    """Compiled pattern set for one currency/decimal convention."""

    currency_symbols: tuple[str, ...]
    decimal_separator: str
    product_code_min_value: int
    price: re.Pattern[str]
    quantity: tuple[QuantityPattern, ...]
    ignore_rules: tuple[IgnoreRule, ...]

    def find_price(self, text: str) -> PriceMatch | None:
        """Return the first price token in text, or None."""
        match = self.price.search(text)
        if match is None:
            return None
        amount = self.parse_amount(match.group(1) or match.group(2))
        if amount is None:
            return None
        return PriceMatch(amount=amount, start=match.start(), end=match.end())

    def has_price(self, text: str) -> bool:
        return self.find_price(text) is not None

    def parse_amount(self, raw: str) -> Decimal | None:
        try:
            return Decimal(raw.replace(self.decimal_separator, "."))
        except InvalidOperation:
            return None

    def ignore_reason(self, line: str) -> str | None:
        """Return the name of the first rejection rule matching line."""
        for rule in self.ignore_rules:
            if rule.pattern.search(line):
                return rule.reason
        return None


def _leading_words(words: tuple[str, ...]) -> re.Pattern[str]:
    # Whole leading token only: "Ref: 123" is metadata, "Refried Beans" is not.
    return re.compile(r"^(?:" + "|".join(words) + r")(?!" + LETTER + ")", re.IGNORECASE)


def _currency_alternation(currency_symbols: tuple[str, ...]) -> str:
    ordered = sorted(currency_symbols, key=len, reverse=True)
    return "|".join(re.escape(symbol) for symbol in ordered)


def _build_price_pattern(currency_symbols: tuple[str, ...], decimal_separator: str) -> re.Pattern[str]:
    cur = _currency_alternation(currency_symbols)
    sep = re.escape(decimal_separator)
    return re.compile(
        rf"(?:^|\s)(?:{cur})\s*(\d+(?:{sep}\d{{2}})?)"  # "£1.50", "$ 2"
        rf"|(\d+{sep}\d{{2}})\s*(?:{cur})?(?=\s|$)"  # "1.50", "1.50€"
    )


def _build_ignore_rules(
    currency_symbols: tuple[str, ...],
    extra_ignore_patterns: tuple[str, ...],
) -> tuple[IgnoreRule, ...]:
    cur = _currency_alternation(currency_symbols)
    financial = re.compile(
        r"^(?:" + "|".join(FINANCIAL_SUMMARY_KEYWORDS) + r")(?!" + LETTER + ")"
        r"(?:\s+(?:" + "|".join(SUMMARY_FILLER_WORDS) + r")(?!" + LETTER + r"))*"
        r"\s*:?\s*-?\s*(?:" + cur + r")?\s*-?\s*\d",
        re.IGNORECASE,
    )
    rules = [
        IgnoreRule("financial_summary", financial),
        IgnoreRule("boilerplate", _leading_words(BOILERPLATE_PHRASES)),
        IgnoreRule("contact_metadata", re.compile(r"^www\.|\.com|\.co\.uk|^tel\s*:|^phone\s*:", re.IGNORECASE)),
        IgnoreRule("contact_metadata", _leading_words(CONTACT_PREFIXES)),
        IgnoreRule("operational_metadata", _leading_words(OPERATIONAL_PREFIXES)),
        IgnoreRule("date_time", re.compile(r"^\d{2}/\d{2}/\d{2,4}|^\d{2}:\d{2}|^\d{4}-\d{2}-\d{2}")),
        IgnoreRule("code_only", re.compile(r"^[\d\s\-()]+$")),
        # Case-sensitive: shouted lines with no digits or symbols are section headers
        IgnoreRule("uppercase_header", re.compile(r"^[A-Z\s]{8,}$")),
        IgnoreRule("decoration", re.compile(r"^[*\-=_\s]+$")),
        IgnoreRule("column_header", _leading_words(COLUMN_HEADER_WORDS)),
    ]
    for raw in extra_ignore_patterns:
        try:
            rules.append(IgnoreRule("custom", re.compile(raw, re.IGNORECASE)))
        except re.error as e:
            raise ReceiptParserConfigError(f"Invalid ignore pattern {raw!r}: {e}") from e
    return tuple(rules)


@lru_cache(maxsize=16)
def build_receipt_patterns(
    currency_symbols: tuple[str, ...] = DEFAULT_CURRENCY_SYMBOLS,
    decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR,
    product_code_min_value: int = DEFAULT_PRODUCT_CODE_MIN_VALUE,
    extra_ignore_patterns: tuple[str, ...] = (),
) -> ReceiptPatterns:
    """
    Compile the pattern set for a currency/decimal convention.

    Args:
        currency_symbols: Symbols recognised as a price prefix or suffix
        decimal_separator: Single non-digit character between units and cents
        product_code_min_value: Leading numbers above this are product codes
        extra_ignore_patterns: Additional case-insensitive rejection regexes

    Raises:
        ReceiptParserConfigError: if the inputs cannot form a usable table
    """
    symbols = tuple(symbol for symbol in currency_symbols if symbol)
    if not symbols:
        raise ReceiptParserConfigError("At least one currency symbol is required")
    if len(decimal_separator) != 1 or decimal_separator.isdigit() or decimal_separator.isspace():
        raise ReceiptParserConfigError(f"Invalid decimal separator: {decimal_separator!r}")

    return ReceiptPatterns(
        currency_symbols=symbols,
        decimal_separator=decimal_separator,
        product_code_min_value=product_code_min_value,
        price=_build_price_pattern(symbols, decimal_separator),
        quantity=QUANTITY_PATTERNS,
        ignore_rules=_build_ignore_rules(symbols, tuple(extra_ignore_patterns)),
    )


def default_receipt_patterns() -> ReceiptPatterns:
    """Pattern set for £/€/$ receipts with a dot decimal separator."""
    return build_receipt_patterns()
