"""Receipt parser settings built from layered TOML-shaped configs."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any

from shelflife.receipt.text_parser.patterns import (
    DEFAULT_CURRENCY_SYMBOLS,
    DEFAULT_DECIMAL_SEPARATOR,
    DEFAULT_PRODUCT_CODE_MIN_VALUE,
    ReceiptParserConfigError,
    ReceiptPatterns,
    build_receipt_patterns,
)


@dataclass(frozen=True)
class ReceiptParserSettings:
    """Locale and review knobs for one parser configuration."""

    currency_symbols: tuple[str, ...] = DEFAULT_CURRENCY_SYMBOLS
    decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR
    product_code_min_value: int = DEFAULT_PRODUCT_CODE_MIN_VALUE
    extra_ignore_patterns: tuple[str, ...] = ()
    absolute_tolerance: Decimal = Decimal("0.01")
    relative_tolerance: Decimal = Decimal("0.02")
    high_quantity_threshold: int = 20

    @property
    def display_currency(self) -> str:
        """Symbol used when printing amounts back to the user."""
        return self.currency_symbols[0]

    def build_patterns(self) -> ReceiptPatterns:
        return build_receipt_patterns(
            currency_symbols=self.currency_symbols,
            decimal_separator=self.decimal_separator,
            product_code_min_value=self.product_code_min_value,
            extra_ignore_patterns=self.extra_ignore_patterns,
        )


def _as_decimal(value: Any, key: str) -> Decimal:
    try:
        result = Decimal(str(value))
    except InvalidOperation as e:
        raise ReceiptParserConfigError(f"{key} must be a number, got {value!r}") from e
    if result < 0:
        raise ReceiptParserConfigError(f"{key} must not be negative, got {value!r}")
    return result


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ReceiptParserConfigError(f"{key} must be an integer, got {value!r}")
    return value


def _as_str_tuple(value: Any, key: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ReceiptParserConfigError(f"{key} must be a list of strings, got {value!r}")
    return tuple(value)


def _apply_config(settings: ReceiptParserSettings, config: dict[str, Any]) -> ReceiptParserSettings:
    parser = config.get("parser", {})
    reconciliation = config.get("reconciliation", {})
    if not isinstance(parser, dict) or not isinstance(reconciliation, dict):
        raise ReceiptParserConfigError("[parser] and [reconciliation] must be tables")

    changes: dict[str, Any] = {}
    if "currency_symbols" in parser:
        symbols = _as_str_tuple(parser["currency_symbols"], "parser.currency_symbols")
        if not any(symbols):
            raise ReceiptParserConfigError("parser.currency_symbols must not be empty")
        changes["currency_symbols"] = symbols
    if "decimal_separator" in parser:
        separator = parser["decimal_separator"]
        if not isinstance(separator, str) or len(separator) != 1 or separator.isdigit() or separator.isspace():
            raise ReceiptParserConfigError(f"parser.decimal_separator must be one non-digit character, got {separator!r}")
        changes["decimal_separator"] = separator
    if "product_code_min_value" in parser:
        changes["product_code_min_value"] = _as_int(parser["product_code_min_value"], "parser.product_code_min_value")
    if "extra_ignore_patterns" in parser:
        # Layers extend the rejection list rather than replacing it
        extra = _as_str_tuple(parser["extra_ignore_patterns"], "parser.extra_ignore_patterns")
        changes["extra_ignore_patterns"] = settings.extra_ignore_patterns + extra

    if "absolute_tolerance" in reconciliation:
        changes["absolute_tolerance"] = _as_decimal(
            reconciliation["absolute_tolerance"], "reconciliation.absolute_tolerance"
        )
    if "relative_tolerance" in reconciliation:
        changes["relative_tolerance"] = _as_decimal(
            reconciliation["relative_tolerance"], "reconciliation.relative_tolerance"
        )
    if "high_quantity_threshold" in reconciliation:
        changes["high_quantity_threshold"] = _as_int(
            reconciliation["high_quantity_threshold"], "reconciliation.high_quantity_threshold"
        )

    return replace(settings, **changes)


def build_parser_settings(configs: tuple[dict[str, Any], ...] = ()) -> ReceiptParserSettings:
    """
    Fold TOML-shaped config layers into parser settings.

    Later layers override scalar keys; ``extra_ignore_patterns`` accumulate.
    The resulting pattern table is compiled once here so a bad regex fails
    at load time, not in the middle of a scan.

    Raises:
        ReceiptParserConfigError: on any invalid key value
    """
    settings = ReceiptParserSettings()
    for config in configs:
        settings = _apply_config(settings, config)
    settings.build_patterns()
    return settings
