from decimal import Decimal
from pathlib import Path

import pytest
from shelflife.receipt.parser_settings import ReceiptParserSettings, build_parser_settings
from shelflife.receipt.text_parser import ReceiptParserConfigError
from shelflife.runtime import get_paths, load_receipt_parser_settings


def _write(path: Path, content: str) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_bundled_defaults_match_settings_defaults() -> None:
    assert get_paths().default_receipt_parser_rules.exists()
    assert load_receipt_parser_settings() == ReceiptParserSettings()


def test_project_config_overrides_bundled_defaults(tmp_path: Path) -> None:
    _write(
        tmp_path / "config" / "receipt_parser.toml",
        """
[parser]
currency_symbols = ["€"]
decimal_separator = ","

[reconciliation]
high_quantity_threshold = 50
""",
    )

    settings = load_receipt_parser_settings()

    assert settings.currency_symbols == ("€",)
    assert settings.decimal_separator == ","
    assert settings.display_currency == "€"
    assert settings.high_quantity_threshold == 50
    assert settings.absolute_tolerance == Decimal("0.01")


def test_explicit_layers_extend_ignore_patterns(tmp_path: Path) -> None:
    first = _write(tmp_path / "a.toml", '[parser]\nextra_ignore_patterns = ["^summe"]\n')
    second = _write(
        tmp_path / "b.toml",
        '[parser]\nextra_ignore_patterns = ["^kasse"]\n[reconciliation]\nrelative_tolerance = 0.05\n',
    )

    settings = load_receipt_parser_settings((first, second))

    assert settings.extra_ignore_patterns == ("^summe", "^kasse")
    assert settings.relative_tolerance == Decimal("0.05")


def test_missing_layer_is_ignored(tmp_path: Path) -> None:
    assert load_receipt_parser_settings((str(tmp_path / "nope.toml"),)) == ReceiptParserSettings()


@pytest.mark.parametrize(
    "config",
    [
        {"parser": {"currency_symbols": []}},
        {"parser": {"currency_symbols": "£"}},
        {"parser": {"decimal_separator": ""}},
        {"parser": {"decimal_separator": 1}},
        {"parser": {"product_code_min_value": "1000"}},
        {"parser": {"product_code_min_value": True}},
        {"parser": {"extra_ignore_patterns": ["("]}},
        {"reconciliation": {"absolute_tolerance": "lots"}},
        {"reconciliation": {"relative_tolerance": -0.1}},
        {"reconciliation": {"high_quantity_threshold": 2.5}},
        {"parser": "not a table"},
    ],
)
def test_invalid_config_raises(config: dict) -> None:
    with pytest.raises(ReceiptParserConfigError):
        build_parser_settings((config,))


def test_invalid_project_config_fails_at_load(tmp_path: Path) -> None:
    _write(tmp_path / "config" / "receipt_parser.toml", '[parser]\ndecimal_separator = "5"\n')

    with pytest.raises(ReceiptParserConfigError):
        load_receipt_parser_settings()
