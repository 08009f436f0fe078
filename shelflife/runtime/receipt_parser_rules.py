"""Runtime loader for receipt parser settings."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from shelflife.receipt.parser_settings import ReceiptParserSettings, build_parser_settings
from shelflife.runtime.logging import get_logger
from shelflife.runtime.paths import get_paths

logger = get_logger(__name__)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        logger.debug("Receipt parser config not found: %s", path)
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


@lru_cache(maxsize=8)
def load_receipt_parser_settings(config_paths: tuple[str, ...] | None = None) -> ReceiptParserSettings:
    """
    Load receipt parser settings from layered TOML files.

    Args:
        config_paths: Files to layer, in order. If None, uses the bundled
            defaults followed by the project's config/receipt_parser.toml.

    Raises:
        ReceiptParserConfigError: if a layer holds an invalid value
    """
    if config_paths is None:
        p = get_paths()
        config_files = [p.default_receipt_parser_rules, p.receipt_parser_rules]
    else:
        config_files = [Path(path) for path in config_paths]

    configs = tuple(_load_toml(path) for path in config_files)
    settings = build_parser_settings(configs)
    logger.debug(
        "Loaded receipt parser settings from %d file(s): currencies=%s separator=%r",
        len(config_files),
        "".join(settings.currency_symbols),
        settings.decimal_separator,
    )
    return settings
