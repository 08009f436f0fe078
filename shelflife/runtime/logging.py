"""Logging setup shared by the CLI, the HTTP server and the scan workflow.

Every shelflife logger lives under the ``shelflife_local`` namespace. Log
records go to stderr so ``shelflife parse --json`` keeps stdout machine
readable.

Usage:
    from shelflife.runtime import get_logger
    logger = get_logger(__name__)

Environment variables:
    SHELFLIFE_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default: INFO)
"""

import logging
import os
import sys
from typing import TextIO

DEFAULT_LOG_LEVEL = logging.INFO
LOG_LEVEL_ENV = "SHELFLIFE_LOG_LEVEL"
LOG_NAMESPACE = "shelflife_local"

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"

# httpx logs every request at INFO, including OCR upload URLs
_CHATTY_LIBRARY_LOGGERS = ("httpx", "httpcore")

_handler: logging.Handler | None = None


def _level_from_env() -> int:
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if raw == "WARN":
        raw = "WARNING"
    level = logging.getLevelName(raw) if raw else DEFAULT_LOG_LEVEL
    return level if isinstance(level, int) else DEFAULT_LOG_LEVEL


def _apply_level(level: int) -> None:
    logging.getLogger(LOG_NAMESPACE).setLevel(level)
    if _handler is not None:
        _handler.setFormatter(logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT))
    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def configure_logging(level: int | None = None, stream: TextIO | None = None) -> None:
    """Attach the stderr handler to the shelflife namespace once per process.

    Args:
        level: Explicit log level; falls back to $SHELFLIFE_LOG_LEVEL, then INFO
        stream: Output stream, stderr by default
    """
    global _handler

    if _handler is not None:
        return

    _handler = logging.StreamHandler(stream or sys.stderr)
    namespace_logger = logging.getLogger(LOG_NAMESPACE)
    namespace_logger.addHandler(_handler)
    namespace_logger.propagate = False
    _apply_level(level if level is not None else _level_from_env())


def get_logger(name: str) -> logging.Logger:
    """Return ``shelflife_local.<name>``, configuring logging on first use."""
    configure_logging()
    return logging.getLogger(f"{LOG_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the namespace level at runtime (e.g. for a --verbose flag)."""
    configure_logging(level)
    _apply_level(level)
