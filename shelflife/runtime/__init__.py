"""Runtime infrastructure for the shelflife project.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Receipt parser settings via load_receipt_parser_settings()

Usage:
    from shelflife.runtime import get_logger, load_receipt_parser_settings

    logger = get_logger(__name__)
    settings = load_receipt_parser_settings()
"""

from shelflife.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from shelflife.runtime.paths import ProjectPaths, get_paths, set_project_root
from shelflife.runtime.receipt_parser_rules import load_receipt_parser_settings

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_receipt_parser_settings",
    # Paths
    "get_paths",
    "set_project_root",
    "ProjectPaths",
]
