"""Shared pytest fixtures for shelflife tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from shelflife.runtime import load_receipt_parser_settings, set_project_root


@pytest.fixture(autouse=True)
def isolated_project_root(tmp_path: Path) -> Iterator[Path]:
    """Point config lookup at an empty project so a developer's config/ never leaks in."""
    set_project_root(tmp_path)
    load_receipt_parser_settings.cache_clear()
    yield tmp_path
    load_receipt_parser_settings.cache_clear()
