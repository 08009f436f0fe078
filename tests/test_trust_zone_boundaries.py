"""Pure packages (domain, receipt) must not reach into runtime, application or cli."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

_PACKAGE = Path(__file__).resolve().parents[1] / "shelflife"
_PURE_DIRS = ("domain", "receipt")
_FORBIDDEN_PREFIXES = ("shelflife.runtime", "shelflife.application", "shelflife.cli")


def _imported_modules(path: Path) -> list[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    modules: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            modules.append(node.module)
    return modules


def _pure_files() -> list[Path]:
    return sorted(path for name in _PURE_DIRS for path in (_PACKAGE / name).rglob("*.py"))


def test_pure_zone_has_files() -> None:
    assert _pure_files()


@pytest.mark.parametrize("path", _pure_files(), ids=lambda p: str(p.relative_to(_PACKAGE)))
def test_pure_module_does_not_import_privileged_code(path: Path) -> None:
    offenders = [m for m in _imported_modules(path) if m.startswith(_FORBIDDEN_PREFIXES)]
    assert offenders == []


@pytest.mark.parametrize("path", _pure_files(), ids=lambda p: str(p.relative_to(_PACKAGE)))
def test_pure_module_does_not_do_network_io(path: Path) -> None:
    offenders = [m for m in _imported_modules(path) if m.split(".")[0] in {"httpx", "fastapi", "uvicorn"}]
    assert offenders == []
