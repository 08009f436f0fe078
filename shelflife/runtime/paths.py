"""Centralized path management for the shelflife project."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Project root: $SHELFLIFE_HOME if set, else the current working directory."""
    env_root = os.environ.get("SHELFLIFE_HOME")
    if env_root:
        return Path(env_root).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths."""

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Source code paths ---
    @property
    def src(self) -> Path:
        """shelflife package directory."""
        return Path(__file__).resolve().parents[1]

    @property
    def default_receipt_parser_rules(self) -> Path:
        """Bundled receipt parser defaults TOML file."""
        return self.src / "receipt" / "rules" / "default_receipt_parser.toml"

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def receipt_parser_rules(self) -> Path:
        """Project-level receipt parser overrides TOML file."""
        return self.config / "receipt_parser.toml"


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def set_project_root(root: Path) -> None:
    """Point path resolution at a different project root."""
    global _paths
    _paths = ProjectPaths(root=root)
