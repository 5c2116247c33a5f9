"""Path resolution for splitscan configuration files.

The project home is ``$SPLITSCAN_HOME`` when set, otherwise the current
working directory. Packaged defaults always come from the installed
``splitscan.receipt.rules`` directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project home directory."""
    home = os.environ.get("SPLITSCAN_HOME", "").strip()
    if home:
        return Path(home).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for project-related paths.

    All user-facing paths are computed relative to the project home.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        # Ensure root is resolved to absolute path
        self.root = self.root.resolve()

    # --- Source code paths ---
    @property
    def src(self) -> Path:
        """Installed splitscan package directory."""
        return Path(__file__).resolve().parents[1]

    @property
    def default_parser_rules(self) -> Path:
        """Packaged parser defaults TOML file."""
        return self.src / "receipt" / "rules" / "default_parser.toml"

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def parser_rules(self) -> Path:
        """Project-level parser overrides TOML file."""
        return self.config / "parser.toml"


# Module-level singleton
_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance.

    Returns:
        The global ProjectPaths instance.
    """
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Forget the cached ProjectPaths so SPLITSCAN_HOME is read again."""
    global _paths
    _paths = None
