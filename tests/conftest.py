"""Shared pytest fixtures for splitscan tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from _pytest.monkeypatch import MonkeyPatch
from splitscan.runtime import clear_parser_config_cache, reset_paths


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: MonkeyPatch) -> Iterator[Path]:
    """Point SPLITSCAN_HOME at an empty directory so user config never leaks in."""
    monkeypatch.setenv("SPLITSCAN_HOME", str(tmp_path))
    monkeypatch.delenv("SPLITSCAN_CONFIG", raising=False)
    reset_paths()
    clear_parser_config_cache()
    yield tmp_path
    reset_paths()
    clear_parser_config_cache()
