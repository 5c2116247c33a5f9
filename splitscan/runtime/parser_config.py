"""Runtime loader for receipt parser configuration."""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from splitscan.receipt.config import ParserConfig
from splitscan.runtime.logging import get_logger
from splitscan.runtime.paths import get_paths

logger = get_logger(__name__)

CONFIG_ENV_VAR = "SPLITSCAN_CONFIG"


def _load_toml(path: Path) -> dict[str, Any]:
    """Load TOML file and return parsed dict; missing files map to empty dict."""
    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)
    return data if isinstance(data, dict) else {}


def resolve_config_files(config_path: str | Path | None = None) -> tuple[Path, ...]:
    """
    Return the TOML files to layer, lowest priority first.

    Order: packaged defaults, ``$SPLITSCAN_HOME/config/parser.toml``, then the
    explicit path (argument, else ``$SPLITSCAN_CONFIG``). Duplicates are kept
    once at their first position.

    Raises:
        FileNotFoundError: when an explicit config path does not exist.
    """
    p = get_paths()
    candidates = [p.default_parser_rules, p.parser_rules]

    explicit = config_path if config_path is not None else os.environ.get(CONFIG_ENV_VAR, "").strip() or None
    if explicit is not None:
        explicit_path = Path(explicit).expanduser()
        if not explicit_path.exists():
            raise FileNotFoundError(f"Parser config not found: {explicit_path}")
        candidates.append(explicit_path)

    seen_paths: set[Path] = set()
    files: list[Path] = []
    for candidate in candidates:
        resolved = candidate.resolve()
        if resolved in seen_paths:
            continue
        seen_paths.add(resolved)
        files.append(candidate)
    return tuple(files)


@lru_cache(maxsize=8)
def _load_layers(config_files: tuple[Path, ...]) -> ParserConfig:
    config = ParserConfig()
    for path in config_files:
        data = _load_toml(path)
        if not data:
            continue
        logger.debug("Layering parser config from %s", path)
        try:
            config = ParserConfig.from_mapping(data, base=config)
        except ValueError as exc:
            raise ValueError(f"Invalid parser config in {path}: {exc}") from exc
    return config


def load_parser_config(config_path: str | Path | None = None) -> ParserConfig:
    """
    Build the effective ParserConfig from packaged defaults and user files.

    Raises:
        FileNotFoundError: when an explicit config path does not exist.
        ValueError: when a file is not valid TOML or holds malformed values.
    """
    return _load_layers(resolve_config_files(config_path))


def clear_parser_config_cache() -> None:
    _load_layers.cache_clear()
