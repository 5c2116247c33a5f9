"""Runtime infrastructure for splitscan.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Parser configuration via load_parser_config()

Usage:
    from splitscan.runtime import get_logger, load_parser_config

    logger = get_logger(__name__)
    config = load_parser_config()
"""

from splitscan.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from splitscan.runtime.parser_config import (
    clear_parser_config_cache,
    load_parser_config,
    resolve_config_files,
)
from splitscan.runtime.paths import ProjectPaths, get_paths, reset_paths

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Config
    "load_parser_config",
    "resolve_config_files",
    "clear_parser_config_cache",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
