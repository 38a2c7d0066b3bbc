"""Logging configuration for applications embedding the query layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SphinxQuery.config.common import expect_bool, expect_str, get_section

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Validated `log` section.

    Attributes:
        level: Level of the `SphinxQuery` logger.
        to_file: Whether to mirror log output to `<dir>/<action>/`.
        dir: Base directory for log files.
        action: Name of the log file subdirectory and file prefix.
    """

    level: str = "INFO"
    to_file: bool = False
    dir: str = "log"
    action: str = "query"


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load the optional `log` section; missing keys keep their defaults.

    Raises:
        TypeError: If a key has the wrong type.
    """
    section = get_section(raw, "log", required=False)
    defaults = RuntimeConfig()
    return RuntimeConfig(
        level=expect_str(section.get("level", defaults.level), "log.level").strip().upper(),
        to_file=expect_bool(section.get("to_file", defaults.to_file), "log.to_file"),
        dir=expect_str(section.get("dir", defaults.dir), "log.dir"),
        action=expect_str(section.get("action", defaults.action), "log.action").strip(),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate the `log` section.

    Raises:
        ValueError: If the level is unknown, or file mirroring lacks a dir or action.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file=true")
    if config.to_file and not config.action:
        raise ValueError("log.action must not be empty when log.to_file=true")
