"""SphinxQuery logging utilities.

Provides the package logger with a timestamp + abbreviated level prefix, and
centralizes handler setup for applications embedding the query layer.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from SphinxQuery.config import AppConfig


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("SphinxQuery")


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> Path | None:
    """Configure the SphinxQuery logger.

    Uses format: mm-dd HH:MM:SS [<LVL>] <message>
    where LVL is one of: DEBG/INFO/WARN/ERRO.

    Args:
        level: Logging level (e.g., INFO, DEBUG).
        action: Name used to build the log file path.
        log_to_file: Whether to mirror logs to a file.
        log_dir: Base directory for log files.

    Returns:
        Path of the mirrored log file, or None when logging only to stderr.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    formatter = _AbbrevLevelFormatter(
        fmt="%(asctime)s [%(levelabbr)s] %(message)s",
        datefmt="%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(resolved_level)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    log_path: Path | None = None
    if log_to_file and action:
        timestamp = datetime.now().strftime("%m%d%H%M%S")
        action_dir = Path(log_dir or "log") / action
        action_dir.mkdir(parents=True, exist_ok=True)
        log_path = action_dir / f"{action}_{timestamp}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for handler in log.handlers:
        handler.close()
    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(min(logging.DEBUG, resolved_level) if log_path else resolved_level)
    log.propagate = False
    return log_path


def configure_logging_from(config: AppConfig) -> Path | None:
    """Configure the SphinxQuery logger from the `log` config section."""
    runtime = config.runtime
    return configure_logging(
        level=runtime.level,
        action=runtime.action,
        log_to_file=runtime.to_file,
        log_dir=runtime.dir,
    )
