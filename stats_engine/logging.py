"""Logging configuration using Loguru.

Console output plus a rotating JSON file sink. Standard library logging is
intercepted and routed through loguru so third-party messages share one
format. Level and directory default to the LOG_LEVEL and LOG_DIR settings.

Example:
    >>> from stats_engine.logging import setup_logging, get_logger
    >>> setup_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.info("Aggregated {} players", 12)

Status Tags:
    >>> from stats_engine.logging import SUCCESS, FAIL, WARN
    >>> logger.info(f"{SUCCESS} Goal 4 evaluated")
    >>> logger.warning(f"{WARN} Skipped 2 malformed stat rows")
    >>> logger.error(f"{FAIL} Goal 7 references unknown metric 99")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from stats_engine.config import get_settings

# ANSI status tags, rendered by loguru's colorize=True console sink
SUCCESS = "\033[92m[SUCCESS]\033[0m"  # Green
FAIL = "\033[91m[FAIL]\033[0m"        # Red
WARN = "\033[93m[WARN]\033[0m"        # Yellow

CONSOLE_FORMAT: str = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} | {message}"
LOG_FILE_PATTERN: str = "stats_engine_{time:YYYY-MM-DD}.log"


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        level: str | int
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back past the logging module to the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(name=record.name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: str | None = None,
    log_dir: str | Path | None = None,
    rotation: str = "1 day",
    retention: str = "30 days",
    serialize: bool = True,
) -> None:
    """Configure application logging.

    Args:
        level: Minimum log level, defaults to the LOG_LEVEL setting.
        log_dir: Directory for log files, defaults to the LOG_DIR setting.
        rotation: When to rotate log files (e.g., "1 day", "100 MB").
        retention: How long to keep old log files.
        serialize: Whether to write JSON-formatted logs to file.
    """
    if level is None or log_dir is None:
        settings = get_settings()
        level = level or settings.log_level
        log_dir = log_dir if log_dir is not None else settings.log_dir_obj

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.configure(extra={"name": "stats_engine"})
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)
    logger.add(
        log_path / LOG_FILE_PATTERN,
        level=level,
        format=FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        serialize=serialize,
        enqueue=True,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: str) -> Any:
    """Return the loguru logger bound to ``name`` (typically ``__name__``)."""
    return logger.bind(name=name)


__all__ = [
    "CONSOLE_FORMAT",
    "FAIL",
    "FILE_FORMAT",
    "SUCCESS",
    "WARN",
    "InterceptHandler",
    "get_logger",
    "logger",
    "setup_logging",
]
