"""
Centralized logging configuration for the kinship services.

Every process (API, batch jobs, tests run with -s) writes one line per record:
Format: 2026-01-06T14:05:52Z [source] LEVEL message

Environment Variables:
    LOG_LEVEL: "TRACE", "DEBUG" or "INFO" (default)
               - INFO: request-level events (paths computed, suggestions found)
               - DEBUG: per-pivot deduction decisions, PocketBase filters
               - TRACE: BFS frontier expansion, raw connection records

Usage:
    from kinship.logging_config import configure_logging, get_logger

    configure_logging(source="api")
    logger = get_logger(__name__)
    logger.info("Mission path computed")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _trace(self: logging.Logger, message: object, *args: object, **kw: object) -> None:
    """Log a message at TRACE level (5)."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kw)  # type: ignore[arg-type]


logging.Logger.trace = _trace  # type: ignore[attr-defined]


class ISO8601Formatter(logging.Formatter):
    """Formatter producing `<UTC timestamp> [source] LEVEL message` lines."""

    def __init__(self, source: str = "kinship"):
        """Initialize formatter with a source identifier.

        Args:
            source: Identifier shown in brackets (e.g., "api", "engine")
        """
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, UTC).strftime(TIMESTAMP_FORMAT)
        message = record.getMessage()

        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return f"{timestamp} [{self.source}] {record.levelname} {message}"


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access lines for the health endpoint unless at DEBUG."""

    HEALTH_PATHS = {"/health", "/api/health"}

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno <= logging.DEBUG:
            return True

        message = record.getMessage()
        return not any(path in message and "GET" in message for path in self.HEALTH_PATHS)


def _level_from_env(debug: bool | None) -> int:
    log_level_env = os.getenv("LOG_LEVEL", "").upper()
    if log_level_env == "TRACE":
        return TRACE
    if log_level_env == "DEBUG" or debug:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    source: str = "kinship",
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Configure the root logger for a service component.

    Args:
        source: Source identifier for log messages (e.g., "api", "engine")
        level: Explicit logging level; defaults to LOG_LEVEL from the environment
        debug: Force DEBUG when LOG_LEVEL is unset

    Returns:
        Configured root logger
    """
    if level is None:
        level = _level_from_env(debug)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))
    handler.addFilter(HealthCheckFilter())
    root_logger.addHandler(handler)

    # Uvicorn installs its own handlers; route them through ours
    for uvicorn_logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(uvicorn_logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.addHandler(handler)
        uvicorn_logger.setLevel(level)
        uvicorn_logger.propagate = False

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
