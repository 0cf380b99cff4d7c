"""Logging for OpenWork skills: console warnings, a rotating log file, trace spans."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from openwork_skills.core.errors import ClassifiedError

LOGGER_NAME = "openwork"
LOG_FILENAME = "openwork.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Rotation for <logs_dir>/openwork.log
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 2

_logger: logging.Logger | None = None


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(log_level: str = "INFO", logs_dir: Path | None = None) -> logging.Logger:
    """Configure the ``openwork`` logger once per process.

    Warnings and errors always reach stderr. When ``logs_dir`` is set, every
    record at ``log_level`` or above (trace spans included at DEBUG) is also
    written to ``<logs_dir>/openwork.log``.
    """
    global _logger
    if _logger is not None:
        return _logger

    level = _level(log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _close_handlers(logger)

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            logs_dir / LOG_FILENAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Return the ``openwork`` logger, configuring defaults on first use."""
    return _logger if _logger is not None else setup_logging()


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def reset_logger() -> None:
    """Close the current handlers so the next call reconfigures logging."""
    global _logger
    if _logger is not None:
        _close_handlers(_logger)
        _logger = None


def _format_details(details: dict[str, Any]) -> str:
    return " ".join(f"{k}={v}" for k, v in details.items())


def log_entry(scope: str, action: str, **details: Any) -> None:
    """Log the start of a traced action."""
    logger = get_logger()
    if details:
        logger.debug("[Trace][%s] %s start %s", scope, action, _format_details(details))
    else:
        logger.debug("[Trace][%s] %s start", scope, action)


def log_exit(
    scope: str,
    action: str,
    duration_ms: float | None = None,
    **details: Any,
) -> None:
    """Log the end of a traced action."""
    logger = get_logger()
    if duration_ms is not None:
        details["duration_ms"] = f"{duration_ms:.0f}"
    if details:
        logger.debug("[Trace][%s] %s end %s", scope, action, _format_details(details))
    else:
        logger.debug("[Trace][%s] %s end", scope, action)


@contextmanager
def trace_span(scope: str, action: str, **details: Any) -> Iterator[None]:
    """Log entry and exit around a block, recording success and duration.

    Exceptions are logged with ``ok=False`` and re-raised unchanged.
    """
    start = time.perf_counter()
    log_entry(scope, action, **details)
    try:
        yield
    except Exception as e:
        log_exit(
            scope,
            action,
            duration_ms=(time.perf_counter() - start) * 1000,
            ok=False,
            error=str(e) or type(e).__name__,
        )
        raise
    log_exit(scope, action, duration_ms=(time.perf_counter() - start) * 1000, ok=True)


def log_skill_error(classified: ClassifiedError) -> None:
    """Log a failed skill operation with its category and error metadata.

    Errors the user can act on are logged at WARNING, filesystem and
    unexpected failures at ERROR.
    """
    level = logging.WARNING if classified.recoverable else logging.ERROR
    details = {"category": classified.category.value, **classified.metadata}
    get_logger().log(
        level,
        "Skill operation failed: %s (%s)",
        classified.message,
        _format_details(details),
    )
