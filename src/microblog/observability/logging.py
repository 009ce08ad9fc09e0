"""Logging configuration using Loguru.

This module provides:
- Structured JSON logging for production
- Human-readable colorized output for development
- Request-scoped context (request ID, user ID) via a ContextVar
- Interception of standard library logging
- Optional file sink with rotation and retention
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from typing import Any


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "asyncpg",
    "httpx",
    "httpcore",
    "asyncio",
)


class InterceptHandler(logging.Handler):
    """Route standard library log records into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Forward a stdlib record, preserving level and caller depth."""
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _patch_record(record: dict[str, Any]) -> None:
    """Merge the request context into the record and pre-render JSON."""
    record["extra"].update(_log_context.get())

    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["extra"].get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        **{k: v for k, v in record["extra"].items() if k != "serialized"},
    }

    exception = record["exception"]
    if exception:
        payload["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }

    record["extra"]["serialized"] = orjson.dumps(payload, default=str).decode()


def _format_json(record: dict[str, Any]) -> str:
    fmt = "{extra[serialized]}\n"
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def _format_text(record: dict[str, Any]) -> str:
    context = _log_context.get()
    context_str = ""
    if context:
        context_str = " | " + " ".join(f"{k}={v}" for k, v in context.items())

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        # Context values are user-controlled: escape format fields and markup
        + context_str.replace("{", "{{").replace("}", "}}").replace("<", r"\<")
        + " - <level>{message}</level>\n"
    )
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
    log_file: Path | str | None = None,
) -> None:
    """Configure Loguru sinks.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ("json" or "text")
        is_development: Force human-readable output regardless of format
        log_file: Optional file path for JSON output with rotation
    """
    logger.remove()
    logger.configure(patcher=_patch_record)

    level = log_level.upper()

    if log_format == "json" and not is_development:
        logger.add(
            sys.stdout,
            format=_format_json,
            level=level,
            colorize=False,
            backtrace=True,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=_format_text,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=_format_json,
            level=level,
            rotation="100 MB",
            retention="7 days",
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> "logger":  # type: ignore[valid-type]
    """Get a logger bound to ``name`` (typically ``__name__``)."""
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Add key/value pairs to the logging context of the current request.

    Example:
        bind_context(request_id="abc-123", user_id=42)
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def clear_context() -> None:
    """Drop all request-scoped logging context."""
    _log_context.set({})


def unbind_context(*keys: str) -> None:
    """Remove specific keys from the logging context."""
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


def get_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
    "unbind_context",
]
