"""Logging configuration using Loguru.

Production writes one JSON object per line; development gets a colourised,
human-readable line. Request-scoped fields (request id, authenticated
username) live in a ContextVar and are attached to every record emitted
while a request is being handled.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

import orjson
from loguru import logger


if TYPE_CHECKING:
    from loguru import Logger, Record


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})  # noqa: B039

# Keys whose values must never reach a log sink.
_REDACTED_KEYS = frozenset(
    {"password", "current_password", "new_password", "token", "refresh_token", "secret"}
)

_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "sqlalchemy.engine",
    "aiosqlite",
    "httpx",
    "httpcore",
    "asyncio",
)


class InterceptHandler(logging.Handler):
    """Route standard-library log records into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
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


def _scrub(extra: dict[str, Any]) -> dict[str, Any]:
    return {
        key: "***" if key in _REDACTED_KEYS else value for key, value in extra.items()
    }


def _patch_record(record: Record) -> None:
    """Merge request context into the record and redact sensitive fields."""
    record["extra"] = _scrub({**_log_context.get(), **record["extra"]})


def _format_json(record: Record) -> str:
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["extra"].get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        **{k: v for k, v in record["extra"].items() if k not in ("name", "_json")},
    }
    exc = record["exception"]
    if exc:
        payload["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }
    record["extra"]["_json"] = orjson.dumps(payload, default=str).decode()
    return "{extra[_json]}\n"


def _format_text(record: Record) -> str:
    fields = " ".join(
        f"{k}={v}" for k, v in record["extra"].items() if k not in ("name", "_ctx")
    )
    record["extra"]["_ctx"] = f" | {fields}" if fields else ""
    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        "{extra[_ctx]} - <level>{message}</level>\n"
    )
    if record["exception"]:
        fmt += "{exception}\n"
    return fmt


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
) -> None:
    """Configure Loguru sinks and capture standard-library logging.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" or "text".
        is_development: Forces the text format and enables variable dumps
            in tracebacks.
    """
    logger.remove()
    logger.configure(patcher=_patch_record)

    use_json = log_format == "json" and not is_development
    logger.add(
        sys.stdout,
        format=_format_json if use_json else _format_text,
        level=log_level.upper(),
        colorize=not use_json,
        backtrace=True,
        diagnose=is_development,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Logger:
    """Get a Loguru logger bound to a module name."""
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every log record in the current request context."""
    _log_context.set({**_log_context.get(), **kwargs})


def clear_context() -> None:
    """Reset the logging context; called at the start of each request."""
    _log_context.set({})


def unbind_context(*keys: str) -> None:
    """Remove fields from the logging context."""
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


def get_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()
