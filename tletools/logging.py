"""Structured logging helpers for tletools."""

from __future__ import annotations

import contextlib
import contextvars
import datetime as _dt
import json
import logging
import os
import sys
from typing import Any, Dict, Iterable, Optional

from .core.types import TLEError

_LOGGER_NAME = "tletools"
_CONTEXT: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "tletools_log_context", default={}
)


def _resolve_level(level: Optional[str | int]) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv("TLETOOLS_LOG_LEVEL", "INFO")
    try:
        return int(level)
    except (TypeError, ValueError):
        numeric = logging.getLevelName(str(level).upper())
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


class JSONFormatter(logging.Formatter):
    """Render log records as JSON with contextual metadata."""

    _SKIP_FIELDS: Iterable[str] = {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "msg",
        "message",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": _dt.datetime.now(_dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = _CONTEXT.get()
        if context:
            payload["context"] = dict(context)

        extras = {k: v for k, v in record.__dict__.items() if k not in self._SKIP_FIELDS}
        if extras:
            payload["extra"] = extras

        if record.exc_info:
            exc = record.exc_info[1]
            if isinstance(exc, TLEError):
                payload["error"] = exc.as_dict()
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_fallback, sort_keys=False)


def _json_fallback(value: Any) -> Any:
    if isinstance(value, TLEError):
        return value.as_dict()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return repr(value)


def configure_logging(
    level: Optional[str | int] = None,
    stream: Optional[Any] = None,
    force: bool = False,
) -> logging.Logger:
    """Configure the package logger with JSON output."""

    logger = logging.getLogger(_LOGGER_NAME)
    if force:
        logger.handlers.clear()
    if logger.handlers and not force:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter())

    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a child logger using the configured JSON handler."""

    base = _LOGGER_NAME
    if not name:
        return logging.getLogger(base)
    if name.startswith(base):
        return logging.getLogger(name)
    return logging.getLogger(f"{base}.{name}")


@contextlib.contextmanager
def log_context(**kwargs: Any):
    """Context manager to bind contextual metadata to emitted logs."""

    current = dict(_CONTEXT.get())
    current.update({k: v for k, v in kwargs.items() if v is not None})
    token = _CONTEXT.set(current)
    try:
        yield
    finally:
        _CONTEXT.reset(token)
