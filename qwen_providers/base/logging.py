"""Structured logging utilities for the adapter.

- One shared ``qwen_providers`` logger with a single JSON stderr handler.
  Its level follows ``QWEN_PROVIDERS_LOG_LEVEL``.
- ``log_event`` writes one JSON payload per event.
- ``normalized_log_event`` guarantees the canonical keys ``structured``,
  ``phase``, ``attempt``, ``emitted`` and ``tokens`` (plus ``error_code`` on
  failures) so chat and stream events can be filtered uniformly.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from typing import Any, Dict, Mapping

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "qwen_providers"
LOG_LEVEL_ENV = "QWEN_PROVIDERS_LOG_LEVEL"

_BASE_LOGGER_ATTR = "_qwen_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_qwen_console_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name, falling back to ``default`` on unknown values."""
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _ensure_base_logger(level: int) -> logging.Logger:
    """Initialize and return the shared base logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False):
                # pytest swaps and closes stderr between tests
                logger.removeHandler(existing)
                with contextlib.suppress(Exception):
                    existing.close()
                logger.addHandler(_make_console_handler(desired_level))
                continue
            existing.setLevel(desired_level)
        return logger

    logger.setLevel(desired_level)
    logger.handlers[:] = [_make_console_handler(desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the configured base logger."""
    base_logger = _ensure_base_logger(level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    keep_none: bool = False,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (JSON formatted by ``get_logger``).
    event: str
        Event name (e.g. ``stream.start``).
    ctx: LogContext | None
        Provider/model context; merged shallowly.
    keep_none: bool
        When ``True``, keys whose values are ``None`` are preserved.
    level: int
        Logging level for the record.
    **fields: Any
        Arbitrary serializable key/value pairs.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    **extra_fields: Any,
) -> None:
    """Emit an event carrying the normalized key set.

    ``error_code`` is omitted when ``None``; every other normalized key is
    always present. Extra fields never overwrite a normalized value. Events
    with an ``error_code`` are logged at WARNING.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "error_code": error_code,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is None:
        base_fields.pop("error_code", None)
    for k, v in extra_fields.items():
        if v is None:
            continue
        if k in base_fields and base_fields[k] is not None:
            continue
        base_fields[k] = v
    level = logging.WARNING if error_code is not None else logging.INFO
    log_event(logger, event, ctx, keep_none=True, level=level, **base_fields)


__all__ = [
    "LogContext",
    "get_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
]
