"""Focused tests for qwen_providers.base.logging.

Covers:
- _parse_level string parsing
- normalized_log_event emits required keys and keeps normalized values
- JsonFormatter hoists JSON messages to top level
"""
from __future__ import annotations

import json
import logging

from qwen_providers.base.log_support import JsonFormatter, LogContext
from qwen_providers.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    _parse_level,  # type: ignore[attr-defined]
    get_logger,
    log_event,
    normalized_log_event,
)


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _logger_with_handler(name: str):
    logger = get_logger(name)
    handler = _ListHandler()
    logger.handlers[:] = [handler]
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_base_logger_level_follows_environment(monkeypatch):
    monkeypatch.setenv("QWEN_PROVIDERS_LOG_LEVEL", "error")
    assert get_logger().level == logging.ERROR  # nosec B101
    monkeypatch.delenv("QWEN_PROVIDERS_LOG_LEVEL")
    assert get_logger().level == logging.INFO  # nosec B101


def test_base_logger_has_one_json_console_handler():
    logger = get_logger()
    get_logger("qwen_providers.extra")
    assert len(logger.handlers) == 1  # nosec B101
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)  # nosec B101


def test_normalized_log_event_emits_required_keys():
    logger, handler = _logger_with_handler("qwen_providers.test.normalized")
    ctx = LogContext(provider="qwen", model="qwen-turbo", mode="native")
    normalized_log_event(
        logger,
        "stream.error",
        ctx,
        phase="finalize",
        error_code="stream_decode",
        emitted=True,
        tokens={"input_tokens": 3},
        emitted_extra=None,
    )
    record = handler.records[-1]
    payload = json.loads(record.getMessage())
    for key in REQUIRED_NORMALIZED_KEYS:
        assert key in payload  # nosec B101
    assert payload["event"] == "stream.error"  # nosec B101
    assert payload["error_code"] == "stream_decode"  # nosec B101
    assert payload["model"] == "qwen-turbo" and payload["mode"] == "native"  # nosec B101
    assert payload["tokens"] == {"input_tokens": 3}  # nosec B101
    assert "emitted_extra" not in payload  # nosec B101
    assert record.levelno == logging.WARNING  # nosec B101


def test_normalized_log_event_without_error_omits_error_code():
    logger, handler = _logger_with_handler("qwen_providers.test.ok")
    normalized_log_event(logger, "chat.end", None, phase="finalize", emitted=True)
    payload = json.loads(handler.records[-1].getMessage())
    assert "error_code" not in payload  # nosec B101
    assert payload["attempt"] is None and payload["tokens"] is None  # nosec B101
    assert handler.records[-1].levelno == logging.INFO  # nosec B101


def test_log_event_drops_none_fields():
    logger, handler = _logger_with_handler("qwen_providers.test.plain")
    log_event(logger, "chat.start", LogContext(provider="qwen"), messages=2, request_id=None)
    payload = json.loads(handler.records[-1].getMessage())
    assert payload == {"event": "chat.start", "provider": "qwen", "messages": 2}  # nosec B101


def test_json_formatter_hoists_structured_message():
    record = logging.LogRecord("qwen_providers", logging.INFO, __file__, 1, '{"event": "chat.end", "emitted": true}', None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "chat.end" and out["emitted"] is True  # nosec B101
    assert out["logger"] == "qwen_providers" and out["level"] == "INFO"  # nosec B101
    assert "msg" not in out  # nosec B101


def test_json_formatter_keeps_plain_message():
    record = logging.LogRecord("qwen_providers", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    out = json.loads(JsonFormatter().format(record))
    assert out["msg"] == "hello world"  # nosec B101
