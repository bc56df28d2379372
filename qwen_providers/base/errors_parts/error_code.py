"""
Normalized adapter error codes (taxonomy).

Defines the `ErrorCode` enumeration raised by the Qwen adapter. Values are
lowercase snake_case and are considered a stable public contract for logging
and caller-side retry decisions.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated error kinds representing failure categories."""

    CONFIGURATION = "configuration"
    SERIALIZATION = "serialization"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    API = "api"
    STREAM_READ = "stream_read"
    STREAM_DECODE = "stream_decode"
    RESPONSE_DECODE = "response_decode"
    CANCELLED = "cancelled"


__all__ = ["ErrorCode"]
