"""
Error classification helpers mapping failures to normalized ErrorCode values.

Two entry points cover the HTTP boundary:

- :func:`classify_http_error` turns a non-success status plus body into an
  ``API`` error (structured ``{"code", "message"}`` body) or an
  ``HTTP_STATUS`` error (anything else). Streaming and non-streaming calls
  share it so both paths report identical errors.
- :func:`classify_transport_exception` wraps ``httpx`` failures raised while
  connecting or reading.
"""
from __future__ import annotations

from typing import Optional

import httpx
from pydantic import ValidationError

from ..dto.error_body import ErrorBody
from .error_code import ErrorCode
from .provider_error import ProviderError


def is_success_status(status: int) -> bool:
    """Return True for 2xx statuses."""
    return 200 <= status < 300


def _decode_body(body: bytes | str) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def classify_http_error(
    status: int,
    body: bytes | str,
    *,
    provider: str = "qwen",
    model: Optional[str] = None,
) -> ProviderError:
    """Build the error for a response whose status is outside the 2xx range.

    Parameters:
        status: HTTP status code returned by the server.
        body: Raw response body (bytes or already-decoded text).
        provider: Provider key recorded on the error.
        model: Optional model name for context.

    Returns:
        ``ProviderError(API)`` carrying ``upstream_code`` and the upstream
        message when the body is a structured error object, otherwise
        ``ProviderError(HTTP_STATUS)`` carrying the status and raw body text.
    """
    text = _decode_body(body)
    try:
        parsed = ErrorBody.model_validate_json(text)
    except ValidationError:
        return ProviderError(
            code=ErrorCode.HTTP_STATUS,
            message=f"HTTP error {status}: {text}",
            provider=provider,
            model=model,
            status_code=status,
            body=text,
        )
    return ProviderError(
        code=ErrorCode.API,
        message=parsed.message,
        provider=provider,
        model=model,
        upstream_code=parsed.code,
        status_code=status,
        body=text,
    )


def classify_transport_exception(
    exc: Exception,
    *,
    provider: str = "qwen",
    model: Optional[str] = None,
    reading_stream: bool = False,
) -> ProviderError:
    """Wrap an ``httpx`` exception in a :class:`ProviderError`.

    Timeouts map to ``CANCELLED``; other failures map to ``TRANSPORT`` or, when
    ``reading_stream`` is set, to ``STREAM_READ``.
    """
    if isinstance(exc, ProviderError):
        return exc
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ProviderError(
            code=ErrorCode.CANCELLED,
            message=f"request timed out: {exc}",
            provider=provider,
            model=model,
            raw=exc,
        )
    code = ErrorCode.STREAM_READ if reading_stream else ErrorCode.TRANSPORT
    prefix = "failed to read stream" if reading_stream else "failed to send HTTP request"
    return ProviderError(code=code, message=f"{prefix}: {exc}", provider=provider, model=model, raw=exc)


__all__ = [
    "classify_http_error",
    "classify_transport_exception",
    "is_success_status",
]
