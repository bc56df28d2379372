"""HTTP dispatch for chat calls.

Every call is sent with ``stream=True`` so the body is read explicitly:
non-streaming calls read it in full on the caller's thread, streaming calls
hand the open response to a stream worker. Non-2xx statuses are classified
here, before any body parsing, so both paths report identical errors.
"""

from __future__ import annotations

import socket
from contextlib import suppress
from typing import Dict, Optional

import httpx

from ..base.cancellation import CancellationToken
from ..base.errors import (
    ErrorCode,
    ProviderError,
    classify_http_error,
    classify_transport_exception,
    is_success_status,
)
from ..base.timeouts import to_httpx_timeout
from ..config.defaults import PROVIDER_NAME
from .options import ClientConfig

EVENT_STREAM = "text/event-stream"


def build_headers(config: ClientConfig, *, stream: bool) -> Dict[str, str]:
    """Return request headers; ``Accept`` is only set for streaming calls."""
    headers = {
        "Authorization": f"Bearer {config.api_key}",
        "Content-Type": "application/json",
    }
    if stream:
        headers["Accept"] = EVENT_STREAM
    return headers


def abort_response(response: httpx.Response) -> None:
    """Close ``response`` so that a read blocked on another thread returns.

    ``Response.close`` alone does not wake a thread parked in ``recv``, so the
    underlying socket is shut down first when the transport exposes it.
    """
    network_stream = response.extensions.get("network_stream")
    sock = network_stream.get_extra_info("socket") if network_stream is not None else None
    if sock is not None:
        with suppress(OSError):
            sock.shutdown(socket.SHUT_RDWR)
    response.close()


def cancelled_error(token: Optional[CancellationToken], model: Optional[str]) -> ProviderError:
    reason = token.reason if token is not None and token.reason else "request cancelled"
    return ProviderError(code=ErrorCode.CANCELLED, message=reason, provider=PROVIDER_NAME, model=model)


def send(
    config: ClientConfig,
    endpoint: str,
    body: bytes,
    *,
    stream: bool,
    model: Optional[str] = None,
    cancel: Optional[CancellationToken] = None,
) -> httpx.Response:
    """POST ``body`` to ``endpoint`` and return the open response.

    The response status is already verified to be 2xx; the caller owns the
    response and must close it.

    Raises:
        ProviderError: ``CANCELLED`` if ``cancel`` fired before dispatch or the
            request timed out; ``TRANSPORT`` on connection failures;
            ``API``/``HTTP_STATUS`` for non-2xx responses.
    """
    if cancel is not None and cancel.cancelled:
        raise cancelled_error(cancel, model)
    client = config.http_client
    request = client.build_request(
        "POST",
        config.base_url + endpoint,
        content=body,
        headers=build_headers(config, stream=stream),
        timeout=to_httpx_timeout(config.timeout),
    )
    try:
        response = client.send(request, stream=True)
    except httpx.HTTPError as exc:
        raise classify_transport_exception(exc, provider=PROVIDER_NAME, model=model) from exc

    if is_success_status(response.status_code):
        return response
    try:
        raw = response.read()
    except httpx.HTTPError as exc:
        raise classify_transport_exception(exc, provider=PROVIDER_NAME, model=model) from exc
    finally:
        response.close()
    raise classify_http_error(response.status_code, raw, provider=PROVIDER_NAME, model=model)


def read_body(
    response: httpx.Response,
    *,
    model: Optional[str] = None,
    cancel: Optional[CancellationToken] = None,
) -> bytes:
    """Read the full body of ``response`` and close it.

    A cancellation while reading aborts the response (see
    :func:`abort_response`), unblocking the read; the failure is then
    reported as ``CANCELLED``.
    """
    unregister = cancel.on_cancel(lambda: abort_response(response)) if cancel is not None else None
    try:
        raw = response.read()
    except Exception as exc:  # a read aborted by cancellation surfaces as an arbitrary I/O error
        if cancel is not None and cancel.cancelled:
            raise cancelled_error(cancel, model) from exc
        if isinstance(exc, httpx.HTTPError):
            raise classify_transport_exception(exc, provider=PROVIDER_NAME, model=model) from exc
        raise
    finally:
        if unregister is not None:
            unregister()
        with suppress(Exception):
            response.close()
    if cancel is not None and cancel.cancelled:
        # shutting the socket down can end a read-until-close body early
        raise cancelled_error(cancel, model)
    return raw


__all__ = ["build_headers", "send", "read_body", "abort_response", "cancelled_error", "EVENT_STREAM"]
