"""Shared HTTP client pool.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so that clients built without an explicit ``with_http_client``
    option share connections. ``httpx.Client`` is safe for concurrent use, so
    one pooled instance backs any number of simultaneous calls.

Timeout strategy:
    The pooled client's default timeout derives from
    :func:`get_timeout_config`; the adapter additionally passes its per-call
    timeout on every request, so the pool default is only a backstop.

Lifecycle & cleanup:
    - Clients are cached by ``purpose`` string.
    - All clients are closed at interpreter exit via ``atexit``. Tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict

import httpx

from ..timeouts import get_timeout_config, to_httpx_timeout

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str = "qwen") -> httpx.Client:
    """Return a pooled ``httpx.Client`` for ``purpose``.

    The first request for a key creates a client; subsequent requests reuse
    the same instance. A client closed by its owner is replaced.

    Parameters:
        purpose: A short string discriminating separate pools. Keep stable to
            maximize reuse.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is not None and not client.is_closed:
            return client
        cfg = get_timeout_config()
        client = httpx.Client(timeout=to_httpx_timeout(cfg.http_timeout_seconds))
        _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
