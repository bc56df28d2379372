"""Timeout defaults for the adapter.

Centralizes the timeout values used when a client is built without an
explicit ``with_timeout`` option and when the pooled ``httpx`` clients are
created.

Key Components
--------------
TimeoutConfig
    Frozen dataclass of normalized timeout values (seconds).

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when the relevant variables change. Supported
    environment variables (all optional, positive floats):
        QWEN_TIMEOUT_HTTP_SECONDS
        QWEN_TIMEOUT_CONNECT_SECONDS

to_httpx_timeout(seconds)
    Converts a per-call timeout into an ``httpx.Timeout``.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx

DEFAULT_HTTP_TIMEOUT_SECONDS = 120.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Default per-request timeout. For streaming calls
            it bounds each read, so it is the maximum idle gap between frames.
        connect_timeout_seconds: Upper bound for establishing a connection.
    """

    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("QWEN_TIMEOUT_HTTP_SECONDS", ""),
            os.getenv("QWEN_TIMEOUT_CONNECT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("QWEN_TIMEOUT_HTTP_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
        connect_timeout_seconds=_parse_env_float("QWEN_TIMEOUT_CONNECT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


def to_httpx_timeout(seconds: float) -> httpx.Timeout:
    """Build an ``httpx.Timeout`` for a per-call limit of ``seconds``."""
    connect = min(seconds, get_timeout_config().connect_timeout_seconds)
    return httpx.Timeout(seconds, connect=connect)


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "to_httpx_timeout",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
]
