"""Client configuration and construction options.

A client is configured by applying option callables, in order, to a mutable
:class:`ConfigDraft` and then sealing it into an immutable
:class:`ClientConfig`. Each option validates its input and raises
``ProviderError(CONFIGURATION)`` to abort construction; no partially built
client is ever returned.

Order matters: ``with_openai_compatible`` resets the base URL to the
selected mode's default, so an explicit ``with_base_url`` must come after it
to take effect.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import httpx

from ..base.errors import ErrorCode, ProviderError
from ..base.http import get_httpx_client
from ..base.timeouts import get_timeout_config
from ..config.defaults import PROVIDER_NAME, ProtocolMode, chat_path, default_base_url
from ..config.env import ENV_BASE_URL, ENV_USE_OPENAI_COMPATIBLE, parse_bool


def _config_error(message: str) -> ProviderError:
    return ProviderError(code=ErrorCode.CONFIGURATION, message=message, provider=PROVIDER_NAME)


@dataclass(frozen=True)
class ClientConfig:
    """Immutable client configuration, shared read-only by concurrent calls.

    Attributes:
        api_key: Bearer credential (never logged or shown in ``repr``).
        base_url: Base endpoint without a trailing slash.
        mode: Wire protocol.
        http_client: ``httpx.Client`` used for every call.
        timeout: Per-call timeout in seconds.
    """

    api_key: str = field(repr=False)
    base_url: str
    mode: ProtocolMode
    http_client: httpx.Client = field(repr=False)
    timeout: float

    @property
    def chat_url(self) -> str:
        """Absolute URL of the chat endpoint for this mode."""
        return self.base_url + chat_path(self.mode)


@dataclass
class ConfigDraft:
    """In-progress configuration mutated by options."""

    api_key: str
    mode: ProtocolMode = ProtocolMode.NATIVE
    base_url: str = field(default_factory=lambda: default_base_url(ProtocolMode.NATIVE))
    http_client: Optional[httpx.Client] = None
    timeout: float = field(default_factory=lambda: get_timeout_config().http_timeout_seconds)

    def seal(self) -> ClientConfig:
        return ClientConfig(
            api_key=self.api_key,
            base_url=self.base_url,
            mode=self.mode,
            http_client=self.http_client if self.http_client is not None else get_httpx_client(PROVIDER_NAME),
            timeout=self.timeout,
        )


Option = Callable[[ConfigDraft], None]


def with_base_url(url: str) -> Option:
    """Set the base endpoint.

    An empty value selects the default for the draft's current mode. Anything
    else must be an absolute ``http``/``https`` URL; a trailing ``/`` is
    stripped.
    """

    def _apply(draft: ConfigDraft) -> None:
        value = (url or "").strip()
        if not value:
            draft.base_url = default_base_url(draft.mode)
            return
        try:
            parsed = httpx.URL(value)
        except httpx.InvalidURL as exc:
            raise _config_error(f"invalid base URL {value!r}: {exc}") from exc
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise _config_error(f"invalid base URL {value!r}: expected an absolute http(s) URL")
        draft.base_url = value.rstrip("/")

    return _apply


def with_openai_compatible(enabled: bool = True) -> Option:
    """Select the OpenAI-compatible protocol (or the native one when ``enabled`` is False).

    Also resets the base URL to the selected mode's default.
    """

    def _apply(draft: ConfigDraft) -> None:
        draft.mode = ProtocolMode.OPENAI_COMPATIBLE if enabled else ProtocolMode.NATIVE
        draft.base_url = default_base_url(draft.mode)

    return _apply


def with_http_client(client: Optional[httpx.Client]) -> Option:
    """Use ``client`` for all calls; ``None`` keeps the pooled default."""

    def _apply(draft: ConfigDraft) -> None:
        if client is not None and not isinstance(client, httpx.Client):
            raise _config_error(f"http client must be an httpx.Client, got {type(client).__name__}")
        draft.http_client = client

    return _apply


def with_timeout(seconds: float) -> Option:
    """Set the per-call timeout; must be a finite positive number of seconds."""

    def _apply(draft: ConfigDraft) -> None:
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            raise _config_error(f"timeout must be a number of seconds, got {seconds!r}")
        if not math.isfinite(seconds) or seconds <= 0:
            raise _config_error(f"timeout must be positive, got {seconds!r}")
        draft.timeout = float(seconds)

    return _apply


def build_config(api_key: str, *options: Option) -> ClientConfig:
    """Validate ``api_key``, apply ``options`` in order and seal the result."""
    if not api_key or not api_key.strip():
        raise _config_error("API key is required")
    draft = ConfigDraft(api_key=api_key.strip())
    for option in options:
        option(draft)
    return draft.seal()


def config_options_from_env() -> List[Option]:
    """Options derived from ``QWEN_USE_OPENAI_COMPATIBLE`` and ``QWEN_BASE_URL``.

    The protocol option comes first so an explicit base URL wins.
    """
    opts: List[Option] = []
    if parse_bool(os.environ.get(ENV_USE_OPENAI_COMPATIBLE)):
        opts.append(with_openai_compatible())
    base_url = os.environ.get(ENV_BASE_URL, "").strip()
    if base_url:
        opts.append(with_base_url(base_url))
    return opts


__all__ = [
    "ClientConfig",
    "ConfigDraft",
    "Option",
    "with_base_url",
    "with_openai_compatible",
    "with_http_client",
    "with_timeout",
    "build_config",
    "config_options_from_env",
]
