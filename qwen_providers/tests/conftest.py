"""Pytest configuration for the qwen_providers test suite.

Provides:
- an autouse fixture isolating every test from ``QWEN_*`` environment
  variables, the cached config file and the shared HTTP client pool;
- ``mock_client``: a factory building a :class:`QwenClient` whose HTTP
  traffic goes to an ``httpx.MockTransport`` handler;
- ``log_records``: structured events captured from the adapter loggers.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Iterator, List

import httpx
import pytest

from qwen_providers.base.http import close_all_clients
from qwen_providers.config import reset_config_cache
from qwen_providers.qwen import QwenClient, with_http_client

_QWEN_ENV = (
    "QWEN_API_KEY",
    "QWEN_MODEL",
    "QWEN_BASE_URL",
    "QWEN_USE_OPENAI_COMPATIBLE",
    "QWEN_PROVIDERS_CONFIG_FILE",
    "QWEN_PROVIDERS_LOG_LEVEL",
    "QWEN_TIMEOUT_HTTP_SECONDS",
    "QWEN_TIMEOUT_CONNECT_SECONDS",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _QWEN_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    close_all_clients()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def mock_client() -> Callable[..., QwenClient]:
    """Return ``make(handler, *options, api_key="sk-test")``.

    Options are applied after the mock transport is installed.
    """

    def make(handler: Callable[[httpx.Request], httpx.Response], *options, api_key: str = "sk-test") -> QwenClient:
        http = httpx.Client(transport=httpx.MockTransport(handler))
        return QwenClient(api_key, with_http_client(http), *options)

    return make


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.events.append(json.loads(record.getMessage()))


@pytest.fixture()
def log_records() -> Iterator[List[dict]]:
    """Capture JSON events emitted on the ``qwen_providers.qwen`` logger."""
    handler = _ListHandler()
    logger = logging.getLogger("qwen_providers.qwen")
    logger.addHandler(handler)
    try:
        yield handler.events
    finally:
        logger.removeHandler(handler)
