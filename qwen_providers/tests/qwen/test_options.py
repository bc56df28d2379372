"""Client construction options: validation, ordering and environment."""
from __future__ import annotations

from typing import List

import httpx
import pytest

from qwen_providers.base.errors import ErrorCode, ProviderError
from qwen_providers.base.http import get_httpx_client
from qwen_providers.config.defaults import (
    DASHSCOPE_COMPATIBLE_BASE_URL,
    DASHSCOPE_NATIVE_BASE_URL,
    ProtocolMode,
)
from qwen_providers.qwen import (
    QwenClient,
    build_config,
    config_options_from_env,
    with_base_url,
    with_http_client,
    with_openai_compatible,
    with_timeout,
)


def test_defaults_select_native_protocol():
    cfg = build_config("sk-test")
    assert cfg.mode is ProtocolMode.NATIVE  # nosec B101
    assert cfg.base_url == DASHSCOPE_NATIVE_BASE_URL  # nosec B101
    assert cfg.chat_url == DASHSCOPE_NATIVE_BASE_URL + "/services/aigc/text-generation/generation"  # nosec B101
    assert cfg.timeout == 120.0  # nosec B101
    assert cfg.http_client is get_httpx_client("qwen")  # nosec B101


@pytest.mark.parametrize("key", ["", "   ", None])
def test_missing_api_key_is_a_configuration_error(key):
    with pytest.raises(ProviderError) as info:
        build_config(key)  # type: ignore[arg-type]
    assert info.value.code is ErrorCode.CONFIGURATION  # nosec B101


def test_missing_api_key_issues_no_request():
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    http = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(ProviderError):
        QwenClient("", with_http_client(http))
    assert seen == []  # nosec B101


def test_api_key_is_stripped_and_hidden_from_repr():
    cfg = build_config("  sk-secret  ")
    assert cfg.api_key == "sk-secret"  # nosec B101
    assert "sk-secret" not in repr(cfg)  # nosec B101


def test_openai_compatible_selects_compatible_default_url():
    cfg = build_config("k", with_openai_compatible())
    assert cfg.mode is ProtocolMode.OPENAI_COMPATIBLE  # nosec B101
    assert cfg.chat_url == DASHSCOPE_COMPATIBLE_BASE_URL + "/chat/completions"  # nosec B101


def test_option_order_decides_base_url():
    custom = "https://proxy.internal.test/v1"
    later_url = build_config("k", with_openai_compatible(), with_base_url(custom))
    earlier_url = build_config("k", with_base_url(custom), with_openai_compatible())
    assert later_url.base_url == custom  # nosec B101
    assert earlier_url.base_url == DASHSCOPE_COMPATIBLE_BASE_URL  # nosec B101


def test_openai_compatible_can_be_switched_back_off():
    cfg = build_config("k", with_openai_compatible(), with_openai_compatible(False))
    assert cfg.mode is ProtocolMode.NATIVE and cfg.base_url == DASHSCOPE_NATIVE_BASE_URL  # nosec B101


def test_base_url_trailing_slash_is_stripped():
    cfg = build_config("k", with_base_url("http://localhost:8080/api/v1/"))
    assert cfg.base_url == "http://localhost:8080/api/v1"  # nosec B101


def test_empty_base_url_selects_mode_default():
    cfg = build_config("k", with_openai_compatible(), with_base_url(""))
    assert cfg.base_url == DASHSCOPE_COMPATIBLE_BASE_URL  # nosec B101


@pytest.mark.parametrize("url", ["not a url", "/relative/path", "ftp://files.test/v1", "http://"])
def test_invalid_base_url_is_rejected(url):
    with pytest.raises(ProviderError) as info:
        build_config("k", with_base_url(url))
    assert info.value.code is ErrorCode.CONFIGURATION  # nosec B101


@pytest.mark.parametrize("value", [0, -1, -0.5, float("inf"), float("nan"), True, "30"])
def test_invalid_timeout_is_rejected(value):
    with pytest.raises(ProviderError) as info:
        build_config("k", with_timeout(value))
    assert info.value.code is ErrorCode.CONFIGURATION  # nosec B101


def test_positive_timeout_is_kept():
    assert build_config("k", with_timeout(5)).timeout == 5.0  # nosec B101


def test_http_client_must_be_an_httpx_client():
    with pytest.raises(ProviderError) as info:
        build_config("k", with_http_client("not-a-client"))  # type: ignore[arg-type]
    assert info.value.code is ErrorCode.CONFIGURATION  # nosec B101


def test_explicit_http_client_is_used():
    http = httpx.Client()
    try:
        assert build_config("k", with_http_client(http)).http_client is http  # nosec B101
    finally:
        http.close()


def test_options_from_environment(monkeypatch):
    monkeypatch.setenv("QWEN_USE_OPENAI_COMPATIBLE", "true")
    monkeypatch.setenv("QWEN_BASE_URL", "https://gateway.test/compat")
    cfg = build_config("k", *config_options_from_env())
    assert cfg.mode is ProtocolMode.OPENAI_COMPATIBLE  # nosec B101
    assert cfg.base_url == "https://gateway.test/compat"  # nosec B101


def test_from_env_reads_key_and_applies_explicit_options_last(monkeypatch):
    monkeypatch.setenv("QWEN_API_KEY", "sk-env")
    monkeypatch.setenv("QWEN_BASE_URL", "https://gateway.test/api")
    client = QwenClient.from_env(with_timeout(3))
    assert client.config.api_key == "sk-env"  # nosec B101
    assert client.config.base_url == "https://gateway.test/api"  # nosec B101
    assert client.config.timeout == 3.0  # nosec B101
    assert client.mode is ProtocolMode.NATIVE  # nosec B101


def test_from_env_without_key_fails():
    with pytest.raises(ProviderError) as info:
        QwenClient.from_env()
    assert info.value.code is ErrorCode.CONFIGURATION  # nosec B101
