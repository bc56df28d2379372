"""Qwen (DashScope) adapter: client, options, translators and provider."""

from .callbacks import ProviderCallbacks
from .client import QwenClient, new_client
from .options import (
    ClientConfig,
    ConfigDraft,
    Option,
    build_config,
    config_options_from_env,
    with_base_url,
    with_http_client,
    with_openai_compatible,
    with_timeout,
)
from .provider import QwenProvider
from .translate_request import build_request_body, encode_payload, to_native_payload, to_openai_payload
from .translate_response import parse_chunk, parse_response

__all__ = [
    "QwenClient",
    "new_client",
    "QwenProvider",
    "ProviderCallbacks",
    "ClientConfig",
    "ConfigDraft",
    "Option",
    "build_config",
    "config_options_from_env",
    "with_base_url",
    "with_http_client",
    "with_openai_compatible",
    "with_timeout",
    "build_request_body",
    "encode_payload",
    "to_native_payload",
    "to_openai_payload",
    "parse_chunk",
    "parse_response",
]
