"""qwen_providers.config.defaults
=============================

Central place for the stable default values of the Qwen adapter: protocol
endpoints, default model and generation parameters, and the model names
DashScope serves.

This module performs no I/O and imports nothing from the rest of the
package, so any layer may depend on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ProtocolMode(str, Enum):
    """Wire protocol spoken by a client."""

    NATIVE = "native"
    OPENAI_COMPATIBLE = "openai_compatible"


@dataclass(frozen=True)
class ProtocolEndpoint:
    """Default base URL and chat path for one protocol mode."""

    base_url: str
    chat_path: str


# ---- Protocol endpoints ----
DASHSCOPE_NATIVE_BASE_URL = "https://dashscope.aliyuncs.com/api/v1"
DASHSCOPE_COMPATIBLE_BASE_URL = "https://dashscope.aliyuncs.com/compatible-mode/v1"
NATIVE_CHAT_PATH = "/services/aigc/text-generation/generation"
OPENAI_CHAT_PATH = "/chat/completions"

# Read-only table keyed by mode; base URL and path always travel together.
ENDPOINTS: Mapping[ProtocolMode, ProtocolEndpoint] = MappingProxyType(
    {
        ProtocolMode.NATIVE: ProtocolEndpoint(DASHSCOPE_NATIVE_BASE_URL, NATIVE_CHAT_PATH),
        ProtocolMode.OPENAI_COMPATIBLE: ProtocolEndpoint(DASHSCOPE_COMPATIBLE_BASE_URL, OPENAI_CHAT_PATH),
    }
)


def default_base_url(mode: ProtocolMode) -> str:
    return ENDPOINTS[mode].base_url


def chat_path(mode: ProtocolMode) -> str:
    return ENDPOINTS[mode].chat_path


# ---- Models ----
MODEL_QWEN_TURBO = "qwen-turbo"
MODEL_QWEN_PLUS = "qwen-plus"
MODEL_QWEN_MAX = "qwen-max"
MODEL_QWEN_VL_PLUS = "qwen-vl-plus"
MODEL_QWEN_VL_MAX = "qwen-vl-max"

KNOWN_MODELS = (
    MODEL_QWEN_TURBO,
    MODEL_QWEN_PLUS,
    MODEL_QWEN_MAX,
    MODEL_QWEN_VL_PLUS,
    MODEL_QWEN_VL_MAX,
)

QWEN_DEFAULT_MODEL = MODEL_QWEN_TURBO

# ---- Generation defaults used by the high-level provider ----
QWEN_DEFAULT_TEMPERATURE = 0.7
QWEN_DEFAULT_TOP_P = 0.8
QWEN_DEFAULT_TOP_K = 50
QWEN_DEFAULT_MAX_TOKENS = 1024

# Native result_format requested for JSON mode.
QWEN_JSON_RESULT_FORMAT = "json"

PROVIDER_NAME = "qwen"


__all__ = [
    "ProtocolMode",
    "ProtocolEndpoint",
    "ENDPOINTS",
    "default_base_url",
    "chat_path",
    "DASHSCOPE_NATIVE_BASE_URL",
    "DASHSCOPE_COMPATIBLE_BASE_URL",
    "NATIVE_CHAT_PATH",
    "OPENAI_CHAT_PATH",
    "MODEL_QWEN_TURBO",
    "MODEL_QWEN_PLUS",
    "MODEL_QWEN_MAX",
    "MODEL_QWEN_VL_PLUS",
    "MODEL_QWEN_VL_MAX",
    "KNOWN_MODELS",
    "QWEN_DEFAULT_MODEL",
    "QWEN_DEFAULT_TEMPERATURE",
    "QWEN_DEFAULT_TOP_P",
    "QWEN_DEFAULT_TOP_K",
    "QWEN_DEFAULT_MAX_TOKENS",
    "QWEN_JSON_RESULT_FORMAT",
    "PROVIDER_NAME",
]
