"""qwen_providers.config.env
=========================

Environment variable names read by the adapter and small helpers to resolve
them.

Variables
---------
QWEN_API_KEY
    Credential used by ``QwenClient.from_env`` and ``QwenProvider``.
QWEN_MODEL
    Default model for the high-level provider.
QWEN_BASE_URL
    Base endpoint override (applied after the protocol mode).
QWEN_USE_OPENAI_COMPATIBLE
    Truthy value (``1``, ``true``, ``yes``, ``on``) selects the
    OpenAI-compatible protocol.

Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

ENV_API_KEY = "QWEN_API_KEY"  # pragma: allowlist secret - env var name, not a secret
ENV_MODEL = "QWEN_MODEL"
ENV_BASE_URL = "QWEN_BASE_URL"
ENV_USE_OPENAI_COMPATIBLE = "QWEN_USE_OPENAI_COMPATIBLE"
ENV_CONFIG_FILE = "QWEN_PROVIDERS_CONFIG_FILE"

# config field -> env var
ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": ENV_API_KEY,  # pragma: allowlist secret
    "model": ENV_MODEL,
    "base_url": ENV_BASE_URL,
    "use_openai_compatible": ENV_USE_OPENAI_COMPATIBLE,
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def parse_bool(val: Optional[str]) -> bool:
    """Return True for common truthy strings (case-insensitive)."""
    if val is None:
        return False
    return str(val).strip().lower() in _TRUTHY


def resolve_api_key() -> Optional[str]:
    """Return ``QWEN_API_KEY`` when set to a non-empty value."""
    val = os.environ.get(ENV_API_KEY, "").strip()
    return val or None


__all__ = [
    "ENV_API_KEY",
    "ENV_MODEL",
    "ENV_BASE_URL",
    "ENV_USE_OPENAI_COMPATIBLE",
    "ENV_CONFIG_FILE",
    "ENV_FIELD_MAP",
    "parse_bool",
    "resolve_api_key",
]
