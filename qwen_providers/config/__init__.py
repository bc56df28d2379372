"""Unified configuration layer for the Qwen adapter.

Goals
-----
* Centralize defaults (model, generation parameters, endpoints).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       QWEN_PROVIDERS_CONFIG_FILE
    3. Environment variables (QWEN_MODEL, QWEN_API_KEY, QWEN_BASE_URL,
       QWEN_USE_OPENAI_COMPATIBLE)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config()``.

External Config File
--------------------
JSON is tried first, then YAML. Structure example:

```
qwen:
  model: qwen-plus
  temperature: 0.3
  use_openai_compatible: true
```

Public API
----------
* get_provider_config(provider="qwen", overrides=None) -> dict
* get_model(provider="qwen") -> str | None
* reset_config_cache()
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    PROVIDER_NAME,
    QWEN_DEFAULT_MAX_TOKENS,
    QWEN_DEFAULT_MODEL,
    QWEN_DEFAULT_TEMPERATURE,
    QWEN_DEFAULT_TOP_K,
    QWEN_DEFAULT_TOP_P,
    ProtocolMode,
)
from .env import ENV_CONFIG_FILE, ENV_FIELD_MAP, parse_bool

DEFAULTS: Dict[str, Dict[str, Any]] = {
    PROVIDER_NAME: {
        "model": QWEN_DEFAULT_MODEL,
        "temperature": QWEN_DEFAULT_TEMPERATURE,
        "top_p": QWEN_DEFAULT_TOP_P,
        "top_k": QWEN_DEFAULT_TOP_K,
        "max_tokens": QWEN_DEFAULT_MAX_TOKENS,
        "use_openai_compatible": False,
    },
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def reset_config_cache() -> None:
    """Forget the parsed config file (tests, or after editing the file)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


def _parse_config_text(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return yaml.safe_load(text)


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(ENV_CONFIG_FILE)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        data = _parse_config_text(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    _FILE_CACHE_PATH = path
    return data


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if val is None or not val.strip():
            continue
        out[field] = parse_bool(val) if field == "use_openai_compatible" else val.strip()
    return out


def get_provider_config(provider: str = PROVIDER_NAME, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for ``provider``.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    The returned dict always carries ``mode`` (a :class:`ProtocolMode`)
    derived from ``use_openai_compatible``.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    cfg |= DEFAULTS.get(name, {})

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides()

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    flag = cfg.get("use_openai_compatible")
    if isinstance(flag, str):
        flag = parse_bool(flag)
    cfg["use_openai_compatible"] = bool(flag)
    cfg["mode"] = ProtocolMode.OPENAI_COMPATIBLE if flag else ProtocolMode.NATIVE
    return cfg


def get_model(provider: str = PROVIDER_NAME) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]
