"""Structured logging context for adapter events.

:class:`LogContext` carries the fields common to every event emitted for one
call (provider, model, protocol mode, request id) and flattens them, together
with the ``extra`` mapping, into a ``None``-free dict.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for adapter logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    mode: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
