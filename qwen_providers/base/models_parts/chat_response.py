"""
Unified response and streaming chunk DTOs.

Both protocols are translated into these shapes. Only the first choice of an
OpenAI-compatible response is represented.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from .tool import ToolCall


@dataclass(frozen=True)
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class ChatResponse:
    """A complete chat response.

    Attributes:
        request_id: Server-assigned request identifier (``id`` in OpenAI mode).
        text: Output text; empty when the model returned none.
        tool_calls: Ordered tool calls requested by the model.
        finish_reason: Reason generation stopped, when reported.
        usage: Token usage, when reported.
    """

    request_id: str = ""
    text: str = ""
    tool_calls: Tuple[ToolCall, ...] = ()
    finish_reason: Optional[str] = None
    usage: Optional[Usage] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return asdict(self)


@dataclass(frozen=True)
class ChatResponseChunk:
    """One incremental unit of a streamed response.

    ``text`` is a fragment and may be empty (e.g. a tool-call-only or
    finish-only frame).
    """

    request_id: str = ""
    text: str = ""
    tool_calls: Tuple[ToolCall, ...] = ()
    finish_reason: Optional[str] = None
    usage: Optional[Usage] = None


__all__ = [
    "Usage",
    "ChatResponse",
    "ChatResponseChunk",
]
