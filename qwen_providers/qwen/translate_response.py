"""Response translation: wire responses and stream frames to unified shapes.

Native payloads already use the unified field layout and map one-to-one.
OpenAI-compatible payloads expose only their first choice; a payload without
choices yields an empty but valid result.

Parsing goes through the pydantic DTOs, so malformed input raises
``pydantic.ValidationError`` (a ``ValueError``); callers translate that into
the error kind appropriate to their path.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple, Union

from ..base.dto.native import NativeChatResponse, NativeToolCall, NativeUsage
from ..base.dto.openai_compat import OpenAIChatChunk, OpenAIChatResponse, OpenAIToolCall, OpenAIUsage
from ..base.models import ChatResponse, ChatResponseChunk, FunctionCall, ToolCall, Usage
from ..config.defaults import ProtocolMode

RawBody = Union[str, bytes]


def _tool_calls(calls: Optional[Iterable[Union[NativeToolCall, OpenAIToolCall]]]) -> Tuple[ToolCall, ...]:
    out = []
    for c in calls or ():
        fn = c.function
        out.append(
            ToolCall(
                id=c.id or "",
                function=FunctionCall(name=(fn.name if fn else None) or "", arguments=(fn.arguments if fn else None) or ""),
            )
        )
    return tuple(out)


def _native_usage(u: Optional[NativeUsage]) -> Optional[Usage]:
    if u is None:
        return None
    return Usage(input_tokens=u.input_tokens, output_tokens=u.output_tokens, total_tokens=u.total_tokens)


def _openai_usage(u: Optional[OpenAIUsage]) -> Optional[Usage]:
    if u is None:
        return None
    return Usage(input_tokens=u.prompt_tokens, output_tokens=u.completion_tokens, total_tokens=u.total_tokens)


def native_to_response(data: NativeChatResponse) -> ChatResponse:
    out = data.output
    return ChatResponse(
        request_id=data.request_id or "",
        text=(out.text if out else None) or "",
        tool_calls=_tool_calls(out.tool_calls if out else None),
        finish_reason=out.finish_reason if out else None,
        usage=_native_usage(data.usage),
    )


def native_to_chunk(data: NativeChatResponse) -> ChatResponseChunk:
    full = native_to_response(data)
    return ChatResponseChunk(
        request_id=full.request_id,
        text=full.text,
        tool_calls=full.tool_calls,
        finish_reason=full.finish_reason,
        usage=full.usage,
    )


def openai_to_response(data: OpenAIChatResponse) -> ChatResponse:
    """Translate the first choice of a chat-completions response."""
    usage = _openai_usage(data.usage)
    if not data.choices:
        return ChatResponse(request_id=data.id or "", usage=usage)
    first = data.choices[0]
    return ChatResponse(
        request_id=data.id or "",
        text=first.message.content or "",
        tool_calls=_tool_calls(first.message.tool_calls),
        finish_reason=first.finish_reason,
        usage=usage,
    )


def openai_to_chunk(data: OpenAIChatChunk) -> ChatResponseChunk:
    """Translate the first choice's delta of a chat-completions chunk."""
    usage = _openai_usage(data.usage)
    if not data.choices:
        return ChatResponseChunk(request_id=data.id or "", usage=usage)
    first = data.choices[0]
    return ChatResponseChunk(
        request_id=data.id or "",
        text=first.delta.content or "",
        tool_calls=_tool_calls(first.delta.tool_calls),
        finish_reason=first.finish_reason,
        usage=usage,
    )


def parse_response(mode: ProtocolMode, raw: RawBody) -> ChatResponse:
    """Parse a complete response body for ``mode``."""
    if mode is ProtocolMode.OPENAI_COMPATIBLE:
        return openai_to_response(OpenAIChatResponse.model_validate_json(raw))
    return native_to_response(NativeChatResponse.model_validate_json(raw))


def parse_chunk(mode: ProtocolMode, raw: RawBody) -> ChatResponseChunk:
    """Parse one event-stream payload for ``mode``."""
    if mode is ProtocolMode.OPENAI_COMPATIBLE:
        return openai_to_chunk(OpenAIChatChunk.model_validate_json(raw))
    return native_to_chunk(NativeChatResponse.model_validate_json(raw))


__all__ = [
    "parse_response",
    "parse_chunk",
    "native_to_response",
    "native_to_chunk",
    "openai_to_response",
    "openai_to_chunk",
]
