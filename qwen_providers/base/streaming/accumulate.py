"""Fold streamed chunks into a complete response.

Text fragments are concatenated in order. Tool-call fragments accumulate by
identifier: a fragment with a known id replaces the earlier call in place,
an unseen id is appended, and a fragment without an id continues the most
recent call by appending its argument text.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from ..models import ChatResponse, ChatResponseChunk, FunctionCall, ToolCall, Usage


class ChunkAccumulator:
    """Incrementally builds a :class:`ChatResponse` from chunks."""

    def __init__(self) -> None:
        self._request_id = ""
        self._text: List[str] = []
        self._calls: List[ToolCall] = []
        self._index: Dict[str, int] = {}
        self._finish_reason: Optional[str] = None
        self._usage: Optional[Usage] = None

    def add(self, chunk: ChatResponseChunk) -> None:
        if chunk.request_id:
            self._request_id = chunk.request_id
        if chunk.text:
            self._text.append(chunk.text)
        for call in chunk.tool_calls:
            self._add_call(call)
        if chunk.finish_reason:
            self._finish_reason = chunk.finish_reason
        if chunk.usage is not None:
            self._usage = chunk.usage

    def _add_call(self, call: ToolCall) -> None:
        if call.id:
            pos = self._index.get(call.id)
            if pos is None:
                self._index[call.id] = len(self._calls)
                self._calls.append(call)
            else:
                self._calls[pos] = call
            return
        if not self._calls:
            self._calls.append(call)
            return
        last = self._calls[-1]
        merged = FunctionCall(
            name=last.function.name or call.function.name,
            arguments=last.function.arguments + call.function.arguments,
        )
        self._calls[-1] = replace(last, function=merged)

    @property
    def text(self) -> str:
        return "".join(self._text)

    def result(self) -> ChatResponse:
        """Return the response accumulated so far."""
        return ChatResponse(
            request_id=self._request_id,
            text=self.text,
            tool_calls=tuple(self._calls),
            finish_reason=self._finish_reason,
            usage=self._usage,
        )


def accumulate_chunks(chunks: Iterable[ChatResponseChunk]) -> ChatResponse:
    """Fold ``chunks`` into one :class:`ChatResponse`."""
    acc = ChunkAccumulator()
    for chunk in chunks:
        acc.add(chunk)
    return acc.result()


__all__ = ["ChunkAccumulator", "accumulate_chunks"]
