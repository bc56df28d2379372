"""Decoder state machine driven through scripted event-stream lines.

The worker is run synchronously (``run()``) or on its thread (``start()``)
against plain iterators, so no network is involved.
"""
from __future__ import annotations

import json
from typing import Callable, Iterable, Iterator, List

import pytest

from qwen_providers.base.cancellation import CancellationToken
from qwen_providers.base.errors import ErrorCode
from qwen_providers.base.models import ChatResponseChunk
from qwen_providers.base.streaming import Channel, ChatStream, StreamWorker
from qwen_providers.config.defaults import ProtocolMode
from qwen_providers.qwen.translate_response import parse_chunk


def _native(text: str, rid: str = "req-1") -> str:
    return "data: " + json.dumps({"request_id": rid, "output": {"text": text}})


class _Harness:
    def __init__(
        self,
        lines: Iterable[str],
        token: CancellationToken | None = None,
        capacity: int = 16,
        parser: Callable[[str], ChatResponseChunk] | None = None,
    ) -> None:
        self.token = token or CancellationToken()
        self.chunks: Channel[ChatResponseChunk] = Channel(capacity, name="chunks")
        self.errors = Channel(1, name="errors")
        self.closed = 0
        self.worker = StreamWorker(
            lines,
            parser or (lambda payload: parse_chunk(ProtocolMode.NATIVE, payload)),
            chunks=self.chunks,
            errors=self.errors,
            token=self.token,
            on_close=self._on_close,
            poll_interval=0.01,
        )

    def _on_close(self) -> None:
        self.closed += 1

    def drain(self):
        chunks = list(self.chunks)
        errors = list(self.errors)
        return chunks, errors


def test_two_frames_keepalive_and_done_yield_two_chunks_cleanly():
    h = _Harness([_native("Hel"), "", _native("lo"), "data: [DONE]"])
    h.worker.run()
    chunks, errors = h.drain()
    assert [c.text for c in chunks] == ["Hel", "lo"]  # nosec B101
    assert errors == []  # nosec B101
    assert h.chunks.close_count == 1 and h.errors.close_count == 1  # nosec B101
    assert h.closed == 1  # nosec B101


def test_frames_after_terminal_are_not_read():
    consumed: List[str] = []

    def lines() -> Iterator[str]:
        for line in [_native("a"), "data: [DONE]", _native("never")]:
            consumed.append(line)
            yield line

    h = _Harness(lines())
    h.worker.run()
    chunks, errors = h.drain()
    assert [c.text for c in chunks] == ["a"] and errors == []  # nosec B101
    assert len(consumed) == 2  # nosec B101


def test_missing_terminator_is_a_clean_finish():
    h = _Harness([_native("only")])
    h.worker.run()
    chunks, errors = h.drain()
    assert [c.text for c in chunks] == ["only"] and errors == []  # nosec B101


def test_malformed_frame_yields_one_decode_error_and_stops():
    h = _Harness([_native("first"), "data: {not json", _native("after")])
    h.worker.run()
    chunks, errors = h.drain()
    assert [c.text for c in chunks] == ["first"]  # nosec B101
    assert len(errors) == 1 and errors[0].code is ErrorCode.STREAM_DECODE  # nosec B101
    assert h.chunks.closed and h.errors.closed  # nosec B101


def test_unexpected_parser_failure_is_published_as_decode_error():
    def parser(payload: str) -> ChatResponseChunk:
        raise KeyError("output")

    h = _Harness([_native("x"), _native("y")], parser=parser)
    h.worker.run()
    chunks, errors = h.drain()
    assert chunks == []  # nosec B101
    assert [e.code for e in errors] == [ErrorCode.STREAM_DECODE]  # nosec B101
    assert isinstance(errors[0].raw, KeyError)  # nosec B101
    assert h.closed == 1  # nosec B101


def test_cancel_before_first_read_yields_one_cancellation_error():
    consumed: List[str] = []

    def lines() -> Iterator[str]:
        consumed.append("read")
        yield _native("x")

    token = CancellationToken()
    token.cancel("caller went away")
    h = _Harness(lines(), token=token)
    h.worker.run()
    chunks, errors = h.drain()
    assert chunks == []  # nosec B101
    assert len(errors) == 1 and errors[0].code is ErrorCode.CANCELLED  # nosec B101
    assert errors[0].message == "caller went away"  # nosec B101
    assert consumed == []  # nosec B101


def test_read_failure_is_stream_read_error():
    def lines() -> Iterator[str]:
        yield _native("a")
        raise ConnectionResetError("peer reset")

    h = _Harness(lines())
    h.worker.run()
    chunks, errors = h.drain()
    assert [c.text for c in chunks] == ["a"]  # nosec B101
    assert len(errors) == 1 and errors[0].code is ErrorCode.STREAM_READ  # nosec B101
    assert isinstance(errors[0].raw, ConnectionResetError)  # nosec B101


def test_read_failure_after_cancel_reports_cancellation():
    token = CancellationToken()

    def lines() -> Iterator[str]:
        token.cancel("closing")
        raise OSError("socket closed")
        yield ""  # pragma: no cover

    h = _Harness(lines(), token=token)
    h.worker.run()
    _, errors = h.drain()
    assert [e.code for e in errors] == [ErrorCode.CANCELLED]  # nosec B101


def test_blocked_handoff_observes_cancellation():
    token = CancellationToken()
    h = _Harness([_native("1"), _native("2"), _native("3")], token=token, capacity=1)
    thread = h.worker.start()
    assert h.chunks.get(timeout=5).text == "1"  # nosec B101
    token.cancel("consumer stopped")
    thread.join(timeout=5)
    assert not thread.is_alive()  # nosec B101
    rest, errors = h.drain()
    assert len(rest) <= 1  # nosec B101
    assert [e.code for e in errors] == [ErrorCode.CANCELLED]  # nosec B101


def test_chat_stream_iteration_raises_published_error():
    h = _Harness([_native("a"), "data: nope"])
    stream = ChatStream(h.chunks, h.errors, h.token, h.worker.start())
    seen: List[str] = []
    with pytest.raises(Exception) as info:
        for chunk in stream:
            seen.append(chunk.text)
    assert seen == ["a"]  # nosec B101
    assert info.value.code is ErrorCode.STREAM_DECODE  # nosec B101
    assert stream.error() is info.value  # nosec B101


def test_chat_stream_collect_accumulates():
    h = _Harness([_native("Hello, "), _native("world"), "data: [DONE]"])
    stream = ChatStream(h.chunks, h.errors, h.token, h.worker.start())
    result = stream.collect()
    assert result.text == "Hello, world" and result.request_id == "req-1"  # nosec B101
    assert stream.error() is None  # nosec B101
