"""Stream worker: drives the event-stream decoder for one streaming call.

Each streaming call owns exactly one :class:`StreamWorker` running on a
daemon thread. The worker loops ``awaiting-line -> have-line -> (skip |
terminal | decode)``:

- before every read it checks the cancellation token;
- each line is classified by :func:`decode_line`;
- data frames are parsed by the protocol's chunk parser and handed off, in
  arrival order, on the chunk channel.

On every exit path (end of body, terminal sentinel, read error, decode error,
cancellation) the worker publishes at most one error, closes the chunk
channel and then the error channel exactly once, and runs ``on_close`` so the
HTTP response is released. An optional ``on_error`` hook then observes the
published error.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Optional

from ..cancellation import CancellationToken
from ..errors import ErrorCode, ProviderError, classify_transport_exception
from ..log_support import LogContext
from ..logging import normalized_log_event
from ..models import ChatResponseChunk
from .channel import Channel
from .sse import FrameKind, decode_line

ChunkParser = Callable[[str], ChatResponseChunk]

DEFAULT_POLL_INTERVAL = 0.05


class StreamWorker:
    """Owns the decoder state machine for one stream."""

    def __init__(
        self,
        lines: Iterable[str],
        parse_chunk: ChunkParser,
        *,
        chunks: Channel[ChatResponseChunk],
        errors: Channel[ProviderError],
        token: CancellationToken,
        on_close: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[ProviderError], None]] = None,
        provider: str = "qwen",
        model: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._lines = lines
        self._parse_chunk = parse_chunk
        self._chunks = chunks
        self._errors = errors
        self._token = token
        self._on_close = on_close
        self._on_error = on_error
        self._provider = provider
        self._model = model
        self._logger = logger
        self._ctx = ctx
        self._poll_interval = poll_interval
        self.emitted = 0
        self.error: Optional[ProviderError] = None

    def start(self) -> threading.Thread:
        """Run the worker on a new daemon thread and return the thread."""
        thread = threading.Thread(target=self.run, name=f"{self._provider}-stream", daemon=True)
        thread.start()
        return thread

    def run(self) -> None:
        """Consume lines until the stream ends, fails, or is cancelled."""
        try:
            self.error = self._loop()
        except Exception as exc:  # an unexpected failure is still reported as the stream error
            self.error = classify_transport_exception(
                exc, provider=self._provider, model=self._model, reading_stream=True
            )
        finally:
            if self.error is not None:
                self._errors.put(self.error)
            self._chunks.close()
            self._errors.close()
            if self._on_close is not None:
                self._on_close()
            self._log_outcome()
            if self.error is not None and self._on_error is not None:
                self._notify_error(self.error)

    def _loop(self) -> Optional[ProviderError]:
        iterator = iter(self._lines)
        while True:
            if self._token.cancelled:
                return self._cancelled()
            try:
                line = next(iterator)
            except StopIteration:
                # an aborted read-until-close body ends like a normal one
                return self._cancelled() if self._token.cancelled else None
            except Exception as exc:  # any read failure ends the stream with one error
                if self._token.cancelled:
                    return self._cancelled()
                return classify_transport_exception(
                    exc, provider=self._provider, model=self._model, reading_stream=True
                )

            try:
                frame = decode_line(line)
            except UnicodeDecodeError as exc:
                return self._decode_error(exc)
            if frame.kind is FrameKind.SKIP:
                continue
            if frame.kind is FrameKind.TERMINAL:
                return None

            try:
                chunk = self._parse_chunk(frame.payload)
            except Exception as exc:  # any parser failure ends the stream as a decode error
                return self._decode_error(exc)
            if not self._handoff(chunk):
                return self._cancelled()
            self.emitted += 1

    def _handoff(self, chunk: ChatResponseChunk) -> bool:
        while not self._chunks.put(chunk, timeout=self._poll_interval):
            if self._token.cancelled:
                return False
        return True

    def _notify_error(self, err: ProviderError) -> None:
        try:
            self._on_error(err)
        except Exception:  # hook failures are logged, never raised on the worker
            if self._logger is not None:
                self._logger.warning("stream error hook failed", exc_info=True)

    def _cancelled(self) -> ProviderError:
        reason = self._token.reason or "stream cancelled"
        return ProviderError(
            code=ErrorCode.CANCELLED,
            message=reason,
            provider=self._provider,
            model=self._model,
        )

    def _decode_error(self, exc: Exception) -> ProviderError:
        return ProviderError(
            code=ErrorCode.STREAM_DECODE,
            message=f"failed to parse stream data: {exc}",
            provider=self._provider,
            model=self._model,
            raw=exc,
        )

    def _log_outcome(self) -> None:
        if self._logger is None:
            return
        err = self.error
        if err is None:
            event = "stream.end"
        elif err.cancelled:
            event = "stream.cancelled"
        else:
            event = "stream.error"
        normalized_log_event(
            self._logger,
            event,
            self._ctx,
            phase="finalize",
            error_code=err.code.value if err is not None else None,
            emitted=self.emitted > 0,
            chunks=self.emitted,
            error=err.message if err is not None else None,
        )


__all__ = ["StreamWorker", "ChunkParser", "DEFAULT_POLL_INTERVAL"]
