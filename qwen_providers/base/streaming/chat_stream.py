"""Caller-facing handle for one streaming call.

:class:`ChatStream` wraps the two channels fed by a :class:`StreamWorker`:

- ``chunks``: ordered :class:`ChatResponseChunk` values;
- ``errors``: at most one :class:`ProviderError`.

Both close when the worker exits, which is the only completion signal.
Callers either drain the channels directly or iterate the stream, which
yields chunks and raises the published error (if any) once chunks close.
"""
from __future__ import annotations

import threading
from typing import Iterator, Optional

from ..cancellation import CancellationToken
from ..errors import ProviderError
from ..models import ChatResponse, ChatResponseChunk
from .accumulate import ChunkAccumulator
from .channel import Channel, ChannelClosed


class ChatStream:
    """Iterable, cancellable view over a running stream."""

    def __init__(
        self,
        chunks: Channel[ChatResponseChunk],
        errors: Channel[ProviderError],
        token: CancellationToken,
        thread: Optional[threading.Thread] = None,
    ) -> None:
        self._chunks = chunks
        self._errors = errors
        self._token = token
        self._thread = thread
        self._error: Optional[ProviderError] = None
        self._error_taken = False

    @property
    def chunks(self) -> Channel[ChatResponseChunk]:
        return self._chunks

    @property
    def errors(self) -> Channel[ProviderError]:
        return self._errors

    @property
    def token(self) -> CancellationToken:
        return self._token

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation; the worker publishes ``CANCELLED`` and closes both channels."""
        self._token.cancel(reason or "stream cancelled by caller")

    def error(self, timeout: float | None = None) -> Optional[ProviderError]:
        """Return the stream's error, or ``None`` after a clean finish.

        Blocks until the worker publishes or closes the error channel.
        """
        if not self._error_taken:
            try:
                self._error = self._errors.get(timeout=timeout)
            except ChannelClosed:
                self._error = None
            self._error_taken = True
        return self._error

    def __iter__(self) -> Iterator[ChatResponseChunk]:
        yield from self._chunks
        err = self.error()
        if err is not None:
            raise err

    def collect(self) -> ChatResponse:
        """Drain the stream into one response; raises the stream error if any."""
        acc = ChunkAccumulator()
        for chunk in self:
            acc.add(chunk)
        return acc.result()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker thread to exit."""
        if self._thread is not None:
            self._thread.join(timeout)

    def __enter__(self) -> "ChatStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if not self._chunks.closed:
            self.cancel("stream context exited")
        self.join()


__all__ = ["ChatStream"]
