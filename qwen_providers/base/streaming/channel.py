"""Ordered, closable handoff channel.

A :class:`Channel` moves items from exactly one producer thread to a
consumer in FIFO order. The producer signals completion with :meth:`close`;
consumers observe closure as :class:`ChannelClosed` from :meth:`get` (or as
the end of iteration). Capacity bounds the number of undelivered items; the
close marker never counts against it, so closing never blocks.
"""
from __future__ import annotations

import queue
import threading
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ChannelClosed(Exception):
    """Raised by :meth:`Channel.get` once the channel is closed and drained."""


class Channel(Generic[T]):
    """Single-producer FIFO channel with explicit closure.

    Parameters:
        capacity: Maximum number of undelivered items (>= 1).
        name: Label used in ``repr`` and error messages.
    """

    def __init__(self, capacity: int = 1, *, name: str = "channel") -> None:
        if capacity < 1:
            raise ValueError("channel capacity must be >= 1")
        self.name = name
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=capacity + 1)
        self._slots = threading.Semaphore(capacity)
        self._lock = threading.Lock()
        self._closed = False
        self._close_count = 0

    @property
    def closed(self) -> bool:
        """Whether the producer has closed the channel."""
        return self._closed

    @property
    def close_count(self) -> int:
        """Number of times :meth:`close` was called (diagnostics)."""
        return self._close_count

    def put(self, item: T, timeout: float | None = None) -> bool:
        """Hand ``item`` to the consumer.

        Blocks while the channel is full. Returns ``False`` if ``timeout``
        elapsed first, so producers can poll for cancellation between
        attempts.

        Raises:
            ChannelClosed: if the channel was already closed.
        """
        if self._closed:
            raise ChannelClosed(f"{self.name} is closed")
        if not self._slots.acquire(timeout=timeout):
            return False
        self._queue.put_nowait(item)
        return True

    def close(self) -> None:
        """Close the channel; a second call is a no-op."""
        with self._lock:
            self._close_count += 1
            if self._closed:
                return
            self._closed = True
        self._queue.put_nowait(_CLOSED)

    def get(self, timeout: float | None = None) -> T:
        """Return the next item.

        Raises:
            ChannelClosed: once the channel is closed and every item was taken.
            queue.Empty: if ``timeout`` elapsed with nothing available.
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # leave the marker for other consumers
            self._queue.put_nowait(_CLOSED)
            raise ChannelClosed(f"{self.name} is closed")
        self._slots.release()
        return item  # type: ignore[return-value]

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Channel(name={self.name!r}, closed={self._closed}, pending={self._queue.qsize()})"


__all__ = ["Channel", "ChannelClosed"]
