"""Cancellation token implementation.

A call takes an optional ``CancellationToken``. Checkpoints poll
``cancelled``; blocking network reads are interrupted by registering an abort
callback (see ``qwen.transport.abort_response``) with ``on_cancel``.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

from .state import State

logger = logging.getLogger("qwen_providers.cancellation")


class CancellationToken:
    """A cooperative cancellation token with cascading and abort callbacks.

    Thread-safe: ``cancel`` may be called from any thread while a worker polls
    the token. Child tokens inherit cancellation when the parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, run abort callbacks, and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
            children = list(self._children)
        for cb in callbacks:
            self._run_callback(cb)
        for child in children:
            child.cancel(reason)

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` to run on cancellation.

        Runs immediately if the token is already cancelled. Returns a function
        that unregisters the callback.
        """
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return lambda: self._remove_callback(callback)
        self._run_callback(callback)
        return lambda: None

    def _remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._state.callbacks:
                self._state.callbacks.remove(callback)

    @staticmethod
    def _run_callback(callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:  # abort hooks close sockets; a failure must not mask the cancel
            logger.debug("cancellation callback failed", exc_info=True)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        """Stop cascading to ``token``; unknown tokens are ignored."""
        with self._lock:
            if token in self._children:
                self._children.remove(token)

    @property
    def child_count(self) -> int:
        """Number of linked children (diagnostics)."""
        with self._lock:
            return len(self._children)

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
