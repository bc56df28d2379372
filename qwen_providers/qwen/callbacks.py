"""Lifecycle hooks for :class:`~qwen_providers.qwen.provider.QwenProvider`.

Subclass :class:`ProviderCallbacks` and override only the hooks you need; the
base implementations do nothing. Hooks run on the calling thread, except
``on_error`` for a stream failure, which runs on the stream's worker thread
after both channels are closed.
"""

from __future__ import annotations

from typing import List, Sequence

from ..base.errors import ProviderError
from ..base.models import ChatResponse, Message


class ProviderCallbacks:
    """No-op hook set observed by the provider around every call."""

    def on_llm_start(self, prompts: List[str]) -> None:
        """Called before a prompt-style request (``call``, ``call_batch``, prompt ``stream``).

        Parameters
        ----------
        prompts:
            The prompt text for this request, as a one-item list.
        """

    def on_generate_start(self, messages: Sequence[Message]) -> None:
        """Called before a conversation request (``generate``, message ``stream``)."""

    def on_generate_end(self, response: ChatResponse) -> None:
        """Called with the translated response of a successful non-streaming call."""

    def on_error(self, error: ProviderError) -> None:
        """Called once for a failed call, a failed stream start, or a stream error.

        A stream cancelled by its caller also reports here with code
        ``CANCELLED``.
        """


__all__ = ["ProviderCallbacks"]
