"""
ChatRequest DTO for unified chat invocations.

The translators map this request onto either wire protocol. Generation
parameters left as ``None`` are omitted from the wire body.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from .message import Message
from .tool import ToolChoice, ToolDeclaration


@dataclass
class GenerationParams:
    """Sampling and tool parameters shared by both protocols.

    Attributes:
        temperature: Sampling temperature.
        max_tokens: Maximum output tokens.
        top_p: Nucleus sampling threshold.
        top_k: Candidate count per step (native protocol only).
        seed: Random seed.
        result_format: Native ``result_format`` (e.g. ``"json"``); native only.
        tools: Tool declarations offered to the model.
        tool_choice: Tool-choice directive.
        stream: Informational only. The translators never read it; the wire
            flag comes from the entry point (``create_chat`` vs
            ``create_chat_stream``). ``from_openai_payload`` fills it from a
            decoded payload.
    """

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    seed: Optional[int] = None
    result_format: Optional[str] = None
    tools: List[ToolDeclaration] = field(default_factory=list)
    tool_choice: Optional[ToolChoice] = None
    stream: bool = False


@dataclass
class ChatRequest:
    """Unified chat request.

    Attributes:
        model: Target model identifier.
        messages: Ordered list of chat messages.
        params: Generation parameters.
        prompt: Optional single-turn prompt used instead of ``messages`` by the
            native protocol; the OpenAI-compatible translator sends it as a
            single user message.
    """

    model: str
    messages: List[Message] = field(default_factory=list)
    params: GenerationParams = field(default_factory=GenerationParams)
    prompt: Optional[str] = None

    def with_stream(self, stream: bool) -> "ChatRequest":
        """Return a copy whose ``params.stream`` is set to ``stream``."""
        return replace(self, params=replace(self.params, stream=stream))


__all__ = [
    "GenerationParams",
    "ChatRequest",
]
