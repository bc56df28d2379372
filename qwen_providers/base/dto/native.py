"""Wire DTOs for the DashScope native text-generation protocol.

Request models are serialized with ``model_dump_json(exclude_none=True)`` so
unset generation parameters never reach the wire. Response models accept the
partial shapes seen in incremental (streaming) output, where most fields are
optional.

Endpoint: ``POST {base}/services/aigc/text-generation/generation``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class NativeImageURL(BaseModel):
    url: str


class NativeContentPart(BaseModel):
    """One multimodal part; ``type`` is ``"text"`` or ``"image"``."""

    type: Literal["text", "image"]
    text: Optional[str] = None
    image_url: Optional[NativeImageURL] = None


class NativeMessage(BaseModel):
    """A chat message; exactly one of ``content``/``content_parts`` is set."""

    role: str
    content: Optional[str] = None
    content_parts: Optional[List[NativeContentPart]] = None


class NativeInput(BaseModel):
    prompt: Optional[str] = None
    messages: Optional[List[NativeMessage]] = None


class NativeFunctionDefinition(BaseModel):
    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)
    required: Optional[List[str]] = None


class NativeTool(BaseModel):
    type: Literal["function"] = "function"
    function: NativeFunctionDefinition


class NativeFunctionChoice(BaseModel):
    name: str


class NativeToolChoice(BaseModel):
    type: Literal["auto", "function"]
    function: Optional[NativeFunctionChoice] = None


class NativeParameters(BaseModel):
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_tokens: Optional[int] = None
    incremental_output: Optional[bool] = None
    seed: Optional[int] = None
    tools: Optional[List[NativeTool]] = None
    tool_choice: Optional[NativeToolChoice] = None
    result_format: Optional[str] = None


class NativeChatRequest(BaseModel):
    model: str
    input: NativeInput
    parameters: NativeParameters = Field(default_factory=NativeParameters)


# ---- Response side ----------------------------------------------------------


# Incremental frames omit or null out most fields, so everything below is
# optional and normalized by the response translator.


class NativeFunctionCall(BaseModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class NativeToolCall(BaseModel):
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[NativeFunctionCall] = None


class NativeUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


class NativeOutput(BaseModel):
    text: Optional[str] = None
    finish_reason: Optional[str] = None
    tool_calls: Optional[List[NativeToolCall]] = None


class NativeChatResponse(BaseModel):
    """Full (non-streaming) response, also the shape of each stream frame."""

    request_id: Optional[str] = None
    output: Optional[NativeOutput] = None
    usage: Optional[NativeUsage] = None


__all__ = [
    "NativeImageURL",
    "NativeContentPart",
    "NativeMessage",
    "NativeInput",
    "NativeFunctionDefinition",
    "NativeTool",
    "NativeFunctionChoice",
    "NativeToolChoice",
    "NativeParameters",
    "NativeChatRequest",
    "NativeFunctionCall",
    "NativeToolCall",
    "NativeUsage",
    "NativeOutput",
    "NativeChatResponse",
]
