"""Wire DTOs for DashScope's OpenAI-compatible chat-completions protocol.

Endpoint: ``POST {base}/chat/completions`` where ``base`` defaults to the
``compatible-mode/v1`` prefix. Message ``content`` is a union on the wire: a
plain string, or an ordered array of typed parts. The request translator
chooses the variant; the DTO only carries it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class OpenAIImageURL(BaseModel):
    url: str


class OpenAIContentPart(BaseModel):
    type: Literal["text", "image_url"]
    text: Optional[str] = None
    image_url: Optional[OpenAIImageURL] = None


class OpenAIChatMessage(BaseModel):
    role: str
    content: Union[str, List[OpenAIContentPart]]


class OpenAIFunctionDefinition(BaseModel):
    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)
    required: Optional[List[str]] = None


class OpenAITool(BaseModel):
    type: Literal["function"] = "function"
    function: OpenAIFunctionDefinition


class OpenAIFunctionChoice(BaseModel):
    name: str


class OpenAINamedToolChoice(BaseModel):
    type: Literal["function"] = "function"
    function: OpenAIFunctionChoice


class OpenAIChatRequest(BaseModel):
    model: str
    messages: List[OpenAIChatMessage]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    seed: Optional[int] = None
    stream: bool = False
    tools: Optional[List[OpenAITool]] = None
    tool_choice: Optional[Union[Literal["auto"], OpenAINamedToolChoice]] = None
    response_format: Optional[Dict[str, str]] = None


# ---- Response side ----------------------------------------------------------


class OpenAIFunctionCall(BaseModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class OpenAIToolCall(BaseModel):
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[OpenAIFunctionCall] = None


class OpenAIUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class OpenAIResponseMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[OpenAIToolCall]] = None


class OpenAIChoice(BaseModel):
    index: int = 0
    message: OpenAIResponseMessage = Field(default_factory=OpenAIResponseMessage)
    finish_reason: Optional[str] = None


class OpenAIChatResponse(BaseModel):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: Optional[List[OpenAIChoice]] = None
    usage: Optional[OpenAIUsage] = None


class OpenAIChunkDelta(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[OpenAIToolCall]] = None


class OpenAIChunkChoice(BaseModel):
    index: int = 0
    delta: OpenAIChunkDelta = Field(default_factory=OpenAIChunkDelta)
    finish_reason: Optional[str] = None


class OpenAIChatChunk(BaseModel):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: Optional[List[OpenAIChunkChoice]] = None
    usage: Optional[OpenAIUsage] = None


__all__ = [
    "OpenAIImageURL",
    "OpenAIContentPart",
    "OpenAIChatMessage",
    "OpenAIFunctionDefinition",
    "OpenAITool",
    "OpenAIFunctionChoice",
    "OpenAINamedToolChoice",
    "OpenAIChatRequest",
    "OpenAIFunctionCall",
    "OpenAIToolCall",
    "OpenAIUsage",
    "OpenAIResponseMessage",
    "OpenAIChoice",
    "OpenAIChatResponse",
    "OpenAIChunkDelta",
    "OpenAIChunkChoice",
    "OpenAIChatChunk",
]
