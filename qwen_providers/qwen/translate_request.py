"""Request translation: unified :class:`ChatRequest` to either wire schema.

Message content is a tagged variant, and the translators branch on its
``kind`` once:

- native: ``TextContent`` -> ``content`` string; ``PartsContent`` ->
  ``content_parts`` array.
- OpenAI-compatible: ``TextContent`` -> ``content`` string; ``PartsContent``
  with at least one part -> ``content`` array of ``text``/``image_url``
  parts. An empty ``PartsContent`` is sent as an empty string.

Streaming intent is expressed as ``parameters.incremental_output`` on the
native protocol and as the explicit top-level ``stream`` flag on the
OpenAI-compatible one.

The ``from_*_payload`` functions map a wire request back onto the unified
shape (used to inspect recorded bodies).
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from ..base.dto.native import (
    NativeChatRequest,
    NativeContentPart,
    NativeFunctionChoice,
    NativeFunctionDefinition,
    NativeImageURL,
    NativeInput,
    NativeMessage,
    NativeParameters,
    NativeTool,
    NativeToolChoice,
)
from ..base.dto.openai_compat import (
    OpenAIChatMessage,
    OpenAIChatRequest,
    OpenAIContentPart,
    OpenAIFunctionChoice,
    OpenAIFunctionDefinition,
    OpenAIImageURL,
    OpenAINamedToolChoice,
    OpenAITool,
)
from ..base.errors import ErrorCode, ProviderError
from ..base.models import (
    ChatRequest,
    ContentPart,
    FunctionDefinition,
    GenerationParams,
    ImagePart,
    Message,
    PartsContent,
    TextContent,
    TextPart,
    ToolChoice,
    ToolDeclaration,
)
from ..config.defaults import PROVIDER_NAME, QWEN_JSON_RESULT_FORMAT, ProtocolMode, chat_path
from .options import ClientConfig

WirePayload = Union[NativeChatRequest, OpenAIChatRequest]


# ---- native -----------------------------------------------------------------


def _native_message(msg: Message) -> NativeMessage:
    if msg.content.kind == "text":
        return NativeMessage(role=msg.role, content=msg.content.text)
    if not msg.content.parts:
        return NativeMessage(role=msg.role, content="")
    parts: List[NativeContentPart] = []
    for part in msg.content.parts:
        if part.type == "text":
            parts.append(NativeContentPart(type="text", text=part.text))
        else:
            parts.append(NativeContentPart(type="image", image_url=NativeImageURL(url=part.url)))
    return NativeMessage(role=msg.role, content_parts=parts)


def _native_tool(decl: ToolDeclaration) -> NativeTool:
    fn = decl.function
    return NativeTool(
        function=NativeFunctionDefinition(
            name=fn.name,
            description=fn.description,
            parameters=dict(fn.parameters),
            required=list(fn.required) if fn.required is not None else None,
        )
    )


def _native_tool_choice(choice: Optional[ToolChoice]) -> Optional[NativeToolChoice]:
    if choice is None:
        return None
    if choice.kind == "auto":
        return NativeToolChoice(type="auto")
    return NativeToolChoice(type="function", function=NativeFunctionChoice(name=choice.function_name))


def to_native_payload(request: ChatRequest, stream: bool) -> NativeChatRequest:
    """Build the native DashScope body for ``request``."""
    p = request.params
    messages = [_native_message(m) for m in request.messages]
    return NativeChatRequest(
        model=request.model,
        input=NativeInput(prompt=request.prompt, messages=messages or None),
        parameters=NativeParameters(
            temperature=p.temperature,
            top_p=p.top_p,
            top_k=p.top_k,
            max_tokens=p.max_tokens,
            incremental_output=True if stream else None,
            seed=p.seed,
            tools=[_native_tool(t) for t in p.tools] or None,
            tool_choice=_native_tool_choice(p.tool_choice),
            result_format=p.result_format,
        ),
    )


# ---- OpenAI-compatible --------------------------------------------------------


def _openai_content(msg: Message) -> Union[str, List[OpenAIContentPart]]:
    if msg.content.kind == "text":
        return msg.content.text
    if not msg.content.parts:
        return ""
    out: List[OpenAIContentPart] = []
    for part in msg.content.parts:
        if part.type == "text":
            out.append(OpenAIContentPart(type="text", text=part.text))
        else:
            out.append(OpenAIContentPart(type="image_url", image_url=OpenAIImageURL(url=part.url)))
    return out


def _openai_tool(decl: ToolDeclaration) -> OpenAITool:
    fn = decl.function
    return OpenAITool(
        function=OpenAIFunctionDefinition(
            name=fn.name,
            description=fn.description,
            parameters=dict(fn.parameters),
            required=list(fn.required) if fn.required is not None else None,
        )
    )


def _openai_tool_choice(choice: Optional[ToolChoice]) -> Union[str, OpenAINamedToolChoice, None]:
    if choice is None:
        return None
    if choice.kind == "auto":
        return "auto"
    return OpenAINamedToolChoice(function=OpenAIFunctionChoice(name=choice.function_name))


def to_openai_payload(request: ChatRequest, stream: bool) -> OpenAIChatRequest:
    """Build the OpenAI-compatible body for ``request``.

    A native-style ``prompt`` is appended as a trailing user message. Native
    ``result_format="json"`` becomes ``response_format={"type": "json_object"}``;
    ``top_k`` has no counterpart and is dropped.
    """
    p = request.params
    messages = [OpenAIChatMessage(role=m.role, content=_openai_content(m)) for m in request.messages]
    if request.prompt:
        messages.append(OpenAIChatMessage(role="user", content=request.prompt))
    response_format = {"type": "json_object"} if p.result_format == QWEN_JSON_RESULT_FORMAT else None
    return OpenAIChatRequest(
        model=request.model,
        messages=messages,
        temperature=p.temperature,
        max_tokens=p.max_tokens,
        top_p=p.top_p,
        seed=p.seed,
        stream=bool(stream),
        tools=[_openai_tool(t) for t in p.tools] or None,
        tool_choice=_openai_tool_choice(p.tool_choice),
        response_format=response_format,
    )


# ---- encoding -----------------------------------------------------------------


def to_payload(mode: ProtocolMode, request: ChatRequest, stream: bool) -> WirePayload:
    if mode is ProtocolMode.OPENAI_COMPATIBLE:
        return to_openai_payload(request, stream)
    return to_native_payload(request, stream)


def encode_payload(payload: WirePayload) -> bytes:
    """Serialize ``payload`` to JSON bytes, omitting unset fields."""
    return payload.model_dump_json(exclude_none=True).encode("utf-8")


def build_request_body(config: ClientConfig, request: ChatRequest, stream: bool) -> Tuple[str, bytes]:
    """Return ``(endpoint path, body bytes)`` for ``request`` under ``config``.

    Raises:
        ProviderError: ``SERIALIZATION`` when the request cannot be encoded.
    """
    try:
        body = encode_payload(to_payload(config.mode, request, stream))
    except (TypeError, ValueError) as exc:
        raise ProviderError(
            code=ErrorCode.SERIALIZATION,
            message=f"failed to encode request: {exc}",
            provider=PROVIDER_NAME,
            model=request.model,
            raw=exc,
        ) from exc
    return chat_path(config.mode), body


# ---- reverse mapping ------------------------------------------------------------


def _declaration(fn: Union[NativeFunctionDefinition, OpenAIFunctionDefinition]) -> ToolDeclaration:
    return ToolDeclaration(
        function=FunctionDefinition(
            name=fn.name,
            description=fn.description,
            parameters=dict(fn.parameters),
            required=fn.required,
        )
    )


def from_native_payload(payload: NativeChatRequest) -> ChatRequest:
    """Map a native wire request back onto :class:`ChatRequest`."""
    messages: List[Message] = []
    for m in payload.input.messages or []:
        if m.content_parts is not None:
            parts: List[ContentPart] = [
                TextPart(p.text or "") if p.type == "text" else ImagePart(p.image_url.url if p.image_url else "")
                for p in m.content_parts
            ]
            messages.append(Message(role=m.role, content=PartsContent(tuple(parts))))  # type: ignore[arg-type]
        else:
            messages.append(Message(role=m.role, content=TextContent(m.content or "")))  # type: ignore[arg-type]
    p = payload.parameters
    choice = None
    if p.tool_choice is not None:
        choice = ToolChoice.function(p.tool_choice.function.name) if p.tool_choice.function else ToolChoice.auto()
    return ChatRequest(
        model=payload.model,
        messages=messages,
        prompt=payload.input.prompt,
        params=GenerationParams(
            temperature=p.temperature,
            max_tokens=p.max_tokens,
            top_p=p.top_p,
            top_k=p.top_k,
            seed=p.seed,
            result_format=p.result_format,
            tools=[_declaration(t.function) for t in p.tools or []],
            tool_choice=choice,
            stream=bool(p.incremental_output),
        ),
    )


def from_openai_payload(payload: OpenAIChatRequest) -> ChatRequest:
    """Map an OpenAI-compatible wire request back onto :class:`ChatRequest`."""
    messages: List[Message] = []
    for m in payload.messages:
        if isinstance(m.content, str):
            messages.append(Message.text(m.role, m.content))
            continue
        parts: List[ContentPart] = [
            TextPart(p.text or "") if p.type == "text" else ImagePart(p.image_url.url if p.image_url else "")
            for p in m.content
        ]
        messages.append(Message.parts(m.role, *parts))
    choice = None
    if payload.tool_choice == "auto":
        choice = ToolChoice.auto()
    elif isinstance(payload.tool_choice, OpenAINamedToolChoice):
        choice = ToolChoice.function(payload.tool_choice.function.name)
    json_mode = (payload.response_format or {}).get("type") == "json_object"
    return ChatRequest(
        model=payload.model,
        messages=messages,
        params=GenerationParams(
            temperature=payload.temperature,
            max_tokens=payload.max_tokens,
            top_p=payload.top_p,
            seed=payload.seed,
            result_format=QWEN_JSON_RESULT_FORMAT if json_mode else None,
            tools=[_declaration(t.function) for t in payload.tools or []],
            tool_choice=choice,
            stream=payload.stream,
        ),
    )


__all__ = [
    "to_native_payload",
    "to_openai_payload",
    "to_payload",
    "encode_payload",
    "build_request_body",
    "from_native_payload",
    "from_openai_payload",
]
