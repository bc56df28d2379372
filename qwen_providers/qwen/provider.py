"""High-level Qwen provider.

Wraps a :class:`QwenClient` with default generation parameters resolved
through :func:`get_provider_config` and offers convenience entry points:

- ``call(prompt)``: single-turn text completion returning a string.
- ``call_batch(prompts)``: ``call`` applied to each prompt in order.
- ``generate(messages, ...)``: multi-turn completion returning a
  :class:`ChatResponse` (tools, tool choice, JSON mode, seed).
- ``stream(messages, ...)``: same request as ``generate`` but streamed.

Tool declarations and tool-choice directives may be given either as the
unified dataclasses or as plain mappings in the common
``{"type": "function", "function": {...}}`` shape.

An optional :class:`ProviderCallbacks` observes each call (start, end, error).
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError
from ..base.models import (
    ChatRequest,
    ChatResponse,
    FunctionDefinition,
    GenerationParams,
    Message,
    ToolChoice,
    ToolDeclaration,
)
from ..base.streaming import ChatStream
from ..config import get_provider_config
from ..config.defaults import PROVIDER_NAME, QWEN_DEFAULT_MODEL, QWEN_JSON_RESULT_FORMAT, ProtocolMode
from .callbacks import ProviderCallbacks
from .client import QwenClient
from .options import Option, with_base_url, with_openai_compatible

ToolLike = Union[ToolDeclaration, Mapping[str, Any]]
ToolChoiceLike = Union[ToolChoice, str, Mapping[str, Any], None]


def _serialization_error(message: str, exc: Optional[BaseException] = None) -> ProviderError:
    return ProviderError(code=ErrorCode.SERIALIZATION, message=message, provider=PROVIDER_NAME, raw=exc)


def coerce_tools(tools: Optional[Iterable[ToolLike]]) -> List[ToolDeclaration]:
    """Normalize tool declarations.

    Mappings whose ``type`` is not ``"function"`` (or that lack a
    ``function`` entry) are skipped. ``parameters`` may be a mapping or a
    JSON object string.

    Raises:
        ProviderError: ``SERIALIZATION`` when ``parameters`` is not valid JSON.
    """
    out: List[ToolDeclaration] = []
    for tool in tools or ():
        if isinstance(tool, ToolDeclaration):
            out.append(tool)
            continue
        fn = tool.get("function")
        if tool.get("type", "function") != "function" or not isinstance(fn, Mapping):
            continue
        params: Any = fn.get("parameters") or {}
        if isinstance(params, str):
            try:
                params = json.loads(params)
            except json.JSONDecodeError as exc:
                raise _serialization_error(f"invalid parameters for tool {fn.get('name')!r}: {exc}", exc) from exc
        if not isinstance(params, Mapping):
            raise _serialization_error(f"parameters for tool {fn.get('name')!r} must be an object")
        out.append(
            ToolDeclaration(
                function=FunctionDefinition(
                    name=str(fn.get("name", "")),
                    description=str(fn.get("description", "")),
                    parameters=dict(params),
                    required=list(fn["required"]) if fn.get("required") else None,
                )
            )
        )
    return out


def coerce_tool_choice(choice: ToolChoiceLike) -> Optional[ToolChoice]:
    """Normalize a tool-choice directive (``"auto"``, a mapping, or a :class:`ToolChoice`)."""
    if choice is None or isinstance(choice, ToolChoice):
        return choice
    if isinstance(choice, str):
        if choice == "auto":
            return ToolChoice.auto()
        raise _serialization_error(f"unsupported tool choice: {choice!r}")
    kind = choice.get("type")
    if kind == "auto":
        return ToolChoice.auto()
    fn = choice.get("function") or {}
    if kind == "function" and isinstance(fn, Mapping) and fn.get("name"):
        return ToolChoice.function(str(fn["name"]))
    raise _serialization_error(f"unsupported tool choice: {dict(choice)!r}")


class QwenProvider:
    """Qwen provider with configured defaults.

    Parameters:
        api_key: Explicit credential; falls back to the resolved config
            (``QWEN_API_KEY``).
        model: Default model; falls back to config (``qwen-turbo``).
        client: Pre-built client; when given, ``api_key`` and ``options`` are
            ignored.
        options: Extra client options applied after the config-derived ones.
        overrides: Config overrides (``temperature``, ``top_p``, ``top_k``,
            ``max_tokens``, ``use_openai_compatible``, ``base_url``, ...).
        callbacks: Lifecycle hooks (see :class:`ProviderCallbacks`).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        *,
        client: Optional[QwenClient] = None,
        options: Sequence[Option] = (),
        overrides: Optional[Dict[str, Any]] = None,
        callbacks: Optional[ProviderCallbacks] = None,
    ) -> None:
        cfg = get_provider_config(PROVIDER_NAME, overrides)
        if client is None:
            opts: List[Option] = [with_openai_compatible(cfg["mode"] is ProtocolMode.OPENAI_COMPATIBLE)]
            if cfg.get("base_url"):
                opts.append(with_base_url(str(cfg["base_url"])))
            opts.extend(options)
            client = QwenClient(api_key or cfg.get("api_key") or "", *opts)
        self._client = client
        self._model = model or cfg.get("model") or QWEN_DEFAULT_MODEL
        self._temperature = cfg.get("temperature")
        self._top_p = cfg.get("top_p")
        self._top_k = cfg.get("top_k")
        self._max_tokens = cfg.get("max_tokens")
        self._callbacks = callbacks or ProviderCallbacks()

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def client(self) -> QwenClient:
        return self._client

    def default_model(self) -> str:
        return self._model

    @property
    def callbacks(self) -> ProviderCallbacks:
        return self._callbacks

    def build_request(
        self,
        messages: Sequence[Message] = (),
        *,
        prompt: Optional[str] = None,
        model: Optional[str] = None,
        tools: Optional[Iterable[ToolLike]] = None,
        tool_choice: ToolChoiceLike = None,
        json_mode: bool = False,
        seed: Optional[int] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> ChatRequest:
        """Build a :class:`ChatRequest` filled with this provider's defaults.

        ``top_k`` is only sent on the native protocol.
        """
        params = GenerationParams(
            temperature=temperature if temperature is not None else self._temperature,
            max_tokens=max_tokens if max_tokens is not None else self._max_tokens,
            top_p=self._top_p,
            top_k=self._top_k if self._client.mode is ProtocolMode.NATIVE else None,
            seed=seed or None,
            result_format=QWEN_JSON_RESULT_FORMAT if json_mode else None,
            tools=coerce_tools(tools),
            tool_choice=coerce_tool_choice(tool_choice),
        )
        return ChatRequest(model=model or self._model, messages=list(messages), params=params, prompt=prompt)

    def call(
        self,
        prompt: str,
        *,
        json_mode: bool = False,
        seed: Optional[int] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> str:
        """Complete a single prompt and return the output text.

        Raises:
            ProviderError: any client error, or ``RESPONSE_DECODE`` when the
                model returned no text.
        """
        self._callbacks.on_llm_start([prompt])
        try:
            request = self.build_request(prompt=prompt, json_mode=json_mode, seed=seed)
            response = self._client.create_chat(request, cancel=cancel)
            if not response.text:
                raise ProviderError(
                    code=ErrorCode.RESPONSE_DECODE,
                    message="empty response",
                    provider=PROVIDER_NAME,
                    model=request.model,
                )
        except ProviderError as err:
            self._callbacks.on_error(err)
            raise
        self._callbacks.on_generate_end(response)
        return response.text

    def call_batch(self, prompts: Iterable[str], **kwargs: Any) -> List[str]:
        """Run :meth:`call` for each prompt in order; the first error propagates."""
        return [self.call(p, **kwargs) for p in prompts]

    def generate(
        self,
        messages: Sequence[Message],
        *,
        tools: Optional[Iterable[ToolLike]] = None,
        tool_choice: ToolChoiceLike = None,
        json_mode: bool = False,
        seed: Optional[int] = None,
        model: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatResponse:
        """Complete a conversation; returns text and any tool calls."""
        self._callbacks.on_generate_start(messages)
        try:
            request = self.build_request(
                messages, model=model, tools=tools, tool_choice=tool_choice, json_mode=json_mode, seed=seed
            )
            response = self._client.create_chat(request, cancel=cancel)
        except ProviderError as err:
            self._callbacks.on_error(err)
            raise
        self._callbacks.on_generate_end(response)
        return response

    def stream(
        self,
        messages: Sequence[Message] = (),
        *,
        prompt: Optional[str] = None,
        tools: Optional[Iterable[ToolLike]] = None,
        tool_choice: ToolChoiceLike = None,
        json_mode: bool = False,
        seed: Optional[int] = None,
        model: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> ChatStream:
        """Stream a conversation (or a single ``prompt``).

        Start failures reach ``callbacks.on_error`` before raising; an error
        published later by the stream reaches it from the worker thread.
        """
        if prompt is not None and not messages:
            self._callbacks.on_llm_start([prompt])
        else:
            self._callbacks.on_generate_start(messages)
        try:
            request = self.build_request(
                messages,
                prompt=prompt,
                model=model,
                tools=tools,
                tool_choice=tool_choice,
                json_mode=json_mode,
                seed=seed,
            )
            return self._client.create_chat_stream(request, cancel=cancel, on_error=self._callbacks.on_error)
        except ProviderError as err:
            self._callbacks.on_error(err)
            raise


__all__ = ["QwenProvider", "coerce_tools", "coerce_tool_choice"]
