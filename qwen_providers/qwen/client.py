"""DashScope (Qwen) chat client speaking the native or OpenAI-compatible protocol.

Summary:
- ``create_chat``: one POST, full body read on the caller's thread, first
  choice translated to :class:`ChatResponse`.
- ``create_chat_stream``: dispatch and status check happen synchronously;
  on success a dedicated worker thread decodes the event stream into a
  :class:`ChatStream`.

Errors & Observability:
- Every failure is a :class:`ProviderError` with a normalized ``ErrorCode``.
- Structured ``chat.*`` / ``stream.*`` events are emitted through the shared
  JSON logger. The credential is never logged.

No retries are performed; callers own retry policy.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import asdict
from typing import Callable, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import ErrorCode, ProviderError
from ..base.log_support import LogContext
from ..base.logging import get_logger, normalized_log_event
from ..base.models import ChatRequest, ChatResponse, ChatResponseChunk
from ..base.streaming import Channel, ChatStream, StreamWorker
from ..config.defaults import PROVIDER_NAME, ProtocolMode
from ..config.env import resolve_api_key
from . import transport
from .options import ClientConfig, Option, build_config, config_options_from_env
from .translate_request import build_request_body
from .translate_response import parse_chunk, parse_response


class QwenClient:
    """Chat client bound to one immutable :class:`ClientConfig`.

    Parameters:
        api_key: DashScope credential; empty values raise
            ``ProviderError(CONFIGURATION)`` before any option runs.
        *options: Construction options applied in order (see
            :mod:`qwen_providers.qwen.options`).

    Instances hold no per-call state and may be shared across threads.
    """

    def __init__(self, api_key: str, *options: Option) -> None:
        self._config = build_config(api_key, *options)
        self._logger = get_logger("qwen_providers.qwen")

    @classmethod
    def from_env(cls, *options: Option) -> "QwenClient":
        """Build a client from ``QWEN_API_KEY``, ``QWEN_USE_OPENAI_COMPATIBLE`` and ``QWEN_BASE_URL``.

        Explicit ``options`` are applied after the environment-derived ones.
        """
        return cls(resolve_api_key() or "", *config_options_from_env(), *options)

    @property
    def provider_name(self) -> str:
        return PROVIDER_NAME

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def mode(self) -> ProtocolMode:
        return self._config.mode

    def _ctx(self, request: ChatRequest) -> LogContext:
        return LogContext(provider=PROVIDER_NAME, model=request.model, mode=self._config.mode.value)

    def create_chat(self, request: ChatRequest, *, cancel: Optional[CancellationToken] = None) -> ChatResponse:
        """Perform a non-streaming chat completion.

        Parameters:
            request: Unified chat request.
            cancel: Optional token; cancelling it aborts the call, including
                an in-progress body read.

        Returns:
            The first choice translated to :class:`ChatResponse`.

        Raises:
            ProviderError: ``SERIALIZATION``, ``TRANSPORT``, ``HTTP_STATUS``,
                ``API``, ``RESPONSE_DECODE`` or ``CANCELLED``.
        """
        ctx = self._ctx(request)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", messages=len(request.messages))
        try:
            endpoint, body = build_request_body(self._config, request, stream=False)
            response = transport.send(
                self._config, endpoint, body, stream=False, model=request.model, cancel=cancel
            )
            raw = transport.read_body(response, model=request.model, cancel=cancel)
            try:
                result = parse_response(self._config.mode, raw)
            except ValueError as exc:
                raise ProviderError(
                    code=ErrorCode.RESPONSE_DECODE,
                    message=f"failed to parse response: {exc}",
                    provider=PROVIDER_NAME,
                    model=request.model,
                    raw=exc,
                ) from exc
        except ProviderError as err:
            normalized_log_event(
                self._logger,
                "chat.error",
                ctx,
                phase="finalize",
                error_code=err.code.value,
                emitted=False,
                status_code=err.status_code,
                upstream_code=err.upstream_code,
                error=err.message,
            )
            raise
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=bool(result.text or result.tool_calls),
            tokens=asdict(result.usage) if result.usage else None,
            request_id=result.request_id or None,
            finish_reason=result.finish_reason,
        )
        return result

    def create_chat_stream(
        self,
        request: ChatRequest,
        *,
        cancel: Optional[CancellationToken] = None,
        on_error: Optional[Callable[[ProviderError], None]] = None,
    ) -> ChatStream:
        """Start a streaming chat completion.

        Dispatch failures and non-2xx statuses raise here, before any chunk
        is produced. Afterwards one worker thread owns the response and
        publishes chunks, then at most one error, on the returned stream.

        Parameters:
            request: Unified chat request.
            cancel: Optional token; the stream also gets its own child token so
                ``ChatStream.cancel`` never affects the caller's token.
            on_error: Optional hook run on the worker thread with the error the
                stream publishes (start failures raise instead).
        """
        token = cancel.child() if cancel is not None else CancellationToken()
        ctx = self._ctx(request)
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", messages=len(request.messages))
        try:
            endpoint, body = build_request_body(self._config, request, stream=True)
            response = transport.send(
                self._config, endpoint, body, stream=True, model=request.model, cancel=token
            )
        except ProviderError as err:
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="start",
                error_code=err.code.value,
                emitted=False,
                status_code=err.status_code,
                upstream_code=err.upstream_code,
                error=err.message,
            )
            if cancel is not None:
                cancel.unlink_child(token)
            raise

        unregister = token.on_cancel(lambda: transport.abort_response(response))

        def _release() -> None:
            unregister()
            if cancel is not None:
                cancel.unlink_child(token)
            with suppress(Exception):
                response.close()

        mode = self._config.mode
        chunks: Channel[ChatResponseChunk] = Channel(1, name="chunks")
        errors: Channel[ProviderError] = Channel(1, name="errors")
        worker = StreamWorker(
            response.iter_lines(),
            lambda payload: parse_chunk(mode, payload),
            chunks=chunks,
            errors=errors,
            token=token,
            on_close=_release,
            on_error=on_error,
            provider=PROVIDER_NAME,
            model=request.model,
            logger=self._logger,
            ctx=ctx,
        )
        return ChatStream(chunks, errors, token, worker.start())


def new_client(api_key: str, *options: Option) -> QwenClient:
    """Construct a :class:`QwenClient`; see :class:`QwenClient` for parameters."""
    return QwenClient(api_key, *options)


__all__ = ["QwenClient", "new_client"]
