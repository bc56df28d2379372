"""
Adapter Base Package

Provider-agnostic building blocks used by the Qwen adapter:
- Models: unified request/response/chunk dataclasses
- DTOs: pydantic wire schemas for both protocols
- Errors: normalized error taxonomy and HTTP/transport classification
- Cancellation, timeouts, pooled HTTP clients and structured logging
- Streaming: event-stream decoder, handoff channel, worker, accumulator
"""

from .models import (
    ChatRequest,
    ChatResponse,
    ChatResponseChunk,
    FunctionCall,
    FunctionDefinition,
    GenerationParams,
    ImagePart,
    Message,
    PartsContent,
    Role,
    TextContent,
    TextPart,
    ToolCall,
    ToolChoice,
    ToolDeclaration,
    Usage,
)
from .errors import ErrorCode, ProviderError
from .timeouts import TimeoutConfig, get_timeout_config
from .cancellation import CancellationToken
from .streaming import Channel, ChannelClosed, ChunkAccumulator, StreamWorker, accumulate_chunks

__all__ = [
    # Models
    "Role",
    "TextPart",
    "ImagePart",
    "TextContent",
    "PartsContent",
    "Message",
    "FunctionDefinition",
    "ToolDeclaration",
    "ToolChoice",
    "FunctionCall",
    "ToolCall",
    "GenerationParams",
    "ChatRequest",
    "ChatResponse",
    "ChatResponseChunk",
    "Usage",
    # Errors
    "ErrorCode",
    "ProviderError",
    # Timeouts / cancellation
    "TimeoutConfig",
    "get_timeout_config",
    "CancellationToken",
    # Streaming
    "Channel",
    "ChannelClosed",
    "ChunkAccumulator",
    "StreamWorker",
    "accumulate_chunks",
]
