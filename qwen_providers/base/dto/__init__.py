"""Pydantic wire DTOs for both DashScope protocols.

The unified domain types live in ``qwen_providers.base.models``; these models
describe only what travels over HTTP and are produced/consumed by the
translators in ``qwen_providers.qwen``.
"""

from .error_body import ErrorBody
from .native import (
    NativeChatRequest,
    NativeChatResponse,
    NativeContentPart,
    NativeFunctionChoice,
    NativeFunctionDefinition,
    NativeImageURL,
    NativeInput,
    NativeMessage,
    NativeParameters,
    NativeTool,
    NativeToolCall,
    NativeToolChoice,
)
from .openai_compat import (
    OpenAIChatChunk,
    OpenAIChatMessage,
    OpenAIChatRequest,
    OpenAIChatResponse,
    OpenAIContentPart,
    OpenAIFunctionChoice,
    OpenAIFunctionDefinition,
    OpenAIImageURL,
    OpenAINamedToolChoice,
    OpenAITool,
    OpenAIToolCall,
)

__all__ = [
    "ErrorBody",
    "NativeChatRequest",
    "NativeChatResponse",
    "NativeContentPart",
    "NativeFunctionChoice",
    "NativeFunctionDefinition",
    "NativeImageURL",
    "NativeInput",
    "NativeMessage",
    "NativeParameters",
    "NativeTool",
    "NativeToolCall",
    "NativeToolChoice",
    "OpenAIChatChunk",
    "OpenAIChatMessage",
    "OpenAIChatRequest",
    "OpenAIChatResponse",
    "OpenAIContentPart",
    "OpenAIFunctionChoice",
    "OpenAIFunctionDefinition",
    "OpenAIImageURL",
    "OpenAINamedToolChoice",
    "OpenAITool",
    "OpenAIToolCall",
]
