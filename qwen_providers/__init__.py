"""qwen_providers package

Client-side adapter for the DashScope (Qwen) chat service, speaking either
the vendor-native protocol or the OpenAI-compatible one behind a single
request/response shape.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`QwenClient`, :func:`new_client` and the ``with_*`` options
    - Provider: :class:`QwenProvider`, :class:`ProviderCallbacks`
    - Models: :class:`ChatRequest`, :class:`Message`, :class:`ChatResponse`, ...
    - Streaming: :class:`ChatStream`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`
"""

from .base.cancellation import CancellationToken
from .base.errors import ErrorCode, ProviderError
from .base.models import (
    ChatRequest,
    ChatResponse,
    ChatResponseChunk,
    FunctionCall,
    FunctionDefinition,
    GenerationParams,
    ImagePart,
    Message,
    PartsContent,
    TextContent,
    TextPart,
    ToolCall,
    ToolChoice,
    ToolDeclaration,
    Usage,
)
from .base.streaming import ChatStream
from .config.defaults import ProtocolMode
from .qwen import (
    ClientConfig,
    ProviderCallbacks,
    QwenClient,
    QwenProvider,
    new_client,
    with_base_url,
    with_http_client,
    with_openai_compatible,
    with_timeout,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CancellationToken",
    "ErrorCode",
    "ProviderError",
    "ChatRequest",
    "ChatResponse",
    "ChatResponseChunk",
    "FunctionCall",
    "FunctionDefinition",
    "GenerationParams",
    "ImagePart",
    "Message",
    "PartsContent",
    "TextContent",
    "TextPart",
    "ToolCall",
    "ToolChoice",
    "ToolDeclaration",
    "Usage",
    "ChatStream",
    "ProtocolMode",
    "ClientConfig",
    "QwenClient",
    "QwenProvider",
    "ProviderCallbacks",
    "new_client",
    "with_base_url",
    "with_http_client",
    "with_openai_compatible",
    "with_timeout",
]
