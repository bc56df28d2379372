"""Models parts package.

Contains the one-concern-per-file DTO implementations re-exported from
``qwen_providers.base.models``.
"""

from .content_part import Content, ContentPart, ImagePart, PartsContent, TextContent, TextPart
from .message import Message, Role, ROLE_ALIASES, normalize_role
from .tool import FunctionCall, FunctionDefinition, ToolCall, ToolChoice, ToolDeclaration
from .chat_request import ChatRequest, GenerationParams
from .chat_response import ChatResponse, ChatResponseChunk, Usage

__all__ = [
    "Content",
    "ContentPart",
    "ImagePart",
    "PartsContent",
    "TextContent",
    "TextPart",
    "Message",
    "Role",
    "ROLE_ALIASES",
    "normalize_role",
    "FunctionCall",
    "FunctionDefinition",
    "ToolCall",
    "ToolChoice",
    "ToolDeclaration",
    "ChatRequest",
    "GenerationParams",
    "ChatResponse",
    "ChatResponseChunk",
    "Usage",
]
