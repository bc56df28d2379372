"""
Unified domain models (DTOs) public surface.

This module re-exports the implementations under
``qwen_providers.base.models_parts`` to provide one stable import path.
"""

from .models_parts.content_part import (
    Content,
    ContentPart,
    ImagePart,
    PartsContent,
    TextContent,
    TextPart,
)
from .models_parts.message import Message, Role, normalize_role
from .models_parts.tool import (
    FunctionCall,
    FunctionDefinition,
    ToolCall,
    ToolChoice,
    ToolDeclaration,
)
from .models_parts.chat_request import ChatRequest, GenerationParams
from .models_parts.chat_response import ChatResponse, ChatResponseChunk, Usage

__all__ = [
    "Content",
    "ContentPart",
    "ImagePart",
    "PartsContent",
    "TextContent",
    "TextPart",
    "Message",
    "Role",
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
