"""
Message content variants.

Message content is a tagged variant: either :class:`TextContent` holding one
plain string, or :class:`PartsContent` holding an ordered sequence of typed
parts (:class:`TextPart` | :class:`ImagePart`). A message never carries both.
Translators dispatch on the variant's ``kind`` tag once, at translation time.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Literal, Tuple, Union


@dataclass(frozen=True)
class TextPart:
    """A text segment inside multimodal content."""

    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class ImagePart:
    """An image reference (http(s) URL or ``data:`` URL) inside multimodal content."""

    url: str
    type: Literal["image"] = "image"

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "ImagePart":
        """Build an inline image part from raw bytes as a base64 ``data:`` URL."""
        encoded = base64.b64encode(data).decode("ascii")
        return cls(url=f"data:{mime_type};base64,{encoded}")


ContentPart = Union[TextPart, ImagePart]


@dataclass(frozen=True)
class TextContent:
    """Plain string content."""

    text: str
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class PartsContent:
    """Ordered multimodal parts."""

    parts: Tuple[ContentPart, ...]
    kind: Literal["parts"] = "parts"


Content = Union[TextContent, PartsContent]


__all__ = [
    "TextPart",
    "ImagePart",
    "ContentPart",
    "TextContent",
    "PartsContent",
    "Content",
]
