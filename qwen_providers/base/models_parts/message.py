"""
Message DTO used by the unified request shape.

Defines the `Message` dataclass and the `Role` literal. Content is always one
of the tagged variants from :mod:`content_part`; helpers build either variant
and provide a flattened text view for logging.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal

from .content_part import Content, ContentPart, PartsContent, TextContent


# Message roles accepted by both wire protocols.
Role = Literal["system", "user", "assistant", "tool"]

# Conversation-layer role names mapped onto wire roles; unknown names fall
# back to "user".
ROLE_ALIASES: Dict[str, str] = {
    "system": "system",
    "user": "user",
    "human": "user",
    "assistant": "assistant",
    "ai": "assistant",
    "tool": "tool",
}


def normalize_role(role: str) -> Role:
    """Map a role or role alias to a wire role."""
    return ROLE_ALIASES.get((role or "").strip().lower(), "user")  # type: ignore[return-value]


@dataclass
class Message:
    """A chat message in the unified request shape.

    Attributes:
        role: The role of the message author.
        content: ``TextContent`` or ``PartsContent``.
    """

    role: Role
    content: Content

    def __post_init__(self) -> None:
        self.role = normalize_role(self.role)

    @classmethod
    def text(cls, role: str, text: str) -> "Message":
        """Build a plain-text message."""
        return cls(role=role, content=TextContent(text))  # type: ignore[arg-type]

    @classmethod
    def parts(cls, role: str, *parts: ContentPart) -> "Message":
        """Build a multimodal message from ordered parts."""
        return cls(role=role, content=PartsContent(tuple(parts)))  # type: ignore[arg-type]

    def is_structured(self) -> bool:
        """Return True if the message content is the multi-part variant."""
        return self.content.kind == "parts"

    def text_or_joined(self) -> str:
        """Return a flattened string representation of the message content.

        Text parts are joined with newlines; image parts are represented by an
        ``[image]`` token for compact logging.
        """
        if self.content.kind == "text":
            return self.content.text
        chunks: List[str] = []
        for p in self.content.parts:
            chunks.append(p.text if p.type == "text" else f"[{p.type}]")
        return "\n".join(chunks)


__all__ = [
    "Message",
    "Role",
    "ROLE_ALIASES",
    "normalize_role",
]
