"""
Tool declaration, tool-choice directive and tool-call records.

Tool calls carry their function arguments as opaque serialized text; this
layer never parses them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional


@dataclass(frozen=True)
class FunctionDefinition:
    """A function the model may call.

    Attributes:
        name: Function name.
        description: Free-text description shown to the model.
        parameters: JSON-schema mapping describing the arguments.
        required: Optional list of required argument names.
    """

    name: str
    description: str = ""
    parameters: Dict[str, Any] = field(default_factory=dict)
    required: Optional[List[str]] = None


@dataclass(frozen=True)
class ToolDeclaration:
    """A tool offered to the model; only function tools exist today."""

    function: FunctionDefinition
    type: Literal["function"] = "function"


@dataclass(frozen=True)
class ToolChoice:
    """Tool-choice directive: ``auto`` or a specific named function."""

    kind: Literal["auto", "function"]
    function_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind == "function" and not self.function_name:
            raise ValueError("function tool choice requires a function name")

    @classmethod
    def auto(cls) -> "ToolChoice":
        return cls(kind="auto")

    @classmethod
    def function(cls, name: str) -> "ToolChoice":
        return cls(kind="function", function_name=name)


@dataclass(frozen=True)
class FunctionCall:
    name: str = ""
    arguments: str = ""


@dataclass(frozen=True)
class ToolCall:
    """A model-issued tool invocation (or a streamed fragment of one)."""

    id: str = ""
    function: FunctionCall = field(default_factory=FunctionCall)
    type: Literal["function"] = "function"


__all__ = [
    "FunctionDefinition",
    "ToolDeclaration",
    "ToolChoice",
    "FunctionCall",
    "ToolCall",
]
