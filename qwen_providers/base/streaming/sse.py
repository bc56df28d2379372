"""Server-sent event line decoding.

:func:`decode_line` classifies one newline-delimited line of an event
stream body:

- blank line (keep-alive) -> ``SKIP``
- ``data: [DONE]`` -> ``TERMINAL``
- any other line without the ``data:`` marker -> ``SKIP``
- ``data: <payload>`` -> ``DATA`` carrying ``<payload>``

The function is pure; JSON decoding of the payload belongs to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"


class FrameKind(str, Enum):
    SKIP = "skip"
    TERMINAL = "terminal"
    DATA = "data"


@dataclass(frozen=True)
class Frame:
    """Classification of a single event-stream line."""

    kind: FrameKind
    payload: str = ""


SKIP = Frame(FrameKind.SKIP)
TERMINAL = Frame(FrameKind.TERMINAL)


def decode_line(line: str | bytes) -> Frame:
    """Classify one event-stream line (see module docstring)."""
    if isinstance(line, bytes):
        line = line.decode("utf-8")
    line = line.strip()
    if not line or not line.startswith(DATA_PREFIX):
        return SKIP
    payload = line[len(DATA_PREFIX):].strip()
    if payload == DONE_SENTINEL:
        return TERMINAL
    return Frame(FrameKind.DATA, payload)


__all__ = ["Frame", "FrameKind", "decode_line", "DATA_PREFIX", "DONE_SENTINEL"]
