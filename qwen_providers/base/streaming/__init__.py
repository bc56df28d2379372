"""Streaming package.

Exposes the event-stream line decoder, the closable handoff channel, the
per-stream worker and the chunk accumulator under one namespace.
"""

from .accumulate import ChunkAccumulator, accumulate_chunks
from .channel import Channel, ChannelClosed
from .chat_stream import ChatStream
from .sse import DATA_PREFIX, DONE_SENTINEL, Frame, FrameKind, decode_line
from .worker import ChunkParser, StreamWorker

__all__ = [
    "ChunkAccumulator",
    "accumulate_chunks",
    "Channel",
    "ChannelClosed",
    "ChatStream",
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "Frame",
    "FrameKind",
    "decode_line",
    "ChunkParser",
    "StreamWorker",
]
