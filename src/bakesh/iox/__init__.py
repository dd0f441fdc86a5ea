"""Adapters between caller-supplied data endpoints and process streams."""

from .channel import Channel
from .readers import StreamSource, reader_from
from .writers import StreamSink, writer_from

__all__ = [
    "Channel",
    "StreamSink",
    "StreamSource",
    "reader_from",
    "writer_from",
]
