"""Write-side endpoint resolution.

Converts any of a range of data sinks into a ``StreamSink``: an object
with ``write(data: bytes) -> int`` and ``close()``.

Sinks are produced from:
    binary streams (io.RawIOBase, io.BufferedIOBase, io.BytesIO)
    text streams (io.TextIOBase, io.StringIO, sys.stdout)
    any other object with a callable ``write``
    bytearray
    Channel (str or bytes)

Anything else raises ``UnresolvableWriter``.
"""

from __future__ import annotations

import codecs
import io
import logging
from typing import Any, Protocol, runtime_checkable

from ..exceptions import UnresolvableWriter
from .channel import Channel

logger = logging.getLogger(__name__)


@runtime_checkable
class StreamSink(Protocol):
    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...


class PassthroughWriter:
    """Forwards bytes to a caller-supplied binary stream.

    The caller owns the stream, so ``close`` only flushes it.
    """

    def __init__(self, stream: Any):
        self.stream = stream

    def fileno(self) -> int:
        self.flush()
        return self.stream.fileno()

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if callable(flush):
            flush()

    def write(self, data: bytes) -> int:
        # raw streams may accept only part of a chunk
        offset = 0
        while offset < len(data):
            written = self.stream.write(data[offset:] if offset else data)
            if written is None:
                break
            if written == 0:
                return offset
            offset += written
        return len(data)

    def close(self) -> None:
        self.flush()


class TextWriter(PassthroughWriter):
    """Decodes bytes as UTF-8 before writing them to a text stream.

    Multi-byte characters split across two writes are held back until
    they are complete.
    """

    def __init__(self, stream: Any, encoding: str = "utf-8"):
        super().__init__(stream)
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def write(self, data: bytes) -> int:
        text = self._decoder.decode(data)
        if text:
            self.stream.write(text)
        return len(data)

    def close(self) -> None:
        tail = self._decoder.decode(b"", final=True)
        if tail:
            self.stream.write(tail)
        self.flush()


class BufferWriter:
    """Appends to a caller-owned ``bytearray`` in place."""

    def __init__(self, buffer: bytearray):
        self.buffer = buffer

    def write(self, data: bytes) -> int:
        self.buffer.extend(data)
        return len(data)

    def close(self) -> None:
        pass


class ChannelWriter:
    """Sends every write as one value on a channel.

    Once the channel is closed (by its consumer, or by ``close``), writes
    report end-of-stream by returning 0 instead of raising.
    Closing the writer closes the channel.
    """

    def __init__(self, channel: Channel, encoding: str = "utf-8"):
        self.channel = channel
        self._decoder = None
        if channel.kind is str:
            self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

    def write(self, data: bytes) -> int:
        if self.channel.closed:
            return 0
        if self._decoder is None:
            value = bytes(data)
        else:
            value = self._decoder.decode(data)
            if not value:
                return len(data)
        if not self.channel.send(value):
            logger.debug("channel closed by consumer; treating as end-of-stream")
            return 0
        return len(data)

    def close(self) -> None:
        if self._decoder is not None and not self.channel.closed:
            tail = self._decoder.decode(b"", final=True)
            if tail:
                self.channel.send(tail)
        self.channel.close()


def writer_from(x: Any) -> StreamSink:
    """Resolve ``x`` into a StreamSink, or raise UnresolvableWriter."""
    if isinstance(x, io.TextIOBase):
        return TextWriter(x)
    if isinstance(x, (io.RawIOBase, io.BufferedIOBase)):
        return PassthroughWriter(x)
    if isinstance(x, bytearray):
        return BufferWriter(x)
    if isinstance(x, Channel):
        return ChannelWriter(x)
    if callable(getattr(x, "write", None)):
        return PassthroughWriter(x)
    raise UnresolvableWriter(x)


__all__ = [
    "BufferWriter",
    "ChannelWriter",
    "PassthroughWriter",
    "StreamSink",
    "TextWriter",
    "writer_from",
]
