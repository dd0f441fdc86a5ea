"""Read-side endpoint resolution.

Converts any of a range of data sources into a ``StreamSource``: an
object with ``read(size: int) -> bytes`` returning ``b""`` at end of
input.

Sources are produced from, in priority order:
    binary streams, text streams, or any object with a callable ``read``
    bytearray / memoryview (read by reference, not drained)
    Channel (str or bytes)
    str / bytes literals (the whole input, consumed once)

Anything else raises ``UnresolvableReader``.
"""

from __future__ import annotations

import io
from typing import Any, Protocol, runtime_checkable

from ..exceptions import ChannelClosed, UnresolvableReader
from .channel import Channel


@runtime_checkable
class StreamSource(Protocol):
    def read(self, size: int = -1) -> bytes: ...


class PassthroughReader:
    """Reads bytes from a caller-supplied binary stream."""

    def __init__(self, stream: Any):
        self.stream = stream

    def fileno(self) -> int:
        return self.stream.fileno()

    def read(self, size: int = -1) -> bytes:
        data = self.stream.read(size)
        return data or b""


class TextReader(PassthroughReader):
    """Encodes text read from a text stream as UTF-8."""

    def __init__(self, stream: Any, encoding: str = "utf-8"):
        super().__init__(stream)
        self.encoding = encoding

    def read(self, size: int = -1) -> bytes:
        text = self.stream.read(size)
        return text.encode(self.encoding) if text else b""


class BufferReader:
    """Reads a caller-owned ``bytearray`` without copying it up front."""

    def __init__(self, buffer: Any):
        self.buffer = buffer
        self._offset = 0

    def read(self, size: int = -1) -> bytes:
        end = len(self.buffer) if size < 0 else self._offset + size
        data = bytes(self.buffer[self._offset:end])
        self._offset += len(data)
        return data


class ChannelReader:
    """Blocks on a channel for each read; channel closure is end of input.

    A value longer than the requested size is handed out over several
    reads.
    """

    def __init__(self, channel: Channel, encoding: str = "utf-8"):
        self.channel = channel
        self.encoding = encoding
        self._pending = b""

    def read(self, size: int = -1) -> bytes:
        if not self._pending:
            try:
                value = self.channel.recv()
            except ChannelClosed:
                return b""
            if isinstance(value, str):
                value = value.encode(self.encoding)
            self._pending = value
        if size < 0:
            size = len(self._pending)
        data, self._pending = self._pending[:size], self._pending[size:]
        return data


def reader_from(x: Any) -> StreamSource:
    """Resolve ``x`` into a StreamSource, or raise UnresolvableReader."""
    if isinstance(x, io.TextIOBase):
        return TextReader(x)
    if isinstance(x, (io.RawIOBase, io.BufferedIOBase)):
        return PassthroughReader(x)
    if isinstance(x, (bytearray, memoryview)):
        return BufferReader(x)
    if isinstance(x, Channel):
        return ChannelReader(x)
    if isinstance(x, str):
        return PassthroughReader(io.BytesIO(x.encode("utf-8")))
    if isinstance(x, bytes):
        return PassthroughReader(io.BytesIO(x))
    if callable(getattr(x, "read", None)):
        return PassthroughReader(x)
    raise UnresolvableReader(x)


__all__ = [
    "BufferReader",
    "ChannelReader",
    "PassthroughReader",
    "StreamSource",
    "TextReader",
    "reader_from",
]
