"""Blocking, closable channel of text or byte chunks.

A Channel carries values of exactly one kind (``str`` or ``bytes``)
between threads. Senders block while the channel is full; receivers block
while it is empty. Closing wakes everybody: pending sends fail, and
receivers drain what is left before seeing ``ChannelClosed``.

Capacity 0 is a rendezvous: ``send`` returns only once a receiver has
taken the value.
"""

from __future__ import annotations

import threading
import time
from collections import deque
from typing import Iterator, Optional, Union

from ..exceptions import ChannelClosed

Chunk = Union[str, bytes]


class Channel:
    """A closable FIFO of ``str`` or ``bytes`` values."""

    def __init__(self, kind: type = str, capacity: int = 0):
        if kind not in (str, bytes):
            raise TypeError(f"channel kind must be str or bytes, not {kind!r}")
        if capacity < 0:
            raise ValueError("channel capacity cannot be negative")
        self.kind = kind
        self.capacity = capacity
        self._items: deque = deque()
        self._closed = False
        self._sent = 0
        self._received = 0
        self._cond = threading.Condition()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Channel({self.kind.__name__}, capacity={self.capacity}, {state})"

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def send(self, value: Chunk) -> bool:
        """Send ``value``, blocking until there is room.

        Returns False if the channel is (or becomes) closed before the
        value could be queued.
        """
        if not isinstance(value, self.kind):
            raise TypeError(
                f"cannot send {type(value).__name__} on a {self.kind.__name__} channel"
            )
        with self._cond:
            while not self._closed and len(self._items) >= max(self.capacity, 1):
                self._cond.wait()
            if self._closed:
                return False
            self._items.append(value)
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()
            if self.capacity == 0:
                while self._received < ticket and not self._closed:
                    self._cond.wait()
            return True

    def recv(self, timeout: Optional[float] = None) -> Chunk:
        """Receive the next value.

        Raises:
            ChannelClosed: the channel is closed and nothing is left in it.
            TimeoutError: ``timeout`` seconds passed with nothing to receive.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self._items:
                if self._closed:
                    raise ChannelClosed("receive on closed channel")
                if deadline is None:
                    self._cond.wait()
                else:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        raise TimeoutError("channel receive timed out")
                    self._cond.wait(remaining)
            value = self._items.popleft()
            self._received += 1
            self._cond.notify_all()
            return value

    def close(self) -> None:
        """Close the channel. Closing twice is harmless."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[Chunk]:
        while True:
            try:
                yield self.recv()
            except ChannelClosed:
                return
