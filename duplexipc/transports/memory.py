"""In-memory channel pair, mainly for tests and same-process wiring."""

from __future__ import annotations

import asyncio
import copy
from typing import Any

from duplexipc.core.contracts import Listener


class MemoryTransport:
    """One end of a MemoryChannel."""

    def __init__(self, channel: MemoryChannel):
        self._channel = channel
        self._listeners: dict[str, list[Listener]] = {}
        self.peer: MemoryTransport | None = None

    def send(self, message: Any) -> bool:
        if self._channel.closed or self.peer is None:
            return False
        # Structured clone: the receiver never shares mutable state with the sender.
        value = copy.deepcopy(message)
        self._channel.sent_count += 1
        if self._channel.asynchronous:
            asyncio.get_running_loop().call_soon(self.peer.emit, "message", value)
        else:
            self.peer.emit("message", value)
        return True

    def on(self, event: str, listener: Listener) -> MemoryTransport:
        self._listeners.setdefault(event, []).append(listener)
        return self

    def off(self, event: str, listener: Listener) -> MemoryTransport:
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            # Same as EventEmitter: drop the most recently added match.
            idx = len(listeners) - 1 - listeners[::-1].index(listener)
            del listeners[idx]
        return self

    def emit(self, event: str, value: Any) -> bool:
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            listener(value)
        return bool(listeners)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))


class MemoryChannel:
    """
    Two linked transports, `master` and `child`.

    Values sent on one end are deep-copied and delivered to the other end's
    "message" listeners, either inline (default) or on the next loop
    iteration when `asynchronous` is set.
    """

    def __init__(self, *, asynchronous: bool = False):
        self.asynchronous = asynchronous
        self.closed = False
        self.sent_count = 0
        self.master = MemoryTransport(self)
        self.child = MemoryTransport(self)
        self.master.peer = self.child
        self.child.peer = self.master

    def close(self) -> None:
        self.closed = True
