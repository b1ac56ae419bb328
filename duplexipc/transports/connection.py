"""Transport over a multiprocessing connection (one end of multiprocessing.Pipe)."""

from __future__ import annotations

import asyncio
from typing import Any

from loguru import logger

from duplexipc.core.contracts import MESSAGE_EVENT, Listener


class ConnectionTransport:
    """
    Adapts a `multiprocessing.connection.Connection` to the transport contract.

    Inbound values are read on the running asyncio loop via `add_reader` while
    at least one "message" listener is attached, so listeners must be attached
    from inside the loop. Removing listeners never closes the connection.
    """

    def __init__(self, connection: Any):
        self._conn = connection
        self._listeners: dict[str, list[Listener]] = {}
        self._loop: asyncio.AbstractEventLoop | None = None
        self._peer_gone = False

    @property
    def closed(self) -> bool:
        return self._conn.closed or self._peer_gone

    def send(self, message: Any) -> bool:
        if self.closed:
            return False
        try:
            self._conn.send(message)
        except (OSError, EOFError) as exc:
            logger.warning("IPC connection send failed: {}", exc)
            self._peer_gone = True
            return False
        return True

    def on(self, event: str, listener: Listener) -> ConnectionTransport:
        self._listeners.setdefault(event, []).append(listener)
        if event == MESSAGE_EVENT:
            self._start_reading()
        return self

    def off(self, event: str, listener: Listener) -> ConnectionTransport:
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            idx = len(listeners) - 1 - listeners[::-1].index(listener)
            del listeners[idx]
        if event == MESSAGE_EVENT and not self._listeners.get(MESSAGE_EVENT):
            self._stop_reading()
        return self

    def close(self) -> None:
        self._stop_reading()
        if not self._conn.closed:
            self._conn.close()

    def _start_reading(self) -> None:
        if self._loop is not None or self.closed:
            return
        loop = asyncio.get_running_loop()
        loop.add_reader(self._conn.fileno(), self._on_readable)
        self._loop = loop

    def _stop_reading(self) -> None:
        loop, self._loop = self._loop, None
        if loop is None or self._conn.closed:
            return
        loop.remove_reader(self._conn.fileno())

    def _on_readable(self) -> None:
        while self._loop is not None:
            try:
                if not self._conn.poll():
                    return
                value = self._conn.recv()
            except (EOFError, OSError) as exc:
                logger.warning("IPC connection closed by peer: {!r}", exc)
                self._stop_reading()
                self._peer_gone = True
                return
            # Listener exceptions go to the loop's exception handler; the channel stays up.
            for listener in list(self._listeners.get(MESSAGE_EVENT, ())):
                listener(value)
