"""Transport contract consumed by the IPC engine."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable
from collections.abc import Callable

MESSAGE_EVENT = "message"

Listener = Callable[[Any], None]


@runtime_checkable
class Transport(Protocol):
    """One end of a bidirectional channel carrying structured values."""

    def send(self, message: Any) -> bool: ...
    def on(self, event: str, listener: Listener) -> Any: ...
    def off(self, event: str, listener: Listener) -> Any: ...
