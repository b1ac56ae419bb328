"""Named publish/subscribe layer sharing the RPC wire."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from collections.abc import Callable

from duplexipc.core.contracts import Transport
from duplexipc.core.protocol import Notification
from duplexipc.core.serialization import encode_message
from duplexipc.utils.validation import assert_valid_handler, assert_valid_name

EventHandler = Callable[[Any], Any]


@dataclass(slots=True, eq=False)
class Subscription:
    name: str
    handler: EventHandler
    once: bool = False


class EventChannel:
    """
    Fan-out of inbound notifications to local subscribers.

    Subscribers run synchronously, in subscription order, inside the inbound
    message turn. Their exceptions are not caught here: events have no reply
    path to carry an error back.
    """

    def __init__(self, transport: Transport):
        self._transport = transport
        self._subscriptions: dict[str, list[Subscription]] = {}

    def emit(self, name: str, data: Any = None) -> bool:
        assert_valid_name(name)
        return bool(self._transport.send(encode_message(Notification(name=name, data=data))))

    def on(self, name: str, handler: EventHandler) -> Callable[[], None]:
        return self._subscribe(name, handler, once=False)

    def once(self, name: str, handler: EventHandler) -> Callable[[], None]:
        return self._subscribe(name, handler, once=True)

    def off(self, name: str, handler: EventHandler) -> None:
        """Remove the most recent subscription of `handler` to `name`."""
        subscriptions = self._subscriptions.get(name)
        if not subscriptions:
            return
        for sub in reversed(subscriptions):
            if sub.handler == handler:
                self._discard(sub)
                return

    def listener_count(self, name: str) -> int:
        return len(self._subscriptions.get(name, ()))

    def dispatch(self, notification: Notification) -> int:
        """Deliver an inbound notification; returns the number of handlers called."""
        subscriptions = self._subscriptions.get(notification.name)
        if not subscriptions:
            return 0
        called = 0
        for sub in list(subscriptions):
            if sub.once:
                self._discard(sub)
            sub.handler(notification.data)
            called += 1
        return called

    def _subscribe(self, name: str, handler: EventHandler, *, once: bool) -> Callable[[], None]:
        assert_valid_name(name)
        assert_valid_handler(handler)
        sub = Subscription(name=name, handler=handler, once=once)
        self._subscriptions.setdefault(name, []).append(sub)
        return lambda: self._discard(sub)

    def _discard(self, sub: Subscription) -> None:
        subscriptions = self._subscriptions.get(sub.name)
        if not subscriptions:
            return
        try:
            subscriptions.remove(sub)
        except ValueError:
            return
        if not subscriptions:
            del self._subscriptions[sub.name]
