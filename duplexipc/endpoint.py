"""One side of a duplex IPC channel: RPC plus events over a shared transport."""

from __future__ import annotations

import asyncio
from typing import Any
from collections.abc import Callable, Mapping

from loguru import logger

from duplexipc.config import EndpointOptions
from duplexipc.core.contracts import MESSAGE_EVENT, Transport
from duplexipc.core.protocol import Notification, Request, Response
from duplexipc.core.serialization import decode_message
from duplexipc.events import EventChannel, EventHandler
from duplexipc.rpc.engine import RequestEngine
from duplexipc.rpc.registry import EndpointRegistry, Handler
from duplexipc.utils.exceptions import EndpointClosedError


class Endpoint:
    """
    Symmetric IPC endpoint.

    Wraps a transport it does not own and installs a single inbound listener
    that routes requests and responses to the RPC engine and notifications to
    the event channel. Either side may call act/add/emit/on.
    """

    def __init__(self, transport: Transport, options: EndpointOptions | Mapping[str, Any] | None = None):
        if options is None:
            options = EndpointOptions()
        elif not isinstance(options, EndpointOptions):
            options = EndpointOptions.model_validate(dict(options))
        self.options = options
        self.transport = transport
        self.registry = EndpointRegistry()
        self.engine = RequestEngine(transport, self.registry, default_timeout_ms=options.default_act_timeout_ms)
        self.events = EventChannel(transport)
        self._running = False
        if options.start_service:
            self.start_service()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def pending_count(self) -> int:
        return self.engine.pending_count

    def start_service(self) -> Endpoint:
        """Attach the inbound listener. Started on construction by default."""
        if self._running:
            return self
        self._running = True
        self.transport.on(MESSAGE_EVENT, self._on_message)
        logger.debug("IPC endpoint service started")
        return self

    def stop_service(self) -> Endpoint:
        """Detach the inbound listener; the transport itself stays open."""
        if not self._running:
            return self
        self._running = False
        self.transport.off(MESSAGE_EVENT, self._on_message)
        logger.debug("IPC endpoint service stopped")
        return self

    def close(self) -> None:
        """Stop the service and reject every outstanding act() call."""
        self.stop_service()
        rejected = self.engine.cancel_all(EndpointClosedError)
        if rejected:
            logger.debug("Rejected {} in-flight IPC request(s) on close", rejected)

    async def __aenter__(self) -> Endpoint:
        return self.start_service()

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    def act(self, name: str, data: Any = None, *, timeout_ms: float | None = None) -> asyncio.Future[Any]:
        """Call the peer's endpoint `name`; await the returned future for the result."""
        return self.engine.act(name, data, timeout_ms=timeout_ms)

    def add(self, name: str, handler: Handler) -> Callable[[], None]:
        """Serve `name` with `handler` (sync or async); returns a removal callable."""
        return self.registry.add(name, handler)

    def emit(self, name: str, data: Any = None) -> bool:
        return self.events.emit(name, data)

    def on(self, name: str, handler: EventHandler) -> Callable[[], None]:
        return self.events.on(name, handler)

    def once(self, name: str, handler: EventHandler) -> Callable[[], None]:
        return self.events.once(name, handler)

    def off(self, name: str, handler: EventHandler) -> None:
        self.events.off(name, handler)

    def _on_message(self, value: Any) -> None:
        message = decode_message(value)
        if message is None:
            logger.trace("Ignoring foreign message on IPC channel")
        elif isinstance(message, Request):
            self.engine.handle_request(message)
        elif isinstance(message, Response):
            self.engine.handle_response(message)
        elif isinstance(message, Notification):
            self.events.dispatch(message)
        else:
            raise TypeError(f"unhandled message type: {type(message).__name__}")
