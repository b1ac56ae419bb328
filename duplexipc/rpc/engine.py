"""Request/response correlation over a shared transport."""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any
from collections.abc import Callable

from loguru import logger

from duplexipc.core.contracts import Transport
from duplexipc.core.ids import unique_id
from duplexipc.core.protocol import Request, Response, SerializedError
from duplexipc.core.serialization import encode_message
from duplexipc.rpc.registry import EndpointRegistry
from duplexipc.utils.exceptions import (
    ChannelUnavailableError,
    NotFoundError,
    RemoteError,
    TimeoutError,
    not_found_message,
    serialize_error,
)
from duplexipc.utils.validation import assert_valid_name, assert_valid_timeout

DEFAULT_ACT_TIMEOUT_MS = 30_000


@dataclass(slots=True)
class PendingRequest:
    correlation_id: str
    name: str
    timeout_ms: float
    future: asyncio.Future[Any]
    timeout_handle: asyncio.TimerHandle


class RequestEngine:
    """Issues correlated requests and serves inbound ones from a registry."""

    def __init__(
        self,
        transport: Transport,
        registry: EndpointRegistry,
        *,
        default_timeout_ms: float = DEFAULT_ACT_TIMEOUT_MS,
    ):
        self._transport = transport
        self._registry = registry
        self.default_timeout_ms = assert_valid_timeout(default_timeout_ms)
        self._pending: dict[str, PendingRequest] = {}
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def act(self, name: str, data: Any = None, *, timeout_ms: float | None = None) -> asyncio.Future[Any]:
        """
        Send a request and return a future settled by the matching reply.

        Invalid arguments raise immediately. Remote failures, timeouts and an
        unavailable channel are delivered through the returned future.
        """
        assert_valid_name(name)
        timeout = assert_valid_timeout(self.default_timeout_ms if timeout_ms is None else timeout_ms)
        loop = asyncio.get_running_loop()
        correlation_id = unique_id()
        future: asyncio.Future[Any] = loop.create_future()
        handle = loop.call_later(timeout / 1000.0, self._on_timeout, correlation_id)
        # Registered before sending: a synchronous transport may deliver the reply inside send().
        self._pending[correlation_id] = PendingRequest(
            correlation_id=correlation_id,
            name=name,
            timeout_ms=timeout,
            future=future,
            timeout_handle=handle,
        )
        future.add_done_callback(lambda fut: self._on_future_done(correlation_id, fut))

        request = Request(correlation_id=correlation_id, name=name, data=data)
        try:
            sent = self._transport.send(encode_message(request))
        except Exception:
            self._settle(correlation_id)
            raise
        if not sent:
            pending = self._settle(correlation_id)
            if pending is not None:
                logger.warning("IPC request {} could not be sent; channel unavailable", name)
                pending.future.set_exception(ChannelUnavailableError(name))
        return future

    def handle_response(self, response: Response) -> bool:
        """Settle the pending call matching `response`; False for late or unknown replies."""
        pending = self._settle(response.correlation_id)
        if pending is None:
            logger.debug(
                "Ignoring IPC reply for unknown or settled request {} ({})",
                response.name,
                response.correlation_id,
            )
            return False
        if response.error is not None:
            pending.future.set_exception(RemoteError(response.error.message, response.error))
        else:
            pending.future.set_result(response.data)
        return True

    def handle_request(self, request: Request) -> None:
        """Answer an inbound request; handlers run as independent tasks."""
        if self._registry.get(request.name) is None:
            error = SerializedError(message=not_found_message(request.name), name=NotFoundError.__name__)
            self._reply(request, error=error)
            return
        task = asyncio.get_running_loop().create_task(self._serve(request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def cancel_all(self, make_error: Callable[[], BaseException]) -> int:
        """Reject every in-flight call with a fresh `make_error()`; returns how many were rejected."""
        rejected = 0
        for correlation_id in list(self._pending):
            pending = self._settle(correlation_id)
            if pending is not None:
                pending.future.set_exception(make_error())
                rejected += 1
        return rejected

    async def _serve(self, request: Request) -> None:
        try:
            result = self._registry.dispatch(request.name, request.data)
            if inspect.isawaitable(result):
                result = await result
        except asyncio.CancelledError as exc:
            self._reply(request, error=serialize_error(exc))
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            return
        except Exception as exc:
            logger.debug("IPC handler {} failed: {}", request.name, exc)
            self._reply(request, error=serialize_error(exc))
            return
        self._reply(request, data=result)

    def _reply(self, request: Request, data: Any = None, error: SerializedError | None = None) -> None:
        response = Response(correlation_id=request.correlation_id, name=request.name, data=data, error=error)
        try:
            sent = self._transport.send(encode_message(response))
        except Exception as exc:
            if error is None:
                # The result could not cross the channel; the caller still gets one reply.
                logger.warning("IPC reply for {} could not be sent, replying with error: {}", request.name, exc)
                self._reply(request, error=serialize_error(exc))
                return
            logger.warning("IPC error reply for {} raised in transport: {}", request.name, exc)
            return
        if not sent:
            logger.warning("IPC reply for {} dropped; channel unavailable", request.name)

    def _settle(self, correlation_id: str) -> PendingRequest | None:
        pending = self._pending.pop(correlation_id, None)
        if pending is None:
            return None
        pending.timeout_handle.cancel()
        if pending.future.done():
            return None
        return pending

    def _on_timeout(self, correlation_id: str) -> None:
        pending = self._settle(correlation_id)
        if pending is None:
            return
        logger.debug("IPC request {} timed out after {}ms", pending.name, pending.timeout_ms)
        pending.future.set_exception(
            TimeoutError(
                f"Reply timeout. IPC name: {pending.name}.",
                name=pending.name,
                timeout_ms=pending.timeout_ms,
            )
        )

    def _on_future_done(self, correlation_id: str, future: asyncio.Future[Any]) -> None:
        # Caller cancelled the future: free the entry so a late reply is ignored.
        if future.cancelled():
            self._settle(correlation_id)
