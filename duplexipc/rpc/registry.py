"""Name -> handler table for RPC endpoints served by one side."""

from __future__ import annotations

from typing import Any
from collections.abc import Callable

from loguru import logger

from duplexipc.utils.exceptions import DuplicateEndpointError, NotFoundError
from duplexipc.utils.validation import assert_valid_handler, assert_valid_name

Handler = Callable[[Any], Any]


class EndpointRegistry:
    """Holds at most one handler per endpoint name."""

    def __init__(self):
        self._handlers: dict[str, Handler] = {}

    def add(self, name: str, handler: Handler) -> Callable[[], None]:
        """Register `handler` under `name` and return a removal callable."""
        assert_valid_name(name)
        assert_valid_handler(handler)
        if name in self._handlers:
            raise DuplicateEndpointError(name)
        self._handlers[name] = handler
        logger.debug("IPC endpoint registered: {}", name)

        def remove() -> None:
            # A stale token must not drop a newer registration under the same name.
            if self._handlers.get(name) is handler:
                self.remove(name)

        return remove

    def remove(self, name: str) -> bool:
        if self._handlers.pop(name, None) is None:
            return False
        logger.debug("IPC endpoint removed: {}", name)
        return True

    def get(self, name: str) -> Handler | None:
        return self._handlers.get(name)

    def names(self) -> list[str]:
        return list(self._handlers)

    def dispatch(self, name: str, data: Any) -> Any:
        """Invoke the handler for `name`; the result may be awaitable."""
        handler = self._handlers.get(name)
        if handler is None:
            raise NotFoundError(name)
        return handler(data)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
