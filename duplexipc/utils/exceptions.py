"""
Exception hierarchy for duplexipc.

Provides:
- Custom exception classes with error codes
- Error categorization (validation, conflict, remote, timeout, ...)
- Conversion of raised values into wire-safe SerializedError payloads
"""

from __future__ import annotations

import traceback
from enum import Enum
from typing import Any

from duplexipc.core.protocol import SerializedError


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    REMOTE = "remote"
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"


class IpcError(Exception):
    """Base exception for all duplexipc errors."""

    def __init__(
        self,
        message: str,
        code: str = "IPC_ERROR",
        category: ErrorCategory = ErrorCategory.REMOTE,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class InvalidNameError(IpcError):
    """Endpoint or event name is not a non-empty string."""

    def __init__(self, name: Any = None):
        super().__init__(
            "IPC name must be a not empty string.",
            code="INVALID_NAME",
            category=ErrorCategory.VALIDATION,
            details={"name": repr(name)},
        )


class InvalidHandlerError(IpcError):
    """Handler is not callable."""

    def __init__(self, handler: Any = None):
        super().__init__(
            "IPC handler must be a function.",
            code="INVALID_HANDLER",
            category=ErrorCategory.VALIDATION,
            details={"handler_type": type(handler).__name__},
        )


class DuplicateEndpointError(IpcError):
    """An RPC endpoint with the same name is already registered."""

    def __init__(self, name: str):
        super().__init__(
            f'The RPC named "{name}" already exists.',
            code="DUPLICATE_ENDPOINT",
            category=ErrorCategory.CONFLICT,
            details={"name": name},
        )


class NotFoundError(IpcError):
    """No RPC endpoint is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(
            not_found_message(name),
            code="NOT_FOUND",
            category=ErrorCategory.NOT_FOUND,
            details={"name": name},
        )


class RemoteError(IpcError):
    """The peer's handler failed; carries the peer's error as inert data."""

    def __init__(self, message: str, remote_error: SerializedError):
        super().__init__(
            message,
            code="REMOTE_ERROR",
            category=ErrorCategory.REMOTE,
            details=remote_error.to_dict(),
        )
        self.remote_error = remote_error

    @property
    def is_not_found(self) -> bool:
        return self.remote_error.name == NotFoundError.__name__


class TimeoutError(IpcError):
    """No matching reply arrived within the configured window."""

    def __init__(self, message: str = "Timeout error.", name: str | None = None, timeout_ms: float | None = None):
        details: dict[str, Any] = {}
        if name is not None:
            details["name"] = name
        if timeout_ms is not None:
            details["timeout_ms"] = timeout_ms
        super().__init__(message, code="TIMEOUT", category=ErrorCategory.TIMEOUT, details=details)


class ChannelUnavailableError(IpcError):
    """The transport refused the outgoing request."""

    def __init__(self, name: str):
        super().__init__(
            f"Channel unavailable. IPC name: {name}.",
            code="CHANNEL_UNAVAILABLE",
            category=ErrorCategory.UNAVAILABLE,
            details={"name": name},
        )


class EndpointClosedError(IpcError):
    """The local endpoint was closed while the call was in flight."""

    def __init__(self, message: str = "Endpoint closed."):
        super().__init__(message, code="ENDPOINT_CLOSED", category=ErrorCategory.UNAVAILABLE)


def not_found_message(name: str) -> str:
    return f'RPC "{name}" not found.'


def serialize_error(err: Any) -> SerializedError:
    """Convert any raised value into a SerializedError that survives the wire."""
    if isinstance(err, BaseException):
        message = err.message if isinstance(err, IpcError) else str(err)
        stack = "".join(traceback.format_exception(type(err), err, err.__traceback__))
        return SerializedError(message=message, name=type(err).__name__, stack=stack)
    return SerializedError(message=str(err))
