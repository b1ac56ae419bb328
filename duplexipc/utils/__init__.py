"""Utility functions for duplexipc."""

from duplexipc.utils.exceptions import (
    IpcError,
    InvalidNameError,
    InvalidHandlerError,
    DuplicateEndpointError,
    NotFoundError,
    RemoteError,
    TimeoutError,
    ChannelUnavailableError,
    EndpointClosedError,
    ErrorCategory,
    not_found_message,
    serialize_error,
)
from duplexipc.utils.validation import assert_valid_handler, assert_valid_name, assert_valid_timeout

__all__ = [
    "IpcError",
    "InvalidNameError",
    "InvalidHandlerError",
    "DuplicateEndpointError",
    "NotFoundError",
    "RemoteError",
    "TimeoutError",
    "ChannelUnavailableError",
    "EndpointClosedError",
    "ErrorCategory",
    "not_found_message",
    "serialize_error",
    "assert_valid_handler",
    "assert_valid_name",
    "assert_valid_timeout",
]
