"""duplexipc - request/response and events between two processes over one channel."""

__version__ = "0.1.0"

from duplexipc.config import EndpointOptions
from duplexipc.core import MessageKind, Notification, Request, Response, SerializedError, Transport
from duplexipc.endpoint import Endpoint
from duplexipc.events import EventChannel
from duplexipc.rpc import EndpointRegistry, RequestEngine
from duplexipc.transports import ConnectionTransport, MemoryChannel, MemoryTransport
from duplexipc.utils.exceptions import (
    ChannelUnavailableError,
    DuplicateEndpointError,
    EndpointClosedError,
    InvalidHandlerError,
    InvalidNameError,
    IpcError,
    NotFoundError,
    RemoteError,
    TimeoutError,
)

__all__ = [
    "ChannelUnavailableError",
    "ConnectionTransport",
    "DuplicateEndpointError",
    "Endpoint",
    "EndpointClosedError",
    "EndpointOptions",
    "EndpointRegistry",
    "EventChannel",
    "InvalidHandlerError",
    "InvalidNameError",
    "IpcError",
    "MemoryChannel",
    "MemoryTransport",
    "MessageKind",
    "Notification",
    "NotFoundError",
    "RemoteError",
    "Request",
    "RequestEngine",
    "Response",
    "SerializedError",
    "TimeoutError",
    "Transport",
    "__version__",
]
