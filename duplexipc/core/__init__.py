"""Wire protocol, transport contract and id helpers."""

from .contracts import MESSAGE_EVENT, Listener, Transport
from .ids import unique_id
from .protocol import KIND_FIELD, Message, MessageKind, Notification, Request, Response, SerializedError
from .serialization import (
    decode_error,
    decode_message,
    encode_message,
    is_notification,
    is_request,
    is_response,
    safe_dict,
)

__all__ = [
    "KIND_FIELD",
    "MESSAGE_EVENT",
    "Listener",
    "Message",
    "MessageKind",
    "Notification",
    "Request",
    "Response",
    "SerializedError",
    "Transport",
    "decode_error",
    "decode_message",
    "encode_message",
    "is_notification",
    "is_request",
    "is_response",
    "safe_dict",
    "unique_id",
]
