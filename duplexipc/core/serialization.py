"""Encoding and validation helpers for wire messages."""

from __future__ import annotations

from typing import Any

from .protocol import KIND_FIELD, Message, MessageKind, Notification, Request, Response, SerializedError


def safe_dict(value: Any) -> dict[str, Any]:
    """Return the value when dict-like, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def _has_kind(value: Any, kind: MessageKind) -> bool:
    return isinstance(value, dict) and value.get(KIND_FIELD) == kind.value


def is_request(value: Any) -> bool:
    """True when an untrusted inbound value has the shape of a Request."""
    return (
        _has_kind(value, MessageKind.REQUEST)
        and isinstance(value.get("correlationId"), str)
        and isinstance(value.get("name"), str)
    )


def is_response(value: Any) -> bool:
    """True when an untrusted inbound value has the shape of a Response."""
    if not (
        _has_kind(value, MessageKind.RESPONSE)
        and isinstance(value.get("correlationId"), str)
        and isinstance(value.get("name"), str)
    ):
        return False
    error = value.get("error")
    return error is None or isinstance(error, dict)


def is_notification(value: Any) -> bool:
    """True when an untrusted inbound value has the shape of a Notification."""
    return _has_kind(value, MessageKind.NOTIFICATION) and isinstance(value.get("name"), str)


def decode_error(payload: Any) -> SerializedError:
    """Normalize an error payload received from the peer."""
    row = safe_dict(payload)
    name = row.get("name")
    stack = row.get("stack")
    return SerializedError(
        message=str(row.get("message") or ""),
        name=str(name) if name is not None else None,
        stack=str(stack) if stack is not None else None,
    )


def encode_message(message: Message) -> dict[str, Any]:
    """Encode a message dataclass into its wire dict."""
    if isinstance(message, Request):
        return {
            KIND_FIELD: MessageKind.REQUEST.value,
            "correlationId": message.correlation_id,
            "name": message.name,
            "data": message.data,
        }
    if isinstance(message, Response):
        payload: dict[str, Any] = {
            KIND_FIELD: MessageKind.RESPONSE.value,
            "correlationId": message.correlation_id,
            "name": message.name,
            "data": message.data,
        }
        if message.error is not None:
            payload["error"] = message.error.to_dict()
        return payload
    if isinstance(message, Notification):
        return {KIND_FIELD: MessageKind.NOTIFICATION.value, "name": message.name, "data": message.data}
    raise TypeError(f"unsupported message type: {type(message).__name__}")


def decode_message(value: Any) -> Message | None:
    """Decode an inbound value; foreign or malformed values yield None."""
    if is_request(value):
        return Request(correlation_id=value["correlationId"], name=value["name"], data=value.get("data"))
    if is_response(value):
        error = value.get("error")
        return Response(
            correlation_id=value["correlationId"],
            name=value["name"],
            data=value.get("data"),
            error=decode_error(error) if error is not None else None,
        )
    if is_notification(value):
        return Notification(name=value["name"], data=value.get("data"))
    return None
