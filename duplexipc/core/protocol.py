"""Wire protocol models shared by both sides of an IPC channel."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

KIND_FIELD = "kind"


class MessageKind(str, Enum):
    """Stable single-character discriminator tags."""

    REQUEST = "I"
    RESPONSE = "O"
    NOTIFICATION = "E"


@dataclass(slots=True)
class SerializedError:
    """Error payload reduced to string fields so it survives structured cloning."""

    message: str
    name: str | None = None
    stack: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"message": self.message}
        if self.name is not None:
            out["name"] = self.name
        if self.stack is not None:
            out["stack"] = self.stack
        return out


@dataclass(slots=True)
class Request:
    """RPC request frame."""

    kind: ClassVar[MessageKind] = MessageKind.REQUEST

    correlation_id: str
    name: str
    data: Any = None


@dataclass(slots=True)
class Response:
    """RPC response frame; `error` is set when the remote handler failed."""

    kind: ClassVar[MessageKind] = MessageKind.RESPONSE

    correlation_id: str
    name: str
    data: Any = None
    error: SerializedError | None = None


@dataclass(slots=True)
class Notification:
    """One-way event frame."""

    kind: ClassVar[MessageKind] = MessageKind.NOTIFICATION

    name: str
    data: Any = None


Message = Request | Response | Notification
