"""Tests for duplexipc.utils.exceptions module."""

from __future__ import annotations

from duplexipc.core.protocol import SerializedError
from duplexipc.utils.exceptions import (
    ChannelUnavailableError,
    DuplicateEndpointError,
    EndpointClosedError,
    ErrorCategory,
    InvalidHandlerError,
    InvalidNameError,
    IpcError,
    NotFoundError,
    RemoteError,
    TimeoutError,
    not_found_message,
    serialize_error,
)


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_ipc_error_to_dict(self) -> None:
        exc = IpcError("test message", code="TEST_CODE")
        assert exc.to_dict() == {
            "error": "TEST_CODE",
            "message": "test message",
            "category": ErrorCategory.REMOTE.value,
            "details": {},
        }
        assert str(exc) == "test message"

    def test_invalid_name_error(self) -> None:
        exc = InvalidNameError("")
        assert exc.code == "INVALID_NAME"
        assert exc.category == ErrorCategory.VALIDATION
        assert exc.message == "IPC name must be a not empty string."

    def test_invalid_handler_error(self) -> None:
        exc = InvalidHandlerError(42)
        assert exc.code == "INVALID_HANDLER"
        assert exc.details == {"handler_type": "int"}

    def test_duplicate_endpoint_error(self) -> None:
        exc = DuplicateEndpointError("rpc1")
        assert exc.category == ErrorCategory.CONFLICT
        assert '"rpc1"' in str(exc)

    def test_not_found_error_message_is_canonical(self) -> None:
        exc = NotFoundError("missing")
        assert exc.code == "NOT_FOUND"
        assert exc.message == 'RPC "missing" not found.'
        assert not_found_message("missing") == exc.message

    def test_remote_error_keeps_peer_payload(self) -> None:
        payload = SerializedError(message="Remote message.", name="Error", stack="stk")
        exc = RemoteError("Remote error.", payload)
        assert exc.message == "Remote error."
        assert exc.remote_error is payload
        assert exc.details == {"message": "Remote message.", "name": "Error", "stack": "stk"}
        assert not exc.is_not_found

    def test_remote_error_not_found_flag(self) -> None:
        exc = RemoteError("x", SerializedError(message="x", name="NotFoundError"))
        assert exc.is_not_found

    def test_timeout_error_default_message(self) -> None:
        exc = TimeoutError()
        assert exc.message == "Timeout error."
        assert exc.category == ErrorCategory.TIMEOUT
        assert exc.details == {}

    def test_timeout_error_details(self) -> None:
        exc = TimeoutError("Reply timeout. IPC name: a.", name="a", timeout_ms=10)
        assert exc.details == {"name": "a", "timeout_ms": 10}

    def test_unavailable_errors(self) -> None:
        assert ChannelUnavailableError("a").category == ErrorCategory.UNAVAILABLE
        assert EndpointClosedError().code == "ENDPOINT_CLOSED"


class TestSerializeError:
    """Test serialize_error function."""

    def test_exception_keeps_name_message_and_stack(self) -> None:
        try:
            raise ValueError("Something bad happened.")
        except ValueError as exc:
            result = serialize_error(exc)
        assert result.name == "ValueError"
        assert result.message == "Something bad happened."
        assert result.stack is not None
        assert "ValueError: Something bad happened." in result.stack

    def test_ipc_error_uses_plain_message(self) -> None:
        result = serialize_error(NotFoundError("x"))
        assert result.message == 'RPC "x" not found.'
        assert result.name == "NotFoundError"

    def test_non_exception_value_is_stringified(self) -> None:
        assert serialize_error("plain string") == SerializedError(message="plain string")
        assert serialize_error(42).to_dict() == {"message": "42"}
