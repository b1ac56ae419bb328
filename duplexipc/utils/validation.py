"""Argument validation for names and handlers."""

from __future__ import annotations

import math
from typing import Any

from duplexipc.utils.exceptions import InvalidHandlerError, InvalidNameError


def assert_valid_name(name: Any) -> str:
    if isinstance(name, str) and name:
        return name
    raise InvalidNameError(name)


def assert_valid_handler(handler: Any) -> Any:
    if callable(handler):
        return handler
    raise InvalidHandlerError(handler)


def assert_valid_timeout(timeout_ms: Any) -> float:
    """Timeouts are positive, finite numbers of milliseconds."""
    if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, (int, float)):
        raise ValueError(f"timeout_ms must be a positive number, got {timeout_ms!r}")
    if not math.isfinite(timeout_ms) or timeout_ms <= 0:
        raise ValueError(f"timeout_ms must be a positive finite number, got {timeout_ms!r}")
    return float(timeout_ms)
