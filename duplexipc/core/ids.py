"""Correlation id generation."""

from __future__ import annotations

import uuid


def unique_id() -> str:
    """Return a random 128-bit token as 32 hex characters."""
    return uuid.uuid4().hex
