"""Concrete transports."""

from .connection import ConnectionTransport
from .memory import MemoryChannel, MemoryTransport

__all__ = ["ConnectionTransport", "MemoryChannel", "MemoryTransport"]
