"""RPC endpoint registry and request/response engine."""

from .engine import DEFAULT_ACT_TIMEOUT_MS, PendingRequest, RequestEngine
from .registry import EndpointRegistry, Handler

__all__ = ["DEFAULT_ACT_TIMEOUT_MS", "EndpointRegistry", "Handler", "PendingRequest", "RequestEngine"]
