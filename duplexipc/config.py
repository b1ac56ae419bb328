"""Endpoint configuration using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field

from duplexipc.rpc.engine import DEFAULT_ACT_TIMEOUT_MS


class EndpointOptions(BaseModel):
    """Construction-time options for an Endpoint."""
    model_config = ConfigDict(extra="forbid")

    default_act_timeout_ms: float = Field(default=DEFAULT_ACT_TIMEOUT_MS, gt=0, allow_inf_nan=False)  # Used when act() gets no timeout_ms
    start_service: bool = True  # Attach the inbound listener on construction
