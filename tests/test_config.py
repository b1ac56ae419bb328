import pytest
from pydantic import ValidationError

from duplexipc import Endpoint, EndpointOptions, MemoryChannel


def test_defaults():
    options = EndpointOptions()
    assert options.default_act_timeout_ms == 30_000
    assert options.start_service is True


def test_rejects_non_positive_timeout_and_unknown_keys():
    with pytest.raises(ValidationError):
        EndpointOptions(default_act_timeout_ms=0)
    with pytest.raises(ValidationError):
        EndpointOptions(act_timeout=10)
    with pytest.raises(ValidationError):
        EndpointOptions(default_act_timeout_ms=float("nan"))
    with pytest.raises(ValidationError):
        EndpointOptions(default_act_timeout_ms=float("inf"))


def test_endpoint_accepts_mapping_options():
    endpoint = Endpoint(MemoryChannel().master, {"default_act_timeout_ms": 250, "start_service": False})
    assert endpoint.options.default_act_timeout_ms == 250
    assert endpoint.engine.default_timeout_ms == 250
    assert not endpoint.is_running
