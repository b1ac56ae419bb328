"""Pytest hooks and fixtures."""

import pytest
from loguru import logger

from duplexipc import Endpoint, MemoryChannel


@pytest.fixture
def channel():
    """Linked in-memory transports with synchronous delivery."""
    return MemoryChannel()


@pytest.fixture
def master(channel):
    endpoint = Endpoint(channel.master)
    yield endpoint
    endpoint.stop_service()


@pytest.fixture
def child(channel):
    endpoint = Endpoint(channel.child)
    yield endpoint
    endpoint.stop_service()


@pytest.fixture
def log_messages():
    """Capture loguru records emitted during a test."""
    records: list[dict] = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)
