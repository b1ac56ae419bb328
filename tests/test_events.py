import pytest

from duplexipc.core.protocol import Notification
from duplexipc.events import EventChannel
from duplexipc.transports.memory import MemoryChannel


def test_event_master_to_child(master, child):
    received = []
    child.on("nice_event", received.append)
    master.emit("nice_event", "one")
    master.emit("nice_event", "two")
    assert received == ["one", "two"]


def test_event_child_to_master(master, child):
    received = []
    master.on("nice_event", received.append)
    for value in ("1", "2", "3"):
        assert child.emit("nice_event", value) is True
    assert received == ["1", "2", "3"]


def test_emit_without_data(master, child):
    received = []
    child.on("ping", received.append)
    master.emit("ping")
    assert received == [None]


def test_once_fires_exactly_once(master, child):
    received = []
    master.once("only_once", received.append)
    child.emit("only_once", "1")
    child.emit("only_once", "2")
    child.emit("only_once", "3")
    assert received == ["1"]
    assert master.events.listener_count("only_once") == 0


def test_off_stops_only_that_subscriber(master, child):
    first, second = [], []
    master.on("sub", first.append)
    master.on("sub", second.append)
    child.emit("sub", "1")
    master.off("sub", first.append)
    child.emit("sub", "2")
    assert first == ["1"]
    assert second == ["1", "2"]


def test_removal_tokens(master, child):
    on_received, once_received = [], []
    on_unsub = master.on("on_unsub", on_received.append)
    child.emit("on_unsub", "1")
    on_unsub()
    on_unsub()
    child.emit("on_unsub", "2")
    assert on_received == ["1"]

    once_unsub = master.once("once_unsub", once_received.append)
    once_unsub()
    child.emit("once_unsub", "1")
    assert once_received == []


def test_delivery_in_subscription_order(master, child):
    calls = []
    master.on("e", lambda v: calls.append(("a", v)))
    master.once("e", lambda v: calls.append(("b", v)))
    master.on("e", lambda v: calls.append(("c", v)))
    child.emit("e", 1)
    child.emit("e", 2)
    assert calls == [("a", 1), ("b", 1), ("c", 1), ("a", 2), ("c", 2)]


def test_subscriber_exceptions_propagate():
    channel = EventChannel(MemoryChannel().master)

    def broken(_):
        raise RuntimeError("subscriber failed")

    channel.on("e", broken)
    with pytest.raises(RuntimeError, match="subscriber failed"):
        channel.dispatch(Notification(name="e", data=None))


def test_dispatch_returns_handler_count():
    channel = EventChannel(MemoryChannel().master)
    channel.on("e", lambda _: None)
    channel.on("e", lambda _: None)
    assert channel.dispatch(Notification(name="e")) == 2
    assert channel.dispatch(Notification(name="other")) == 0


def test_emit_returns_transport_result():
    memory = MemoryChannel()
    channel = EventChannel(memory.master)
    assert channel.emit("e", 1) is True
    memory.close()
    assert channel.emit("e", 1) is False
