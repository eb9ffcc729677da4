"""
Unit tests for the module level API.

The broadcast module forwards to one default Broadcast instance which is
shared by every test here, so each test starts with broadcast.clear().
"""

from typing import Any

import pytest

import broadcast
from broadcast import Broadcast


def test_default_instance_is_created_once() -> None:
    """Test that the module always forwards to the same instance."""
    assert isinstance(broadcast.default(), Broadcast)
    assert broadcast.default() is broadcast.default()


def test_default_instance_is_protected() -> None:
    """Test that the default instance is not reachable as an attribute."""
    assert not hasattr(broadcast, "_DEFAULT_BROADCAST")


def test_module_subscribe_and_publish() -> None:
    """Test the change scenario through the module functions."""
    broadcast.clear()
    calls: list[int] = []

    def f(value: int) -> None:
        calls.append(value)

    assert broadcast.subscribe("change", f) is broadcast.default()
    broadcast.publish("change", 42)
    broadcast.unsubscribe("change", f)
    broadcast.publish("change", 42)

    assert calls == [42]


def test_module_aliases() -> None:
    """Test on/off/emit/trigger at module level."""
    broadcast.clear()
    calls: list[str] = []

    def handler(name: str) -> None:
        calls.append(name)

    broadcast.on("change", handler)
    broadcast.emit("change", "emit")
    broadcast.trigger("change", "trigger")
    broadcast.off("change", handler)
    broadcast.emit("change", "after")

    assert calls == ["emit", "trigger"]


def test_module_decorator() -> None:
    """Test that the module subscribe() works as a decorator."""
    broadcast.clear()
    received: list[Any] = []

    @broadcast.subscribe("ready")
    def on_ready(*args: Any) -> None:
        received.append(args)

    broadcast.publish("ready", 1)

    assert received == [(1,)]
    assert broadcast.is_subscribed(on_ready, "ready")


def test_module_explicit_none_callback_raises() -> None:
    """Test that the module subscribe() rejects None instead of decorating."""
    broadcast.clear()

    with pytest.raises(TypeError, match="must be callable"):
        broadcast.subscribe("ready", None)

    with pytest.raises(TypeError, match="must be callable"):
        broadcast.on("ready", None)

    assert broadcast.get_topics() == []


def test_module_clear() -> None:
    """Test that clear() empties the default instance."""
    broadcast.clear()
    broadcast.subscribe("a b.ns", lambda: None)

    assert broadcast.get_topics() == ["a", "b"]

    broadcast.clear()

    assert broadcast.get_topics() == []


def test_module_introspection() -> None:
    """Test that introspection helpers forward to the default instance."""
    broadcast.clear()

    def handler() -> None:
        pass

    broadcast.subscribe("change.ui", handler)

    assert broadcast.has_subscribers("change")
    assert broadcast.get_subscriber_count(".ui") == 1
    assert broadcast.get_subscriptions("change")[0].callback is handler
    assert broadcast.to_dict() == broadcast.default().to_dict()
    assert broadcast.to_string() == broadcast.default().to_string()
    broadcast.clear()


def test_module_exception_handler() -> None:
    """Test setting an exception handler on the default instance."""
    broadcast.clear()
    calls: list[str] = []

    def failing_handler() -> None:
        raise ValueError("boom")

    broadcast.subscribe("test", failing_handler)
    broadcast.subscribe("test", lambda: calls.append("after"))

    broadcast.set_exception_handler(broadcast.handlers.silent_subscriber_exception)
    try:
        broadcast.publish("test")
    finally:
        broadcast.set_exception_handler(None)
        broadcast.clear()

    assert calls == ["after"]


def test_module_exposes_submodules_and_classes() -> None:
    """Test that classes and submodules are reachable from the module."""
    from broadcast import handlers
    from broadcast import topics

    assert broadcast.Broadcast is Broadcast
    assert broadcast.handlers is handlers
    assert broadcast.topics is topics
    assert broadcast.Topic is topics.Topic
    assert isinstance(broadcast.__version__, str)


def test_module_independent_of_instances() -> None:
    """Test that separate instances do not see the default's subscribers."""
    broadcast.clear()
    calls: list[str] = []

    broadcast.subscribe("change", lambda: calls.append("default"))
    Broadcast().publish("change")

    assert calls == []
    broadcast.clear()
