"""Unit tests for the reserved 'all' topic."""

from typing import Any

import broadcast
from broadcast import Broadcast


def test_all_receives_every_publish() -> None:
    """Test that 'all' subscribers hear about other topics."""
    events = Broadcast()
    calls: list[bool] = []

    events.subscribe("all", lambda *args: calls.append(True))
    events.publish("change")

    assert calls == [True]


def test_all_receives_topic_name_and_arguments() -> None:
    """Test that the topic name is prepended to the published arguments."""
    events = Broadcast()
    received: list[tuple[Any, ...]] = []

    events.subscribe("all", lambda *args: received.append(args))
    events.publish("change", "argument", 20)

    assert received == [("change", "argument", 20)]


def test_all_runs_after_topic_subscribers() -> None:
    """Test that 'all' is notified once the topic's own round is done."""
    events = Broadcast()
    calls: list[str] = []

    events.subscribe("all", lambda *args: calls.append("all"))
    events.subscribe("change", lambda: calls.append("change"))
    events.publish("change")

    assert calls == ["change", "all"]


def test_all_is_not_rebroadcast() -> None:
    """Test that publishing 'all' directly notifies its subscribers once."""
    events = Broadcast()
    calls: list[tuple[Any, ...]] = []

    events.subscribe("all", lambda *args: calls.append(args))
    events.publish("all", "x")

    assert calls == [("x",)]


def test_all_receives_bare_topic_for_namespaced_publish() -> None:
    """Test that the namespace is stripped from the name given to 'all'."""
    events = Broadcast()
    received: list[tuple[Any, ...]] = []

    events.subscribe("all", lambda *args: received.append(args))
    events.publish("change.sidebar", 1)

    assert received == [("change", 1)]


def test_all_with_namespaced_subscribers() -> None:
    """Test that namespaced 'all' subscribers hear every topic."""
    events = Broadcast()
    received: list[str] = []

    events.subscribe("all.logger", lambda topic, *args: received.append(topic))
    events.publish("open").publish("close")

    assert received == ["open", "close"]


def test_all_notified_even_without_topic_subscribers() -> None:
    """Test that 'all' hears topics nobody else subscribed to."""
    events = Broadcast()
    received: list[str] = []

    events.subscribe("all", lambda topic, *args: received.append(topic))
    events.publish("unheard")

    assert received == ["unheard"]


def test_all_skips_namespace_only_publish() -> None:
    """Test that publishing '.ns' does not report an empty topic to 'all'."""
    events = Broadcast()
    received: list[tuple[Any, ...]] = []
    namespaced: list[tuple[Any, ...]] = []

    events.subscribe("all", lambda *args: received.append(args))
    events.subscribe(".ns", lambda *args: namespaced.append(args))
    events.publish(".ns", 1)

    assert received == []
    assert namespaced == [(1,)]


def test_all_topic_constant() -> None:
    """Test that the reserved name is exposed on the module."""
    assert broadcast.ALL_TOPIC == "all"
