"""
Required for static type checkers to accept these names as members of the
broadcast module.

This module gets imported into the broadcast module so stubs are accessible
through the broadcast namespace.

The doc strings for each function exists in the stubs for intellisense
fetching, instead of within the module class itself because the module class
is a module replacement at runtime, so the namespaces during inspection are
different.
"""

import os
from typing import Any
from typing import Callable
from typing import Mapping
from typing import Optional
from typing import Union

from broadcast import broadcaster
from broadcast import handlers
from broadcast import subscription


# -----General Stubs-----------------------------------------------------------


def default() -> broadcaster.Broadcast:
    """
    Get the default Broadcast behind the module level functions.
    It is created on first use and lives for the rest of the process.
    """


def clear() -> None:
    """Removes every subscription from the default Broadcast."""


# -----Subscriber Stubs--------------------------------------------------------


# noinspection PyUnusedLocal
def subscribe(
    topic: Union[str, Mapping[str, subscription.CALLBACK]],
    callback: Any = broadcaster.UNSET,
    context: Optional[Any] = None,
) -> Union[
    broadcaster.Broadcast,
    Callable[[subscription.CALLBACK], subscription.CALLBACK],
]:
    """
    Register a callback to one or more topics on the default Broadcast.

    Usage:
        broadcast.subscribe('change', on_change)
        broadcast.subscribe('create update delete', on_any_write)
        broadcast.subscribe('change.sidebar', sidebar.refresh)
        broadcast.subscribe({'open': on_open, 'close': on_close}, window)

        @broadcast.subscribe('change')
        def on_change(value: int) -> None:
            print(f'Changed to {value}')
    Args:
        topic (Union[str, Mapping[str, CALLBACK]]): A topic string, several
            whitespace separated topics, or a mapping of topics to callbacks.
            A topic may carry a namespace after its last dot.
        callback (Any): Function to call when the topic is
            published. With the mapping form this holds the shared context.
            If omitted with a topic string, a decorator is returned. None
            is rejected.
        context (Optional[Any]): Receiver passed as the callback's first
            positional argument.
    Returns:
        Broadcast: The default instance, for chaining, or a decorator.
    Raises:
        TypeError: If the topic is not a string or mapping, or a callback is
            not callable.
    """


# noinspection PyUnusedLocal
def on(
    topic: Union[str, Mapping[str, subscription.CALLBACK]],
    callback: Any = broadcaster.UNSET,
    context: Optional[Any] = None,
) -> Union[
    broadcaster.Broadcast,
    Callable[[subscription.CALLBACK], subscription.CALLBACK],
]:
    """Alias of subscribe()."""


# noinspection PyUnusedLocal
def unsubscribe(
    topic: Optional[str] = None, callback: Optional[subscription.CALLBACK] = None
) -> broadcaster.Broadcast:
    """
    Remove callbacks from the default Broadcast.

    Usage:
        broadcast.unsubscribe()                      # everything
        broadcast.unsubscribe('change')              # every 'change' callback
        broadcast.unsubscribe('change', on_change)   # one callback
        broadcast.unsubscribe('.sidebar')            # a namespace, all topics
        broadcast.unsubscribe(callback=on_change)    # one callback, all topics
    Args:
        topic (Optional[str]): One or more whitespace separated topics.
        callback (Optional[CALLBACK]): The specific callback to remove.
    Returns:
        Broadcast: The default instance, for chaining.
    """


# noinspection PyUnusedLocal
def off(
    topic: Optional[str] = None, callback: Optional[subscription.CALLBACK] = None
) -> broadcaster.Broadcast:
    """Alias of unsubscribe()."""


# noinspection PyUnusedLocal
def set_exception_handler(
    handler: Optional[handlers.SUBSCRIPTION_EXCEPTION_HANDLER],
) -> None:
    """
    Set the exception handler for subscriber errors on the default Broadcast.
    The handler is called when a subscriber raises an exception during
    publish.

    Args:
        handler: Callable with signature (CALLBACK, str, Exception) -> bool.
                 Returns True to stop delivery, False to continue.
                 Pass None to restore default behavior (re-raise exceptions).
    Example:
        def my_handler(callback: Callable, topic: str, exc: Exception) -> bool:
            print(f"Error in {topic}: {exc}")
            return False  # Continue

        broadcast.set_exception_handler(my_handler)

        # Or use one of the built-in handlers
        broadcast.set_exception_handler(
            broadcast.handlers.log_and_continue_subscriber_exception
        )
    """


# -----Publisher Stubs---------------------------------------------------------


# noinspection PyUnusedLocal
def publish(topic: str, *args: Any) -> broadcaster.Broadcast:
    """
    Call every callback subscribed to a topic on the default Broadcast.

    Callbacks run synchronously in registration order. Subscribers of 'all'
    are then called with the topic name followed by args. A namespace only
    topic ('.sidebar') skips the 'all' round.

    Args:
        topic (str): The topic to publish, optionally namespaced.
        *args (Any): Arguments passed to every callback.
    Returns:
        Broadcast: The default instance, for chaining.
    Raises:
        Exception: Whatever a callback raises, unless an exception handler
            is set.
    """


# noinspection PyUnusedLocal
def emit(topic: str, *args: Any) -> broadcaster.Broadcast:
    """Alias of publish()."""


# noinspection PyUnusedLocal
def trigger(topic: str, *args: Any) -> broadcaster.Broadcast:
    """Alias of publish()."""


# -----Introspection Stubs-----------------------------------------------------


def get_topics() -> list[str]:
    """Get all topic names that have at least one subscription."""


# noinspection PyUnusedLocal
def get_subscriptions(topic: str) -> list[subscription.Subscription]:
    """
    Get the subscriptions for a topic, in dispatch order.

    Args:
        topic (str): A topic, 'topic.namespace' or '.namespace'.
    Returns:
        list[subscription.Subscription]: A copy of the matching records.
    """


# noinspection PyUnusedLocal
def get_subscriber_count(topic: str) -> int:
    """Get the number of subscriptions for a topic."""


# noinspection PyUnusedLocal
def has_subscribers(topic: str) -> bool:
    """Check if anything is subscribed to a topic."""


# noinspection PyUnusedLocal
def is_subscribed(callback: subscription.CALLBACK, topic: str) -> bool:
    """Check if a specific callback is subscribed to a topic."""


def to_dict() -> dict[str, list[str]]:
    """Convert the subscription table to a dictionary."""


def to_string() -> str:
    """Returns a string representation of the subscription table."""


# noinspection PyUnusedLocal
def export(filepath: Union[str, os.PathLike]) -> None:
    """Export the subscription table to filepath as JSON."""
