"""
# Broadcaster

The Broadcast class: a synchronous, in-process publish/subscribe object.

Callbacks subscribe to topics, optionally tagged with a namespace
('change.sidebar') so they can be removed in bulk later. Publishing a topic
calls every matching callback in registration order with the published
arguments, then notifies the reserved 'all' topic with the topic name
prepended to the arguments.

Dispatch iterates over a snapshot of a topic's subscriptions, so callbacks may
subscribe, unsubscribe or publish on the same instance while being called.
"""

import json
import logging
import os
import threading
from typing import Any
from typing import Callable
from typing import Mapping
from typing import Optional
from typing import Union

from broadcast import handlers
from broadcast import subscription
from broadcast import topics
from broadcast.options import BroadcastOptions
from broadcast.options import resolve_options


logger = logging.getLogger(__name__)


TOPIC_SPEC = Union[str, Mapping[str, subscription.CALLBACK]]
"""A topic string or a mapping of topic strings to callbacks."""

DECORATOR = Callable[[subscription.CALLBACK], subscription.CALLBACK]

UNSET: Any = object()
"""Default for subscribe()'s callback. Tells an omitted callback from None."""


def _check_topic(topic: Any) -> str:
    if not isinstance(topic, str):
        raise TypeError(
            f"Topic must be a string, got {topic.__class__.__name__}: {topic!r}"
        )
    return topic


def _check_callback(topic: str, callback: Any) -> None:
    if not callable(callback):
        raise TypeError(
            f"Callback for topic '{topic}' must be callable, "
            f"got {callback.__class__.__name__}: {callback!r}"
        )


class Broadcast(object):
    """
    Topic based event dispatcher.

    Use subscribe() to register callbacks, publish() to call them and
    unsubscribe() to remove them. Every method returns the instance so calls
    can be chained:

        events = Broadcast()
        events.subscribe('change', on_change).publish('change', 42)

    Topic strings may hold several whitespace separated topics, and each topic
    may carry a namespace after its last dot. Subscribing to 'all' receives
    every published topic name followed by its arguments.

    Unless constructed with alias_on=False, on(), off(), emit() and trigger()
    are available as aliases.
    """

    def __init__(
        self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any
    ) -> None:
        self.options: BroadcastOptions = resolve_options(options, **kwargs)
        self.alias_on: bool = self.options["alias_on"]

        self._subscriptions: dict[str, list[subscription.Subscription]] = {}
        self._lock = threading.RLock()

        # -----Exception Handler-----
        # None means callback exceptions propagate to the publish() caller.
        self._exception_handler: Optional[
            handlers.SUBSCRIPTION_EXCEPTION_HANDLER
        ] = None

        if self.alias_on:
            self._install_aliases()

    def _install_aliases(self) -> None:
        """Create alias bindings."""
        self.on = self.subscribe
        self.off = self.unsubscribe
        self.emit = self.publish
        self.trigger = self.publish

    def __repr__(self) -> str:
        with self._lock:
            count = sum(len(subs) for subs in self._subscriptions.values())
            return (
                f"<{self.__class__.__name__} "
                f"topics={len(self._subscriptions)} subscriptions={count}>"
            )

    def __contains__(self, topic: str) -> bool:
        return self.has_subscribers(topic)

    # -----Subscriber Management-----------------------------------------------

    def subscribe(
        self,
        topic: TOPIC_SPEC,
        callback: Any = UNSET,
        context: Optional[Any] = None,
    ) -> Union["Broadcast", DECORATOR]:
        """
        Register a callback to one or more topics.

        Args:
            topic (TOPIC_SPEC): A topic string such as 'change',
                'change.sidebar' or 'create update delete', or a mapping of
                topic strings to callbacks.
            callback (Any): Function to call when the topic is published.
                With the mapping form this position holds the context shared
                by every pair. If omitted with a topic string, a decorator is
                returned instead. An explicit None is rejected.
            context (Optional[Any]): Receiver passed to the callback as its
                first positional argument.
        Returns:
            Broadcast: The instance, for chaining. A decorator when no
                callback was given for a topic string.
        Raises:
            TypeError: If the topic is not a string or mapping, or a callback
                is not callable.
        Example:
            >>> events = Broadcast()
            >>> @events.subscribe('change')
            ... def on_change(value):
            ...     print(value)
            >>> _ = events.publish('change', 42)
            42
        """
        if isinstance(topic, Mapping):
            if context is None and callback is not UNSET:
                context = callback

            # Validate every pair first so a bad one registers nothing.
            pairs = list(topic.items())
            for key, value in pairs:
                _check_callback(_check_topic(key), value)

            with self._lock:
                for key, value in pairs:
                    self._add(key, value, context)
            return self

        _check_topic(topic)

        if callback is UNSET:

            def decorator(func: subscription.CALLBACK) -> subscription.CALLBACK:
                self._add(topic, func, context)
                return func

            return decorator

        self._add(topic, callback, context)
        return self

    def _add(
        self, topic: str, callback: subscription.CALLBACK, context: Optional[Any]
    ) -> None:
        _check_callback(topic, callback)

        with self._lock:
            for parsed in topics.split_topics(topic):
                sub = subscription.Subscription(
                    callback=callback, namespace=parsed.namespace, context=context
                )
                self._subscriptions.setdefault(parsed.name, []).append(sub)

    def unsubscribe(
        self,
        topic: Optional[str] = None,
        callback: Optional[subscription.CALLBACK] = None,
    ) -> "Broadcast":
        """
        Remove registered callbacks.

        With no arguments every callback for every topic is removed. With a
        topic only, every callback for that topic is removed; 'change.sidebar'
        limits that to the namespace and '.sidebar' applies it to every topic.
        With a callback as well, only occurrences of that callback are removed.
        A callback without a topic is removed from every topic.

        Args:
            topic (Optional[str]): One or more whitespace separated topics.
            callback (Optional[CALLBACK]): The specific callback to remove.
        Returns:
            Broadcast: The instance, for chaining.
        Notes:
            Unknown topics and callbacks are ignored. A publish already in
            progress keeps calling the subscribers it started with.
        """
        with self._lock:
            if topic is None and callback is None:
                self._subscriptions = {}
                logger.debug("Cleared all broadcast subscriptions")
                return self

            if topic is None:
                for name in list(self._subscriptions):
                    self._remove(name, None, callback)
                return self

            for parsed in topics.split_topics(_check_topic(topic)):
                if parsed.is_namespace_only:
                    for name in list(self._subscriptions):
                        self._remove(name, parsed.namespace, callback)
                elif parsed.namespace is None and callback is None:
                    self._subscriptions.pop(parsed.name, None)
                else:
                    self._remove(parsed.name, parsed.namespace, callback)

        return self

    def _remove(
        self,
        name: str,
        namespace: Optional[str],
        callback: Optional[subscription.CALLBACK],
    ) -> None:
        """
        Replace the topic's list with the subscriptions that do not match.
        The list is replaced rather than mutated so dispatch snapshots stay
        intact. Topics left empty are removed from the table.
        """
        subs = self._subscriptions.get(name)
        if subs is None:
            return

        remaining = [sub for sub in subs if not sub.matches(namespace, callback)]
        if remaining:
            self._subscriptions[name] = remaining
        else:
            del self._subscriptions[name]

    def set_exception_handler(
        self, handler: Optional[handlers.SUBSCRIPTION_EXCEPTION_HANDLER]
    ) -> None:
        """
        Set the exception handler for subscriber errors.
        The handler is called when a subscriber raises an exception during
        publish.

        Args:
            handler (Optional[handlers.SUBSCRIPTION_EXCEPTION_HANDLER]):
                Callable with signature (CALLBACK, str, Exception) -> bool.
                Returns True to stop delivery, False to continue.
                Pass None to restore default behavior (re-raise exceptions).
        """
        self._exception_handler = handler

    # -----Publishing----------------------------------------------------------

    def publish(self, topic: str, *args: Any) -> "Broadcast":
        """
        Call every callback subscribed to a topic.

        Callbacks run synchronously in registration order and receive args.
        A namespaced topic ('change.sidebar') only reaches callbacks registered
        under that namespace; a bare topic reaches all of them. Afterwards,
        subscribers of 'all' receive the bare topic name followed by args.
        A namespace only publish ('.sidebar') has no topic name to report, so
        it reaches callbacks subscribed to '.sidebar' itself and skips 'all'.

        Args:
            topic (str): The topic to publish, optionally namespaced.
            *args (Any): Arguments passed to every callback.
        Returns:
            Broadcast: The instance, for chaining.
        Raises:
            Exception: Whatever a callback raises, unless an exception handler
                is set. Remaining callbacks are not called.
        """
        parsed = topics.parse_topic(_check_topic(topic))

        self._dispatch(parsed.name, parsed.namespace, args)

        if not parsed.is_namespace_only and parsed.name != topics.ALL_TOPIC:
            self._dispatch(topics.ALL_TOPIC, None, (parsed.name, *args))

        return self

    def _dispatch(
        self, name: str, namespace: Optional[str], args: tuple[Any, ...]
    ) -> None:
        with self._lock:
            snapshot = list(self._subscriptions.get(name, ()))

        for sub in snapshot:
            if not sub.matches(namespace):
                continue

            try:
                sub.invoke(*args)
            except Exception as e:
                if self._exception_handler is None:
                    raise

                stop = self._exception_handler(sub.callback, name, e)
                if stop:
                    break

    # -----Introspection API---------------------------------------------------

    def get_topics(self) -> list[str]:
        """Get all topic names that have at least one subscription."""
        with self._lock:
            return sorted(self._subscriptions.keys())

    def get_subscriptions(self, topic: str) -> list[subscription.Subscription]:
        """
        Get the subscriptions for a topic, in dispatch order.

        Args:
            topic (str): A topic, 'topic.namespace' or '.namespace'.
        Returns:
            list[subscription.Subscription]: A copy of the matching records.
        """
        parsed = topics.parse_topic(_check_topic(topic))

        with self._lock:
            if parsed.is_namespace_only:
                candidates = [
                    sub for name in sorted(self._subscriptions)
                    for sub in self._subscriptions[name]
                ]
            else:
                candidates = self._subscriptions.get(parsed.name, [])

            return [sub for sub in candidates if sub.matches(parsed.namespace)]

    def get_subscriber_count(self, topic: str) -> int:
        """Get the number of subscriptions for a topic."""
        return len(self.get_subscriptions(topic))

    def has_subscribers(self, topic: str) -> bool:
        """Check if anything is subscribed to a topic."""
        return self.get_subscriber_count(topic) > 0

    def is_subscribed(self, callback: subscription.CALLBACK, topic: str) -> bool:
        """
        Check if a specific callback is subscribed to a topic.

        Args:
            callback (CALLBACK): The callback function to check.
            topic (str): The topic to check, optionally namespaced.
        Returns:
            bool: True if callback is subscribed to topic, False otherwise.
        """
        return any(
            subscription.same_callback(sub.callback, callback)
            for sub in self.get_subscriptions(topic)
        )

    @staticmethod
    def _get_subscription_info(sub: subscription.Subscription) -> str:
        """Returns metadata on a subscription as a string."""
        callback = sub.callback

        if hasattr(callback, "__self__") and hasattr(callback, "__name__"):
            info = f"{callback.__self__.__class__.__name__}.{callback.__name__}"
        elif hasattr(callback, "__qualname__"):
            module = getattr(callback, "__module__", "<unknown>")
            info = f"{module}.{callback.__qualname__}"
        else:
            # Fallback for unusual callables
            info = str(callback)

        if sub.namespace is not None:
            info += f" [namespace={sub.namespace}]"
        if sub.context is not None:
            info += f" [context={sub.context.__class__.__name__}]"

        return info

    def to_dict(self) -> dict[str, list[str]]:
        """Convert the subscription table to a dictionary."""
        with self._lock:
            return {
                name: [self._get_subscription_info(sub) for sub in subs]
                for name, subs in sorted(self._subscriptions.items())
            }

    def to_string(self) -> str:
        """Returns a string representation of the subscription table."""
        return json.dumps(self.to_dict(), indent=4)

    def export(self, filepath: Union[str, os.PathLike]) -> None:
        """Export the subscription table to filepath as JSON."""
        with open(filepath, "w") as outfile:
            json.dump(self.to_dict(), outfile, indent=4)
