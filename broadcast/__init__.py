"""
# Broadcast

Synchronous topic based publish/subscribe.

Create as many independent Broadcast instances as needed:

    from broadcast import Broadcast

    events = Broadcast()
    events.subscribe('change', on_change)
    events.publish('change', 42)

Or use the module itself, which forwards to one default Broadcast created on
first use and kept for the life of the process:

    import broadcast

    broadcast.subscribe('change', on_change)
    broadcast.publish('change', 42)

The module replaces itself with a module class so the default instance stays
out of reach. A reimport protection clause exists at the top of the file to
prevent the default instance and its subscribers from being lost on reload.

Function stubs exist in the stubs file for static type checkers to validate
correct calls.
"""

# Remember to update doc strings in the stub.py file so static type checkers
# and intellisense can receive accurate feedback!

import sys

# -----------------------------------------------------------------------------
# Prevent module reload - the default instance would be lost!
if "broadcast" in sys.modules:
    existing_module = sys.modules["broadcast"]
    if hasattr(existing_module, "_BROADCAST_IMPORT_GUARD"):
        raise ImportError(
            "Module 'broadcast' has already been imported and cannot be "
            "reloaded. Subscriber data would be lost. "
            "Restart your Python session to reimport."
        )
_BROADCAST_IMPORT_GUARD = True
# -----------------------------------------------------------------------------

import os
import threading
from types import ModuleType
from typing import Any
from typing import Optional
from typing import Union

from broadcast.stub import *
from broadcast import broadcaster
from broadcast import handlers
from broadcast import options
from broadcast import subscription
from broadcast import topics


version_major = 1
version_minor = 0
version_patch = 0
__version__ = f"{version_major}.{version_minor}.{version_patch}"

_DEFAULT_BROADCAST: Optional[broadcaster.Broadcast] = None
"""The process wide instance behind the module level functions."""

_DEFAULT_LOCK = threading.Lock()


def _get_default() -> broadcaster.Broadcast:
    """Return the default instance, creating it on first use."""
    global _DEFAULT_BROADCAST

    if _DEFAULT_BROADCAST is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_BROADCAST is None:
                _DEFAULT_BROADCAST = broadcaster.Broadcast()

    return _DEFAULT_BROADCAST


class BroadcastModule(ModuleType):
    """
    Module level access to a default Broadcast.

    subscribe(), unsubscribe() and publish() (and their on(), off(), emit()
    and trigger() aliases) forward to one Broadcast instance created lazily.
    Use Broadcast() directly for independent dispatchers.
    """

    # -----Runtime Closures----------------------------------------------------
    # ---Constants---
    __version__ = __version__
    _BROADCAST_IMPORT_GUARD = _BROADCAST_IMPORT_GUARD
    # Explicitly refuse to make closure for _DEFAULT_BROADCAST so it stays
    # protected!
    ALL_TOPIC = topics.ALL_TOPIC

    # ---Classes---
    Broadcast = broadcaster.Broadcast
    BroadcastOptions = options.BroadcastOptions
    Subscription = subscription.Subscription
    Topic = topics.Topic

    # ---Modules---
    broadcaster = broadcaster
    handlers = handlers
    options = options
    subscription = subscription
    topics = topics
    # -------------------------------------------------------------------------

    def __init__(self, name: str) -> None:
        super().__init__(name)
        assert self._BROADCAST_IMPORT_GUARD is True

    @staticmethod
    def default() -> broadcaster.Broadcast:
        return _get_default()

    @staticmethod
    def clear() -> None:
        _get_default().unsubscribe()

    # -----Subscriber Management-----------------------------------------------

    @staticmethod
    def subscribe(
        topic: broadcaster.TOPIC_SPEC,
        callback: Any = broadcaster.UNSET,
        context: Optional[Any] = None,
    ) -> Union[broadcaster.Broadcast, broadcaster.DECORATOR]:
        return _get_default().subscribe(topic, callback, context)

    @staticmethod
    def on(
        topic: broadcaster.TOPIC_SPEC,
        callback: Any = broadcaster.UNSET,
        context: Optional[Any] = None,
    ) -> Union[broadcaster.Broadcast, broadcaster.DECORATOR]:
        return _get_default().subscribe(topic, callback, context)

    @staticmethod
    def unsubscribe(
        topic: Optional[str] = None,
        callback: Optional[subscription.CALLBACK] = None,
    ) -> broadcaster.Broadcast:
        return _get_default().unsubscribe(topic, callback)

    @staticmethod
    def off(
        topic: Optional[str] = None,
        callback: Optional[subscription.CALLBACK] = None,
    ) -> broadcaster.Broadcast:
        return _get_default().unsubscribe(topic, callback)

    @staticmethod
    def set_exception_handler(
        handler: Optional[handlers.SUBSCRIPTION_EXCEPTION_HANDLER],
    ) -> None:
        _get_default().set_exception_handler(handler)

    # -----Publishing----------------------------------------------------------

    @staticmethod
    def publish(topic: str, *args: Any) -> broadcaster.Broadcast:
        return _get_default().publish(topic, *args)

    @staticmethod
    def emit(topic: str, *args: Any) -> broadcaster.Broadcast:
        return _get_default().publish(topic, *args)

    @staticmethod
    def trigger(topic: str, *args: Any) -> broadcaster.Broadcast:
        return _get_default().publish(topic, *args)

    # -----Introspection API---------------------------------------------------

    @staticmethod
    def get_topics() -> list[str]:
        return _get_default().get_topics()

    @staticmethod
    def get_subscriptions(topic: str) -> list[subscription.Subscription]:
        return _get_default().get_subscriptions(topic)

    @staticmethod
    def get_subscriber_count(topic: str) -> int:
        return _get_default().get_subscriber_count(topic)

    @staticmethod
    def has_subscribers(topic: str) -> bool:
        return _get_default().has_subscribers(topic)

    @staticmethod
    def is_subscribed(callback: subscription.CALLBACK, topic: str) -> bool:
        return _get_default().is_subscribed(callback, topic)

    @staticmethod
    def to_dict() -> dict[str, list[str]]:
        return _get_default().to_dict()

    @staticmethod
    def to_string() -> str:
        return _get_default().to_string()

    @staticmethod
    def export(filepath: Union[str, os.PathLike]) -> None:
        _get_default().export(filepath)


# This is here to protect _DEFAULT_BROADCAST, creating a protective closure.
custom_module = BroadcastModule(sys.modules[__name__].__name__)
sys.modules[__name__] = custom_module
