"""
Subscription records and callback type definitions for the broadcaster.

Defines the Subscription dataclass which pairs a callback with the namespace
it was registered under and an optional context. Callbacks are held by strong
reference and compared by identity, never by value.

When a context is supplied the callback is invoked as if it were a method of
that context: the context is passed as the first positional argument, ahead
of the published arguments. Callbacks that need no receiver should simply be
registered without one (closures and bound methods already carry theirs).
"""

import inspect
from dataclasses import dataclass
from typing import Any
from typing import Callable
from typing import Optional


CALLBACK = Callable[..., Any]
"""
The end point that published arguments are forwarded to.

The broadcaster ignores return values. If you want data back, publish an
event going the opposite direction.
"""


def same_callback(left: CALLBACK, right: CALLBACK) -> bool:
    """
    Identity comparison for callbacks.

    Bound methods are recreated on every attribute access, so two bound
    methods are the same callback when they wrap the same function on the
    same instance.
    """
    if left is right:
        return True

    if inspect.ismethod(left) and inspect.ismethod(right):
        return left.__self__ is right.__self__ and left.__func__ is right.__func__

    # Builtin bound methods, e.g. some_list.append
    if inspect.isbuiltin(left) and inspect.isbuiltin(right):
        return left.__self__ is right.__self__ and left.__name__ == right.__name__

    return False


@dataclass(frozen=True, eq=False)
class Subscription(object):
    """A callback registered to a topic."""

    callback: CALLBACK
    """What gets ran when the topic is published."""

    namespace: Optional[str] = None
    """The namespace tag given at registration, used for bulk removal."""

    context: Optional[Any] = None
    """
    The receiver the callback is invoked on. Passed as the first positional
    argument when not None.
    """

    def matches(
        self, namespace: Optional[str] = None, callback: Optional[CALLBACK] = None
    ) -> bool:
        """
        Check the subscription against a namespace and callback filter.

        Args:
            namespace (Optional[str]): Required namespace, or None for any.
            callback (Optional[CALLBACK]): Required callback, or None for any.
        Returns:
            bool: True if the subscription passes both filters.
        """
        if namespace is not None and self.namespace != namespace:
            return False

        if callback is not None and not same_callback(self.callback, callback):
            return False

        return True

    def invoke(self, *args: Any) -> Any:
        """Call the callback with args, honouring the context."""
        if self.context is None:
            return self.callback(*args)

        return self.callback(self.context, *args)
