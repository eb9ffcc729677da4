"""
Policies for callbacks that raise during publish().

A Broadcast without a handler lets the exception escape publish(), and the
callbacks after the failing one are not called for that round. Installing one
of the functions below with set_exception_handler() catches the exception
instead; the handler's return value decides whether the round goes on.

    events.set_exception_handler(handlers.log_and_continue_subscriber_exception)

Handlers run on the publishing thread, inside the except block, so
sys.exc_info() still describes the failure.
"""

import logging
import sys
import threading
from typing import Any
from typing import Callable

from broadcast import subscription


logger = logging.getLogger(__name__)


SUBSCRIPTION_EXCEPTION_HANDLER = Callable[
    [subscription.CALLBACK, str, Exception], bool
]
"""
handler(callback, topic, exception) -> bool

The topic is the bare topic name being dispatched ('all' for the catch-all
round). Return STOP to skip the rest of that round or CONTINUE to carry on.
"""

STOP = True
CONTINUE = False


def get_callable_name(callable_: Callable) -> str:
    """Readable name for log lines: 'Class.method', a qualname, or repr."""
    if hasattr(callable_, "__self__") and hasattr(callable_, "__name__"):
        return f"{callable_.__self__.__class__.__name__}.{callable_.__name__}"
    return getattr(
        callable_, "__qualname__", getattr(callable_, "__name__", str(callable_))
    )


def stop_and_log_subscriber_exception(
    callback: subscription.CALLBACK, topic: str, exception: Exception
) -> bool:
    """Log the failure with its traceback and end the current round."""
    logger.error(
        f"Exception in broadcast subscriber:\n"
        f"  Topic:     {topic}\n"
        f"  Callback:  {get_callable_name(callback)}\n"
        f"  Exception: {exception.__class__.__name__}: {exception}",
        exc_info=True,
    )
    return STOP


def log_and_continue_subscriber_exception(
    callback: subscription.CALLBACK, topic: str, exception: Exception
) -> bool:
    """One warning line per failure; the other callbacks still run."""
    logger.warning(
        f"Subscriber error (continuing): "
        f"{get_callable_name(callback)} on '{topic}': {exception}"
    )
    return CONTINUE


def silent_subscriber_exception(
    _: subscription.CALLBACK, __: str, ___: Exception
) -> bool:
    return CONTINUE


# -----Collecting---------------------------------------------------------------

exceptions_caught: list[dict[str, Any]] = []
"""
Failures recorded by collect_subscriber_exception(), oldest first. Each entry
holds 'callback' (name), 'topic', 'exception' ('Type: message') and
'exc_info'.
"""

_collect_lock = threading.Lock()


def collect_subscriber_exception(
    callback: subscription.CALLBACK, topic: str, exception: Exception
) -> bool:
    """
    Record the failure in exceptions_caught and keep dispatching.

    Useful when a publish should finish regardless and the errors are looked
    at afterwards, e.g. at the end of a batch:

        events.set_exception_handler(handlers.collect_subscriber_exception)
        events.publish('import', rows)
        for entry in handlers.clear_exceptions_caught():
            report(entry)
    """
    entry = {
        "callback": get_callable_name(callback),
        "topic": topic,
        "exception": f"{exception.__class__.__name__}: {exception}",
        "exc_info": sys.exc_info(),
    }
    with _collect_lock:
        exceptions_caught.append(entry)
    return CONTINUE


def clear_exceptions_caught() -> list[dict[str, Any]]:
    """
    Empty exceptions_caught.

    Returns:
        list[dict[str, Any]]: The entries that were removed, oldest first.
    """
    with _collect_lock:
        drained = list(exceptions_caught)
        exceptions_caught.clear()
    return drained
