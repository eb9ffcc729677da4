"""
Construction options for the broadcaster.

Defines the BroadcastOptions TypedDict accepted by Broadcast(). Only
'alias_on' is interpreted, with 'aliasOn' accepted as a synonym. Any other
key is ignored so option dictionaries can be shared with surrounding
configuration.
"""

import logging
from typing import Any
from typing import Mapping
from typing import Optional
from typing import TypedDict


logger = logging.getLogger(__name__)


class BroadcastOptions(TypedDict, total=False):
    """Options recognised by Broadcast()."""

    alias_on: bool
    """
    If True (the default) the instance also exposes on(), off(), emit() and
    trigger() as aliases of subscribe(), unsubscribe() and publish().
    May also be given as 'aliasOn'.
    """


DEFAULT_OPTIONS: BroadcastOptions = {"alias_on": True}

OPTION_SYNONYMS: dict[str, str] = {"aliasOn": "alias_on"}
"""Alternative spellings mapped to their canonical option names."""


def resolve_options(
    options: Optional[Mapping[str, Any]] = None, **overrides: Any
) -> BroadcastOptions:
    """
    Merge user options over the defaults.

    Args:
        options (Optional[Mapping[str, Any]]): Options mapping, may be None.
        **overrides (Any): Keyword options, these win over the mapping.
    Returns:
        BroadcastOptions: The recognised options with defaults filled in.
    """
    resolved: BroadcastOptions = {**DEFAULT_OPTIONS}

    for source in (options or {}, overrides):
        for key, value in source.items():
            name = OPTION_SYNONYMS.get(key, key)
            if name in DEFAULT_OPTIONS:
                resolved[name] = bool(value)
            else:
                logger.debug(f"Ignoring unrecognised broadcast option: {key!r}")

    return resolved
