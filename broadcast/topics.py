"""
Topic string grammar for the broadcaster.

A topic string is either a bare name ('change') or a name with a namespace
suffix ('change.sidebar'). The namespace is everything after the LAST dot, so
'model.user.sidebar' is topic 'model.user' in namespace 'sidebar'. A string
with nothing before the dot ('.sidebar') names every topic in that namespace.

Several topic strings may be given at once separated by whitespace, e.g.
'create update delete'.
"""

from dataclasses import dataclass
from typing import Optional


ALL_TOPIC = "all"
"""Reserved topic notified after every publish to any other topic."""

NAMESPACE_SEPARATOR = "."


@dataclass(frozen=True)
class Topic(object):
    """A parsed topic string."""

    name: str
    """The bare topic name. Empty when only a namespace was given."""

    namespace: Optional[str] = None
    """The namespace tag, without the separator, or None."""

    @property
    def is_namespace_only(self) -> bool:
        """True for the '.namespace' form, meaning 'any topic'."""
        return not self.name

    def __str__(self) -> str:
        if self.namespace is None:
            return self.name
        return f"{self.name}{NAMESPACE_SEPARATOR}{self.namespace}"


def parse_topic(token: str) -> Topic:
    """
    Split a single topic token into its bare name and namespace.

    Args:
        token (str): A topic such as 'change' or 'change.sidebar'.
    Returns:
        Topic: The parsed topic. An empty namespace ('change.') is treated as
            no namespace at all.
    """
    name, separator, namespace = token.rpartition(NAMESPACE_SEPARATOR)
    if not separator:
        return Topic(name=token)

    return Topic(name=name, namespace=namespace or None)


def split_topics(spec: str) -> list[Topic]:
    """
    Parse a whitespace separated list of topic tokens.

    Args:
        spec (str): One or more topics, e.g. 'create update.sidebar .admin'.
    Returns:
        list[Topic]: Parsed topics in the order given. Blank input yields an
            empty list.
    """
    return [parse_topic(token) for token in spec.split()]
