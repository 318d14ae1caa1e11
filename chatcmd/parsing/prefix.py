"""
Prefix Module.

Decide whether a message is a command invocation, and with which prefix.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from chatcmd.context import ChatMessage


def resolve_prefix(content: str, prefixes: Sequence[str]) -> Optional[str]:
    """
    Find the prefix that triggers command processing.

    Prefixes are checked in the given order and the first one the
    content starts with wins. Content consisting of nothing but the
    prefix is not an invocation.

    Args:
        content: Raw message content
        prefixes: Candidate prefixes, in priority order

    Returns:
        The matched prefix or None

    Examples:
        >>> resolve_prefix("!ping", ["!", "?"])
        '!'
        >>> resolve_prefix("!", ["!"]) is None
        True
        >>> resolve_prefix("!!ping", ["!", "!!"])
        '!'
    """
    for prefix in prefixes:
        if not prefix or not content.startswith(prefix):
            continue
        if len(content) == len(prefix):
            return None
        return prefix
    return None


def mention_prefixes(self_id: int) -> list[str]:
    """Mention forms that address the bot directly."""
    return [f"<@{self_id}> ", f"<@!{self_id}> "]


class PrefixProvider(ABC):
    """Supplies candidate prefixes for a message."""

    @abstractmethod
    def provide(self, message: ChatMessage) -> list[str]:
        """
        Get the prefixes to check for a message.

        Args:
            message: The inbound message

        Returns:
            Ordered list of candidate prefixes
        """
        pass


class DefaultPrefixProvider(PrefixProvider):
    """Static prefixes, optionally followed by the bot's mention."""

    def __init__(self, prefixes: Sequence[str], allow_mention_prefix: bool = True):
        """
        Initialize provider.

        Args:
            prefixes: Literal prefixes, in priority order
            allow_mention_prefix: Also accept "@bot " as a prefix
        """
        self._prefixes = list(prefixes)
        self._allow_mention_prefix = allow_mention_prefix

    def provide(self, message: ChatMessage) -> list[str]:
        if not self._allow_mention_prefix:
            return list(self._prefixes)
        if message.self_mentions:
            return self._prefixes + list(message.self_mentions)
        if message.self_id is not None:
            return self._prefixes + mention_prefixes(message.self_id)
        return list(self._prefixes)
