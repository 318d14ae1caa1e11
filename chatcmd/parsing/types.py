"""
Argument Types Module.

Stable identifiers for argument types and the value objects that
the built-in parsers produce.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ArgumentType(str, Enum):
    """Identifiers of the built-in argument parsers.

    Custom parsers may be registered under any other string.
    """

    BOOLEAN = "boolean"
    DOUBLE = "double"
    FLOAT = "float"
    INTEGER = "integer"
    LONG = "long"
    STRING = "string"
    URL = "url"
    SNOWFLAKE = "snowflake"
    EMOJI = "emoji"
    INVITE = "invite"
    USER = "user"
    MEMBER = "member"
    ROLE = "role"
    TEXT_CHANNEL = "text_channel"
    VOICE_CHANNEL = "voice_channel"


class MentionType(str, Enum):
    """Kind of mention a snowflake was written as."""

    USER = "user"
    ROLE = "role"
    CHANNEL = "channel"


@dataclass(frozen=True)
class Snowflake:
    """A platform identifier, optionally taken from a mention."""

    id: int
    mention_type: Optional[MentionType] = None


@dataclass(frozen=True)
class Emoji:
    """A custom emoji reference like <:name:id> or <a:name:id>."""

    name: str
    id: int
    animated: bool = False

    @property
    def url(self) -> str:
        extension = "gif" if self.animated else "png"
        return f"https://cdn.discordapp.com/emojis/{self.id}.{extension}"


@dataclass(frozen=True)
class Invite:
    """An invite link reduced to its code."""

    url: str
    code: str
