"""
Context Module.

The gateway-neutral inbound message and the per-invocation context
handed to parsers, gates, hooks and handlers.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from chatcmd.commands.base import CommandDefinition


class ChatMessage(BaseModel):
    """
    An inbound chat message as delivered by a platform gateway.

    Attributes:
        content: Raw message text
        author_id: Identity of the sender
        channel_id: Channel the message was sent in
        guild_id: Guild/server the channel belongs to, None for direct messages
        author_is_bot: Whether the sender is an automated account
        nsfw_channel: Whether the channel is marked as nsfw
        author_permissions: Permissions the sender holds in the channel
        bot_permissions: Permissions the bot holds in the channel
        self_id: The bot's own user id, used for mention prefixes
        self_mentions: Platform specific ways of addressing the bot, e.g. "@my_bot ";
            when empty, mentions are derived from self_id
        raw: The platform's original message object
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    content: str
    author_id: int
    channel_id: int
    guild_id: Optional[int] = None
    author_is_bot: bool = False
    nsfw_channel: bool = False
    author_permissions: frozenset[str] = frozenset()
    bot_permissions: frozenset[str] = frozenset()
    self_id: Optional[int] = None
    self_mentions: tuple[str, ...] = ()
    raw: Any = None


@dataclass
class InvocationContext:
    """
    State of a single command invocation.

    One context is created per message and never shared between
    dispatches. ``metadata`` is free for event adapters to use.
    """

    message: ChatMessage
    prefix: str
    invoked_with: str
    command: CommandDefinition
    args: list[str]
    arg_text: str = ""
    is_developer: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def content(self) -> str:
        return self.message.content

    @property
    def author_id(self) -> int:
        return self.message.author_id

    @property
    def channel_id(self) -> int:
        return self.message.channel_id

    @property
    def guild_id(self) -> Optional[int]:
        return self.message.guild_id

    @property
    def origin_id(self) -> int:
        """Guild id when sent in a guild, otherwise the channel id."""
        if self.message.guild_id is not None:
            return self.message.guild_id
        return self.message.channel_id
