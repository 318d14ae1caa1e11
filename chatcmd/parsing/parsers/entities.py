"""
Entity lookup parsers.

Users, members, roles and channels are looked up through an
IdentityResolver supplied by the platform integration. These are the
only parsers with a side channel; lookup errors are logged and become
parse failures.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from loguru import logger

from chatcmd.context import InvocationContext
from chatcmd.parsing.parsers.text import parse_snowflake
from chatcmd.parsing.registry import Parser
from chatcmd.parsing.types import ArgumentType, MentionType

entity_log = logger.bind(module="EntityParser")


class EntityKind(str, Enum):
    """Platform entities an argument can refer to."""

    USER = "user"
    MEMBER = "member"
    ROLE = "role"
    TEXT_CHANNEL = "text_channel"
    VOICE_CHANNEL = "voice_channel"


ENTITY_ARGUMENT_TYPES = {
    EntityKind.USER: ArgumentType.USER,
    EntityKind.MEMBER: ArgumentType.MEMBER,
    EntityKind.ROLE: ArgumentType.ROLE,
    EntityKind.TEXT_CHANNEL: ArgumentType.TEXT_CHANNEL,
    EntityKind.VOICE_CHANNEL: ArgumentType.VOICE_CHANNEL,
}

ENTITY_MENTIONS = {
    EntityKind.USER: MentionType.USER,
    EntityKind.MEMBER: MentionType.USER,
    EntityKind.ROLE: MentionType.ROLE,
    EntityKind.TEXT_CHANNEL: MentionType.CHANNEL,
    EntityKind.VOICE_CHANNEL: MentionType.CHANNEL,
}

# Kinds that only exist inside a guild
GUILD_ENTITIES = frozenset(
    {EntityKind.MEMBER, EntityKind.ROLE, EntityKind.TEXT_CHANNEL, EntityKind.VOICE_CHANNEL}
)


class IdentityResolver(ABC):
    """Looks up platform entities for the entity parsers."""

    @abstractmethod
    def resolve(
        self,
        kind: EntityKind,
        ctx: InvocationContext,
        token: str,
        entity_id: Optional[int],
    ) -> Any:
        """
        Find an entity within the invocation's origin.

        Args:
            kind: Kind of entity to look up
            ctx: Invocation context (origin, caller)
            token: Raw token, for name based lookups
            entity_id: Id taken from the token when it is an id or mention

        Returns:
            The entity, or None if not found
        """
        pass


class EntityParser:
    """Parser that resolves a token to one kind of entity."""

    def __init__(
        self,
        kind: EntityKind,
        resolver: IdentityResolver,
        id_parser: Parser = parse_snowflake,
    ):
        """
        Initialize parser.

        Args:
            kind: Entity kind this parser produces
            resolver: Platform lookup collaborator
            id_parser: Extracts a Snowflake from ids and mentions in the platform's format
        """
        self.kind = kind
        self._resolver = resolver
        self._id_parser = id_parser

    def __call__(self, ctx: InvocationContext, token: str) -> Any:
        if self.kind in GUILD_ENTITIES and ctx.guild_id is None:
            return None

        snowflake = self._id_parser(ctx, token)
        entity_id: Optional[int] = None
        if snowflake is not None:
            if snowflake.mention_type is not None and snowflake.mention_type != ENTITY_MENTIONS[self.kind]:
                return None
            entity_id = snowflake.id

        try:
            return self._resolver.resolve(self.kind, ctx, token, entity_id)
        except Exception as e:
            entity_log.warning(f"Resolver failed for {self.kind.value} {token!r}: {e}")
            return None
