"""
Built-in argument parsers.

Contains the default converters and the helper that registers them.
"""

from typing import Optional

from chatcmd.parsing.parsers.entities import (
    ENTITY_ARGUMENT_TYPES,
    EntityKind,
    EntityParser,
    IdentityResolver,
)
from chatcmd.parsing.parsers.primitives import (
    parse_boolean,
    parse_double,
    parse_float,
    parse_integer,
    parse_long,
    parse_string,
)
from chatcmd.parsing.parsers.text import (
    parse_emoji,
    parse_invite,
    parse_snowflake,
    parse_url,
)
from chatcmd.parsing.registry import ArgumentParserRegistry, Parser
from chatcmd.parsing.types import ArgumentType


def register_default_parsers(
    registry: ArgumentParserRegistry,
    resolver: Optional[IdentityResolver] = None,
    id_parser: Optional[Parser] = None,
) -> ArgumentParserRegistry:
    """
    Register every built-in parser.

    Entity parsers are only registered when a resolver is given.

    Args:
        registry: Registry to populate
        resolver: Platform lookup for user/member/role/channel arguments
        id_parser: Platform identifier parser, used for snowflake arguments
            and by the entity parsers (parse_snowflake by default)

    Returns:
        The same registry, for chaining
    """
    id_parser = id_parser or parse_snowflake
    registry.register(ArgumentType.BOOLEAN, parse_boolean)
    registry.register(ArgumentType.DOUBLE, parse_double)
    registry.register(ArgumentType.FLOAT, parse_float)
    registry.register(ArgumentType.INTEGER, parse_integer)
    registry.register(ArgumentType.LONG, parse_long)
    registry.register(ArgumentType.STRING, parse_string)
    registry.register(ArgumentType.URL, parse_url)
    registry.register(ArgumentType.SNOWFLAKE, id_parser)
    registry.register(ArgumentType.EMOJI, parse_emoji)
    registry.register(ArgumentType.INVITE, parse_invite)

    if resolver is not None:
        register_entity_parsers(registry, resolver, id_parser)
    return registry


def register_entity_parsers(
    registry: ArgumentParserRegistry,
    resolver: IdentityResolver,
    id_parser: Parser = parse_snowflake,
) -> None:
    """Register one EntityParser per entity kind."""
    for kind, type_id in ENTITY_ARGUMENT_TYPES.items():
        registry.register(type_id, EntityParser(kind, resolver, id_parser))


__all__ = [
    "EntityKind",
    "EntityParser",
    "IdentityResolver",
    "parse_boolean",
    "parse_double",
    "parse_emoji",
    "parse_float",
    "parse_integer",
    "parse_invite",
    "parse_long",
    "parse_snowflake",
    "parse_string",
    "parse_url",
    "register_default_parsers",
    "register_entity_parsers",
]
