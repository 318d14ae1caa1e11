"""
Parsing Module.

Prefix detection, tokenization and argument conversion.
"""

from chatcmd.parsing.binder import ParsedArguments, bind_arguments
from chatcmd.parsing.parsers import IdentityResolver, EntityKind, register_default_parsers
from chatcmd.parsing.prefix import DefaultPrefixProvider, PrefixProvider, resolve_prefix
from chatcmd.parsing.registry import ArgumentParserRegistry, ParseResult
from chatcmd.parsing.tokenizer import split_command, split_remainder, tokenize
from chatcmd.parsing.types import ArgumentType, Emoji, Invite, MentionType, Snowflake

__all__ = [
    "ArgumentParserRegistry",
    "ArgumentType",
    "DefaultPrefixProvider",
    "Emoji",
    "EntityKind",
    "IdentityResolver",
    "Invite",
    "MentionType",
    "ParseResult",
    "ParsedArguments",
    "PrefixProvider",
    "Snowflake",
    "bind_arguments",
    "register_default_parsers",
    "resolve_prefix",
    "split_command",
    "split_remainder",
    "tokenize",
]
