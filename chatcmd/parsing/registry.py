"""
Argument Parser Registry Module.

Maps argument type identifiers to converter functions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from loguru import logger

from chatcmd.context import InvocationContext

parser_log = logger.bind(module="ArgParser")

# A parser returns the converted value, or None when the token does not
# convert. Raising is treated the same as returning None.
Parser = Callable[[InvocationContext, str], Any]

TypeId = Union[str, Enum]


def type_key(type_id: TypeId) -> str:
    """Normalize an ArgumentType or plain string to its identifier."""
    if isinstance(type_id, Enum):
        return str(type_id.value)
    return type_id


@dataclass(frozen=True)
class ParseResult:
    """Outcome of converting one token."""

    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "ParseResult":
        """Create a successful result."""
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        """Create a failed result."""
        return cls(ok=False, error=error)


class ArgumentParserRegistry:
    """
    Registry of argument parsers keyed by type identifier.

    Built once at startup; ``parse`` only reads and is safe to call
    concurrently.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._parsers: dict[str, Parser] = {}

    def register(self, type_id: TypeId, parser: Parser) -> None:
        """
        Register a parser, replacing any previous one for the same type.

        Args:
            type_id: ArgumentType or custom type identifier
            parser: Function of (ctx, token) returning a value or None
        """
        key = type_key(type_id)
        if key in self._parsers:
            parser_log.debug(f"Replacing parser for type '{key}'")
        self._parsers[key] = parser

    def get(self, type_id: TypeId) -> Optional[Parser]:
        """Get the parser registered for a type, if any."""
        return self._parsers.get(type_key(type_id))

    @property
    def types(self) -> list[str]:
        """Registered type identifiers."""
        return list(self._parsers)

    def __contains__(self, type_id: object) -> bool:
        if not isinstance(type_id, (str, Enum)):
            return False
        return type_key(type_id) in self._parsers

    def parse(self, type_id: TypeId, ctx: InvocationContext, token: str) -> ParseResult:
        """
        Convert a token with the parser registered for a type.

        Never raises: missing parsers and parser errors become failures.

        Args:
            type_id: Type identifier of the parameter
            ctx: Current invocation context
            token: Raw token text

        Returns:
            ParseResult with the converted value or an error description
        """
        key = type_key(type_id)
        parser = self._parsers.get(key)
        if parser is None:
            return ParseResult.failure(f"no parser registered for type '{key}'")

        try:
            value = parser(ctx, token)
        except Exception as e:
            parser_log.debug(f"Parser for '{key}' raised on {token!r}: {e}")
            return ParseResult.failure(str(e) or e.__class__.__name__)

        if value is None:
            return ParseResult.failure(f"'{token}' is not a valid {key}")
        return ParseResult.success(value)
