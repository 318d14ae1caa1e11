"""
Primitive argument parsers.

Booleans, numbers and plain strings. Each parser returns the converted
value or None when the token does not convert.
"""

import math
import re
from typing import Optional

from chatcmd.context import InvocationContext

TRUE_VALUES = frozenset({"yes", "y", "true", "t", "1", "enable", "on"})
FALSE_VALUES = frozenset({"no", "n", "false", "f", "0", "disable", "off"})

INTEGER_MIN, INTEGER_MAX = -(2**31), 2**31 - 1
LONG_MIN, LONG_MAX = -(2**63), 2**63 - 1
FLOAT_MAX = 3.4028234663852886e38

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)
_DOUBLE_PATTERN = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?", re.ASCII
)


def parse_boolean(ctx: InvocationContext, token: str) -> Optional[bool]:
    """
    Parse a yes/no style token.

    Examples:
        >>> parse_boolean(None, "on")
        True
        >>> parse_boolean(None, "Disable")
        False
        >>> parse_boolean(None, "maybe") is None
        True
    """
    lowered = token.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


def parse_double(ctx: InvocationContext, token: str) -> Optional[float]:
    """
    Parse a finite double precision number.

    Examples:
        >>> parse_double(None, "1e3")
        1000.0
        >>> parse_double(None, "nan") is None
        True
    """
    if not _DOUBLE_PATTERN.fullmatch(token):
        return None
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


def parse_float(ctx: InvocationContext, token: str) -> Optional[float]:
    """Parse a number that must fit a single precision float."""
    value = parse_double(ctx, token)
    if value is None or abs(value) > FLOAT_MAX:
        return None
    return value


def _parse_bounded_int(token: str, low: int, high: int) -> Optional[int]:
    if not _INTEGER_PATTERN.fullmatch(token):
        return None
    value = int(token)
    if value < low or value > high:
        return None
    return value


def parse_integer(ctx: InvocationContext, token: str) -> Optional[int]:
    """
    Parse a 32-bit integer.

    Examples:
        >>> parse_integer(None, "42")
        42
        >>> parse_integer(None, "abc") is None
        True
        >>> parse_integer(None, "2147483648") is None
        True
    """
    return _parse_bounded_int(token, INTEGER_MIN, INTEGER_MAX)


def parse_long(ctx: InvocationContext, token: str) -> Optional[int]:
    """Parse a 64-bit integer."""
    return _parse_bounded_int(token, LONG_MIN, LONG_MAX)


def parse_string(ctx: InvocationContext, token: str) -> str:
    """Return the token unchanged."""
    return token
