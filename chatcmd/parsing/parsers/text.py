"""
Structured text parsers.

URLs, platform identifiers, custom emoji and invite links. None of these
consult the platform; they only validate and decompose the token.
"""

import re
from typing import Optional

from pydantic import AnyUrl, TypeAdapter, ValidationError

from chatcmd.context import InvocationContext
from chatcmd.parsing.types import Emoji, Invite, MentionType, Snowflake

_URL_ADAPTER = TypeAdapter(AnyUrl)

SNOWFLAKE_PATTERN = re.compile(
    r"<(?P<kind>@!?|@&|#)(?P<mention>\d{17,21})>|(?P<id>\d{17,21})", re.ASCII
)
EMOJI_PATTERN = re.compile(r"<(?P<animated>a)?:(?P<name>\w{2,32}):(?P<id>\d{17,21})>", re.ASCII)
INVITE_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?(?:discord(?:app)?\.com/invite|discord\.gg)/(?P<code>[A-Za-z0-9-]{2,32})/?",
    re.ASCII,
)

MENTION_KINDS = {
    "@": MentionType.USER,
    "@!": MentionType.USER,
    "@&": MentionType.ROLE,
    "#": MentionType.CHANNEL,
}


def parse_url(ctx: InvocationContext, token: str) -> Optional[AnyUrl]:
    """
    Parse an absolute URL.

    Args:
        ctx: Invocation context (unused)
        token: Raw token like "https://example.com/path"

    Returns:
        Parsed URL or None if malformed
    """
    try:
        return _URL_ADAPTER.validate_python(token)
    except ValidationError:
        return None


def parse_snowflake(ctx: InvocationContext, token: str) -> Optional[Snowflake]:
    """
    Parse a platform identifier.

    Accepts a bare 17-21 digit id or a user, role or channel mention.

    Examples:
        >>> parse_snowflake(None, "<@!123456789012345678>")
        Snowflake(id=123456789012345678, mention_type=<MentionType.USER: 'user'>)
        >>> parse_snowflake(None, "12345") is None
        True
    """
    match = SNOWFLAKE_PATTERN.fullmatch(token)
    if not match:
        return None
    if match.group("id"):
        return Snowflake(int(match.group("id")))
    return Snowflake(int(match.group("mention")), MENTION_KINDS[match.group("kind")])


def parse_emoji(ctx: InvocationContext, token: str) -> Optional[Emoji]:
    """Parse a custom emoji like <:wave:123456789012345678>."""
    match = EMOJI_PATTERN.fullmatch(token)
    if not match:
        return None
    return Emoji(
        name=match.group("name"),
        id=int(match.group("id")),
        animated=match.group("animated") is not None,
    )


def parse_invite(ctx: InvocationContext, token: str) -> Optional[Invite]:
    """Parse an invite link like https://discord.gg/abc123."""
    match = INVITE_PATTERN.fullmatch(token)
    if not match:
        return None
    return Invite(url=token, code=match.group("code"))
