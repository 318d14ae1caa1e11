"""
Permission Gate Module.

Evaluates a command's declarative requirements against an invocation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from chatcmd.context import InvocationContext


class DenialReason(str, Enum):
    """Why an invocation was refused."""

    NOT_DEVELOPER = "not_developer"
    GUILD_ONLY = "guild_only"
    NOT_SAFE_FOR_CHANNEL = "not_safe_for_channel"
    MISSING_CALLER_PERMISSION = "missing_caller_permission"
    MISSING_BOT_PERMISSION = "missing_bot_permission"


@dataclass(frozen=True)
class PermissionDenial:
    """
    A refused permission check.

    Attributes:
        reason: Which requirement failed
        missing: Missing permissions, for the two permission reasons
    """

    reason: DenialReason
    missing: frozenset[str] = frozenset()


class PermissionGate:
    """
    Checks developer, guild, nsfw and permission requirements.

    Checks run in a fixed order and stop at the first denial:
    developer-only, guild-only, nsfw, caller permissions, bot
    permissions. A recognized developer passes every check.
    Subclass and override ``check`` to add policies.
    """

    def check(self, ctx: InvocationContext) -> Optional[PermissionDenial]:
        """
        Evaluate the requirements of ``ctx.command``.

        Args:
            ctx: Invocation to check

        Returns:
            None when allowed, otherwise the first denial
        """
        command = ctx.command
        message = ctx.message

        if ctx.is_developer:
            return None
        if command.developer_only:
            return PermissionDenial(DenialReason.NOT_DEVELOPER)

        if command.guild_only and message.guild_id is None:
            return PermissionDenial(DenialReason.GUILD_ONLY)

        if command.nsfw and not message.nsfw_channel:
            return PermissionDenial(DenialReason.NOT_SAFE_FOR_CHANNEL)

        missing = command.user_permissions - message.author_permissions
        if missing:
            return PermissionDenial(DenialReason.MISSING_CALLER_PERMISSION, frozenset(missing))

        missing = command.bot_permissions - message.bot_permissions
        if missing:
            return PermissionDenial(DenialReason.MISSING_BOT_PERMISSION, frozenset(missing))

        return None
