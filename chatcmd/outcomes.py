"""
Outcome Module.

Every message that matches a prefix and names a known command ends in
exactly one of these outcomes.
"""

from dataclasses import dataclass
from typing import Any, Optional

from chatcmd.commands.base import ParameterSpec
from chatcmd.context import InvocationContext
from chatcmd.gating.permissions import DenialReason, PermissionDenial

DENIAL_MESSAGES = {
    DenialReason.NOT_DEVELOPER: "This command is restricted to developers.",
    DenialReason.GUILD_ONLY: "This command can only be used in a server.",
    DenialReason.NOT_SAFE_FOR_CHANNEL: "This command can only be used in nsfw channels.",
    DenialReason.MISSING_CALLER_PERMISSION: "You are missing permissions: {missing}",
    DenialReason.MISSING_BOT_PERMISSION: "I am missing permissions: {missing}",
}


@dataclass(frozen=True)
class Outcome:
    """Base class for dispatch outcomes."""

    context: InvocationContext

    @property
    def ok(self) -> bool:
        return False

    @property
    def command_name(self) -> str:
        return self.context.command.name

    def describe(self) -> str:
        """Plain text description of the outcome."""
        return self.__class__.__name__


@dataclass(frozen=True)
class Completed(Outcome):
    """The handler ran and returned ``result``."""

    result: Any = None

    @property
    def ok(self) -> bool:
        return True

    def describe(self) -> str:
        return "" if self.result is None else str(self.result)


@dataclass(frozen=True)
class PermissionDenied(Outcome):
    """A permission requirement was not met."""

    denial: PermissionDenial

    @property
    def reason(self) -> DenialReason:
        return self.denial.reason

    def describe(self) -> str:
        missing = ", ".join(sorted(self.denial.missing))
        return DENIAL_MESSAGES[self.denial.reason].format(missing=missing)


@dataclass(frozen=True)
class CooldownActive(Outcome):
    """The command is on cooldown for this caller/origin."""

    remaining_ms: int

    def describe(self) -> str:
        return f"This command is on cooldown. Try again in {self.remaining_ms / 1000:.1f}s."


@dataclass(frozen=True)
class ParseFailure(Outcome):
    """Base class for argument binding failures."""

    parameter: ParameterSpec


@dataclass(frozen=True)
class MissingArgument(ParseFailure):
    """A required parameter had no token."""

    def describe(self) -> str:
        return f"Missing argument '{self.parameter.name}' ({self.parameter.type})."


@dataclass(frozen=True)
class InvalidFormat(ParseFailure):
    """A token did not convert to the parameter's type."""

    token: str
    error: Optional[str] = None

    def describe(self) -> str:
        return f"Invalid value '{self.token}' for '{self.parameter.name}': expected {self.parameter.type}."


@dataclass(frozen=True)
class ExecutionFailure(Outcome):
    """The handler raised."""

    cause: BaseException

    def describe(self) -> str:
        return f"Command '{self.command_name}' failed: {self.cause}"
