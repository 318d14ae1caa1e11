"""
Event Adapter Module.

Hooks notified of dispatch outcomes, for logging or user-facing
replies. Hooks are never consulted for control decisions.
"""

from chatcmd.context import InvocationContext
from chatcmd.outcomes import (
    Completed,
    CooldownActive,
    ExecutionFailure,
    Outcome,
    ParseFailure,
    PermissionDenied,
)


class CommandEventAdapter:
    """
    Base class for event adapters.

    Every hook is a no-op; override the ones you need. Hooks may be
    called from worker threads when execution is pooled.
    """

    def on_command_pre_invoke(self, ctx: InvocationContext) -> None:
        """Called right before the handler runs."""

    def on_command_completed(self, outcome: Completed) -> None:
        """Called after the handler returned."""

    def on_permission_denied(self, outcome: PermissionDenied) -> None:
        """Called when a permission requirement is not met."""

    def on_cooldown_active(self, outcome: CooldownActive) -> None:
        """Called when the command is on cooldown."""

    def on_parse_failure(self, outcome: ParseFailure) -> None:
        """Called when an argument is missing or malformed."""

    def on_command_error(self, outcome: ExecutionFailure) -> None:
        """Called when the handler raised."""


# outcome type -> hook name, most specific first
OUTCOME_HOOKS: tuple[tuple[type[Outcome], str], ...] = (
    (Completed, "on_command_completed"),
    (PermissionDenied, "on_permission_denied"),
    (CooldownActive, "on_cooldown_active"),
    (ParseFailure, "on_parse_failure"),
    (ExecutionFailure, "on_command_error"),
)


def hook_for(outcome: Outcome) -> str:
    """
    Get the adapter hook name for an outcome.

    Args:
        outcome: Dispatch outcome

    Returns:
        Name of the CommandEventAdapter method to call
    """
    for outcome_type, hook in OUTCOME_HOOKS:
        if isinstance(outcome, outcome_type):
            return hook
    raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")
