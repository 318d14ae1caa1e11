"""
Error Module.

Exceptions raised while configuring the command system.

Runtime problems (denied permissions, cooldowns, bad arguments, failing
handlers) are never raised out of the dispatcher; they are reported as
outcomes instead. Only startup-time configuration mistakes raise.
"""


class ChatCommandError(Exception):
    """Base class for command system configuration errors."""


class DuplicateCommandError(ChatCommandError, ValueError):
    """A command name or alias is already registered."""

    def __init__(self, trigger: str, existing: str):
        """
        Initialize error.

        Args:
            trigger: The colliding name or alias
            existing: Name of the command that already owns the trigger
        """
        super().__init__(
            f"Command trigger collision: '{trigger}' is already registered to '{existing}'"
        )
        self.trigger = trigger
        self.existing = existing


class InvalidCommandError(ChatCommandError):
    """A decorated object cannot be turned into a command definition."""
