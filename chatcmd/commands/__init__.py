"""
Commands Module.

Command definitions, the command registry and the decorator front-end.
The built-in help command lives in ``chatcmd.commands.help``.
"""

from chatcmd.commands.base import (
    DEFAULT_DESCRIPTION,
    CommandDefinition,
    CooldownScope,
    CooldownSpec,
    ParameterSpec,
)
from chatcmd.commands.decorators import collect_commands, command
from chatcmd.commands.registry import CommandRegistry

__all__ = [
    "DEFAULT_DESCRIPTION",
    "CommandDefinition",
    "CommandRegistry",
    "CooldownScope",
    "CooldownSpec",
    "ParameterSpec",
    "collect_commands",
    "command",
]
