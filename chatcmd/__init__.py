"""
chatcmd.

Routes chat messages to command handlers with typed arguments,
permission checks and cooldowns.
"""

from chatcmd.builder import DispatcherBuilder
from chatcmd.commands.base import CommandDefinition, CooldownScope, CooldownSpec, ParameterSpec
from chatcmd.commands.decorators import collect_commands, command
from chatcmd.commands.help import build_help_command
from chatcmd.commands.registry import CommandRegistry
from chatcmd.context import ChatMessage, InvocationContext
from chatcmd.dispatch.dispatcher import Dispatcher
from chatcmd.dispatch.hooks import CommandEventAdapter
from chatcmd.errors import ChatCommandError, DuplicateCommandError, InvalidCommandError
from chatcmd.outcomes import (
    Completed,
    CooldownActive,
    ExecutionFailure,
    InvalidFormat,
    MissingArgument,
    Outcome,
    ParseFailure,
    PermissionDenied,
)
from chatcmd.parsing.types import ArgumentType

__version__ = "0.1.0"

__all__ = [
    "ArgumentType",
    "ChatCommandError",
    "ChatMessage",
    "CommandDefinition",
    "CommandEventAdapter",
    "CommandRegistry",
    "Completed",
    "CooldownActive",
    "CooldownScope",
    "CooldownSpec",
    "Dispatcher",
    "DispatcherBuilder",
    "DuplicateCommandError",
    "ExecutionFailure",
    "InvalidCommandError",
    "InvalidFormat",
    "InvocationContext",
    "MissingArgument",
    "Outcome",
    "ParameterSpec",
    "ParseFailure",
    "PermissionDenied",
    "build_help_command",
    "collect_commands",
    "command",
]
