"""
Help Command Module.

Builds the built-in help command, which lists registered commands or
describes a single one.
"""

from typing import Optional

from chatcmd.commands.base import CommandDefinition, ParameterSpec
from chatcmd.commands.registry import CommandRegistry
from chatcmd.context import InvocationContext
from chatcmd.parsing.types import ArgumentType

HELP_COMMAND_NAME = "help"
UNCATEGORIZED = "Uncategorized"


def format_parameter(param: ParameterSpec, show_type: bool = True) -> str:
    """
    Render one parameter for a usage line.

    Required parameters use angle brackets, optional ones square brackets.

    Args:
        param: The parameter
        show_type: Append ``:type`` to the name

    Returns:
        e.g. ``<user:member>`` or ``[reason...]``
    """
    label = param.name
    if show_type:
        label = f"{label}:{param.type}"
    if param.greedy:
        label = f"{label}..."
    return f"[{label}]" if param.optional else f"<{label}>"


def format_usage(command: CommandDefinition, prefix: str = "", show_types: bool = True) -> str:
    """Render ``prefix + name`` followed by every parameter."""
    parts = [f"{prefix}{command.name}"]
    parts.extend(format_parameter(param, show_types) for param in command.parameters)
    return " ".join(parts)


class HelpCommand:
    """Handler for the built-in help command."""

    def __init__(self, registry: CommandRegistry, show_parameter_types: bool = True):
        """
        Initialize help handler.

        Args:
            registry: Registry to describe
            show_parameter_types: Include parameter types in usage lines
        """
        self.registry = registry
        self.show_parameter_types = show_parameter_types

    def __call__(self, ctx: InvocationContext, query: Optional[str]) -> str:
        if query:
            return self.describe(ctx, query.strip())
        return self.overview(ctx)

    def _visible(self, ctx: InvocationContext, command: CommandDefinition) -> bool:
        return ctx.is_developer or not command.developer_only

    def overview(self, ctx: InvocationContext) -> str:
        """List visible commands grouped by category."""
        groups: dict[str, list[CommandDefinition]] = {}
        for command in self.registry:
            if self._visible(ctx, command):
                groups.setdefault(command.category or UNCATEGORIZED, []).append(command)

        lines = ["Commands:"]
        for category in sorted(groups):
            lines.append(f"{category}:")
            for command in sorted(groups[category], key=lambda c: c.name):
                lines.append(f"  {ctx.prefix}{command.name} - {command.description}")
        lines.append(f"Use {ctx.prefix}{HELP_COMMAND_NAME} <command> for details.")
        return "\n".join(lines)

    def describe(self, ctx: InvocationContext, name: str) -> str:
        """Describe one command, looked up by name or alias."""
        command = self.registry.resolve(name)
        if command is None or not self._visible(ctx, command):
            return f"Unknown command: {name}"

        lines = [
            f"{ctx.prefix}{command.name}: {command.description}",
            f"Usage: {format_usage(command, ctx.prefix, self.show_parameter_types)}",
        ]
        if command.aliases:
            lines.append(f"Aliases: {', '.join(command.aliases)}")
        if command.cooldown is not None:
            spec = command.cooldown
            lines.append(f"Cooldown: {spec.limit} per {spec.window:g}s ({spec.scope.value})")
        if command.user_permissions:
            lines.append(f"Requires: {', '.join(sorted(command.user_permissions))}")
        if command.guild_only:
            lines.append("Server only")
        return "\n".join(lines)


def build_help_command(
    registry: CommandRegistry, show_parameter_types: bool = True
) -> CommandDefinition:
    """
    Build the help command for a registry.

    Args:
        registry: Registry whose commands are described
        show_parameter_types: Include parameter types in usage lines

    Returns:
        A definition named "help" taking one optional greedy string
    """
    return CommandDefinition(
        name=HELP_COMMAND_NAME,
        handler=HelpCommand(registry, show_parameter_types),
        parameters=(
            ParameterSpec(name="command", type=ArgumentType.STRING, optional=True, greedy=True),
        ),
        description="Show available commands",
        category="Utility",
    )
