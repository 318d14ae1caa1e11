"""
Command Registry Module.

Central registry for all available commands.
"""

from typing import Iterable, Iterator, Optional

from loguru import logger

from chatcmd.commands.base import CommandDefinition
from chatcmd.errors import DuplicateCommandError

registry_log = logger.bind(module="CommandRegistry")


class CommandRegistry:
    """
    Maps command names and aliases to command definitions.

    Registration is expected to happen once at startup, before any
    dispatching begins. Lookups only read a plain dict and are safe to
    call from many threads afterwards.
    """

    def __init__(self):
        """Initialize an empty registry."""
        # trigger (name or alias) -> definition
        self._triggers: dict[str, CommandDefinition] = {}
        # name -> definition, in registration order
        self._commands: dict[str, CommandDefinition] = {}

    def register(self, command: CommandDefinition) -> None:
        """
        Register a command definition.

        Args:
            command: The definition to register

        Raises:
            DuplicateCommandError: If the name or any alias is already taken
        """
        for trigger in command.triggers:
            existing = self._triggers.get(trigger)
            if existing is not None:
                raise DuplicateCommandError(trigger, existing.name)

        for trigger in command.triggers:
            self._triggers[trigger] = command
        self._commands[command.name] = command

        registry_log.debug(f"Registered command: {command.name} (aliases: {list(command.aliases)})")

    def register_all(self, commands: Iterable[CommandDefinition]) -> None:
        """
        Register several definitions, stopping at the first collision.

        Args:
            commands: Definitions to register
        """
        for command in commands:
            self.register(command)
        registry_log.info(f"Registered {len(self._commands)} commands")

    def resolve(self, trigger: str) -> Optional[CommandDefinition]:
        """
        Get a command by name or alias.

        Args:
            trigger: Exact, case-sensitive command name or alias

        Returns:
            Command definition or None if not found
        """
        return self._triggers.get(trigger)

    def all(self) -> list[CommandDefinition]:
        """Return every command once, in registration order."""
        return list(self._commands.values())

    def __contains__(self, trigger: object) -> bool:
        return trigger in self._triggers

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(self.all())
