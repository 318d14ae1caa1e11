"""
Command Decorators Module.

A declarative front-end for building CommandDefinitions from plain
functions or methods.

    class Moderation:
        @command(aliases=["b"], parameters=[ParameterSpec(name="user", type="user")],
                 user_permissions={"ban_members"}, guild_only=True)
        def ban(self, ctx, user):
            ...

    registry.register_all(collect_commands(Moderation()))

Nothing is discovered implicitly: only the objects handed to
``collect_commands`` are scanned.
"""

import inspect
from typing import Any, Callable, Iterable, Optional

from pydantic import ValidationError

from chatcmd.commands.base import DEFAULT_DESCRIPTION, CommandDefinition, ParameterSpec
from chatcmd.errors import InvalidCommandError

COMMAND_ATTRIBUTE = "__chatcmd_command__"


def command(
    name: Optional[str] = None,
    *,
    aliases: Iterable[str] = (),
    parameters: Iterable[ParameterSpec] = (),
    description: str = DEFAULT_DESCRIPTION,
    **options: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Mark a function as a command handler.

    Args:
        name: Command name (defaults to the function name)
        aliases: Alternative names
        parameters: Parameter specs, in positional order
        description: Help text
        **options: Any other CommandDefinition field (cooldown, guild_only, ...)

    Returns:
        Decorator that records the metadata on the function
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        setattr(
            func,
            COMMAND_ATTRIBUTE,
            {
                "name": name or func.__name__,
                "aliases": tuple(aliases),
                "parameters": tuple(parameters),
                "description": description,
                **options,
            },
        )
        return func

    return decorator


def _definition(handler: Callable[..., Any], metadata: dict[str, Any]) -> CommandDefinition:
    try:
        return CommandDefinition(handler=handler, **metadata)
    except ValidationError as e:
        raise InvalidCommandError(f"Invalid command '{metadata.get('name')}': {e}") from e


def collect_commands(*sources: Any) -> list[CommandDefinition]:
    """
    Build definitions from decorated functions.

    Each source may be a decorated function, or an object/module whose
    decorated attributes are collected (bound, for instances).

    Args:
        *sources: Functions, instances or modules

    Returns:
        Definitions in source order, attributes sorted by name

    Raises:
        InvalidCommandError: If decorated metadata is invalid
    """
    definitions: list[CommandDefinition] = []
    for source in sources:
        metadata = getattr(source, COMMAND_ATTRIBUTE, None)
        if metadata is not None and callable(source):
            definitions.append(_definition(source, metadata))
            continue

        if inspect.isclass(source):
            raise InvalidCommandError(
                f"Pass an instance of {source.__name__}, not the class itself"
            )

        for attr_name in dir(source):
            static = inspect.getattr_static(source, attr_name, None)
            metadata = getattr(static, COMMAND_ATTRIBUTE, None)
            if metadata is None:
                continue
            definitions.append(_definition(getattr(source, attr_name), metadata))

    return definitions
