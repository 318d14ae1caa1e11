"""
Base Command Module.

Defines the immutable data describing a command: its parameters,
gating requirements and handler.
"""

from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_DESCRIPTION = "No description available"


class CooldownScope(str, Enum):
    """Granularity at which a cooldown is tracked."""

    CALLER = "caller"
    ORIGIN = "origin"
    GLOBAL = "global"


class CooldownSpec(BaseModel):
    """
    Rate limit attached to a command.

    Attributes:
        window: Window length in seconds
        limit: Invocations allowed per window
        scope: Which key the window is tracked under
    """

    model_config = ConfigDict(frozen=True)

    window: float = Field(..., gt=0)
    limit: int = Field(1, ge=1)
    scope: CooldownScope = CooldownScope.CALLER

    @property
    def window_ms(self) -> int:
        return int(self.window * 1000)


class ParameterSpec(BaseModel):
    """
    A single positional parameter of a command.

    Attributes:
        name: Human readable name, used in error messages and help output
        type: Parser type identifier (an ArgumentType or a custom string)
        optional: Whether the parameter may be omitted
        default: Value bound when an optional parameter is omitted
        greedy: Consume the remainder of the message instead of one token
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: str
    optional: bool = False
    default: Any = None
    greedy: bool = False

    @field_validator("type", mode="before")
    @classmethod
    def type_to_identifier(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    @property
    def required(self) -> bool:
        return not self.optional


class CommandDefinition(BaseModel):
    """
    Immutable description of a registered command.

    The handler is called as ``handler(ctx, *values)`` with one value per
    parameter, in declaration order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    handler: Callable[..., Any]
    aliases: tuple[str, ...] = ()
    parameters: tuple[ParameterSpec, ...] = ()
    description: str = DEFAULT_DESCRIPTION
    category: Optional[str] = None

    developer_only: bool = False
    guild_only: bool = False
    nsfw: bool = False
    user_permissions: frozenset[str] = frozenset()
    bot_permissions: frozenset[str] = frozenset()

    arg_delimiter: str = " "
    cooldown: Optional[CooldownSpec] = None

    @field_validator("name")
    @classmethod
    def name_has_no_whitespace(cls, value: str) -> str:
        if any(ch.isspace() for ch in value):
            raise ValueError("command name must not contain whitespace")
        return value

    @field_validator("aliases")
    @classmethod
    def aliases_are_words(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for alias in value:
            if not alias or any(ch.isspace() for ch in alias):
                raise ValueError(f"invalid alias: {alias!r}")
        if len(set(value)) != len(value):
            raise ValueError("aliases must be unique")
        return value

    @field_validator("arg_delimiter")
    @classmethod
    def delimiter_is_single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("arg_delimiter must be exactly one character")
        return value

    @model_validator(mode="after")
    def check_parameters(self) -> "CommandDefinition":
        if self.name in self.aliases:
            raise ValueError(f"alias '{self.name}' repeats the command name")

        names = [param.name for param in self.parameters]
        if len(set(names)) != len(names):
            raise ValueError("parameter names must be unique")

        for index, param in enumerate(self.parameters):
            if param.greedy and index != len(self.parameters) - 1:
                raise ValueError(f"greedy parameter '{param.name}' must be the last parameter")
        return self

    @property
    def triggers(self) -> tuple[str, ...]:
        """Name followed by every alias."""
        return (self.name, *self.aliases)
