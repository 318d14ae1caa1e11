"""
Argument binding.

Binds the tokens of an invocation to the command's parameters,
positionally and left to right.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

from chatcmd.commands.base import ParameterSpec
from chatcmd.context import InvocationContext
from chatcmd.outcomes import InvalidFormat, MissingArgument, ParseFailure
from chatcmd.parsing.registry import ArgumentParserRegistry
from chatcmd.parsing.tokenizer import split_remainder


@dataclass
class ParsedArguments:
    """Values bound to a command's parameters, in declaration order."""

    parameters: tuple[ParameterSpec, ...] = ()
    values: list[Any] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        """Map parameter names to bound values."""
        return {param.name: value for param, value in zip(self.parameters, self.values)}

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


def bind_arguments(
    ctx: InvocationContext,
    parsers: ArgumentParserRegistry,
) -> Union[ParsedArguments, ParseFailure]:
    """
    Convert the invocation's tokens into parameter values.

    Binding rules:
    - an optional parameter is skipped (its default bound, no token
      consumed) when the remaining tokens are needed by the required
      parameters after it, or when its token does not convert
    - a greedy last parameter receives the raw rest of the message
    - extra trailing tokens are ignored
    - binding stops at the first failing required parameter

    Args:
        ctx: Invocation with ``command``, ``args`` and ``arg_text`` set
        parsers: Registry used to convert tokens

    Returns:
        ParsedArguments on success, otherwise MissingArgument or InvalidFormat
    """
    command = ctx.command
    params = command.parameters
    tokens = ctx.args
    parsed = ParsedArguments(parameters=params)
    index = 0

    for position, param in enumerate(params):
        remaining = len(tokens) - index

        if remaining <= 0:
            if param.optional:
                parsed.values.append(param.default)
                continue
            return MissingArgument(ctx, param)

        if param.greedy:
            token = split_remainder(ctx.arg_text, command.arg_delimiter, skip=index)
            consumed = remaining
        else:
            if param.optional:
                required_after = sum(1 for later in params[position + 1:] if later.required)
                if remaining <= required_after:
                    parsed.values.append(param.default)
                    continue
            token = tokens[index]
            consumed = 1

        result = parsers.parse(param.type, ctx, token)
        if result.ok:
            parsed.values.append(result.value)
            index += consumed
        elif param.optional:
            parsed.values.append(param.default)
        else:
            return InvalidFormat(ctx, param, token, result.error)

    return parsed
