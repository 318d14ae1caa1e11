"""
Command definition fixtures for dispatcher and registry tests.
"""

import pytest

from chatcmd.commands.base import CommandDefinition, CooldownScope, CooldownSpec, ParameterSpec
from chatcmd.parsing.types import ArgumentType


class Recorder:
    """Handler that records every call."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, ctx, *args):
        self.calls.append((ctx, args))
        return self.result


@pytest.fixture
def recorder():
    """A recording handler returning None."""
    return Recorder()


@pytest.fixture
def ping_command():
    """Parameterless command with an alias."""
    return CommandDefinition(
        name="ping",
        aliases=("p",),
        handler=Recorder("pong"),
        description="Check latency",
        category="General",
    )


@pytest.fixture
def add_command():
    """Two integers, the second optional with default 0."""
    return CommandDefinition(
        name="add",
        handler=lambda ctx, a, b: a + b,
        parameters=(
            ParameterSpec(name="a", type=ArgumentType.INTEGER),
            ParameterSpec(name="b", type=ArgumentType.INTEGER, optional=True, default=0),
        ),
    )


@pytest.fixture
def echo_command():
    """Greedy string command."""
    return CommandDefinition(
        name="echo",
        aliases=("say",),
        handler=lambda ctx, text: text,
        parameters=(ParameterSpec(name="text", type=ArgumentType.STRING, greedy=True),),
    )


@pytest.fixture
def ban_command():
    """Guild-only command requiring ban permissions."""
    return CommandDefinition(
        name="ban",
        handler=Recorder("banned"),
        parameters=(ParameterSpec(name="target", type=ArgumentType.SNOWFLAKE),),
        guild_only=True,
        user_permissions=frozenset({"ban_members"}),
        bot_permissions=frozenset({"ban_members"}),
    )


@pytest.fixture
def cooldown_command():
    """One use per caller per five seconds."""
    return CommandDefinition(
        name="daily",
        handler=Recorder("claimed"),
        parameters=(ParameterSpec(name="amount", type=ArgumentType.INTEGER, optional=True, default=1),),
        cooldown=CooldownSpec(window=5, limit=1, scope=CooldownScope.CALLER),
    )
