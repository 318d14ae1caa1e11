"""
Unit tests for chatcmd/commands/decorators.py
"""

import pytest

from chatcmd.commands.base import CooldownSpec, ParameterSpec
from chatcmd.commands.decorators import COMMAND_ATTRIBUTE, collect_commands, command
from chatcmd.errors import InvalidCommandError


class Moderation:
    """Sample command holder."""

    def __init__(self):
        self.kicked = []

    @command(
        aliases=["k"],
        parameters=[ParameterSpec(name="user", type="snowflake")],
        description="Kick a user",
        guild_only=True,
        user_permissions={"kick_members"},
    )
    def kick(self, ctx, user):
        self.kicked.append(user)
        return "kicked"

    @command(name="timeout", cooldown=CooldownSpec(window=10))
    def mute(self, ctx):
        return "muted"

    def helper(self):
        return "not a command"

    @property
    def broken(self):
        raise RuntimeError("properties are never evaluated")


@command(description="Standalone")
def ping(ctx):
    return "pong"


# ============================================================
# command decorator tests
# ============================================================


class TestCommandDecorator:
    """Tests for the command decorator."""

    def test_records_metadata(self):
        """The decorator stores metadata and returns the function."""
        metadata = getattr(ping, COMMAND_ATTRIBUTE)

        assert metadata["name"] == "ping"
        assert metadata["description"] == "Standalone"
        assert ping(None) == "pong"

    def test_explicit_name(self):
        """An explicit name overrides the function name."""
        assert getattr(Moderation.mute, COMMAND_ATTRIBUTE)["name"] == "timeout"


# ============================================================
# collect_commands tests
# ============================================================


class TestCollectCommands:
    """Tests for collect_commands function."""

    def test_collects_from_instance(self):
        """Decorated methods become definitions with bound handlers."""
        moderation = Moderation()

        definitions = collect_commands(moderation)

        assert [d.name for d in definitions] == ["kick", "timeout"]
        kick = definitions[0]
        assert kick.aliases == ("k",)
        assert kick.guild_only is True
        assert kick.user_permissions == frozenset({"kick_members"})
        assert kick.handler(None, 42) == "kicked"
        assert moderation.kicked == [42]

    def test_cooldown_option(self):
        """Extra options are passed through to the definition."""
        definitions = collect_commands(Moderation())

        assert definitions[1].cooldown == CooldownSpec(window=10)

    def test_collects_function(self):
        """A decorated function can be passed directly."""
        definitions = collect_commands(ping)

        assert len(definitions) == 1
        assert definitions[0].handler is ping

    def test_rejects_classes(self):
        """Classes must be instantiated first."""
        with pytest.raises(InvalidCommandError):
            collect_commands(Moderation)

    def test_invalid_metadata(self):
        """Invalid metadata raises InvalidCommandError."""

        @command(name="bad name")
        def bad(ctx):
            return None

        with pytest.raises(InvalidCommandError) as exc_info:
            collect_commands(bad)

        assert "bad name" in str(exc_info.value)

    def test_object_without_commands(self):
        """Objects without decorated members yield nothing."""
        assert collect_commands(object()) == []
