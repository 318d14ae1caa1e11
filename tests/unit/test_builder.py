"""
Unit tests for chatcmd/builder.py
"""

from unittest.mock import MagicMock

import pytest

from chatcmd.builder import DispatcherBuilder
from chatcmd.channels.telegram import parse_telegram_id
from chatcmd.commands.base import CommandDefinition, ParameterSpec
from chatcmd.commands.decorators import command
from chatcmd.config.settings import (
    CooldownSettings,
    DispatcherSettings,
    HelpSettings,
    Settings,
)
from chatcmd.dispatch.execution import InlineExecution, PooledExecution
from chatcmd.errors import DuplicateCommandError
from chatcmd.gating.cooldowns import FixedWindowCooldownTracker, SlidingWindowCooldownTracker
from chatcmd.outcomes import Completed
from chatcmd.parsing.parsers.entities import IdentityResolver
from chatcmd.parsing.prefix import PrefixProvider
from chatcmd.parsing.types import ArgumentType

pytest_plugins = ["tests.fixtures.commands"]


class Greetings:
    """Decorated command source."""

    @command(parameters=[ParameterSpec(name="name", type="string")])
    def hello(self, ctx, name):
        return f"hello {name}"


def result_of(dispatcher, message):
    return dispatcher.dispatch(message).result(timeout=5)


# ============================================================
# build tests
# ============================================================


class TestBuild:
    """Tests for DispatcherBuilder.build."""

    def test_defaults(self, ping_command):
        """A bare builder uses '!', inline execution and the help command."""
        dispatcher = DispatcherBuilder().add_commands(ping_command).build()

        assert isinstance(dispatcher.execution, InlineExecution)
        assert "help" in dispatcher.commands
        assert "ping" in dispatcher.commands
        assert isinstance(dispatcher.cooldowns, FixedWindowCooldownTracker)

    def test_prunes_by_default(self, ping_command):
        """A bare builder schedules cooldown pruning once started."""
        dispatcher = DispatcherBuilder().add_commands(ping_command).build()

        with dispatcher:
            assert dispatcher._pruner is not None
            assert dispatcher._pruner.running is True

    def test_help_disabled(self, ping_command):
        """The help command can be turned off."""
        dispatcher = DispatcherBuilder().add_commands(ping_command).configure_help(False).build()

        assert "help" not in dispatcher.commands

    def test_help_works_without_default_parsers(self, ping_command, make_message):
        """Help still parses its argument when defaults are not registered."""
        dispatcher = DispatcherBuilder().add_commands(ping_command).build()

        outcome = result_of(dispatcher, make_message("!help ping"))

        assert isinstance(outcome, Completed)
        assert "Usage: !ping" in outcome.result

    def test_custom_help_command_kept(self, make_message):
        """A user supplied help command replaces the built-in one."""
        custom = CommandDefinition(name="help", handler=lambda ctx: "custom help")
        dispatcher = DispatcherBuilder().add_commands(custom).build()

        assert result_of(dispatcher, make_message("!help")).result == "custom help"

    def test_duplicate_commands(self, ping_command):
        """Colliding commands fail at build time."""
        builder = DispatcherBuilder().add_commands(
            ping_command, CommandDefinition(name="p", handler=lambda ctx: None)
        )

        with pytest.raises(DuplicateCommandError):
            builder.build()

    def test_prefixes_and_mention(self, ping_command, make_message):
        """Configured prefixes are used; mentions can be disabled."""
        dispatcher = (
            DispatcherBuilder()
            .set_prefixes(">", "bot ")
            .set_allow_mention_prefix(False)
            .add_commands(ping_command)
            .build()
        )

        assert result_of(dispatcher, make_message("bot ping")).result == "pong"
        assert dispatcher.dispatch(make_message("!ping")) is None
        assert dispatcher.dispatch(make_message(f"<@{make_message().self_id}> ping")) is None

    def test_custom_prefix_provider(self, ping_command, make_message):
        """A prefix provider overrides literal prefixes."""
        provider = MagicMock(spec=PrefixProvider)
        provider.provide.return_value = ["$"]
        dispatcher = DispatcherBuilder().set_prefix_provider(provider).add_commands(ping_command).build()

        assert result_of(dispatcher, make_message("$ping")).result == "pong"

    def test_owner_ids_from_strings(self):
        """Owner ids given as strings are converted."""
        dispatcher = DispatcherBuilder().set_owner_ids("42", 7).build()

        assert dispatcher.owner_ids == frozenset({42, 7})

    def test_pooled(self):
        """set_pooled builds a worker pool."""
        dispatcher = DispatcherBuilder().set_pooled(3).build()
        try:
            assert isinstance(dispatcher.execution, PooledExecution)
            assert dispatcher.execution.max_workers == 3
        finally:
            dispatcher.close()

    def test_pooled_rejects_zero(self):
        """A pool needs at least one worker."""
        with pytest.raises(ValueError):
            DispatcherBuilder().set_pooled(0)


# ============================================================
# Parser configuration tests
# ============================================================


class TestParsers:
    """Tests for parser registration through the builder."""

    def test_default_parsers(self, add_command, make_message):
        """Built-in parsers are registered on request."""
        dispatcher = DispatcherBuilder().register_default_parsers().add_commands(add_command).build()

        assert result_of(dispatcher, make_message("!add 1 2")).result == 3

    def test_custom_parser_wins(self, add_command, make_message):
        """Custom parsers replace built-ins of the same type."""
        dispatcher = (
            DispatcherBuilder()
            .register_default_parsers()
            .add_custom_parser(ArgumentType.INTEGER, lambda ctx, token: len(token))
            .add_commands(add_command)
            .build()
        )

        assert result_of(dispatcher, make_message("!add abc de")).result == 5

    def test_identity_resolver(self):
        """A resolver enables entity parsers."""
        resolver = MagicMock(spec=IdentityResolver)
        dispatcher = DispatcherBuilder().register_default_parsers(resolver).build()

        assert ArgumentType.MEMBER in dispatcher.parsers

    def test_id_parser(self):
        """A platform id parser replaces the snowflake parser."""
        dispatcher = (
            DispatcherBuilder().register_default_parsers().set_id_parser(parse_telegram_id).build()
        )

        assert dispatcher.parsers.get(ArgumentType.SNOWFLAKE) is parse_telegram_id

    def test_command_sources(self, make_message):
        """Decorated commands are collected from sources."""
        dispatcher = (
            DispatcherBuilder()
            .register_default_parsers()
            .add_command_sources(Greetings())
            .build()
        )

        assert result_of(dispatcher, make_message("!hello world")).result == "hello world"


# ============================================================
# from_settings tests
# ============================================================


class TestFromSettings:
    """Tests for DispatcherBuilder.from_settings."""

    def test_applies_settings(self, make_message, ping_command):
        """Settings drive prefixes, owners, help and cooldown backend."""
        settings = Settings(
            dispatcher=DispatcherSettings(prefixes=["?"], owner_ids={99}, ignore_bots=False),
            help=HelpSettings(enabled=False),
            cooldown=CooldownSettings(backend="sliding"),
        )

        dispatcher = DispatcherBuilder.from_settings(settings).add_commands(ping_command).build()

        assert "help" not in dispatcher.commands
        assert dispatcher.owner_ids == frozenset({99})
        assert dispatcher.ignore_bots is False
        assert isinstance(dispatcher.cooldowns, SlidingWindowCooldownTracker)
        assert result_of(dispatcher, make_message("?ping")).result == "pong"
        assert ArgumentType.URL in dispatcher.parsers

    def test_pooled_from_settings(self):
        """The pooled strategy uses the configured worker count."""
        settings = Settings(
            dispatcher=DispatcherSettings(execution_strategy="pooled", worker_count=2),
        )

        dispatcher = DispatcherBuilder.from_settings(settings).build()
        try:
            assert dispatcher.execution.max_workers == 2
        finally:
            dispatcher.close()
