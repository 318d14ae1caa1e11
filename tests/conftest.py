"""
Shared pytest fixtures for all tests.
"""

import pytest

from chatcmd.commands.base import CommandDefinition
from chatcmd.context import ChatMessage, InvocationContext
from chatcmd.parsing.parsers import register_default_parsers
from chatcmd.parsing.registry import ArgumentParserRegistry
from chatcmd.parsing.tokenizer import tokenize
from tests.fixtures.messages import AUTHOR_ID, BOT_ID, CHANNEL_ID, GUILD_ID, FakeClock


def noop_handler(ctx, *args):
    return None


# ============================================================
# Message Fixtures
# ============================================================


@pytest.fixture
def make_message():
    """Factory for ChatMessage with guild defaults."""

    def _make(content: str = "!ping", **overrides) -> ChatMessage:
        fields = {
            "content": content,
            "author_id": AUTHOR_ID,
            "channel_id": CHANNEL_ID,
            "guild_id": GUILD_ID,
            "self_id": BOT_ID,
        }
        fields.update(overrides)
        return ChatMessage(**fields)

    return _make


@pytest.fixture
def make_context(make_message):
    """Factory for InvocationContext of a command and raw argument text."""

    def _make(
        command: CommandDefinition | None = None,
        arg_text: str = "",
        is_developer: bool = False,
        **message_overrides,
    ) -> InvocationContext:
        command = command or CommandDefinition(name="test", handler=noop_handler)
        message = make_message(f"!{command.name} {arg_text}".rstrip(), **message_overrides)
        return InvocationContext(
            message=message,
            prefix="!",
            invoked_with=command.name,
            command=command,
            args=tokenize(arg_text, command.arg_delimiter),
            arg_text=arg_text,
            is_developer=is_developer,
        )

    return _make


# ============================================================
# Parser Fixtures
# ============================================================


@pytest.fixture
def parsers() -> ArgumentParserRegistry:
    """Registry with every built-in parser except entity lookups."""
    return register_default_parsers(ArgumentParserRegistry())


# ============================================================
# Clock Fixtures
# ============================================================


@pytest.fixture
def clock() -> FakeClock:
    """A fake monotonic clock."""
    return FakeClock()
