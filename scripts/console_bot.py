#!/usr/bin/env python3
"""
Console bot for trying out commands locally.

Every line read from stdin is dispatched as a message from a fixed user.

Usage:
    python scripts/console_bot.py
    python scripts/console_bot.py --guild 42 --developer
"""

import argparse
import random
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chatcmd import ChatMessage, CooldownSpec, ParameterSpec, command
from chatcmd.builder import DispatcherBuilder
from chatcmd.config import get_settings
from chatcmd.middleware import LoggingEventAdapter, configure_logging

CONSOLE_USER_ID = 100000000000000001
CONSOLE_CHANNEL_ID = 200000000000000002


class DemoCommands:
    """A few commands to poke at."""

    @command(description="Check that the bot is alive", category="General")
    def ping(self, ctx):
        return "pong"

    @command(
        aliases=["say"],
        parameters=[ParameterSpec(name="text", type="string", greedy=True)],
        description="Repeat the given text",
        category="General",
    )
    def echo(self, ctx, text):
        return text

    @command(
        parameters=[
            ParameterSpec(name="a", type="integer"),
            ParameterSpec(name="b", type="integer", optional=True, default=0),
        ],
        description="Add two numbers",
        category="Math",
    )
    def add(self, ctx, a, b):
        return str(a + b)

    @command(
        parameters=[ParameterSpec(name="sides", type="integer", optional=True, default=6)],
        description="Roll a die",
        category="Fun",
        cooldown=CooldownSpec(window=5),
    )
    def roll(self, ctx, sides):
        return str(random.randint(1, max(sides, 1)))

    @command(description="Only for developers", category="Admin", developer_only=True)
    def shutdown(self, ctx):
        return "Not really shutting down."


def main(guild_id: int | None, developer: bool) -> None:
    """Run the console loop."""
    settings = get_settings()
    configure_logging(settings.log_level)

    builder = DispatcherBuilder.from_settings(settings).add_command_sources(DemoCommands())
    if developer:
        builder.set_owner_ids(CONSOLE_USER_ID)
    if settings.log_level == "DEBUG":
        builder.add_event_adapters(LoggingEventAdapter())

    prefix = settings.dispatcher.prefixes[0] if settings.dispatcher.prefixes else ""
    print(f"Type commands (e.g. {prefix}help). Ctrl-D to quit.")

    with builder.build() as dispatcher:
        for line in sys.stdin:
            message = ChatMessage(
                content=line.rstrip("\n"),
                author_id=CONSOLE_USER_ID,
                channel_id=CONSOLE_CHANNEL_ID,
                guild_id=guild_id,
            )
            future = dispatcher.dispatch(message)
            if future is None:
                continue
            text = future.result().describe()
            if text:
                print(text)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Dispatch stdin lines as chat messages")
    parser.add_argument("--guild", type=int, default=None, help="Pretend to be in this guild")
    parser.add_argument("--developer", action="store_true", help="Run as a developer")
    args = parser.parse_args()

    main(args.guild, args.developer)
