#!/usr/bin/env python3
"""
Run a polling Telegram bot backed by the dispatcher.

Usage:
    TELEGRAM_BOT_TOKEN=... CHATCMD_PREFIXES='["/"]' python scripts/telegram_bot.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from telegram.ext import Application

from chatcmd.builder import DispatcherBuilder
from chatcmd.channels.telegram import TelegramHandler, parse_telegram_id
from chatcmd.config import get_settings
from chatcmd.middleware import LoggingEventAdapter, configure_logging

sys.path.insert(0, str(Path(__file__).parent))

from console_bot import DemoCommands  # noqa: E402


def main() -> None:
    """Start polling until interrupted."""
    settings = get_settings()
    configure_logging(settings.log_level)

    if not settings.telegram.bot_token:
        logger.error("TELEGRAM_BOT_TOKEN not set")
        sys.exit(1)

    # handlers must not block the bot's event loop
    dispatcher = (
        DispatcherBuilder.from_settings(settings)
        .add_command_sources(DemoCommands())
        .add_event_adapters(LoggingEventAdapter())
        .set_pooled(settings.dispatcher.worker_count)
        .set_id_parser(parse_telegram_id)
        .build()
    )

    async def post_init(app: Application) -> None:
        me = await app.bot.get_me()
        TelegramHandler(dispatcher, app.bot, bot_id=me.id, bot_username=me.username).attach(app)

    application = (
        Application.builder().token(settings.telegram.bot_token).post_init(post_init).build()
    )

    with dispatcher:
        application.run_polling()


if __name__ == "__main__":
    main()
