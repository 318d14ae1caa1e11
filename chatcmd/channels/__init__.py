"""
Channels Module.

Platform gateways that feed messages into a Dispatcher.
"""

from chatcmd.channels.telegram import (
    ChatAdminCache,
    TelegramHandler,
    member_permissions,
    parse_telegram_id,
    to_chat_message,
)

__all__ = [
    "ChatAdminCache",
    "TelegramHandler",
    "member_permissions",
    "parse_telegram_id",
    "to_chat_message",
]
