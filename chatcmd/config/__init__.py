"""
Configuration Module.

Environment-driven settings for the command system.
"""

from chatcmd.config.settings import (
    CooldownSettings,
    DispatcherSettings,
    HelpSettings,
    RedisSettings,
    Settings,
    TelegramSettings,
    get_settings,
)

__all__ = [
    "CooldownSettings",
    "DispatcherSettings",
    "HelpSettings",
    "RedisSettings",
    "Settings",
    "TelegramSettings",
    "get_settings",
]
