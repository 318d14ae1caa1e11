"""
Application settings module.

Manages all configuration via environment variables using pydantic-settings.
"""

from functools import lru_cache
from typing import Literal
from urllib.parse import quote

from pydantic_settings import BaseSettings, SettingsConfigDict


class DispatcherSettings(BaseSettings):
    """Dispatch pipeline settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CHATCMD_", extra="ignore")

    prefixes: list[str] = ["!"]
    allow_mention_prefix: bool = True
    ignore_bots: bool = True
    owner_ids: set[int] = set()

    # inline: run handlers on the calling thread; pooled: worker threads
    execution_strategy: Literal["inline", "pooled"] = "inline"
    worker_count: int = 4


class HelpSettings(BaseSettings):
    """Default help command settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CHATCMD_HELP_", extra="ignore")

    enabled: bool = True
    show_parameter_types: bool = True


class CooldownSettings(BaseSettings):
    """Cooldown tracking settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="CHATCMD_COOLDOWN_", extra="ignore")

    backend: Literal["fixed", "sliding", "redis"] = "fixed"
    prune_interval_seconds: int = 60


class RedisSettings(BaseSettings):
    """Redis connection settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="REDIS_", extra="ignore")

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str = ""
    key_prefix: str = "chatcmd:cooldown"

    @property
    def url(self) -> str:
        """Generate Redis URL."""
        if self.password:
            return f"redis://:{quote(self.password, safe='')}@{self.host}:{self.port}/{self.db}"
        return f"redis://{self.host}:{self.port}/{self.db}"


class TelegramSettings(BaseSettings):
    """Telegram bot settings."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TELEGRAM_", extra="ignore")

    bot_token: str = ""


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    dispatcher: DispatcherSettings = DispatcherSettings()
    help: HelpSettings = HelpSettings()
    cooldown: CooldownSettings = CooldownSettings()
    redis: RedisSettings = RedisSettings()
    telegram: TelegramSettings = TelegramSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
