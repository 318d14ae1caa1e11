"""
Cooldown Provider Module.

Selects the cooldown tracker named in settings.
"""

from typing import Optional

from loguru import logger

from chatcmd.config.settings import CooldownSettings, RedisSettings
from chatcmd.gating.cooldowns import (
    CooldownProvider,
    CooldownTracker,
    FixedWindowCooldownTracker,
    SlidingWindowCooldownTracker,
)
from chatcmd.gating.redis_cooldowns import RedisCooldownTracker

provider_log = logger.bind(module="Cooldown")


class DefaultCooldownProvider(CooldownProvider):
    """Builds the tracker for ``CooldownSettings.backend`` once, lazily."""

    def __init__(
        self,
        settings: Optional[CooldownSettings] = None,
        redis_settings: Optional[RedisSettings] = None,
    ):
        """
        Initialize provider.

        Args:
            settings: Cooldown settings (defaults to environment)
            redis_settings: Redis settings, used by the redis backend
        """
        self._settings = settings or CooldownSettings()
        self._redis_settings = redis_settings
        self._tracker: Optional[CooldownTracker] = None

    def provide(self) -> CooldownTracker:
        if self._tracker is None:
            self._tracker = self._build()
            provider_log.info(f"Using {self._settings.backend} cooldown tracker")
        return self._tracker

    def _build(self) -> CooldownTracker:
        backend = self._settings.backend
        if backend == "redis":
            return RedisCooldownTracker.from_settings(self._redis_settings or RedisSettings())
        if backend == "sliding":
            return SlidingWindowCooldownTracker()
        return FixedWindowCooldownTracker()
