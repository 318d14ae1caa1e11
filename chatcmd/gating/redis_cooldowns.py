"""
Redis Cooldown Module.

Fixed-window cooldowns stored in Redis, so several dispatcher processes
share one rate limit. Expiry is handled by Redis TTLs.
"""

import redis
from loguru import logger

from chatcmd.commands.base import CooldownSpec
from chatcmd.config.settings import RedisSettings
from chatcmd.gating.cooldowns import CooldownDecision, CooldownKey, CooldownTracker

redis_log = logger.bind(module="Redis")

# KEYS[1] = bucket key, ARGV[1] = limit, ARGV[2] = window in ms
ACQUIRE_SCRIPT = """
local count = redis.call('INCR', KEYS[1])
local ttl = redis.call('PTTL', KEYS[1])
if ttl < 0 then
    redis.call('PEXPIRE', KEYS[1], ARGV[2])
    ttl = tonumber(ARGV[2])
end
if count > tonumber(ARGV[1]) then
    redis.call('DECR', KEYS[1])
    return {0, ttl}
end
return {1, ttl}
"""

RELEASE_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return redis.call('DECR', KEYS[1])
end
return 0
"""


class RedisCooldownTracker(CooldownTracker):
    """
    Cooldown tracker backed by Redis.

    ``acquire`` runs as a single Lua script, which Redis executes
    atomically. When Redis is unreachable the tracker fails open and
    allows the invocation.
    """

    def __init__(self, client: redis.Redis, key_prefix: str = "chatcmd:cooldown"):
        """
        Initialize tracker.

        Args:
            client: Redis client (sync)
            key_prefix: Prefix for every bucket key
        """
        self._client = client
        self._key_prefix = key_prefix
        self._acquire = client.register_script(ACQUIRE_SCRIPT)
        self._release = client.register_script(RELEASE_SCRIPT)

    @classmethod
    def from_settings(cls, settings: RedisSettings) -> "RedisCooldownTracker":
        """
        Create a tracker from Redis settings.

        Args:
            settings: Connection settings

        Returns:
            RedisCooldownTracker instance
        """
        redis_log.info(f"Connecting to Redis at {settings.host}:{settings.port}")
        client = redis.Redis.from_url(settings.url, decode_responses=True)
        return cls(client, key_prefix=settings.key_prefix)

    # ========== Key Generators ==========

    def _bucket_key(self, key: CooldownKey) -> str:
        """Generate key for a cooldown bucket."""
        return f"{self._key_prefix}:{key.command}:{key.scope.value}:{key.scope_id}"

    # ========== Tracker Operations ==========

    def check(self, key: CooldownKey, spec: CooldownSpec) -> CooldownDecision:
        bucket = self._bucket_key(key)
        try:
            pipe = self._client.pipeline()
            pipe.get(bucket)
            pipe.pttl(bucket)
            count, ttl = pipe.execute()
        except redis.RedisError as e:
            redis_log.warning(f"Cooldown check failed for {bucket}: {e}")
            return CooldownDecision.allow()

        if count is None or int(count) < spec.limit:
            return CooldownDecision.allow()
        return CooldownDecision.deny(int(ttl))

    def record(self, key: CooldownKey, spec: CooldownSpec) -> None:
        bucket = self._bucket_key(key)
        try:
            pipe = self._client.pipeline()
            pipe.incr(bucket)
            pipe.pexpire(bucket, spec.window_ms, nx=True)
            pipe.execute()
        except redis.RedisError as e:
            redis_log.warning(f"Cooldown record failed for {bucket}: {e}")

    def acquire(self, key: CooldownKey, spec: CooldownSpec) -> CooldownDecision:
        bucket = self._bucket_key(key)
        try:
            allowed, ttl = self._acquire(keys=[bucket], args=[spec.limit, spec.window_ms])
        except redis.RedisError as e:
            redis_log.warning(f"Cooldown acquire failed for {bucket}: {e}")
            return CooldownDecision.allow()

        if int(allowed) == 1:
            return CooldownDecision.allow()
        return CooldownDecision.deny(int(ttl))

    def release(self, key: CooldownKey, spec: CooldownSpec) -> None:
        bucket = self._bucket_key(key)
        try:
            self._release(keys=[bucket])
        except redis.RedisError as e:
            redis_log.warning(f"Cooldown release failed for {bucket}: {e}")

    def close(self) -> None:
        """Close the Redis connection."""
        self._client.close()
        redis_log.info("Redis connection closed")
