"""
Gating Module.

Permission and cooldown checks that run before argument parsing.
"""

from chatcmd.gating.cooldowns import (
    CooldownDecision,
    CooldownKey,
    CooldownProvider,
    CooldownTracker,
    FixedWindowCooldownTracker,
    SlidingWindowCooldownTracker,
    StaticCooldownProvider,
)
from chatcmd.gating.permissions import DenialReason, PermissionDenial, PermissionGate
from chatcmd.gating.providers import DefaultCooldownProvider
from chatcmd.gating.redis_cooldowns import RedisCooldownTracker

__all__ = [
    "CooldownDecision",
    "CooldownKey",
    "CooldownProvider",
    "CooldownTracker",
    "DefaultCooldownProvider",
    "DenialReason",
    "FixedWindowCooldownTracker",
    "PermissionDenial",
    "PermissionGate",
    "RedisCooldownTracker",
    "SlidingWindowCooldownTracker",
    "StaticCooldownProvider",
]
