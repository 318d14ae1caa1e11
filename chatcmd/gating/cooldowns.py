"""
Cooldown Tracking Module.

Rate-limit state per (command, scope) key. The tracker is the only
structure mutated on the dispatch hot path, so every implementation
offers an atomic check-and-record (``acquire``).
"""

import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from chatcmd.commands.base import CooldownScope, CooldownSpec
from chatcmd.context import InvocationContext

cooldown_log = logger.bind(module="Cooldown")

Clock = Callable[[], float]


@dataclass(frozen=True)
class CooldownKey:
    """Identity of one rate-limit bucket."""

    command: str
    scope: CooldownScope
    scope_id: int = 0

    @classmethod
    def for_invocation(cls, ctx: InvocationContext, spec: CooldownSpec) -> "CooldownKey":
        """
        Build the key for an invocation under a cooldown spec.

        Args:
            ctx: Invocation being gated
            spec: Cooldown attached to the command

        Returns:
            Key scoped to the caller, the origin or the whole command
        """
        if spec.scope == CooldownScope.CALLER:
            scope_id = ctx.author_id
        elif spec.scope == CooldownScope.ORIGIN:
            scope_id = ctx.origin_id
        else:
            scope_id = 0
        return cls(ctx.command.name, spec.scope, scope_id)


@dataclass(frozen=True)
class CooldownDecision:
    """Result of a cooldown check."""

    allowed: bool
    remaining_ms: int = 0

    @classmethod
    def allow(cls) -> "CooldownDecision":
        return cls(True)

    @classmethod
    def deny(cls, remaining_ms: int) -> "CooldownDecision":
        # a denial always reports a positive wait
        return cls(False, max(1, remaining_ms))


class CooldownTracker(ABC):
    """
    Capability interface for cooldown policies.

    Swap the whole tracker to change policy (fixed window, sliding
    window, shared storage).
    """

    @abstractmethod
    def check(self, key: CooldownKey, spec: CooldownSpec) -> CooldownDecision:
        """Report whether an invocation would currently be allowed."""
        pass

    @abstractmethod
    def record(self, key: CooldownKey, spec: CooldownSpec) -> None:
        """Count one accepted invocation against the key."""
        pass

    @abstractmethod
    def acquire(self, key: CooldownKey, spec: CooldownSpec) -> CooldownDecision:
        """
        Atomically check and, when allowed, record an invocation.

        Two concurrent callers can never both be allowed the last slot.
        """
        pass

    @abstractmethod
    def release(self, key: CooldownKey, spec: CooldownSpec) -> None:
        """
        Undo the most recent record for the key.

        The dispatcher acquires a slot before binding arguments and
        releases it when binding fails. Between the two, a concurrent
        invocation on the same key may be refused even though the first
        one ends up not counting.
        """
        pass

    def prune(self) -> int:
        """
        Drop expired state.

        Returns:
            Number of entries removed
        """
        return 0

    def close(self) -> None:
        """Release connections held by the tracker."""
        pass


class CooldownProvider(ABC):
    """Supplies the tracker a dispatcher uses."""

    @abstractmethod
    def provide(self) -> CooldownTracker:
        pass


class StaticCooldownProvider(CooldownProvider):
    """Always provides the same tracker instance."""

    def __init__(self, tracker: CooldownTracker):
        self._tracker = tracker

    def provide(self) -> CooldownTracker:
        return self._tracker


@dataclass
class _Window:
    started_at: float
    expires_at: float
    count: int = 0


# Seconds between the opportunistic sweeps done inside acquire()
DEFAULT_SWEEP_INTERVAL = 1.0


class FixedWindowCooldownTracker(CooldownTracker):
    """
    In-memory fixed window per key.

    The window opens at the first recorded invocation and allows
    ``spec.limit`` invocations until it expires. Expired windows are
    swept from ``acquire`` at most once per ``sweep_interval``, so state
    stays bounded even without a prune scheduler.
    """

    def __init__(self, clock: Clock = time.monotonic, sweep_interval: float = DEFAULT_SWEEP_INTERVAL):
        """
        Initialize tracker.

        Args:
            clock: Time source in seconds
            sweep_interval: Minimum seconds between sweeps done by acquire
        """
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = float("-inf")
        self._lock = threading.Lock()
        self._windows: dict[CooldownKey, _Window] = {}

    def _live_window(self, key: CooldownKey, now: float) -> Optional[_Window]:
        window = self._windows.get(key)
        if window is not None and now >= window.expires_at:
            del self._windows[key]
            return None
        return window

    def _check(self, key: CooldownKey, spec: CooldownSpec, now: float) -> CooldownDecision:
        window = self._live_window(key, now)
        if window is None or window.count < spec.limit:
            return CooldownDecision.allow()
        return CooldownDecision.deny(int((window.expires_at - now) * 1000))

    def _record(self, key: CooldownKey, spec: CooldownSpec, now: float) -> None:
        window = self._live_window(key, now)
        if window is None:
            window = _Window(started_at=now, expires_at=now + spec.window)
            self._windows[key] = window
        window.count += 1

    def _sweep(self, now: float) -> int:
        expired = [key for key, window in self._windows.items() if now >= window.expires_at]
        for key in expired:
            del self._windows[key]
        self._next_sweep = now + self._sweep_interval
        return len(expired)

    def check(self, key: CooldownKey, spec: CooldownSpec) -> CooldownDecision:
        with self._lock:
            return self._check(key, spec, self._clock())

    def record(self, key: CooldownKey, spec: CooldownSpec) -> None:
        with self._lock:
            self._record(key, spec, self._clock())

    def acquire(self, key: CooldownKey, spec: CooldownSpec) -> CooldownDecision:
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)
            decision = self._check(key, spec, now)
            if decision.allowed:
                self._record(key, spec, now)
            return decision

    def release(self, key: CooldownKey, spec: CooldownSpec) -> None:
        with self._lock:
            window = self._windows.get(key)
            if window is None:
                return
            window.count -= 1
            if window.count <= 0:
                del self._windows[key]

    def prune(self) -> int:
        with self._lock:
            removed = self._sweep(self._clock())
        if removed:
            cooldown_log.debug(f"Pruned {removed} expired cooldown windows")
        return removed

    def __len__(self) -> int:
        return len(self._windows)


class SlidingWindowCooldownTracker(CooldownTracker):
    """
    In-memory sliding window per key.

    Keeps the timestamps of recent invocations; an invocation is allowed
    while fewer than ``spec.limit`` fall within the last ``spec.window``
    seconds. Keys are only created by recording, and idle keys are swept
    from ``acquire`` at most once per ``sweep_interval``.
    """

    def __init__(self, clock: Clock = time.monotonic, sweep_interval: float = DEFAULT_SWEEP_INTERVAL):
        """
        Initialize tracker.

        Args:
            clock: Time source in seconds
            sweep_interval: Minimum seconds between sweeps done by acquire
        """
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = float("-inf")
        self._lock = threading.Lock()
        self._stamps: dict[CooldownKey, deque[float]] = {}
        self._windows: dict[CooldownKey, float] = {}

    def _drop(self, key: CooldownKey) -> None:
        self._stamps.pop(key, None)
        self._windows.pop(key, None)

    def _live_stamps(self, key: CooldownKey, window: float, now: float) -> Optional[deque[float]]:
        stamps = self._stamps.get(key)
        if stamps is None:
            return None
        while stamps and now - stamps[0] >= window:
            stamps.popleft()
        if not stamps:
            self._drop(key)
            return None
        return stamps

    def _check(self, key: CooldownKey, spec: CooldownSpec, now: float) -> CooldownDecision:
        stamps = self._live_stamps(key, spec.window, now)
        if stamps is None or len(stamps) < spec.limit:
            return CooldownDecision.allow()
        # the slot frees up when the oldest stamp that still blocks expires
        blocking = stamps[len(stamps) - spec.limit]
        return CooldownDecision.deny(int((blocking + spec.window - now) * 1000))

    def _record(self, key: CooldownKey, spec: CooldownSpec, now: float) -> None:
        stamps = self._live_stamps(key, spec.window, now)
        if stamps is None:
            stamps = self._stamps[key] = deque()
        self._windows[key] = spec.window
        stamps.append(now)

    def _sweep(self, now: float) -> int:
        removed = 0
        for key in list(self._stamps):
            if self._live_stamps(key, self._windows.get(key, 0.0), now) is None:
                removed += 1
        self._next_sweep = now + self._sweep_interval
        return removed

    def check(self, key: CooldownKey, spec: CooldownSpec) -> CooldownDecision:
        with self._lock:
            return self._check(key, spec, self._clock())

    def record(self, key: CooldownKey, spec: CooldownSpec) -> None:
        with self._lock:
            self._record(key, spec, self._clock())

    def acquire(self, key: CooldownKey, spec: CooldownSpec) -> CooldownDecision:
        with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)
            decision = self._check(key, spec, now)
            if decision.allowed:
                self._record(key, spec, now)
            return decision

    def release(self, key: CooldownKey, spec: CooldownSpec) -> None:
        with self._lock:
            stamps = self._stamps.get(key)
            if stamps:
                stamps.pop()
            if not stamps:
                self._drop(key)

    def prune(self) -> int:
        with self._lock:
            removed = self._sweep(self._clock())
        if removed:
            cooldown_log.debug(f"Pruned {removed} idle sliding windows")
        return removed

    def __len__(self) -> int:
        return len(self._stamps)
