"""In-memory sliding-window rate limiter for public lead submissions."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from threading import Lock

FIFTEEN_MINUTES_MS = 15 * 60 * 1000


@dataclass(frozen=True, slots=True)
class RateLimitPolicy:
    """Fixed cap of ``max_requests`` per trailing ``window_ms``."""

    max_requests: int
    window_ms: float


IP_POLICY = RateLimitPolicy(max_requests=10, window_ms=FIFTEEN_MINUTES_MS)
IP_SITE_POLICY = RateLimitPolicy(max_requests=5, window_ms=FIFTEEN_MINUTES_MS)


@dataclass(frozen=True, slots=True)
class RateLimitVerdict:
    allowed: bool


def _now_ms() -> float:
    return time.time() * 1000


def _live(timestamps: deque[float], cutoff: float) -> deque[float]:
    return deque(t for t in timestamps if t > cutoff)


class SlidingWindowLimiter:
    """Per-key sliding-window limiter keyed by opaque strings.

    Each key keeps the epoch-millisecond timestamps of its admitted requests.
    A timestamp counts only while it is strictly newer than ``now - window_ms``.
    Rejected calls are never recorded, so retrying at capacity does not
    consume a slot.

    Fully expired keys are dropped by a sweep that runs after every
    ``sweep_every``-th call; there is no timer or background thread.

    Degenerate configurations are not rejected:

    * ``max_requests <= 0`` rejects every call and stores nothing.
    * ``window_ms <= 0`` expires every timestamp at or before ``now``, so
      every call is admitted while ``max_requests >= 1``.
    """

    def __init__(self, max_requests: int, window_ms: float, *, sweep_every: int = 1) -> None:
        self._max_requests = max_requests
        self._window_ms = window_ms
        self._sweep_every = sweep_every
        self._windows: dict[str, deque[float]] = {}
        self._calls = 0
        self._lock = Lock()

    @classmethod
    def from_policy(cls, policy: RateLimitPolicy, **kwargs) -> "SlidingWindowLimiter":
        return cls(policy.max_requests, policy.window_ms, **kwargs)

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_ms(self) -> float:
        return self._window_ms

    def check(self, key: str, now: float | None = None) -> RateLimitVerdict:
        """Admit and record one request for ``key`` unless it is at capacity."""
        if now is None:
            now = _now_ms()
        cutoff = now - self._window_ms

        with self._lock:
            self._calls += 1
            timestamps = self._windows.get(key)
            if timestamps is None:
                timestamps = deque()
            else:
                # callers may pass an earlier `now`, so order is not guaranteed
                timestamps = _live(timestamps, cutoff)

            if len(timestamps) >= self._max_requests:
                if timestamps:
                    self._windows[key] = timestamps
                else:
                    self._windows.pop(key, None)
                allowed = False
            else:
                timestamps.append(now)
                self._windows[key] = timestamps
                allowed = True

            if self._sweep_every > 0 and self._calls % self._sweep_every == 0:
                self._sweep(cutoff)

        return RateLimitVerdict(allowed=allowed)

    def _sweep(self, cutoff: float) -> None:
        for key in list(self._windows):
            timestamps = _live(self._windows[key], cutoff)
            if timestamps:
                self._windows[key] = timestamps
            else:
                del self._windows[key]

    def tracked_keys(self) -> list[str]:
        with self._lock:
            return list(self._windows)

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)

    def __repr__(self) -> str:
        return (
            f"<SlidingWindowLimiter max_requests={self._max_requests} "
            f"window_ms={self._window_ms}>"
        )
