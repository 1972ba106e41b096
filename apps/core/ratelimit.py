"""
Fixed-window rate limiting

Counters are kept per (limit name, client identifier) so that named limits
never share a window. Expired entries are swept lazily, at most once per
cleanup interval.
"""
import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

CLEANUP_INTERVAL_SECONDS = 10 * 60


@dataclass(frozen=True)
class RateLimitRule:
    """A named limit: at most `limit` requests per `window_seconds`."""
    limit: int
    window_seconds: int
    message: str = "Too many requests. Please try again later."

    @classmethod
    def from_config(cls, config: Dict) -> "RateLimitRule":
        return cls(
            limit=int(config['limit']),
            window_seconds=int(config['window_seconds']),
            message=config.get('message') or cls.message,
        )


@dataclass
class RateLimitEntry:
    count: int
    reset_time: float


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single hit against the limiter."""
    allowed: bool
    limit: int
    remaining: int
    reset_time: float
    retry_after: int
    message: str


class FixedWindowRateLimiter:
    """
    In-process fixed-window counter.

    One instance lives for the life of the process (see CoreConfig.ready);
    tests build their own with a fake clock.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None,
                 cleanup_interval: float = CLEANUP_INTERVAL_SECONDS):
        self._clock = clock or time.time
        self._cleanup_interval = cleanup_interval
        self._entries: Dict[Tuple[str, str], RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._last_cleanup = self._clock()

    def hit(self, scope: str, identifier: str, rule: RateLimitRule) -> RateLimitResult:
        """
        Count one request for `identifier` under the named limit `scope`.
        """
        now = self._clock()
        key = (scope, identifier)

        with self._lock:
            self._maybe_cleanup(now)

            entry = self._entries.get(key)
            if entry is None or now > entry.reset_time:
                entry = RateLimitEntry(count=0, reset_time=now + rule.window_seconds)
                self._entries[key] = entry

            if entry.count >= rule.limit:
                retry_after = max(0, math.ceil(entry.reset_time - now))
                logger.warning(
                    f"Rate limit '{scope}' exceeded for {identifier} "
                    f"({rule.limit}/{rule.window_seconds}s), retry in {retry_after}s"
                )
                return RateLimitResult(
                    allowed=False,
                    limit=rule.limit,
                    remaining=0,
                    reset_time=entry.reset_time,
                    retry_after=retry_after,
                    message=rule.message,
                )

            entry.count += 1
            return RateLimitResult(
                allowed=True,
                limit=rule.limit,
                remaining=rule.limit - entry.count,
                reset_time=entry.reset_time,
                retry_after=0,
                message=rule.message,
            )

    def _maybe_cleanup(self, now: float) -> None:
        if now - self._last_cleanup < self._cleanup_interval:
            return
        expired = [key for key, entry in self._entries.items() if now > entry.reset_time]
        for key in expired:
            del self._entries[key]
        self._last_cleanup = now
        if expired:
            logger.debug(f"Swept {len(expired)} expired rate limit entries")

    def reset(self) -> None:
        """Forget every counter."""
        with self._lock:
            self._entries.clear()
            self._last_cleanup = self._clock()

    def __len__(self):
        return len(self._entries)
