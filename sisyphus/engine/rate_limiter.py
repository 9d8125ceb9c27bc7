"""Sliding-window rate limiting for push attempts."""

import logging
import threading
import time
from collections import deque
from typing import Callable, Optional

from sisyphus.config import DEFAULT_RATE_LIMIT_MAX_ATTEMPTS, DEFAULT_RATE_LIMIT_WINDOW_MS
from sisyphus.errors import RateLimitedError

logger = logging.getLogger(__name__.split(".")[-1])


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class SlidingWindowRateLimiter:
    """
    Allows at most ``max_attempts`` attempts per key within a trailing window.

    State lives in process memory, so limits are per server instance.
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_RATE_LIMIT_MAX_ATTEMPTS,
        window_ms: int = DEFAULT_RATE_LIMIT_WINDOW_MS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Initialize rate limiter.

        Args:
            max_attempts: Attempts allowed inside one window
            window_ms: Window length in milliseconds
            clock: Millisecond clock, monotonic by default
        """
        self.max_attempts = max(1, max_attempts)
        self.window_ms = max(1, window_ms)
        self._clock = clock or _monotonic_ms
        self._attempts: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep: Optional[float] = None

    def allow(self, key: str) -> bool:
        """
        Record an attempt for ``key`` if it fits in the window.

        A rejected attempt is not recorded.

        Returns:
            True if the attempt is allowed
        """
        now = self._clock()
        with self._lock:
            self._sweep(now)

            attempts = self._attempts.get(key)
            if attempts is None:
                attempts = deque()
                self._attempts[key] = attempts

            while attempts and now - attempts[0] >= self.window_ms:
                attempts.popleft()

            if len(attempts) >= self.max_attempts:
                return False

            attempts.append(now)
            return True

    def check_or_raise(self, key: str) -> None:
        """Raise RateLimitedError when ``key`` is over its limit."""
        if not self.allow(key):
            logger.warning(f"Rate limit hit for {key} ({self.max_attempts} per {self.window_ms}ms)")
            raise RateLimitedError()

    def _sweep(self, now: float) -> None:
        # At most once per window: drop keys whose newest attempt has expired
        if self._last_sweep is not None and now - self._last_sweep < self.window_ms:
            return
        stale = [
            key for key, attempts in self._attempts.items() if not attempts or now - attempts[-1] >= self.window_ms
        ]
        for key in stale:
            del self._attempts[key]
        if stale:
            logger.debug(f"Dropped {len(stale)} idle rate limit key(s)")
        self._last_sweep = now
