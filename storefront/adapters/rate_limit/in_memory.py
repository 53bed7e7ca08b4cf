"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: one lock covers lookup, compare and increment.
- Windows are anchored at each client's first request, not at wall-clock
  boundaries. Near a window edge a client can be admitted up to twice the
  limit in quick succession.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from storefront.adapters.rate_limit.base import (
    AbstractRateLimiter,
    ClientWindow,
    RateLimitResult,
)

logger = logging.getLogger(__name__)


@dataclass
class _WindowState:
    window_start: float
    count: int


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter using a fixed time window per key.

    Limits requests per key within a window that opens on the key's first
    request (e.g., 5 requests per hour). Once the window has elapsed the next
    request replaces it with a fresh one holding a count of 1.

    Important:
        This limiter is per-process only. If the API runs with multiple workers
        (e.g., multiple Uvicorn/Gunicorn workers), each worker will enforce its
        own independent limits.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.time,
        max_keys: int | None = None,
    ) -> None:
        """Initialize the in-memory rate limiter.

        Args:
            limit: Maximum number of requests allowed per window.
            window_seconds: Length of the window in seconds.
            clock: Time source function returning UNIX time in seconds.
            max_keys: Optional soft cap on tracked keys. When a new key would
                exceed it, expired windows are purged first. Live windows are
                never dropped. ``None`` keeps every window.

        Raises:
            ValueError: If limit, window_seconds or max_keys are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        if max_keys is not None and max_keys < 1:
            raise ValueError("max_keys must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._max_keys = max_keys
        self._lock = threading.RLock()
        self._state_by_key: dict[str, _WindowState] = {}

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    def __len__(self) -> int:
        with self._lock:
            return len(self._state_by_key)

    def _is_expired(self, state: _WindowState, now: float) -> bool:
        return now - state.window_start >= self._window_seconds

    def _open_window_locked(self, key: str, now: float) -> _WindowState:
        if key not in self._state_by_key and self._max_keys is not None:
            if len(self._state_by_key) >= self._max_keys:
                self._purge_expired_locked(now)
        state = _WindowState(window_start=now, count=1)
        self._state_by_key[key] = state
        return state

    def _purge_expired_locked(self, now: float) -> int:
        expired = [k for k, s in self._state_by_key.items() if self._is_expired(s, now)]
        for key in expired:
            del self._state_by_key[key]
        if expired:
            logger.debug("rate_limit.purged", extra={"purged": len(expired)})
        return len(expired)

    def _build_allowed_result(self, state: _WindowState) -> RateLimitResult:
        return RateLimitResult(
            allowed=True,
            limit=self._limit,
            remaining=max(0, self._limit - state.count),
            reset_at=int(math.ceil(state.window_start + self._window_seconds)),
            retry_after_seconds=None,
        )

    def _build_blocked_result(self, state: _WindowState, now: float) -> RateLimitResult:
        reset_at = state.window_start + self._window_seconds
        return RateLimitResult(
            allowed=False,
            limit=self._limit,
            remaining=0,
            reset_at=int(math.ceil(reset_at)),
            retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
        )

    def check(self, key: str) -> RateLimitResult:
        """Record a request for ``key`` and decide whether it is admitted.

        Denied requests leave the window untouched.

        Args:
            key: Unique identifier for rate limiting (e.g., client IP).

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty.
        """
        if not key:
            raise ValueError("key must be a non-empty string")

        with self._lock:
            now = self._clock()
            state = self._state_by_key.get(key)

            if state is None or self._is_expired(state, now):
                state = self._open_window_locked(key, now)
                return self._build_allowed_result(state)

            if state.count < self._limit:
                state.count += 1
                return self._build_allowed_result(state)

            return self._build_blocked_result(state, now)

    def snapshot(self, key: str) -> ClientWindow | None:
        """Return a copy of the stored window for ``key``, if any."""
        with self._lock:
            state = self._state_by_key.get(key)
            if state is None:
                return None
            return ClientWindow(
                client_key=key,
                count=state.count,
                window_start=state.window_start,
            )

    def purge_expired(self) -> int:
        """Drop windows whose duration has elapsed.

        Returns:
            Number of windows removed.
        """
        with self._lock:
            return self._purge_expired_locked(self._clock())
