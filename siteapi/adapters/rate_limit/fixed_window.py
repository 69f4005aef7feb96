"""Fixed-window rate limiter storing per-client counters in a shared cache.

Algorithm per request (``now`` in whole UNIX seconds):

- no record: start a new window with a count of 1
- record inside the window and count >= limit: reject, leave the record as is
- record inside the window: count + 1
- record older than the window: start a new window with a count of 1

Allowed requests overwrite the whole record with a TTL of one window, so
idle clients disappear from the cache without a sweep.

Notes:
- The read, the arithmetic and the write-back are separate cache calls with
  no lock around them. Concurrent requests from one client can read the same
  count and both write count + 1; the limiter under-counts in that case.
- Backend failures resolve to allow (fail open) or to a
  BACKEND_UNAVAILABLE result (fail closed), never to an exception.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from siteapi.adapters.cache.base import AbstractCache
from siteapi.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitOutcome,
    RateLimitResult,
    RateWindowState,
)
from siteapi.core.errors import CacheBackendError

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "rate_limit:"
DEFAULT_LIMIT_PER_MINUTE = 60
DEFAULT_WINDOW_SECONDS = 60


class CacheFixedWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter using a fixed time window per client key.

    The window starts at the first request of a client rather than on a
    wall-clock boundary, and the limit is re-read on every call so runtime
    configuration changes apply to the next request.
    """

    def __init__(
        self,
        cache: AbstractCache,
        *,
        limit_provider: Callable[[], int | None],
        default_limit: int = DEFAULT_LIMIT_PER_MINUTE,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
        fail_open: bool = True,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            cache: Shared store holding RateWindowState records.
            limit_provider: Returns the configured requests-per-window, or
                None when unset.
            default_limit: Limit used when the provider returns nothing usable.
            window_seconds: Fixed window length.
            fail_open: Allow requests when the cache backend fails.
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If default_limit or window_seconds are invalid.
        """
        if default_limit < 1:
            raise ValueError("default_limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._cache = cache
        self._limit_provider = limit_provider
        self._default_limit = default_limit
        self._window_seconds = window_seconds
        self._fail_open = fail_open
        self._clock = clock

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    @staticmethod
    def cache_key(client_key: str) -> str:
        return f"{CACHE_KEY_PREFIX}{client_key}"

    def current_limit(self) -> int:
        """Return the configured limit, falling back to the default."""
        configured = self._limit_provider()
        if isinstance(configured, int) and not isinstance(configured, bool) and configured >= 1:
            return configured
        return self._default_limit

    def get_state(self, client_key: str) -> RateWindowState | None:
        """Read the stored window state for a client (None on a miss)."""
        return RateWindowState.from_record(client_key, self._cache.get(self.cache_key(client_key)))

    def consume(self, client_key: str) -> RateLimitResult:
        if not client_key:
            raise ValueError("client_key must be a non-empty string")

        limit = self.current_limit()
        now = int(self._clock())

        try:
            state = self.get_state(client_key)
        except CacheBackendError as exc:
            return self._backend_failure(client_key, limit, now, exc)

        if state is None or now - state.window_start >= self._window_seconds:
            state = RateWindowState(client_key=client_key, request_count=1, window_start=now)
        elif state.request_count >= limit:
            return RateLimitResult(
                outcome=RateLimitOutcome.LIMIT_EXCEEDED,
                limit=limit,
                request_count=state.request_count,
                window_start=state.window_start,
                retry_after_seconds=max(0, self._window_seconds - (now - state.window_start)),
            )
        else:
            state = RateWindowState(
                client_key=client_key,
                request_count=state.request_count + 1,
                window_start=state.window_start,
            )

        try:
            self._cache.set(
                self.cache_key(client_key),
                state.to_record(),
                ttl_seconds=self._window_seconds,
            )
        except CacheBackendError as exc:
            return self._backend_failure(client_key, limit, now, exc)

        return RateLimitResult(
            outcome=RateLimitOutcome.ALLOWED,
            limit=limit,
            request_count=state.request_count,
            window_start=state.window_start,
        )

    def _backend_failure(
        self, client_key: str, limit: int, now: int, exc: CacheBackendError
    ) -> RateLimitResult:
        logger.warning(
            "rate_limit.backend_error",
            extra={
                "error_type": type(exc).__name__,
                "error_msg": str(exc),
                "fail_open": self._fail_open,
            },
        )
        if self._fail_open:
            return RateLimitResult(
                outcome=RateLimitOutcome.ALLOWED,
                limit=limit,
                request_count=0,
                window_start=now,
            )
        return RateLimitResult(
            outcome=RateLimitOutcome.BACKEND_UNAVAILABLE,
            limit=limit,
            request_count=0,
            window_start=now,
            retry_after_seconds=self._window_seconds,
        )
