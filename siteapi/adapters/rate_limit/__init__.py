"""Rate limiting adapters.

The HTTP layer depends on ``AbstractRateLimiter`` only; counters live in an
injected ``AbstractCache`` so the storage backend can be swapped freely.
"""

from siteapi.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitOutcome,
    RateLimitResult,
    RateWindowState,
)
from siteapi.adapters.rate_limit.fixed_window import CacheFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "CacheFixedWindowRateLimiter",
    "RateLimitOutcome",
    "RateLimitResult",
    "RateWindowState",
]
