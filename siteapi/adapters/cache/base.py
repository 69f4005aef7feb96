"""Cache interface shared by the rate limiter and the weather service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class AbstractCache(ABC):
    """Expiring key-value store.

    Values are opaque to the cache. Implementations must report backend
    failures by raising ``siteapi.core.errors.CacheBackendError`` so callers
    can decide between failing open and failing closed.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the live value stored under ``key`` or None on a miss."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: Any, *, ttl_seconds: float) -> None:
        """Store ``value`` under ``key``, replacing any previous value.

        Args:
            key: Cache key.
            value: Value to store.
            ttl_seconds: Relative lifetime; the store drops the entry itself
                once it elapses.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        raise NotImplementedError
