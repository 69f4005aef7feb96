"""Shared key-value cache adapters.

The rate limiter and the weather service depend on ``AbstractCache`` only,
so the in-memory store can be replaced by a networked one without touching
them.
"""

from siteapi.adapters.cache.base import AbstractCache
from siteapi.adapters.cache.in_memory import InMemoryTTLCache

__all__ = ["AbstractCache", "InMemoryTTLCache"]
