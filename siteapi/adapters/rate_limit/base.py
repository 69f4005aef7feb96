"""Rate limiter interfaces and value types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class RateWindowState:
    """Per-client counter for the current fixed window.

    Attributes:
        client_key: Identity the counter belongs to (client address).
        request_count: Requests observed in the current window (>= 1).
        window_start: UNIX epoch seconds when the window began.
    """

    client_key: str
    request_count: int
    window_start: int

    def to_record(self) -> dict[str, int]:
        """Serialize to the cache record shape."""
        return {"request_count": self.request_count, "window_start": self.window_start}

    @classmethod
    def from_record(cls, client_key: str, record: Any) -> "RateWindowState | None":
        """Rebuild state from a cache record, or None if the record is unusable."""
        if not isinstance(record, dict):
            return None
        count = record.get("request_count")
        start = record.get("window_start")
        # bool is an int subclass; reject it explicitly
        if not isinstance(count, int) or isinstance(count, bool) or count < 1:
            return None
        if not isinstance(start, int) or isinstance(start, bool):
            return None
        return cls(client_key=client_key, request_count=count, window_start=start)


class RateLimitOutcome(str, Enum):
    ALLOWED = "allowed"
    LIMIT_EXCEEDED = "limit_exceeded"
    BACKEND_UNAVAILABLE = "backend_unavailable"


@dataclass(frozen=True)
class RateLimitResult:
    """Result of a consume operation.

    Attributes:
        outcome: Decision for the request.
        limit: Limit that was applied.
        request_count: Counter value after the decision (unchanged on reject).
        window_start: Start of the window the decision belongs to.
        retry_after_seconds: Suggested wait when not allowed, else None.
    """

    outcome: RateLimitOutcome
    limit: int
    request_count: int
    window_start: int
    retry_after_seconds: int | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is RateLimitOutcome.ALLOWED


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def consume(self, client_key: str) -> RateLimitResult:
        """Count one request for ``client_key`` and decide whether it may proceed.

        Implementations never raise for backend failures; they resolve them
        into a result instead.
        """
        raise NotImplementedError
