"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional to keep backward compatibility while encouraging
    consistent shapes across the codebase.
    """

    code: str
    message: str
    hint: str
    field: str
    http_status: int
    retry_after: float
    config_name: str
    unknown: list[str]
    nid: int
    uid: int
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class AuthenticationAppError(AppError):
    """Raised when authentication fails."""


class AccessDeniedAppError(AppError):
    """Raised when an authenticated caller may not access a resource."""


class NotFoundAppError(AppError):
    """Raised when a requested entity or configuration does not exist."""


class DeliveryAppError(AppError):
    """Raised when an outgoing message cannot be delivered."""


class UpstreamAppError(AppError):
    """Raised when a third-party provider call fails."""


class ConfigurationAppError(AppError):
    """Raised when a feature is used before it has been configured."""


class CacheBackendError(Exception):
    """Raised by cache backends when the underlying store is unavailable."""
