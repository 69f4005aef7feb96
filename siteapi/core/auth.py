"""API key authentication for administrative and content-editing endpoints.

Keys are validated against a comma-separated list from environment
variables (APP_API_KEYS). Every key grants the same privileges; the
permission name passed by a route is only recorded in the logs.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Annotated, Awaitable, Callable

from fastapi import Header

from siteapi.core.config import settings
from siteapi.core.errors import AuthenticationAppError

logger = logging.getLogger(__name__)


def parse_api_keys(keys_string: str | None) -> set[str]:
    """Parse comma-separated API keys into a set.

    Examples:
        >>> parse_api_keys("key1, key2 , key3 ")
        {'key1', 'key2', 'key3'}
        >>> parse_api_keys(None)
        set()
    """
    if not keys_string:
        return set()

    return {key.strip() for key in keys_string.split(",") if key.strip()}


def _key_fingerprint(key: str) -> str:
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def validate_api_key(provided_key: str | None) -> None:
    """Validate that the provided API key matches a configured key.

    Pure validation logic without FastAPI dependencies for easy testing.

    Raises:
        AuthenticationAppError: If the key is missing or invalid, or if
            authentication is required but no keys are configured.
    """
    if not settings.app.api_key_required:
        return

    valid_keys = parse_api_keys(settings.app.api_keys)

    if not valid_keys:
        logger.error(
            "api_key_validation_failed",
            extra={"reason": "api_keys_not_configured"},
        )
        raise AuthenticationAppError(
            code="api_keys_not_configured",
            message="API key authentication is enabled but no valid keys are configured",
            details={"hint": "Set APP_API_KEYS or disable auth with APP_API_KEY_REQUIRED=false"},
        )

    if not provided_key:
        raise AuthenticationAppError(
            code="missing_api_key",
            message="Missing API key. Provide X-API-Key header.",
        )

    if provided_key not in valid_keys:
        logger.warning(
            "api_key_validation_failed",
            extra={
                "reason": "invalid_api_key",
                "api_key_hash": _key_fingerprint(provided_key),
            },
        )
        raise AuthenticationAppError(
            code="invalid_api_key",
            message="Invalid or missing API key",
        )


def require_permission(permission: str) -> Callable[..., Awaitable[None]]:
    """Build a FastAPI dependency guarding a route with the API key check.

    Usage:
        @router.get("/x", dependencies=[Depends(require_permission("administer site configuration"))])

    Args:
        permission: Human-readable permission name, logged on success/failure.

    Returns:
        Async dependency raising AuthenticationAppError (403) on failure.
    """

    async def verify_api_key(
        x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
    ) -> None:
        if not settings.app.api_key_required:
            logger.debug("auth.skipped", extra={"permission": permission})
            return

        try:
            validate_api_key(x_api_key)
        except AuthenticationAppError:
            logger.warning(
                "auth.denied",
                extra={"permission": permission, "api_key_present": bool(x_api_key)},
            )
            raise

        logger.info(
            "auth.success",
            extra={"permission": permission, "api_key_hash": _key_fingerprint(x_api_key or "")},
        )

    return verify_api_key
