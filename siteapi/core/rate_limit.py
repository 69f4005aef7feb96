"""Rate limiting middleware for the governed API prefix.

This module wires the rate limiting adapter into the HTTP layer. Every
request is offered to the middleware before routing; only paths starting
with the governed prefix are counted.

Rate limiting strategy:
- Fixed window per client network address.
- Clients without an address share the ``unknown`` bucket.
- Rejected requests never reach the route handlers.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from siteapi.adapters.rate_limit.base import AbstractRateLimiter, RateLimitOutcome, RateLimitResult

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"

RateLimitMiddleware = Callable[[Request, Callable[[Request], Awaitable[Response]]], Awaitable[Response]]


def client_key_for(request: Request) -> str:
    """Derive the rate limit identity from the client address.

    No proxy header is consulted: clients behind one NAT or proxy share a
    counter.
    """

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def _hash_client_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def build_rejection_response(result: RateLimitResult, *, include_headers: bool) -> JSONResponse:
    """Build the short-circuit response for a request that may not proceed."""

    retry_after = result.retry_after_seconds or 0
    if result.outcome is RateLimitOutcome.BACKEND_UNAVAILABLE:
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        error = "Rate limiter unavailable"
    else:
        status_code = status.HTTP_429_TOO_MANY_REQUESTS
        error = "Rate limit exceeded"

    headers = {"Retry-After": str(retry_after)} if include_headers else None
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "retry_after": retry_after},
        headers=headers,
    )


def create_rate_limit_middleware(
    limiter: AbstractRateLimiter,
    *,
    path_prefix: str,
    enabled: bool = True,
    include_headers: bool = True,
) -> RateLimitMiddleware:
    """Build an HTTP middleware enforcing ``limiter`` under ``path_prefix``.

    Usage:
        app.middleware("http")(create_rate_limit_middleware(limiter, path_prefix="/api/"))

    Args:
        limiter: Limiter consulted for governed requests.
        path_prefix: Paths starting with this string are governed. This is a
            plain prefix test, not a route match.
        enabled: When False every request passes through untouched.
        include_headers: Add Retry-After to rejection responses.

    Returns:
        Middleware callable for ``app.middleware("http")``.
    """

    async def rate_limit_middleware(request: Request, call_next) -> Response:
        path = request.url.path
        if not enabled or not path.startswith(path_prefix):
            return await call_next(request)

        client_key = client_key_for(request)
        key_hash = _hash_client_key(client_key)
        logger.info(
            "rate_limit.checked",
            extra={"path": path, "key_hash": key_hash, "path_prefix": path_prefix},
        )

        result = limiter.consume(client_key)
        if result.allowed:
            return await call_next(request)

        logger.warning(
            "rate_limit.exceeded"
            if result.outcome is RateLimitOutcome.LIMIT_EXCEEDED
            else "rate_limit.unavailable",
            extra={
                "path": path,
                "key_hash": key_hash,
                "limit": result.limit,
                "request_count": result.request_count,
                "retry_after_s": result.retry_after_seconds,
            },
        )
        return build_rejection_response(result, include_headers=include_headers)

    return rate_limit_middleware
