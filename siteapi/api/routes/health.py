from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe.

    Lives outside the rate-limited prefix so load balancers are never
    throttled.

    Returns:
        dict: ``{"status": "ok"}``.
    """

    return {"status": "ok"}
