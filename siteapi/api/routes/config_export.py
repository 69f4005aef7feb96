from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from siteapi.api.deps import ContainerDep
from siteapi.core.auth import require_permission

router = APIRouter(tags=["Config"])


@router.get(
    "/config-export/{config_name}",
    dependencies=[Depends(require_permission("administer site configuration"))],
)
def export_config(config_name: str, container: ContainerDep) -> dict[str, Any]:
    """Return the raw data of an allow-listed configuration object.

    Returns:
        dict: Configuration data as stored.

    Raises:
        AccessDeniedAppError: 403 when the name is not allow-listed.
        NotFoundAppError: 404 when the allow-listed name is not stored.
    """
    return container.config_export.export(config_name)
