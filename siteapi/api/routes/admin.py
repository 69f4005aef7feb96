"""Site configuration endpoints (rate limit, config export, weather)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from siteapi.api.deps import ContainerDep
from siteapi.core.auth import require_permission
from siteapi.schemas.admin import (
    ConfigExportSettingsPayload,
    ConfigExportSettingsResponse,
    RateLimitSettingsPayload,
    WeatherSettingsPayload,
    WeatherSettingsResponse,
)
from siteapi.services.config_store import RATE_LIMIT_CONFIG, WEATHER_CONFIG

router = APIRouter(
    prefix="/admin/config",
    tags=["Admin"],
    dependencies=[Depends(require_permission("administer site configuration"))],
)


def _mask(secret: str | None) -> str | None:
    if not secret:
        return secret
    return "*" * max(0, len(secret) - 4) + secret[-4:]


@router.get("/rate-limit", response_model=RateLimitSettingsPayload)
def get_rate_limit_settings(container: ContainerDep) -> RateLimitSettingsPayload:
    """Return the per-client request limit currently applied."""
    return RateLimitSettingsPayload(
        limit_per_minute=container.config_store.get_value(
            RATE_LIMIT_CONFIG,
            "limit_per_minute",
            container.settings.rate_limit.limit_per_minute,
        )
    )


@router.put("/rate-limit", response_model=RateLimitSettingsPayload)
def update_rate_limit_settings(
    payload: RateLimitSettingsPayload, container: ContainerDep
) -> RateLimitSettingsPayload:
    """Change the per-client request limit; the next governed request uses it."""
    container.config_store.update(RATE_LIMIT_CONFIG, limit_per_minute=payload.limit_per_minute)
    return payload


@router.get("/config-export", response_model=ConfigExportSettingsResponse)
def get_config_export_settings(container: ContainerDep) -> ConfigExportSettingsResponse:
    return ConfigExportSettingsResponse(
        export_configurations=container.config_export.allowlist(),
        available=container.config_store.names(),
    )


@router.put("/config-export", response_model=ConfigExportSettingsResponse)
def update_config_export_settings(
    payload: ConfigExportSettingsPayload, container: ContainerDep
) -> ConfigExportSettingsResponse:
    """Replace the list of configuration names exposed by the export endpoint."""
    saved = container.config_export.set_allowlist(payload.export_configurations)
    return ConfigExportSettingsResponse(
        export_configurations=saved,
        available=container.config_store.names(),
    )


@router.get("/weather", response_model=WeatherSettingsResponse)
def get_weather_settings(container: ContainerDep) -> WeatherSettingsResponse:
    config = container.config_store.get(WEATHER_CONFIG) or {}
    return WeatherSettingsResponse(
        api_key=_mask(config.get("api_key")),
        base_url=config.get("base_url"),
        city=config.get("city"),
    )


@router.put("/weather", response_model=WeatherSettingsResponse)
def update_weather_settings(
    payload: WeatherSettingsPayload, container: ContainerDep
) -> WeatherSettingsResponse:
    """Save provider credentials and drop any cached weather payload."""
    values = {"api_key": payload.api_key, "base_url": payload.base_url}
    if payload.city:
        values["city"] = payload.city
    config = container.config_store.update(WEATHER_CONFIG, **values)
    container.weather.invalidate()
    return WeatherSettingsResponse(
        api_key=_mask(config.get("api_key")),
        base_url=config.get("base_url"),
        city=config.get("city"),
    )
