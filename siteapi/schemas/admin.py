"""Pydantic schemas for the site configuration admin endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RateLimitSettingsPayload(BaseModel):
    limit_per_minute: int = Field(
        ...,
        ge=1,
        description="Number of allowed requests per minute per client address.",
    )


class ConfigExportSettingsPayload(BaseModel):
    export_configurations: list[str] = Field(
        default_factory=list,
        description="Configuration names exposed through /api/config-export/{name}.",
    )


class ConfigExportSettingsResponse(ConfigExportSettingsPayload):
    available: list[str] = Field(
        default_factory=list,
        description="All configuration names that can be allow-listed.",
    )


class WeatherSettingsPayload(BaseModel):
    api_key: str = Field(..., min_length=1, description="WeatherAPI.com API key.")
    base_url: str = Field(
        "https://api.weatherapi.com/v1",
        min_length=1,
        description="Base URL of the weather provider.",
    )
    city: str | None = Field(None, description="City for current conditions; unchanged when omitted.")


class WeatherSettingsResponse(BaseModel):
    api_key: str | None = Field(None, description="Masked API key (last 4 characters visible).")
    base_url: str | None = None
    city: str | None = None
