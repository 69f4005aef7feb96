from __future__ import annotations

from fastapi import APIRouter

from siteapi.api.deps import ContainerDep
from siteapi.schemas.content import WeatherResponse

router = APIRouter(tags=["Weather"])


@router.get("/weather", response_model=WeatherResponse)
async def get_weather(container: ContainerDep) -> WeatherResponse:
    """Current temperature, wind and precipitation for the configured city.

    Served from cache for up to WEATHER_CACHE_TTL_SECONDS after a fetch.
    """
    return await container.weather.current()
