"""Current weather for the configured city, cached in the shared cache."""

from __future__ import annotations

import logging
from typing import Any

from siteapi.adapters.cache.base import AbstractCache
from siteapi.adapters.weather.base import AbstractWeatherClient
from siteapi.core.errors import CacheBackendError, ConfigurationAppError, UpstreamAppError
from siteapi.schemas.content import WeatherResponse
from siteapi.services.config_store import WEATHER_CONFIG, ConfigStore

logger = logging.getLogger(__name__)

WEATHER_CACHE_KEY = "weather.data"
DEFAULT_CITY = "London"


def extract_conditions(data: dict[str, Any]) -> dict[str, float]:
    """Pick temperature, wind and precipitation out of a provider payload.

    Raises:
        UpstreamAppError: If ``current`` or one of its fields is missing.
    """
    current = data.get("current")
    if not isinstance(current, dict):
        raise UpstreamAppError(code="weather_invalid_payload", message="Invalid weather data received.")
    try:
        return {
            "temperature": float(current["temp_c"]),
            "wind": float(current["wind_kph"]),
            "precipitation": float(current["precip_mm"]),
        }
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamAppError(code="weather_invalid_payload", message="Invalid weather data received.") from exc


class WeatherService:
    def __init__(
        self,
        client: AbstractWeatherClient,
        cache: AbstractCache,
        store: ConfigStore,
        *,
        cache_ttl_seconds: int = 3600,
    ) -> None:
        self._client = client
        self._cache = cache
        self._store = store
        self._ttl = cache_ttl_seconds

    def invalidate(self) -> None:
        try:
            self._cache.delete(WEATHER_CACHE_KEY)
        except CacheBackendError as exc:
            logger.warning("weather.cache_error", extra={"error_msg": str(exc), "operation": "delete"})

    async def current(self) -> WeatherResponse:
        """Return current conditions, fetching them at most once per TTL.

        Raises:
            ConfigurationAppError: API key or base URL not configured (503).
            UpstreamAppError: Provider failure or malformed payload (502).
        """
        config = self._store.get(WEATHER_CONFIG) or {}
        api_key = config.get("api_key")
        base_url = config.get("base_url")
        city = config.get("city") or DEFAULT_CITY

        if not api_key or not base_url:
            raise ConfigurationAppError(
                code="weather_not_configured",
                message="API key or base URL is missing from configuration.",
            )

        cached = self._read_cache()
        if cached is not None:
            return WeatherResponse(**cached, cached=True)

        try:
            data = await self._client.fetch_current(base_url=base_url, api_key=api_key, city=city)
            weather = {**extract_conditions(data), "city": city}
        except UpstreamAppError as exc:
            logger.error(
                "weather.fetch_failed",
                extra={"error_code": exc.code, "error_msg": exc.message, "city": city},
            )
            raise UpstreamAppError(
                code="weather_unavailable",
                message="Unable to retrieve weather data.",
            ) from exc

        self._write_cache(weather)
        return WeatherResponse(**weather)

    def _read_cache(self) -> dict[str, Any] | None:
        try:
            cached = self._cache.get(WEATHER_CACHE_KEY)
        except CacheBackendError as exc:
            logger.warning("weather.cache_error", extra={"error_msg": str(exc), "operation": "get"})
            return None
        return cached if isinstance(cached, dict) else None

    def _write_cache(self, weather: dict[str, Any]) -> None:
        try:
            self._cache.set(WEATHER_CACHE_KEY, weather, ttl_seconds=self._ttl)
        except CacheBackendError as exc:
            logger.warning("weather.cache_error", extra={"error_msg": str(exc), "operation": "set"})
