"""WeatherAPI.com client adapter."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from siteapi.adapters.weather.base import AbstractWeatherClient
from siteapi.core.errors import UpstreamAppError

logger = logging.getLogger(__name__)


class WeatherAPIClient(AbstractWeatherClient):
    """Client for the ``/current.json`` endpoint of WeatherAPI.com.

    Base URL and key are passed per call because both are runtime-editable
    site configuration.
    """

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout_seconds: Timeout for requests in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self._timeout = timeout_seconds
        self._transport = transport

    async def fetch_current(self, *, base_url: str, api_key: str, city: str) -> dict[str, Any]:
        url = f"{base_url.rstrip('/')}/current.json"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, params={"key": api_key, "q": city})
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamAppError(
                code="weather_http_error",
                message=f"Weather provider returned HTTP {exc.response.status_code}",
                details={"http_status": exc.response.status_code},
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamAppError(
                code="weather_transport_error",
                message=f"Weather provider request failed: {type(exc).__name__}",
            ) from exc
        except ValueError as exc:
            raise UpstreamAppError(
                code="weather_invalid_json",
                message="Weather provider returned a non-JSON body",
            ) from exc

        if not isinstance(data, dict):
            raise UpstreamAppError(
                code="weather_invalid_payload",
                message="Weather provider returned an unexpected payload",
            )
        return data
