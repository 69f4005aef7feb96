"""Weather provider adapters."""

from siteapi.adapters.weather.base import AbstractWeatherClient
from siteapi.adapters.weather.weatherapi_client import WeatherAPIClient

__all__ = ["AbstractWeatherClient", "WeatherAPIClient"]
