"""Runtime site configuration: named, JSON-like configuration objects.

Objects are addressed by dotted names (``rate_limit.settings``). They are
seeded from environment settings at startup and can be edited through the
admin endpoints while the process runs.
"""

from __future__ import annotations

import copy
import logging
from threading import Lock
from typing import Any

from siteapi.core.config import Settings

logger = logging.getLogger(__name__)

SITE_CONFIG = "system.site"
RATE_LIMIT_CONFIG = "rate_limit.settings"
CONFIG_EXPORT_CONFIG = "config_export.settings"
WEATHER_CONFIG = "weather.settings"


class ConfigStore:
    """Thread-safe in-memory store of named configuration objects.

    Reads return deep copies; callers must go through ``set``/``update`` to
    change stored values.
    """

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        self._objects: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})
        self._lock = Lock()

    def get(self, name: str) -> dict[str, Any] | None:
        with self._lock:
            data = self._objects.get(name)
            return copy.deepcopy(data) if data is not None else None

    def get_value(self, name: str, key: str, default: Any = None) -> Any:
        data = self.get(name) or {}
        value = data.get(key)
        return default if value is None else value

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._objects

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._objects)

    def set(self, name: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._objects[name] = copy.deepcopy(data)
        logger.info("config.saved", extra={"config_name": name, "keys": sorted(data)})

    def update(self, name: str, **values: Any) -> dict[str, Any]:
        """Merge ``values`` into an object (creating it if needed) and return the result."""
        with self._lock:
            data = self._objects.setdefault(name, {})
            data.update(copy.deepcopy(values))
            result = copy.deepcopy(data)
        logger.info("config.saved", extra={"config_name": name, "keys": sorted(values)})
        return result


def _split_names(value: str | None) -> list[str]:
    if not value:
        return []
    return sorted({name.strip() for name in value.split(",") if name.strip()})


def build_config_store(settings: Settings) -> ConfigStore:
    """Seed a ConfigStore from environment settings."""
    return ConfigStore(
        {
            SITE_CONFIG: {
                "name": settings.app.site_name,
                "mail": settings.app.site_mail,
            },
            RATE_LIMIT_CONFIG: {
                "limit_per_minute": settings.rate_limit.limit_per_minute,
            },
            CONFIG_EXPORT_CONFIG: {
                "export_configurations": _split_names(settings.app.config_export_allowlist),
            },
            WEATHER_CONFIG: {
                "api_key": settings.weather.api_key,
                "base_url": settings.weather.base_url,
                "city": settings.weather.city,
            },
        }
    )
