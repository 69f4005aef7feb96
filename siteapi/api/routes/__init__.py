from __future__ import annotations

from siteapi.api.routes.admin import router as admin_router
from siteapi.api.routes.articles import router as articles_router
from siteapi.api.routes.config_export import router as config_export_router
from siteapi.api.routes.contact import router as contact_router
from siteapi.api.routes.health import router as health_router
from siteapi.api.routes.weather import router as weather_router

__all__ = [
    "admin_router",
    "articles_router",
    "config_export_router",
    "contact_router",
    "health_router",
    "weather_router",
]
