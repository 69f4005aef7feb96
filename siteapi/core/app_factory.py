from __future__ import annotations

"""Application factory for the FastAPI app.

Centralizes app construction (service container, middleware, handlers,
routers) so tests can build isolated apps with their own collaborators.
"""

from fastapi import FastAPI

from siteapi.api.routes import (
    admin_router,
    articles_router,
    config_export_router,
    contact_router,
    health_router,
    weather_router,
)
from siteapi.core.config import Settings, settings as default_settings
from siteapi.core.container import ServiceContainer, build_container
from siteapi.core.exception_handlers import setup_exception_handlers
from siteapi.core.logging import configure_logging
from siteapi.core.middleware import request_id_middleware
from siteapi.core.openapi import apply_openapi_customizations
from siteapi.core.rate_limit import create_rate_limit_middleware

API_PREFIX = "/api"


def create_app(
    container: ServiceContainer | None = None,
    *,
    app_settings: Settings | None = None,
    configure_logs: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        container: Prebuilt services; built from settings when omitted.
        app_settings: Settings to use when building the container.
        configure_logs: Install the root log handler (tests pass False to
            keep pytest's capture handlers).

    Returns:
        Configured app with middleware, handlers, routers and docs.
    """
    cfg = container.settings if container is not None else (app_settings or default_settings)

    # Logging first so subsequent init logs are formatted as desired
    if configure_logs:
        configure_logging(cfg.log)

    if container is None:
        container = build_container(cfg)

    app = FastAPI(
        title="Site API",
        description=(
            "Site content API: article tagging, configuration export, contact "
            "relay and cached weather, with per-client rate limiting on "
            f"{cfg.rate_limit.path_prefix}."
        ),
        version="0.1.0",
    )
    app.state.container = container

    # Middleware runs in reverse order of registration: the request id
    # middleware wraps the rate limiter so throttled responses carry the id.
    app.middleware("http")(
        create_rate_limit_middleware(
            container.rate_limiter,
            path_prefix=cfg.rate_limit.path_prefix,
            enabled=cfg.rate_limit.enabled,
            include_headers=cfg.rate_limit.include_headers,
        )
    )
    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(config_export_router, prefix=API_PREFIX)
    app.include_router(articles_router, prefix=API_PREFIX)
    app.include_router(contact_router, prefix=API_PREFIX)
    app.include_router(weather_router, prefix=API_PREFIX)
    app.include_router(admin_router)
    app.include_router(health_router)

    apply_openapi_customizations(app, rate_limit_prefix=cfg.rate_limit.path_prefix)

    return app
