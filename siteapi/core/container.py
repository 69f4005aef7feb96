"""Service wiring.

The app factory builds one ``ServiceContainer`` and stores it on
``app.state.container``; routes reach it through ``siteapi.api.deps``.
Tests build their own container with fakes and a controllable clock.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from siteapi.adapters.cache.base import AbstractCache
from siteapi.adapters.cache.in_memory import InMemoryTTLCache
from siteapi.adapters.content.base import AbstractContentRepository
from siteapi.adapters.content.in_memory import InMemoryContentRepository
from siteapi.adapters.mail.base import AbstractMailer
from siteapi.adapters.mail.logging_mailer import LoggingMailer
from siteapi.adapters.rate_limit.base import AbstractRateLimiter
from siteapi.adapters.rate_limit.fixed_window import CacheFixedWindowRateLimiter
from siteapi.adapters.weather.base import AbstractWeatherClient
from siteapi.adapters.weather.weatherapi_client import WeatherAPIClient
from siteapi.core.config import Settings
from siteapi.services.config_export_service import ConfigExportService
from siteapi.services.config_store import RATE_LIMIT_CONFIG, ConfigStore, build_config_store
from siteapi.services.contact_service import ContactRelayService
from siteapi.services.deletion_logger import ArticleDeletionLogger
from siteapi.services.tag_service import TagUpdateService
from siteapi.services.weather_service import WeatherService


@dataclass
class ServiceContainer:
    settings: Settings
    cache: AbstractCache
    config_store: ConfigStore
    rate_limiter: AbstractRateLimiter
    content: AbstractContentRepository
    mailer: AbstractMailer
    config_export: ConfigExportService
    tags: TagUpdateService
    contact: ContactRelayService
    weather: WeatherService


def build_container(
    settings: Settings,
    *,
    cache: AbstractCache | None = None,
    content: AbstractContentRepository | None = None,
    mailer: AbstractMailer | None = None,
    weather_client: AbstractWeatherClient | None = None,
    clock: Callable[[], float] = time.time,
) -> ServiceContainer:
    """Build the default service graph from settings.

    Any collaborator can be overridden; ``clock`` drives both the cache
    expiry and the rate limiter windows so they stay consistent.
    """
    if cache is None:
        cache = InMemoryTTLCache(max_entries=settings.rate_limit.cache_max_entries, clock=clock)

    if content is None:
        if settings.app.seed_file:
            content = InMemoryContentRepository.from_seed_file(settings.app.seed_file)
        else:
            content = InMemoryContentRepository()
    content.add_delete_listener(ArticleDeletionLogger())

    config_store = build_config_store(settings)

    rate_limiter = CacheFixedWindowRateLimiter(
        cache,
        limit_provider=lambda: config_store.get_value(RATE_LIMIT_CONFIG, "limit_per_minute"),
        default_limit=settings.rate_limit.limit_per_minute,
        window_seconds=settings.rate_limit.window_seconds,
        fail_open=settings.rate_limit.fail_open,
        clock=clock,
    )

    mailer = mailer or LoggingMailer()
    weather_client = weather_client or WeatherAPIClient(timeout_seconds=settings.weather.timeout_seconds)

    return ServiceContainer(
        settings=settings,
        cache=cache,
        config_store=config_store,
        rate_limiter=rate_limiter,
        content=content,
        mailer=mailer,
        config_export=ConfigExportService(config_store),
        tags=TagUpdateService(content),
        contact=ContactRelayService(content, mailer),
        weather=WeatherService(
            weather_client,
            cache,
            config_store,
            cache_ttl_seconds=settings.weather.cache_ttl_seconds,
        ),
    )
