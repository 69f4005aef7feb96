"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before any ``siteapi`` import so the global
settings object is built from them.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("APP_API_KEY_REQUIRED", "true")
os.environ.setdefault("APP_API_KEYS", "test-api-key-123,test-api-key-456")
os.environ.setdefault("RATE_LIMIT_LIMIT_PER_MINUTE", "60")
os.environ.setdefault("WEATHER_API_KEY", "")

import pytest
from fastapi.testclient import TestClient

from siteapi.adapters.content.base import Node, Term, User
from siteapi.adapters.content.in_memory import InMemoryContentRepository
from siteapi.core.app_factory import create_app
from siteapi.core.config import Settings
from siteapi.core.container import ServiceContainer, build_container


class FakeClock:
    """Deterministic clock: call it for the current time, move it with advance()."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def content() -> InMemoryContentRepository:
    """Repository with two articles, a page, three tags and three users."""
    return InMemoryContentRepository(
        nodes=[
            Node(nid=1, type="article", title="First article", tags=[10]),
            Node(nid=2, type="article", title="Second article"),
            Node(nid=3, type="page", title="About us"),
        ],
        terms=[
            Term(tid=10, name="python"),
            Term(tid=11, name="fastapi"),
            Term(tid=12, name="caching"),
            Term(tid=20, name="python", vocabulary="languages"),
        ],
        users=[
            User(uid=1, name="admin", email="admin@example.com"),
            User(uid=2, name="editor", email="editor@example.com"),
            User(uid=3, name="ghost", email=None),
        ],
    )


@pytest.fixture
def test_settings() -> Settings:
    return Settings()


@pytest.fixture
def container(test_settings: Settings, content: InMemoryContentRepository, clock: FakeClock) -> ServiceContainer:
    return build_container(test_settings, content=content, clock=clock)


@pytest.fixture
def client(container: ServiceContainer) -> TestClient:
    return TestClient(create_app(container, configure_logs=False))


@pytest.fixture
def api_headers() -> dict[str, str]:
    return {"X-API-Key": "test-api-key-123"}
