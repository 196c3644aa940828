"""Pytest configuration shared by every test layer.

This configuration ensures:
1. Markers are registered (unit, integration, api)
2. Container singletons that hold state (rate limiters, cache) are rebuilt
   per test, so counters never leak between cases
3. Dependency overrides installed by API tests are always removed
4. Time can be driven explicitly through ManualClock
"""

import inspect
from datetime import UTC, datetime, timedelta

import pytest

from src.core.container import get_cache, get_entity_caches, get_rate_limiters


class ManualClock:
    """Clock whose time only moves when a test says so.

    Pass the instance wherever a component accepts ``clock=``.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        """Move time forward, e.g. ``clock.advance(minutes=15)``."""
        self.now += timedelta(**delta)


@pytest.fixture
def clock() -> ManualClock:
    """Fresh manual clock starting 2026-01-01 12:00 UTC."""
    return ManualClock()


@pytest.fixture(autouse=True)
def reset_container_state():
    """Drop stateful singletons and FastAPI overrides around every test."""
    get_rate_limiters.cache_clear()
    get_entity_caches.cache_clear()
    get_cache.cache_clear()
    yield
    from src.main import app

    app.dependency_overrides.clear()
    get_rate_limiters.cache_clear()
    get_entity_caches.cache_clear()
    get_cache.cache_clear()


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database (SQLite)"
    )
    config.addinivalue_line("markers", "api: API tests through FastAPI TestClient")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
