"""Unit test fixtures."""

from contextlib import contextmanager
from unittest.mock import Mock

import pytest

from config.settings import Settings
from core.dependencies import close_session_store, reset_catalog


@contextmanager
def override_deps(app, overrides):
    """Set FastAPI dependency overrides and clear them on exit.

    Args:
        app: The FastAPI application.
        overrides: A dict mapping dependency functions to their replacement values.
    """

    def _make_override(val):
        return lambda: val

    for dep_fn, provider in overrides.items():
        app.dependency_overrides[dep_fn] = _make_override(provider)
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def mock_settings(monkeypatch):
    """Settings with safe test defaults (no real DSNs, fixed initial month)."""
    monkeypatch.setenv("SENTRY_DSN", "")
    monkeypatch.setenv("POSTHOG_API_KEY", "")
    monkeypatch.setenv("ENABLE_TELEMETRY", "false")
    return Settings(
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
        initial_month="2024-04",
        page_size=2,
    )


@pytest.fixture
def mock_posthog_client():
    """Mock PostHog client."""
    client = Mock()
    client.capture = Mock()
    client.flush = Mock()
    client.shutdown = Mock()
    return client


@pytest.fixture(autouse=True)
def reset_module_state():
    """Drop the cached catalog and session store between tests."""
    reset_catalog()
    close_session_store()
    yield
    reset_catalog()
    close_session_store()
