"""Integration test fixtures.

Provides the real app wired to a JSON catalog file on disk, with 25 books
acquired in March 2024 and a few from neighbouring months.
"""

import json

import pytest
import pytest_asyncio

from config.settings import Settings
from core.dependencies import SESSION_COOKIE, close_session_store, reset_catalog


# ---------------------------------------------------------------------------
# Seed data -- 25 March 2024 acquisitions plus neighbours
# ---------------------------------------------------------------------------

MARCH_RECORDS = [
    {
        "title": f"March title {n:02d}",
        "imprint": "Leiden: Brill, 2024",
        "callno": f"DS{n:03d} .M37 2024",
        "date": f"2024-03-{(n % 28) + 1:02d}",
        "lat": 30.0 + n / 10,
        "lng": 40.0 + n / 10,
        "bobcat_url": f"https://catalog.example.org/record/march-{n}",
    }
    # Reverse call number order so the listing must sort
    for n in range(25, 0, -1)
]

OTHER_RECORDS = [
    {
        "title": "February title",
        "callno": "DF1 .F44 2024",
        "date": "2024-02-10",
        "lat": 38.0,
        "lng": 23.7,
    },
    {
        "title": "Undated title",
        "callno": "DA1 .U53",
        "date": "",
        "lat": 51.5,
        "lng": -0.1,
    },
    {
        "title": "Broken record",
        "callno": "DZ1",
    },
]

SEED_RECORDS = MARCH_RECORDS + OTHER_RECORDS


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "books.json"
    path.write_text(json.dumps(SEED_RECORDS), encoding="utf-8")
    return path


@pytest.fixture
def test_settings(catalog_path):
    """Settings pointing at the seeded catalog, telemetry disabled."""
    return Settings(
        catalog_path=catalog_path,
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
        initial_month="2024-04",
        page_size=10,
        selection_zoom=6,
    )


@pytest_asyncio.fixture
async def app_client(test_settings):
    """httpx AsyncClient against the real app with the seeded catalog."""
    from httpx import ASGITransport, AsyncClient
    from main import app
    from config.settings import get_settings

    reset_catalog()
    close_session_store()
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={SESSION_COOKIE: "integration"},
    ) as client:
        yield client

    app.dependency_overrides.clear()
    reset_catalog()
    close_session_store()
