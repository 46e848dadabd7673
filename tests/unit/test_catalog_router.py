"""Unit tests for catalog/router.py."""

import pytest
from httpx import ASGITransport, AsyncClient

from core.exceptions import CatalogLoadError


@pytest.fixture
def app_client(sample_catalog, mock_settings):
    from main import app
    from core.dependencies import get_catalog, get_posthog_client
    from config.settings import get_settings

    app.dependency_overrides[get_catalog] = lambda: sample_catalog
    app.dependency_overrides[get_posthog_client] = lambda: None
    app.dependency_overrides[get_settings] = lambda: mock_settings
    yield app
    app.dependency_overrides.clear()


class TestListBooks:
    @pytest.mark.asyncio
    async def test_lists_previous_month(self, app_client):
        async with AsyncClient(
            transport=ASGITransport(app=app_client), base_url="http://test"
        ) as client:
            resp = await client.get("/api/v1/books", params={"month": "2024-04"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["month"] == "2024-04"
        assert body["listed_month"] == "2024-03"
        assert body["total"] == 3
        assert [b["id"] for b in body["books"]] == [2, 0, 1]

    @pytest.mark.asyncio
    async def test_own_month_not_listed(self, app_client):
        async with AsyncClient(
            transport=ASGITransport(app=app_client), base_url="http://test"
        ) as client:
            resp = await client.get("/api/v1/books", params={"month": "2024-03"})

        assert resp.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_january_lists_december(self, app_client):
        async with AsyncClient(
            transport=ASGITransport(app=app_client), base_url="http://test"
        ) as client:
            resp = await client.get("/api/v1/books", params={"month": "2024-01"})

        assert [b["title"] for b in resp.json()["books"]] == ["Merv: oasis cities of the Silk Road"]

    @pytest.mark.asyncio
    async def test_malformed_month_returns_400(self, app_client):
        async with AsyncClient(
            transport=ASGITransport(app=app_client), base_url="http://test"
        ) as client:
            resp = await client.get("/api/v1/books", params={"month": "April"})

        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_year_outside_calendar_returns_400(self, app_client):
        async with AsyncClient(
            transport=ASGITransport(app=app_client), base_url="http://test"
        ) as client:
            resp = await client.get("/api/v1/books", params={"month": "0000-05"})

        assert resp.status_code == 400
        assert "year" in resp.json()["detail"]

    @pytest.mark.asyncio
    async def test_missing_month_returns_422(self, app_client):
        async with AsyncClient(
            transport=ASGITransport(app=app_client), base_url="http://test"
        ) as client:
            resp = await client.get("/api/v1/books")

        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_catalog_unavailable_returns_503(self, app_client):
        from core.dependencies import get_catalog

        def _fail():
            raise CatalogLoadError("Book catalog not found")

        app_client.dependency_overrides[get_catalog] = _fail
        async with AsyncClient(
            transport=ASGITransport(app=app_client), base_url="http://test"
        ) as client:
            resp = await client.get("/api/v1/books", params={"month": "2024-04"})

        assert resp.status_code == 503
        assert resp.json() == {"detail": "Book catalog unavailable"}
