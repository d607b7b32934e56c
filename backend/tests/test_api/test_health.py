"""Test health and basic API endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from backend.app.api.deps import get_chart_adapter
from backend.app.main import create_app


@pytest.fixture
def app():
    return create_app()


@pytest.mark.asyncio
async def test_health_endpoint(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["app"] == "stockchart"
    assert data["version"] == "0.1.0"


@pytest.mark.asyncio
async def test_docs_available(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/docs")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_openapi_schema_has_endpoints(app):
    """Verify all expected API routes are registered."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/openapi.json")
    assert response.status_code == 200
    paths = list(response.json()["paths"].keys())
    assert "/health" in paths
    assert "/diag" in paths
    assert "/api/v1/stock" in paths
    assert "/api/v1/stock/periods" in paths


@pytest.mark.asyncio
async def test_diag_reports_upstream_ok(app, upstream, aapl_payload):
    adapter, requests = upstream(aapl_payload)
    app.dependency_overrides[get_chart_adapter] = lambda: adapter
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/diag")
    assert response.status_code == 200
    data = response.json()["upstream"]
    assert data["status"] == "ok"
    assert data["rows"] == 5
    assert data["symbol_tested"] == "AAPL"
    assert len(requests) == 1


@pytest.mark.asyncio
async def test_diag_reports_upstream_error(app, upstream, error_payload):
    adapter, _ = upstream(error_payload("Not Found", "No data found"), status_code=404)
    app.dependency_overrides[get_chart_adapter] = lambda: adapter
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        response = await client.get("/diag")
    assert response.status_code == 200
    data = response.json()["upstream"]
    assert data["status"] == "error"
    assert data["details"] == "No data found"
