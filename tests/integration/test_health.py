"""Integration tests: Health, root and access guards (no database needed)."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app


@pytest.mark.asyncio
async def test_health():
    """Health endpoint at /health."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in resp.headers


@pytest.mark.asyncio
async def test_request_id_is_echoed():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_root():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["health"] == "/health"


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", [
    ("get", "/customers"),
    ("get", "/staff"),
    ("get", "/bills"),
    ("post", "/bills/generate"),
    ("get", "/settings/billing"),
    ("get", "/dashboard/admin"),
    ("get", "/dashboard/me"),
])
async def test_endpoints_require_token(async_client: AsyncClient, method: str, path: str):
    resp = await getattr(async_client, method)(path)
    assert resp.status_code in (401, 403)


@pytest.mark.asyncio
async def test_garbage_token_rejected(async_client: AsyncClient):
    resp = await async_client.get("/customers", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_cron_rejects_wrong_secret(async_client: AsyncClient):
    resp = await async_client.post(
        "/cron/generate-monthly-bills",
        headers={"Authorization": "Bearer wrong-secret"},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_login_validation_error(async_client: AsyncClient):
    resp = await async_client.post("/auth/login", json={"email": "not-an-email", "password": "x"})
    assert resp.status_code == 422
