"""Integration test: one admin and one collector through a billing month."""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from tests.conftest import requires_db

pytestmark = requires_db

from app.database import session_scope
from app.models.enums import UserRole
from app.services.user_service import UserService

PASSWORD = "SecurePass123!"


async def _login(client: AsyncClient, email: str) -> dict:
    resp = await client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['access_token']}"}


@pytest.mark.asyncio
async def test_billing_month_flow(async_client: AsyncClient, unique_suffix: str):
    admin_email = f"admin_{unique_suffix}@example.com"
    async with session_scope() as db:
        await UserService.create_user(db, admin_email, PASSWORD, role=UserRole.ADMIN)
    admin = await _login(async_client, admin_email)

    resp = await async_client.get("/auth/me", headers=admin)
    assert resp.json()["data"]["role"] == "admin"

    # collector account plus profile
    collector_email = f"collector_{unique_suffix}@example.com"
    resp = await async_client.post(
        "/staff",
        headers=admin,
        json={"name": f"Collector {unique_suffix}", "email": collector_email, "password": PASSWORD},
    )
    assert resp.status_code == 200, resp.text
    staff_uid = resp.json()["data"]["uid"]

    resp = await async_client.post(
        "/customers",
        headers=admin,
        json={"name": f"Customer {unique_suffix}", "connection_no": f"W-{unique_suffix}"},
    )
    assert resp.status_code == 200, resp.text
    customer_id = resp.json()["data"]["id"]

    resp = await async_client.post(
        "/assignments/toggle",
        headers=admin,
        json={"staff_uid": staff_uid, "customer_ids": [customer_id]},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["assigned"] == [customer_id]

    resp = await async_client.put("/settings/billing/price", headers=admin, json={"fixed_price": "0"})
    assert resp.status_code == 422

    resp = await async_client.put("/settings/billing/price", headers=admin, json={"fixed_price": "1000"})
    assert resp.status_code == 200
    assert Decimal(resp.json()["data"]["fixed_price"]) == Decimal("1000")

    resp = await async_client.post("/bills/generate", headers=admin)
    assert resp.status_code == 200

    # a second run in the same month creates nothing
    resp = await async_client.post("/bills/generate", headers=admin)
    assert resp.json()["data"]["generated"] == 0

    collector = await _login(async_client, collector_email)
    resp = await async_client.get("/dashboard/me", headers=collector, params={"filter": "pending"})
    assert resp.status_code == 200
    rows = resp.json()["data"]["customers"]
    assert [row["customer_id"] for row in rows] == [customer_id]

    resp = await async_client.get(f"/customers/{customer_id}/statement", headers=collector)
    assert resp.status_code == 200
    bill_id = resp.json()["data"]["bills"][0]["id"]

    resp = await async_client.post(f"/dashboard/me/bills/{bill_id}/pay", headers=collector)
    assert resp.status_code == 200
    paid = resp.json()["data"]
    assert paid["status"] == "paid"
    assert paid["payment_date"] is not None

    resp = await async_client.post(f"/dashboard/me/bills/{bill_id}/pay", headers=collector)
    assert resp.status_code == 400

    # admin correction: paid -> not paid clears the payment date
    resp = await async_client.post(f"/bills/{bill_id}/status", headers=admin)
    assert resp.json()["data"]["status"] == "not paid"
    assert resp.json()["data"]["payment_date"] is None

    resp = await async_client.get("/bills/outstanding", headers=admin, params={"search": unique_suffix})
    assert [row["id"] for row in resp.json()["data"]] == [bill_id]

    resp = await async_client.get("/customers", headers=collector)
    assert resp.status_code == 403
