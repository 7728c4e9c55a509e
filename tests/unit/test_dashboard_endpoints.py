"""Unit tests for dashboard endpoints with service calls mocked out."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from httpx import AsyncClient
from starlette.websockets import WebSocketDisconnect

from app.api import deps
from app.api.v1.endpoints import dashboard
from app.main import app
from tests.factories import make_staff


@pytest.fixture
def collector():
    staff = make_staff("Collector")

    async def current_staff():
        return staff

    async def no_db():
        yield MagicMock()

    app.dependency_overrides[deps.get_current_staff] = current_staff
    app.dependency_overrides[deps.get_db] = no_db
    yield staff
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_my_dashboard_passes_search(async_client: AsyncClient, collector):
    empty = {
        "staff_id": collector.id,
        "uid": collector.uid,
        "name": collector.name,
        "total_assigned": 0,
        "total_collected": 0,
        "collected_amount": 0,
        "outstanding_amount": 0,
        "customers": [],
    }
    with patch("app.api.v1.endpoints.dashboard.DashboardService.staff_dashboard", new_callable=AsyncMock) as mock_dash:
        mock_dash.return_value = empty
        resp = await async_client.get("/dashboard/me", params={"filter": "paid", "search": "W-100"})

    assert resp.status_code == 200
    assert mock_dash.await_args.kwargs["search"] == "W-100"
    assert mock_dash.await_args.kwargs["bill_filter"] == "paid"


@pytest.mark.asyncio
async def test_live_push_failure_is_logged_not_raised():
    websocket = AsyncMock()

    with patch("app.api.v1.endpoints.dashboard.DashboardService.admin_overview", new_callable=AsyncMock) as mock_overview:
        mock_overview.side_effect = RuntimeError("database unavailable")
        with patch.object(dashboard.logger, "error") as mock_log:
            pushed = await dashboard._push_overview(websocket)

    assert pushed is False
    websocket.send_json.assert_not_awaited()
    mock_log.assert_called_once()
    assert mock_log.call_args.kwargs["exc_info"] is True


@pytest.mark.asyncio
async def test_live_push_lets_disconnect_through():
    websocket = AsyncMock()
    websocket.send_json.side_effect = WebSocketDisconnect()

    with patch("app.api.v1.endpoints.dashboard.DashboardService.admin_overview", new_callable=AsyncMock) as mock_overview:
        mock_overview.return_value = {
            "total_customers": 0,
            "assigned_customers": 0,
            "unassigned_customers": 0,
            "total_staff": 0,
            "active_staff": 0,
            "current_month": "2026-03",
            "current_month_bills": 0,
            "current_month_paid": 0,
            "current_month_outstanding": 0,
            "pending_total": 0,
            "paid_total": 0,
        }
        with pytest.raises(WebSocketDisconnect):
            await dashboard._push_overview(websocket)
