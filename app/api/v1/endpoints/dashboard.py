"""Dashboard endpoints - aggregated figures for admins and collectors"""

import asyncio
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.core.events import BILLS, CUSTOMERS, STAFF, change_feed
from app.core.logging import get_logger
from app.database import session_scope
from app.models.enums import CollectionFilter
from app.models.staff import Staff
from app.models.user import User
from app.schemas.billing import BillResponse
from app.schemas.dashboard import AdminOverview, StaffDashboard, StaffRevenueSummary
from app.schemas.responses import SuccessResponse
from app.services.billing_service import BillingService
from app.services.dashboard_service import DashboardService

router = APIRouter()
logger = get_logger(__name__)


@router.get("/admin", response_model=SuccessResponse[AdminOverview])
async def get_admin_overview(
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Headline counts plus pending and collected totals."""
    overview = await DashboardService.admin_overview(db)
    return SuccessResponse(data=overview)


@router.get("/staff-summary", response_model=SuccessResponse[List[StaffRevenueSummary]])
async def get_staff_summary(
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Per collector: assigned customers, this month's revenue and monthly history."""
    summary = await DashboardService.staff_summary(db)
    return SuccessResponse(data=summary)


@router.get("/me", response_model=SuccessResponse[StaffDashboard])
async def get_my_dashboard(
    filter: CollectionFilter = CollectionFilter.ALL,
    search: Optional[str] = None,
    staff: Staff = Depends(deps.get_current_staff),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Collector view of assigned customers, filterable by this month's standing
    and searchable by name, CNIC, phone or connection number.
    """
    dashboard = await DashboardService.staff_dashboard(db, staff, bill_filter=filter, search=search)
    return SuccessResponse(data=dashboard)


@router.post("/me/bills/{bill_id}/pay", response_model=SuccessResponse[BillResponse])
async def mark_bill_paid(
    bill_id: UUID,
    staff: Staff = Depends(deps.get_current_staff),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Record a payment collected from one of the caller's customers."""
    try:
        bill = await BillingService.mark_paid(db, bill_id, collector_uid=staff.uid)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return SuccessResponse(data=BillResponse.model_validate(bill), message="Bill marked as paid!")


async def _push_overview(websocket: WebSocket) -> bool:
    """
    Send one fresh overview. Failures other than a disconnect are logged and
    skipped; the socket stays open for the next change.
    """
    try:
        async with session_scope() as db:
            overview = await DashboardService.admin_overview(db)
        await websocket.send_json(AdminOverview(**overview).model_dump(mode="json"))
    except WebSocketDisconnect:
        raise
    except Exception:
        logger.error("Live dashboard push failed", exc_info=True)
        return False
    return True


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        return


@router.websocket("/live")
async def live_admin_overview(websocket: WebSocket, token: str = Query(...)):
    """
    Pushes a fresh admin overview on connect and after every change to
    customers, staff or bills.
    """
    async with session_scope() as db:
        try:
            user = await deps.user_from_token(db, token)
        except HTTPException:
            user = None
    if user is None or not user.is_admin:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    changes: asyncio.Queue = asyncio.Queue(maxsize=1)

    def on_change(collection: str) -> None:
        # one queued refresh covers any burst of changes
        if changes.empty():
            changes.put_nowait(collection)

    unsubscribes = [change_feed.subscribe(name, on_change) for name in (CUSTOMERS, STAFF, BILLS)]
    disconnected = asyncio.create_task(_wait_for_disconnect(websocket))
    try:
        await _push_overview(websocket)
        while True:
            next_change = asyncio.create_task(changes.get())
            done, _ = await asyncio.wait(
                {next_change, disconnected}, return_when=asyncio.FIRST_COMPLETED
            )
            if disconnected in done:
                next_change.cancel()
                break
            await _push_overview(websocket)
    except WebSocketDisconnect:
        pass
    finally:
        disconnected.cancel()
        for unsubscribe in unsubscribes:
            unsubscribe()
        logger.info("Live dashboard closed", extra={"uid": user.uid})
