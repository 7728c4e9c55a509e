"""Bill endpoints - admin bill management"""

from datetime import date
from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.enums import BillListStatus
from app.models.user import User
from app.schemas.billing import (
    BillListFilters, BillListResponse, BillResponse, BillWithCustomer, GenerationResult,
)
from app.schemas.responses import SuccessResponse
from app.services.billing_service import BillingService

router = APIRouter()


@router.get("", response_model=SuccessResponse[BillListResponse])
async def list_bills(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: BillListStatus = BillListStatus.ALL,
    search: Optional[str] = None,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Bills of the current month, or of an inclusive date range when either
    bound is given. Filter by status and by customer name/connection number.
    """
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")
    filters = BillListFilters(start_date=start_date, end_date=end_date, status=status, search=search)
    listing = await BillingService.list_bills(db, filters)
    return SuccessResponse(data=listing)


@router.get("/outstanding", response_model=SuccessResponse[List[BillWithCustomer]])
async def list_outstanding_bills(
    search: Optional[str] = None,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Pending and not-paid bills, searchable by name, CNIC, phone or connection number."""
    bills = await BillingService.list_outstanding(db, search=search)
    return SuccessResponse(data=bills)


@router.post("/generate", response_model=SuccessResponse[GenerationResult])
async def generate_bills(
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Generate this month's missing bills at the current fixed price."""
    result = await BillingService.generate_for_month(db)
    if result.generated == 0:
        return SuccessResponse(data=result, message="No bills to generate")
    return SuccessResponse(data=result, message=f"Generated {result.generated} bills")


@router.delete("/month/{year}/{month}", response_model=SuccessResponse)
async def delete_bills_for_month(
    year: int = Path(..., ge=2000, le=2100),
    month: int = Path(..., ge=1, le=12),
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Delete every bill dated in the given month. Cannot be undone."""
    deleted = await BillingService.delete_bills_for_month(db, year, month)
    return SuccessResponse(data={"deleted": deleted}, message=f"Deleted {deleted} bills")


@router.post("/{bill_id}/status", response_model=SuccessResponse[BillResponse])
async def change_bill_status(
    bill_id: UUID,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Rotate the bill status: paid -> not paid -> pending -> paid."""
    bill = await BillingService.change_status(db, bill_id)
    if not bill:
        raise HTTPException(status_code=404, detail="Bill not found")
    return SuccessResponse(
        data=BillResponse.model_validate(bill),
        message=f"Bill status updated to {bill.status.value}",
    )


@router.delete("/{bill_id}", response_model=SuccessResponse)
async def delete_bill(
    bill_id: UUID,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    deleted = await BillingService.delete_bill(db, bill_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Bill not found")
    return SuccessResponse(data=None, message="Bill deleted successfully")
