"""Staff registry endpoints"""

from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.responses import SuccessResponse
from app.schemas.staff import StaffCreate, StaffResponse, StaffUpdate
from app.services.staff_service import StaffService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[StaffResponse]])
async def list_staff(
    search: Optional[str] = None,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    staff = await StaffService.list_staff(db, search=search)
    return SuccessResponse(data=[StaffResponse.model_validate(s) for s in staff])


@router.post("", response_model=SuccessResponse[StaffResponse])
async def create_staff(
    staff_in: StaffCreate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Create a staff member and their login account. Admin only."""
    try:
        staff = await StaffService.create_staff(db, staff_in)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse(data=StaffResponse.model_validate(staff), message="Staff member created successfully")


@router.get("/{staff_id}", response_model=SuccessResponse[StaffResponse])
async def get_staff(
    staff_id: UUID,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    staff = await StaffService.get_staff(db, staff_id)
    if not staff:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return SuccessResponse(data=StaffResponse.model_validate(staff))


@router.patch("/{staff_id}", response_model=SuccessResponse[StaffResponse])
async def update_staff(
    staff_id: UUID,
    staff_in: StaffUpdate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    staff = await StaffService.update_staff(db, staff_id, staff_in)
    if not staff:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return SuccessResponse(data=StaffResponse.model_validate(staff), message="Staff member updated successfully")


@router.delete("/{staff_id}", response_model=SuccessResponse)
async def delete_staff(
    staff_id: UUID,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    deleted = await StaffService.delete_staff(db, staff_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Staff member not found")
    return SuccessResponse(data=None, message="Staff member deleted successfully")
