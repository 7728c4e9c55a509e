"""Assignment endpoints - admin links customers to collectors"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.assignment import AssignmentToggleRequest, AssignmentToggleResult
from app.schemas.responses import SuccessResponse
from app.services.assignment_service import AssignmentService

router = APIRouter()


@router.post("/toggle", response_model=SuccessResponse[AssignmentToggleResult])
async def toggle_assignment(
    body: AssignmentToggleRequest,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Toggle the staff member on each selected customer: customers already
    assigned to them are released, all others are assigned to them.
    """
    try:
        plan = await AssignmentService.toggle_assignment(db, body.staff_uid, body.customer_ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse(
        data=AssignmentToggleResult(
            staff_uid=plan.staff_uid,
            assigned=plan.assigned,
            unassigned=plan.unassigned,
        ),
        message=f"Assigned {len(plan.assigned)} customers, unassigned {len(plan.unassigned)} customers",
    )
