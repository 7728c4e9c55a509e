"""Customer registry endpoints"""

from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.billing import CustomerStatement
from app.schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from app.schemas.responses import SuccessResponse
from app.services.billing_service import BillingService
from app.services.customer_service import CustomerService
from app.services.staff_service import StaffService

router = APIRouter()


@router.get("", response_model=SuccessResponse[List[CustomerResponse]])
async def list_customers(
    search: Optional[str] = None,
    assigned_to: Optional[str] = None,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """List customers, searchable by name or connection number. Admin only."""
    customers = await CustomerService.list_customers(db, search=search, assigned_to=assigned_to)
    return SuccessResponse(data=[CustomerResponse.model_validate(c) for c in customers])


@router.post("", response_model=SuccessResponse[CustomerResponse])
async def create_customer(
    customer_in: CustomerCreate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Create a customer. Name and connection number are required."""
    customer = await CustomerService.create_customer(db, customer_in)
    return SuccessResponse(data=CustomerResponse.model_validate(customer), message="Customer created successfully")


@router.get("/{customer_id}", response_model=SuccessResponse[CustomerResponse])
async def get_customer(
    customer_id: UUID,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    customer = await CustomerService.get_customer(db, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return SuccessResponse(data=CustomerResponse.model_validate(customer))


@router.patch("/{customer_id}", response_model=SuccessResponse[CustomerResponse])
async def update_customer(
    customer_id: UUID,
    customer_in: CustomerUpdate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    customer = await CustomerService.update_customer(db, customer_id, customer_in)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return SuccessResponse(data=CustomerResponse.model_validate(customer), message="Customer updated successfully")


@router.delete("/{customer_id}", response_model=SuccessResponse)
async def delete_customer(
    customer_id: UUID,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Remove a customer. Bills already issued to it are kept."""
    deleted = await CustomerService.delete_customer(db, customer_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Customer not found")
    return SuccessResponse(data=None, message="Customer deleted successfully")


@router.get("/{customer_id}/statement", response_model=SuccessResponse[CustomerStatement])
async def get_customer_statement(
    customer_id: UUID,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Bill statement for a customer. Admins see any customer; staff only
    customers assigned to them.
    """
    customer = await CustomerService.get_customer(db, customer_id, include_deleted=current_user.is_admin)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    if not current_user.is_admin:
        staff = await StaffService.get_staff_by_uid(db, current_user.uid)
        if not staff or customer.assigned_to != staff.uid:
            raise HTTPException(status_code=403, detail="Not enough permissions")
    statement = await BillingService.customer_statement(db, customer)
    return SuccessResponse(data=statement)
