"""Billing settings endpoints"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.models.user import User
from app.schemas.billing import BillingSettingsResponse, BillingSettingsUpdate, FixedPriceUpdate
from app.schemas.responses import SuccessResponse
from app.services.settings_service import SettingsService

router = APIRouter()


@router.get("/billing", response_model=SuccessResponse[BillingSettingsResponse])
async def get_billing_settings(
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Current settings; defaults when none have been saved yet."""
    row = await SettingsService.get_settings(db)
    return SuccessResponse(data=SettingsService.describe(row))


@router.patch("/billing", response_model=SuccessResponse[BillingSettingsResponse])
async def update_billing_settings(
    body: BillingSettingsUpdate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    try:
        row = await SettingsService.update_settings(db, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse(data=SettingsService.describe(row), message="Settings updated successfully")


@router.put("/billing/price", response_model=SuccessResponse[BillingSettingsResponse])
async def update_fixed_price(
    body: FixedPriceUpdate,
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Set the fixed monthly price. Bills already issued keep their amount."""
    try:
        row = await SettingsService.update_fixed_price(db, body.fixed_price)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuccessResponse(data=SettingsService.describe(row), message="Fixed price updated successfully.")


@router.post("/billing/auto-generation/toggle", response_model=SuccessResponse[BillingSettingsResponse])
async def toggle_auto_generation(
    current_user: User = Depends(deps.require_admin),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    row = await SettingsService.toggle_auto_generation(db)
    state = "enabled" if row.auto_bill_generation else "disabled"
    return SuccessResponse(data=SettingsService.describe(row), message=f"Auto bill generation {state}")
