"""Scheduler-triggered jobs, guarded by a shared secret"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.logging import get_logger
from app.core.security import verify_cron_secret
from app.services.billing_service import BillingService

router = APIRouter()
security = HTTPBearer()
logger = get_logger(__name__)


@router.post("/generate-monthly-bills")
async def generate_monthly_bills(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """
    Monthly generation run by the external scheduler. Does nothing unless
    auto bill generation is enabled; repeat calls in a month are no-ops.
    """
    if not verify_cron_secret(credentials.credentials):
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        result = await BillingService.run_scheduled_generation(db)
    except Exception as e:
        logger.error("Scheduled bill generation failed", exc_info=True)
        return {"status": "error", "message": str(e)}

    return {
        "status": "success",
        "generated": result.generated,
        "billing_month": result.billing_month,
        "message": result.skipped_reason or f"Generated {result.generated} bills",
    }
