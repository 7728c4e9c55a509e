"""Settings Service - billing settings singleton"""

from decimal import Decimal
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.events import SETTINGS, change_feed
from app.core.logging import get_logger
from app.models.billing import BillingSettings, SETTINGS_SINGLETON_ID
from app.schemas.billing import BillingSettingsResponse, BillingSettingsUpdate
from app.services.billing_rules import validate_fixed_price
from app.utils.time import get_utc_now

logger = get_logger(__name__)


class SettingsService:
    """
    Read-or-create access to the billing settings row.

    Reads tolerate a missing row (defaults apply). Writes create the row at the
    fixed singleton key with a conflict-ignoring insert and then lock it, so two
    concurrent first writers end up updating the same record.
    """

    @staticmethod
    async def get_settings(db: AsyncSession) -> Optional[BillingSettings]:
        result = await db.execute(
            select(BillingSettings).where(BillingSettings.id == SETTINGS_SINGLETON_ID)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def describe(row: Optional[BillingSettings]) -> BillingSettingsResponse:
        if row is None:
            return BillingSettingsResponse(
                fixed_price=settings.DEFAULT_FIXED_PRICE,
                auto_bill_generation=False,
                is_default=True,
            )
        return BillingSettingsResponse(
            fixed_price=row.fixed_price,
            auto_bill_generation=row.auto_bill_generation,
        )

    @staticmethod
    async def get_fixed_price(db: AsyncSession) -> Decimal:
        row = await SettingsService.get_settings(db)
        if row is None or not row.fixed_price:
            return settings.DEFAULT_FIXED_PRICE
        return Decimal(row.fixed_price)

    @staticmethod
    async def _lock_or_create(db: AsyncSession) -> BillingSettings:
        await db.execute(
            pg_insert(BillingSettings)
            .values(
                id=SETTINGS_SINGLETON_ID,
                fixed_price=settings.DEFAULT_FIXED_PRICE,
                auto_bill_generation=False,
                updated_at=get_utc_now(),
            )
            .on_conflict_do_nothing(index_elements=["id"])
        )
        result = await db.execute(
            select(BillingSettings)
            .where(BillingSettings.id == SETTINGS_SINGLETON_ID)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    @staticmethod
    async def _save(db: AsyncSession, row: BillingSettings) -> BillingSettings:
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error("Failed to save billing settings", exc_info=True)
            raise
        await db.refresh(row)
        await change_feed.publish(SETTINGS)
        return row

    @staticmethod
    async def update_fixed_price(
        db: AsyncSession, new_price: Union[int, float, str, Decimal]
    ) -> BillingSettings:
        """
        Set the price used for future generated bills. Existing bills keep
        the amount they were generated with.

        Raises:
            ValueError: if the price is not a positive finite number
        """
        price = validate_fixed_price(new_price)
        row = await SettingsService._lock_or_create(db)
        row.fixed_price = price
        row = await SettingsService._save(db, row)
        logger.info("Fixed price updated", extra={"fixed_price": str(price)})
        return row

    @staticmethod
    async def toggle_auto_generation(db: AsyncSession) -> BillingSettings:
        """Flip the auto-generation flag, creating settings on first use."""
        row = await SettingsService._lock_or_create(db)
        row.auto_bill_generation = not row.auto_bill_generation
        row = await SettingsService._save(db, row)
        logger.info(
            "Auto bill generation toggled",
            extra={"auto_bill_generation": row.auto_bill_generation},
        )
        return row

    @staticmethod
    async def update_settings(db: AsyncSession, data: BillingSettingsUpdate) -> BillingSettings:
        """Partial update of both settings in one write."""
        price = None
        if data.fixed_price is not None:
            price = validate_fixed_price(data.fixed_price)
        row = await SettingsService._lock_or_create(db)
        if price is not None:
            row.fixed_price = price
        if data.auto_bill_generation is not None:
            row.auto_bill_generation = data.auto_bill_generation
        return await SettingsService._save(db, row)
