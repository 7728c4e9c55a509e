"""Unit tests for SettingsService."""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.billing import BillingSettings
from app.services.settings_service import SettingsService


@pytest.mark.asyncio
@pytest.mark.parametrize("price", [0, -10, "abc"])
async def test_invalid_price_never_touches_database(price):
    db = AsyncMock(spec=AsyncSession)

    with pytest.raises(ValueError):
        await SettingsService.update_fixed_price(db, price)

    db.execute.assert_not_awaited()
    db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_fixed_price_saves_on_singleton():
    db = AsyncMock(spec=AsyncSession)
    row = BillingSettings(id=1, fixed_price=Decimal("1000"), auto_bill_generation=True)

    with patch("app.services.settings_service.SettingsService._lock_or_create", new_callable=AsyncMock) as mock_lock:
        mock_lock.return_value = row
        saved = await SettingsService.update_fixed_price(db, "1250")

    assert saved.fixed_price == Decimal("1250")
    assert saved.auto_bill_generation is True
    db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_toggle_auto_generation_flips_flag():
    db = AsyncMock(spec=AsyncSession)
    row = BillingSettings(id=1, fixed_price=Decimal("1000"), auto_bill_generation=False)

    with patch("app.services.settings_service.SettingsService._lock_or_create", new_callable=AsyncMock) as mock_lock:
        mock_lock.return_value = row
        first = await SettingsService.toggle_auto_generation(db)
        assert first.auto_bill_generation is True
        second = await SettingsService.toggle_auto_generation(db)

    assert second.auto_bill_generation is False


@pytest.mark.asyncio
async def test_save_failure_rolls_back():
    db = AsyncMock(spec=AsyncSession)
    db.commit.side_effect = RuntimeError("write failed")
    row = BillingSettings(id=1, fixed_price=Decimal("1000"), auto_bill_generation=False)

    with patch("app.services.settings_service.SettingsService._lock_or_create", new_callable=AsyncMock) as mock_lock:
        mock_lock.return_value = row
        with pytest.raises(RuntimeError):
            await SettingsService.toggle_auto_generation(db)

    db.rollback.assert_awaited_once()


def test_describe_without_row_uses_defaults():
    described = SettingsService.describe(None)

    assert described.is_default is True
    assert described.fixed_price == settings.DEFAULT_FIXED_PRICE
    assert described.auto_bill_generation is False


@pytest.mark.asyncio
async def test_get_fixed_price_defaults_when_missing():
    db = AsyncMock(spec=AsyncSession)

    with patch("app.services.settings_service.SettingsService.get_settings", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = None
        assert await SettingsService.get_fixed_price(db) == settings.DEFAULT_FIXED_PRICE
