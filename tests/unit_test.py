"""Unit tests that do not require a running API or external services."""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.config import Settings, settings


def test_settings_load():
    assert settings.API_V1_PREFIX == "/api/v1"
    assert settings.APP_NAME == "Water Billing Backend"


def test_environment_flag():
    assert settings.ENVIRONMENT.lower() in ("development", "test", "production")
    assert settings.is_development == (settings.ENVIRONMENT.lower() == "development")
    assert settings.is_production == (settings.ENVIRONMENT.lower() == "production")


def test_billing_defaults():
    assert settings.DEFAULT_FIXED_PRICE == Decimal("1000")
    assert settings.BILLING_TIMEZONE == "Asia/Karachi"
    assert isinstance(settings.ALLOWED_ORIGINS, list)


@pytest.mark.parametrize("price", ["0", "0.004", "100000000"])
def test_default_price_must_fit_bill_column(price):
    with pytest.raises(ValidationError):
        Settings(DEFAULT_FIXED_PRICE=price)
