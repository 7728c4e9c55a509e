"""Unit tests for billing-month time helpers."""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from app.utils.time import day_bounds, get_utc_now, month_bounds, month_key, month_of, to_utc_naive

KARACHI = ZoneInfo("Asia/Karachi")


def test_get_utc_now_is_naive():
    assert get_utc_now().tzinfo is None


def test_month_key_uses_billing_timezone():
    assert month_key(datetime(2026, 1, 31, 18, 59, 59), KARACHI) == "2026-01"
    assert month_key(datetime(2026, 1, 31, 19, 0, 0), KARACHI) == "2026-02"


def test_aware_values_are_converted():
    aware = datetime(2026, 12, 31, 20, 0, tzinfo=timezone.utc)
    assert month_of(aware, KARACHI) == (2027, 1)


def test_month_bounds_are_half_open_utc():
    start, end = month_bounds(2026, 3, KARACHI)

    assert start == datetime(2026, 2, 28, 19, 0, 0)
    assert end == datetime(2026, 3, 31, 19, 0, 0)


def test_month_bounds_december_rolls_year():
    start, end = month_bounds(2026, 12, KARACHI)

    assert start == datetime(2026, 11, 30, 19, 0, 0)
    assert end == datetime(2026, 12, 31, 19, 0, 0)


@pytest.mark.parametrize("month", [0, 13])
def test_month_bounds_rejects_invalid_month(month):
    with pytest.raises(ValueError):
        month_bounds(2026, month, KARACHI)


def test_naive_input_is_local_time():
    assert to_utc_naive(datetime(2026, 3, 1, 5, 0, 0), KARACHI) == datetime(2026, 3, 1, 0, 0, 0)


def test_day_bounds_cover_whole_days():
    lower, upper = day_bounds(date(2026, 3, 1), date(2026, 3, 1), KARACHI)

    assert lower == datetime(2026, 2, 28, 19, 0, 0)
    assert upper > datetime(2026, 3, 1, 18, 59, 59)
    assert upper < datetime(2026, 3, 1, 19, 0, 0)


def test_day_bounds_open_ended():
    lower, upper = day_bounds(None, date(2026, 3, 1), KARACHI)
    assert lower is None
    assert upper is not None
