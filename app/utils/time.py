"""Time Utilities for UTC storage and billing-month arithmetic"""

from datetime import date, datetime, time, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from app.config import settings


def get_utc_now() -> datetime:
    """
    Returns a naive UTC datetime.
    Matches the DB schema (TIMESTAMP WITHOUT TIME ZONE).
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def billing_tz() -> ZoneInfo:
    return ZoneInfo(settings.BILLING_TIMEZONE)


def to_local(value: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """Convert a stored naive-UTC datetime to the billing timezone."""
    tz = tz or billing_tz()
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def to_utc_naive(value: datetime, tz: Optional[ZoneInfo] = None) -> datetime:
    """Normalize any datetime to naive UTC. Naive input is taken as local billing time."""
    tz = tz or billing_tz()
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def month_of(value: datetime, tz: Optional[ZoneInfo] = None) -> Tuple[int, int]:
    """(year, month) of a stored timestamp, as seen in the billing timezone."""
    local = to_local(value, tz)
    return local.year, local.month


def month_key(value: datetime, tz: Optional[ZoneInfo] = None) -> str:
    """'YYYY-MM' bucket key of a stored timestamp."""
    year, month = month_of(value, tz)
    return f"{year:04d}-{month:02d}"


def month_bounds(year: int, month: int, tz: Optional[ZoneInfo] = None) -> Tuple[datetime, datetime]:
    """
    Naive-UTC half-open range [start, end) covering a calendar month
    in the billing timezone.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    tz = tz or billing_tz()
    start = datetime(year, month, 1, tzinfo=tz)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=tz)
    else:
        end = datetime(year, month + 1, 1, tzinfo=tz)
    return to_utc_naive(start), to_utc_naive(end)


def day_bounds(
    start: Optional[date], end: Optional[date], tz: Optional[ZoneInfo] = None
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Inclusive local-day range converted to a naive-UTC half-open range."""
    tz = tz or billing_tz()
    lower = upper = None
    if start is not None:
        lower = to_utc_naive(datetime.combine(start, time.min, tzinfo=tz))
    if end is not None:
        upper = to_utc_naive(datetime.combine(end, time.max, tzinfo=tz))
    return lower, upper
