"""Billing Rules - pure bill lifecycle logic, no I/O

Everything here operates on in-memory records so the same rules back the API,
the scheduled job and the tests.
"""

import math
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Union
from zoneinfo import ZoneInfo

from app.models.billing import Bill
from app.models.enums import BillStatus
from app.utils.time import month_of, month_key, to_local

# Bill amounts and the fixed price are stored as NUMERIC(10, 2)
CENT = Decimal("0.01")
MAX_PRICE = Decimal("99999999.99")

# Rotation used to correct collector mistakes: paid -> not paid -> pending -> paid
STATUS_ROTATION: Dict[BillStatus, BillStatus] = {
    BillStatus.PAID: BillStatus.NOT_PAID,
    BillStatus.NOT_PAID: BillStatus.PENDING,
    BillStatus.PENDING: BillStatus.PAID,
}


def parse_status(value: Any) -> Optional[BillStatus]:
    """Map a raw status value to BillStatus, or None when unrecognized."""
    if isinstance(value, BillStatus):
        return value
    try:
        return BillStatus(value)
    except ValueError:
        return None


def next_bill_status(current: Any) -> BillStatus:
    """Next status in the rotation. Unrecognized or missing status becomes paid."""
    status = parse_status(current)
    if status is None:
        return BillStatus.PAID
    return STATUS_ROTATION[status]


def status_update_fields(status: BillStatus, now: datetime) -> Dict[str, Any]:
    """
    Fields to write for a status change.

    payment_date is stamped when entering paid and cleared otherwise.
    """
    return {
        "status": status,
        "payment_date": now if status == BillStatus.PAID else None,
    }


def change_bill_status(bill: Bill, now: datetime) -> Dict[str, Any]:
    """Updated fields for rotating ``bill`` one step through the status cycle."""
    return status_update_fields(next_bill_status(bill.status), now)


def apply_bill_status(bill: Bill, status: BillStatus, now: datetime) -> Dict[str, Any]:
    """Set ``status`` on ``bill`` together with its payment-date side effect."""
    fields = status_update_fields(status, now)
    for key, value in fields.items():
        setattr(bill, key, value)
    return fields


def validate_fixed_price(value: Union[int, float, str, Decimal]) -> Decimal:
    """
    Normalize a fixed price to Decimal.

    Raises:
        ValueError: if the value is not a positive finite number that fits
            NUMERIC(10, 2)
    """
    if isinstance(value, bool):
        raise ValueError("Price must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("Price must be a finite number")
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError("Price must be a number")
    if not price.is_finite():
        raise ValueError("Price must be a finite number")
    if price <= 0:
        raise ValueError("Please enter a valid price greater than 0.")
    if price > MAX_PRICE:
        raise ValueError(f"Price cannot exceed {MAX_PRICE}")
    if price != price.quantize(CENT):
        raise ValueError("Price can have at most 2 decimal places")
    return price


def bills_in_month(
    bills: Iterable[Any],
    year: int,
    month: int,
    tz: Optional[ZoneInfo] = None,
) -> List[Any]:
    """Bills whose bill_date falls in the given calendar month."""
    return [
        bill for bill in bills
        if bill.bill_date is not None and month_of(bill.bill_date, tz) == (year, month)
    ]


def generation_note(now: datetime, tz: Optional[ZoneInfo] = None) -> str:
    local = to_local(now, tz)
    return f"Auto-generated monthly bill for {local.strftime('%d/%m/%Y')}"


def generate_monthly_bills(
    customers: Iterable[Any],
    existing_bills_for_month: Iterable[Any],
    fixed_price: Union[int, float, str, Decimal],
    now: datetime,
    tz: Optional[ZoneInfo] = None,
) -> List[Bill]:
    """
    Build the bills still missing for the month of ``now``.

    Customers that already have a bill in ``existing_bills_for_month`` are
    skipped, so running generation again in the same month yields nothing.
    Returned bills are transient; the caller persists them.
    """
    price = validate_fixed_price(fixed_price)
    billed = {bill.customer_id for bill in existing_bills_for_month}
    period = month_key(now, tz)
    note = generation_note(now, tz)

    new_bills = []
    for customer in customers:
        if customer.id in billed:
            continue
        # a customer listed twice still gets one bill
        billed.add(customer.id)
        new_bills.append(
            Bill(
                id=uuid.uuid4(),
                customer_id=customer.id,
                amount=price,
                status=BillStatus.PENDING,
                bill_date=now,
                payment_date=None,
                billing_month=period,
                notes=note,
            )
        )
    return new_bills
