"""Unit tests for the pure bill lifecycle rules."""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from app.models.enums import BillStatus
from app.services import billing_rules
from tests.factories import NOW, make_bill, make_customer

KARACHI = ZoneInfo("Asia/Karachi")


def test_status_rotation_cycle():
    assert billing_rules.next_bill_status(BillStatus.PAID) == BillStatus.NOT_PAID
    assert billing_rules.next_bill_status(BillStatus.NOT_PAID) == BillStatus.PENDING
    assert billing_rules.next_bill_status(BillStatus.PENDING) == BillStatus.PAID


def test_status_rotation_returns_after_three_steps():
    for start in BillStatus:
        status = start
        for _ in range(3):
            status = billing_rules.next_bill_status(status)
        assert status == start


def test_raw_string_status_is_understood():
    assert billing_rules.next_bill_status("not paid") == BillStatus.PENDING


@pytest.mark.parametrize("raw", ["overdue", "", None, "PAID"])
def test_unrecognized_status_becomes_paid(raw):
    assert billing_rules.next_bill_status(raw) == BillStatus.PAID


def test_entering_paid_stamps_payment_date():
    customer = make_customer()
    bill = make_bill(customer, status=BillStatus.PENDING)

    fields = billing_rules.change_bill_status(bill, NOW)

    assert fields == {"status": BillStatus.PAID, "payment_date": NOW}


def test_leaving_paid_clears_payment_date():
    customer = make_customer()
    bill = make_bill(customer, status=BillStatus.PAID)
    assert bill.payment_date is not None

    fields = billing_rules.change_bill_status(bill, NOW)

    assert fields["status"] == BillStatus.NOT_PAID
    assert fields["payment_date"] is None


def test_apply_bill_status_mutates_record():
    customer = make_customer()
    bill = make_bill(customer, status=BillStatus.NOT_PAID)

    billing_rules.apply_bill_status(bill, BillStatus.PAID, NOW)
    assert bill.status == BillStatus.PAID
    assert bill.payment_date == NOW

    billing_rules.apply_bill_status(bill, BillStatus.PENDING, NOW)
    assert bill.payment_date is None


@pytest.mark.parametrize("value,expected", [
    (1200, Decimal("1200")),
    ("750.50", Decimal("750.50")),
    (Decimal("0.01"), Decimal("0.01")),
    (99.5, Decimal("99.5")),
])
def test_validate_fixed_price_accepts_positive_numbers(value, expected):
    assert billing_rules.validate_fixed_price(value) == expected


@pytest.mark.parametrize("value", [0, -5, "0", "abc", "", True, float("inf"), float("nan"), "NaN"])
def test_validate_fixed_price_rejects_invalid(value):
    with pytest.raises(ValueError):
        billing_rules.validate_fixed_price(value)


def test_validate_fixed_price_message_for_non_positive():
    with pytest.raises(ValueError, match="greater than 0"):
        billing_rules.validate_fixed_price(-1)


def test_generate_creates_one_pending_bill_per_customer():
    customers = [make_customer("A"), make_customer("B"), make_customer("C")]

    bills = billing_rules.generate_monthly_bills(customers, [], 1200, NOW, KARACHI)

    assert len(bills) == 3
    assert {b.customer_id for b in bills} == {c.id for c in customers}
    for bill in bills:
        assert bill.id is not None
        assert bill.status == BillStatus.PENDING
        assert bill.amount == Decimal("1200")
        assert bill.payment_date is None
        assert bill.bill_date == NOW
        assert bill.billing_month == "2026-03"
        assert bill.notes == "Auto-generated monthly bill for 15/03/2026"


def test_generate_is_idempotent_within_month():
    customers = [make_customer("A"), make_customer("B")]
    first = billing_rules.generate_monthly_bills(customers, [], 1000, NOW, KARACHI)

    second = billing_rules.generate_monthly_bills(customers, first, 1000, NOW, KARACHI)

    assert second == []


def test_generate_only_fills_missing_customers():
    a, b = make_customer("A"), make_customer("B")
    existing = [make_bill(a, status=BillStatus.PAID)]

    bills = billing_rules.generate_monthly_bills([a, b], existing, 1000, NOW, KARACHI)

    assert [bill.customer_id for bill in bills] == [b.id]


def test_generate_with_no_customers_returns_nothing():
    assert billing_rules.generate_monthly_bills([], [], 1000, NOW, KARACHI) == []


def test_generate_deduplicates_repeated_customer():
    a = make_customer("A")

    bills = billing_rules.generate_monthly_bills([a, a], [], 1000, NOW, KARACHI)

    assert len(bills) == 1


def test_generate_rejects_invalid_price():
    with pytest.raises(ValueError):
        billing_rules.generate_monthly_bills([make_customer()], [], 0, NOW, KARACHI)


def test_generate_uses_local_month_near_midnight():
    # 20:00 UTC on 31 January is already 1 February in Karachi (UTC+5)
    late = datetime(2026, 1, 31, 20, 0, 0)

    bills = billing_rules.generate_monthly_bills([make_customer()], [], 1000, late, KARACHI)

    assert bills[0].billing_month == "2026-02"


def test_bills_in_month_uses_billing_timezone():
    customer = make_customer()
    january = make_bill(customer, bill_date=datetime(2026, 1, 31, 18, 0, 0))
    february = make_bill(customer, bill_date=datetime(2026, 1, 31, 19, 30, 0))

    found = billing_rules.bills_in_month([january, february], 2026, 2, KARACHI)

    assert found == [february]


@pytest.mark.parametrize("value", ["0.004", "12.345", Decimal("100000000"), "1e30"])
def test_validate_fixed_price_rejects_what_the_amount_column_cannot_hold(value):
    with pytest.raises(ValueError):
        billing_rules.validate_fixed_price(value)


def test_validate_fixed_price_accepts_column_limits():
    assert billing_rules.validate_fixed_price("99999999.99") == billing_rules.MAX_PRICE
    assert billing_rules.validate_fixed_price("0.01") == billing_rules.CENT


def test_generate_rejects_sub_cent_price():
    with pytest.raises(ValueError, match="2 decimal places"):
        billing_rules.generate_monthly_bills([make_customer()], [], "0.004", NOW, KARACHI)
