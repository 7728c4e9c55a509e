"""Aggregation - read-side totals and histories derived from a snapshot

Pure functions over customers, staff and bills. Nothing here is stored, so
callers recompute on every change. Month bucketing always uses a bill's
``bill_date`` in the billing timezone.
"""

from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from app.models.enums import (
    BillStatus,
    CollectionFilter,
    MonthStanding,
    OUTSTANDING_STATUSES,
    StaffStatus,
)
from app.services.billing_rules import parse_status
from app.utils.time import month_key, month_of

ZERO = Decimal("0")


def _is_paid(bill: Any) -> bool:
    return parse_status(bill.status) == BillStatus.PAID


def _is_outstanding(bill: Any) -> bool:
    return parse_status(bill.status) in OUTSTANDING_STATUSES


def _sum(bills: Iterable[Any]) -> Decimal:
    return sum((Decimal(bill.amount) for bill in bills), ZERO)


def pending_total(bills: Iterable[Any]) -> Decimal:
    """Sum of amounts still to collect (pending and not paid)."""
    return _sum(bill for bill in bills if _is_outstanding(bill))


def paid_total(bills: Iterable[Any]) -> Decimal:
    """Sum of collected amounts."""
    return _sum(bill for bill in bills if _is_paid(bill))


def customers_of(staff_uid: Optional[str], customers: Iterable[Any]) -> List[Any]:
    """Customers whose assignment points at ``staff_uid``."""
    if not staff_uid:
        return []
    return [c for c in customers if c.assigned_to == staff_uid]


def bills_of(customers: Iterable[Any], bills: Iterable[Any]) -> List[Any]:
    ids = {c.id for c in customers}
    return [bill for bill in bills if bill.customer_id in ids]


def monthly_history(bills: Iterable[Any], tz: Optional[ZoneInfo] = None) -> Dict[str, Decimal]:
    """'YYYY-MM' -> collected amount, bucketed by bill_date."""
    history: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for bill in bills:
        if _is_paid(bill) and bill.bill_date is not None:
            history[month_key(bill.bill_date, tz)] += Decimal(bill.amount)
    return dict(sorted(history.items()))


def staff_assignment_summary(
    staff: Iterable[Any],
    customers: Iterable[Any],
    bills: Iterable[Any],
    now: datetime,
    tz: Optional[ZoneInfo] = None,
) -> List[Dict[str, Any]]:
    """
    Per staff member: assigned customer count, revenue collected for the
    current month and the full monthly revenue history.
    """
    customers = list(customers)
    bills = list(bills)
    current_key = month_key(now, tz)

    summary = []
    for member in staff:
        assigned = customers_of(member.uid, customers)
        assigned_bills = bills_of(assigned, bills)
        history = monthly_history(assigned_bills, tz)
        summary.append({
            "staff_id": member.id,
            "uid": member.uid,
            "name": member.name,
            "customer_count": len(assigned),
            "current_revenue": history.get(current_key, ZERO),
            "monthly_history": history,
        })
    return summary


def customer_bill_status_for_month(
    customer: Any,
    bills: Iterable[Any],
    year: int,
    month: int,
    tz: Optional[ZoneInfo] = None,
) -> MonthStanding:
    """Standing of one customer for one month: paid, pending or no bill."""
    matching = [
        bill for bill in bills
        if bill.customer_id == customer.id
        and bill.bill_date is not None
        and month_of(bill.bill_date, tz) == (year, month)
    ]
    if not matching:
        return MonthStanding.NO_BILL
    if any(_is_paid(bill) for bill in matching):
        return MonthStanding.PAID
    return MonthStanding.PENDING


def _matches_search(customer: Any, needle: str) -> bool:
    fields = (customer.name, customer.cnic, customer.phone, customer.connection_no)
    return any(value and needle in value.lower() for value in fields)


def _matches_filter(month_bills: List[Any], bill_filter: CollectionFilter) -> bool:
    """Keep customers with at least one current-month bill of the wanted kind."""
    if bill_filter == CollectionFilter.ALL:
        return True
    if bill_filter == CollectionFilter.PAID:
        return any(_is_paid(bill) for bill in month_bills)
    return any(_is_outstanding(bill) for bill in month_bills)


def staff_dashboard(
    staff: Any,
    customers: Iterable[Any],
    bills: Iterable[Any],
    now: datetime,
    bill_filter: CollectionFilter = CollectionFilter.ALL,
    tz: Optional[ZoneInfo] = None,
    search: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Collector's view: assigned customers with this month's standing and totals.

    ``search`` narrows the rows by name, CNIC, phone or connection number;
    the headline totals always cover every assigned customer.
    """
    needle = search.strip().lower() if search else ""
    assigned = customers_of(staff.uid, customers)
    assigned_bills = bills_of(assigned, bills)
    year, month = month_of(now, tz)

    by_customer: Dict[Any, List[Any]] = defaultdict(list)
    for bill in assigned_bills:
        by_customer[bill.customer_id].append(bill)

    rows = []
    for customer in assigned:
        if needle and not _matches_search(customer, needle):
            continue
        own_bills = by_customer.get(customer.id, [])
        standing = customer_bill_status_for_month(customer, own_bills, year, month, tz)
        month_bills = [
            bill for bill in own_bills
            if bill.bill_date is not None and month_of(bill.bill_date, tz) == (year, month)
        ]
        if not _matches_filter(month_bills, bill_filter):
            continue
        rows.append({
            "customer_id": customer.id,
            "name": customer.name,
            "connection_no": customer.connection_no,
            "phone": customer.phone,
            "address": customer.address,
            "current_month_status": standing,
            "outstanding_bills": sum(1 for b in own_bills if _is_outstanding(b)),
            "outstanding_amount": pending_total(own_bills),
            "collected_amount": paid_total(own_bills),
        })

    return {
        "staff_id": staff.id,
        "uid": staff.uid,
        "name": staff.name,
        "total_assigned": len(assigned),
        "total_collected": sum(1 for b in assigned_bills if _is_paid(b)),
        "collected_amount": paid_total(assigned_bills),
        "outstanding_amount": pending_total(assigned_bills),
        "customers": rows,
    }


def admin_overview(
    customers: Iterable[Any],
    staff: Iterable[Any],
    bills: Iterable[Any],
    now: datetime,
    tz: Optional[ZoneInfo] = None,
) -> Dict[str, Any]:
    """Administrator headline figures."""
    customers = list(customers)
    staff = list(staff)
    bills = list(bills)
    staff_uids = {member.uid for member in staff}
    year, month = month_of(now, tz)
    this_month = [
        bill for bill in bills
        if bill.bill_date is not None and month_of(bill.bill_date, tz) == (year, month)
    ]
    assigned = sum(1 for c in customers if c.assigned_to in staff_uids)

    return {
        "total_customers": len(customers),
        "assigned_customers": assigned,
        "unassigned_customers": len(customers) - assigned,
        "total_staff": len(staff),
        "active_staff": sum(1 for s in staff if s.status == StaffStatus.ACTIVE),
        "current_month": month_key(now, tz),
        "current_month_bills": len(this_month),
        "current_month_paid": sum(1 for b in this_month if _is_paid(b)),
        "current_month_outstanding": sum(1 for b in this_month if _is_outstanding(b)),
        "pending_total": pending_total(bills),
        "paid_total": paid_total(bills),
    }
