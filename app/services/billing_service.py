"""Billing Service - persists the bill lifecycle"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.events import BILLS, change_feed
from app.core.logging import get_logger
from app.models.billing import Bill
from app.models.customer import Customer
from app.models.enums import BillListStatus, BillStatus, OUTSTANDING_STATUSES
from app.schemas.billing import BillListFilters, GenerationResult
from app.services import billing_rules
from app.services.aggregation import paid_total, pending_total
from app.services.settings_service import SettingsService
from app.utils.time import day_bounds, get_utc_now, month_bounds, month_key, month_of

logger = get_logger(__name__)

UNKNOWN_CUSTOMER = "Unknown Customer"
UNKNOWN_CONNECTION = "N/A"


def _row(bill: Bill, customer: Optional[Customer]) -> Dict[str, Any]:
    return {
        "id": bill.id,
        "customer_id": bill.customer_id,
        "amount": bill.amount,
        "status": bill.status,
        "bill_date": bill.bill_date,
        "payment_date": bill.payment_date,
        "billing_month": bill.billing_month,
        "notes": bill.notes,
        "customer_name": customer.name if customer else UNKNOWN_CUSTOMER,
        "connection_no": customer.connection_no if customer else UNKNOWN_CONNECTION,
        "cnic": customer.cnic if customer else None,
        "phone": customer.phone if customer else None,
    }


class BillingService:
    """Service layer for bills"""

    @staticmethod
    async def get_bill(db: AsyncSession, bill_id: UUID) -> Optional[Bill]:
        result = await db.execute(select(Bill).where(Bill.id == bill_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_bills_for_month(db: AsyncSession, year: int, month: int) -> List[Bill]:
        start, end = month_bounds(year, month)
        result = await db.execute(
            select(Bill).where(Bill.bill_date >= start, Bill.bill_date < end)
        )
        return list(result.scalars().all())

    @staticmethod
    async def generate_for_month(
        db: AsyncSession,
        now: Optional[datetime] = None,
        fixed_price: Optional[Decimal] = None,
    ) -> GenerationResult:
        """
        Create the month's missing bills for every live customer.

        All new bills are written in one transaction; on failure none are kept.
        Calling again within the same month creates nothing.
        """
        now = now or get_utc_now()
        year, month = month_of(now)
        if fixed_price is None:
            fixed_price = await SettingsService.get_fixed_price(db)

        result = await db.execute(select(Customer).where(Customer.deleted_at.is_(None)))
        customers = list(result.scalars().all())
        existing = await BillingService.get_bills_for_month(db, year, month)

        new_bills = billing_rules.generate_monthly_bills(customers, existing, fixed_price, now)
        period = month_key(now)
        if not new_bills:
            logger.info("No bills to generate", extra={"billing_month": period})
            return GenerationResult(
                generated=0,
                billing_month=period,
                fixed_price=fixed_price,
                skipped_reason="No bills to generate",
            )

        try:
            db.add_all(new_bills)
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error(
                "Monthly bill generation failed",
                extra={"billing_month": period, "pending_bills": len(new_bills)},
                exc_info=True,
            )
            raise

        await change_feed.publish(BILLS)
        logger.info(
            "Monthly bills generated",
            extra={"billing_month": period, "generated": len(new_bills), "fixed_price": str(fixed_price)},
        )
        return GenerationResult(
            generated=len(new_bills),
            billing_month=period,
            fixed_price=fixed_price,
            bill_ids=[bill.id for bill in new_bills],
        )

    @staticmethod
    async def run_scheduled_generation(
        db: AsyncSession, now: Optional[datetime] = None
    ) -> GenerationResult:
        """Scheduler entry point: generation only runs when the settings flag is on."""
        now = now or get_utc_now()
        row = await SettingsService.get_settings(db)
        if row is None:
            logger.info("No settings found; skipping scheduled generation")
            return GenerationResult(generated=0, billing_month=month_key(now), skipped_reason="No settings found")
        if not row.auto_bill_generation:
            logger.info("Auto bill generation is disabled")
            return GenerationResult(
                generated=0,
                billing_month=month_key(now),
                skipped_reason="Auto bill generation is disabled",
            )
        price = Decimal(row.fixed_price) if row.fixed_price else None
        return await BillingService.generate_for_month(db, now=now, fixed_price=price)

    @staticmethod
    async def _write_status(db: AsyncSession, bill: Bill, status: BillStatus, now: datetime) -> Bill:
        previous = bill.status
        billing_rules.apply_bill_status(bill, status, now)
        await db.commit()
        await db.refresh(bill)
        await change_feed.publish(BILLS)
        logger.info(
            "Bill status changed",
            extra={"bill_id": str(bill.id), "from": str(previous), "to": status.value},
        )
        return bill

    @staticmethod
    async def change_status(
        db: AsyncSession, bill_id: UUID, now: Optional[datetime] = None
    ) -> Optional[Bill]:
        """Rotate a bill one step: paid -> not paid -> pending -> paid."""
        bill = await BillingService.get_bill(db, bill_id)
        if not bill:
            return None
        status = billing_rules.next_bill_status(bill.status)
        return await BillingService._write_status(db, bill, status, now or get_utc_now())

    @staticmethod
    async def mark_paid(
        db: AsyncSession,
        bill_id: UUID,
        collector_uid: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[Bill]:
        """
        Record a collection. With ``collector_uid`` the bill must belong to a
        customer assigned to that collector.

        Raises:
            PermissionError: bill belongs to someone else's or a deleted customer
            ValueError: bill is already paid
        """
        bill = await BillingService.get_bill(db, bill_id)
        if not bill:
            return None
        if collector_uid is not None:
            customer = await db.get(Customer, bill.customer_id)
            if customer is None or customer.is_deleted or customer.assigned_to != collector_uid:
                raise PermissionError("Bill is not for one of your assigned customers")
        if billing_rules.parse_status(bill.status) == BillStatus.PAID:
            raise ValueError("Bill is already paid")
        return await BillingService._write_status(db, bill, BillStatus.PAID, now or get_utc_now())

    @staticmethod
    async def delete_bill(db: AsyncSession, bill_id: UUID) -> bool:
        bill = await BillingService.get_bill(db, bill_id)
        if not bill:
            return False
        await db.delete(bill)
        await db.commit()
        await change_feed.publish(BILLS)
        logger.info("Bill deleted", extra={"bill_id": str(bill_id)})
        return True

    @staticmethod
    async def delete_bills_for_month(db: AsyncSession, year: int, month: int) -> int:
        """Delete every bill dated in the given calendar month, atomically."""
        start, end = month_bounds(year, month)
        try:
            result = await db.execute(
                delete(Bill).where(Bill.bill_date >= start, Bill.bill_date < end)
            )
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error(
                "Bulk bill delete failed",
                extra={"year": year, "month": month},
                exc_info=True,
            )
            raise
        deleted = result.rowcount or 0
        await change_feed.publish(BILLS)
        logger.info("Bills deleted for month", extra={"year": year, "month": month, "deleted": deleted})
        return deleted

    @staticmethod
    async def _bills_with_customers(db: AsyncSession, stmt) -> List[Tuple[Bill, Optional[Customer]]]:
        result = await db.execute(stmt)
        return [(bill, customer) for bill, customer in result.all()]

    @staticmethod
    async def list_bills(
        db: AsyncSession, filters: BillListFilters, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Bills for the current month (or an inclusive date range), with
        status and customer search filters, plus the filtered total.
        """
        now = now or get_utc_now()
        stmt = select(Bill, Customer).outerjoin(Customer, Bill.customer_id == Customer.id)
        if filters.uses_date_range:
            lower, upper = day_bounds(filters.start_date, filters.end_date)
            if lower is not None:
                stmt = stmt.where(Bill.bill_date >= lower)
            if upper is not None:
                stmt = stmt.where(Bill.bill_date <= upper)
        else:
            start, end = month_bounds(*month_of(now))
            stmt = stmt.where(Bill.bill_date >= start, Bill.bill_date < end)
        if filters.search and filters.search.strip():
            pattern = f"%{filters.search.strip()}%"
            stmt = stmt.where(
                or_(Customer.name.ilike(pattern), Customer.connection_no.ilike(pattern))
            )
        pairs = await BillingService._bills_with_customers(db, stmt.order_by(Bill.bill_date.desc()))

        status_counts = {status.value: 0 for status in BillStatus}
        for bill, _ in pairs:
            parsed = billing_rules.parse_status(bill.status)
            if parsed is not None:
                status_counts[parsed.value] += 1

        if filters.status != BillListStatus.ALL:
            wanted = BillStatus(filters.status.value)
            pairs = [(b, c) for b, c in pairs if billing_rules.parse_status(b.status) == wanted]

        return {
            "bills": [_row(bill, customer) for bill, customer in pairs],
            "total_amount": sum((Decimal(bill.amount) for bill, _ in pairs), Decimal("0")),
            "status_counts": status_counts,
        }

    @staticmethod
    async def list_outstanding(db: AsyncSession, search: Optional[str] = None) -> List[Dict[str, Any]]:
        """Pending and not-paid bills with their customer, searchable by name, CNIC, phone or connection."""
        stmt = (
            select(Bill, Customer)
            .outerjoin(Customer, Bill.customer_id == Customer.id)
            .where(Bill.status.in_(list(OUTSTANDING_STATUSES)))
        )
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    Customer.name.ilike(pattern),
                    Customer.cnic.ilike(pattern),
                    Customer.phone.ilike(pattern),
                    Customer.connection_no.ilike(pattern),
                )
            )
        pairs = await BillingService._bills_with_customers(db, stmt.order_by(Bill.bill_date.desc()))
        return [_row(bill, customer) for bill, customer in pairs]

    @staticmethod
    async def customer_statement(db: AsyncSession, customer: Customer) -> Dict[str, Any]:
        """Full bill history of one customer, newest first, with paid and pending totals."""
        result = await db.execute(
            select(Bill).where(Bill.customer_id == customer.id).order_by(Bill.bill_date.desc())
        )
        bills = list(result.scalars().all())
        entries = []
        for bill in bills:
            entry = _row(bill, customer)
            paid = billing_rules.parse_status(bill.status) == BillStatus.PAID
            entry["display_date"] = bill.payment_date if paid and bill.payment_date else bill.bill_date
            entries.append(entry)
        return {
            "customer_id": customer.id,
            "customer_name": customer.name,
            "connection_no": customer.connection_no,
            "bills": entries,
            "total_paid": paid_total(bills),
            "total_pending": pending_total(bills),
        }
