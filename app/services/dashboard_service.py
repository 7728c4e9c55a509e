"""Dashboard Service - loads the current snapshot and runs the aggregations"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.billing import Bill
from app.models.customer import Customer
from app.models.enums import CollectionFilter
from app.models.staff import Staff
from app.services import aggregation
from app.utils.time import get_utc_now


@dataclass
class Snapshot:
    customers: List[Customer]
    staff: List[Staff]
    bills: List[Bill]


class DashboardService:

    @staticmethod
    async def load_snapshot(db: AsyncSession) -> Snapshot:
        """Live customers, all staff and every bill (including bills of deleted customers)."""
        customers = await db.execute(select(Customer).where(Customer.deleted_at.is_(None)))
        staff = await db.execute(select(Staff).order_by(Staff.name))
        bills = await db.execute(select(Bill))
        return Snapshot(
            customers=list(customers.scalars().all()),
            staff=list(staff.scalars().all()),
            bills=list(bills.scalars().all()),
        )

    @staticmethod
    async def admin_overview(db: AsyncSession, now: Optional[datetime] = None) -> Dict[str, Any]:
        snap = await DashboardService.load_snapshot(db)
        return aggregation.admin_overview(snap.customers, snap.staff, snap.bills, now or get_utc_now())

    @staticmethod
    async def staff_summary(db: AsyncSession, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        snap = await DashboardService.load_snapshot(db)
        return aggregation.staff_assignment_summary(
            snap.staff, snap.customers, snap.bills, now or get_utc_now()
        )

    @staticmethod
    async def staff_dashboard(
        db: AsyncSession,
        staff: Staff,
        bill_filter: CollectionFilter = CollectionFilter.ALL,
        now: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Collector view, limited to the collector's own customers and their bills."""
        customers = await db.execute(
            select(Customer).where(
                Customer.deleted_at.is_(None), Customer.assigned_to == staff.uid
            )
        )
        assigned = list(customers.scalars().all())
        ids = [c.id for c in assigned]
        bills: List[Bill] = []
        if ids:
            result = await db.execute(select(Bill).where(Bill.customer_id.in_(ids)))
            bills = list(result.scalars().all())
        return aggregation.staff_dashboard(
            staff, assigned, bills, now or get_utc_now(), bill_filter, search=search
        )
