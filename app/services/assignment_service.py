"""Assignment Service - links customers to the collector responsible for them"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.events import CUSTOMERS, change_feed
from app.core.logging import get_logger
from app.models.customer import Customer
from app.services.customer_service import CustomerService
from app.services.staff_service import StaffService

logger = get_logger(__name__)


@dataclass
class TogglePlan:
    staff_uid: str
    assigned: List[Any] = field(default_factory=list)
    unassigned: List[Any] = field(default_factory=list)


def plan_toggle(staff_uid: str, customers: Iterable[Any]) -> TogglePlan:
    """
    Decide, per customer, whether toggling ``staff_uid`` assigns or unassigns.

    A customer already linked to ``staff_uid`` is unassigned; any other
    customer (unassigned or linked elsewhere) is assigned, replacing the old
    link. Customer ids are returned, each at most once.
    """
    plan = TogglePlan(staff_uid=staff_uid)
    seen = set()
    for customer in customers:
        if customer.id in seen:
            continue
        seen.add(customer.id)
        if customer.assigned_to == staff_uid:
            plan.unassigned.append(customer.id)
        else:
            plan.assigned.append(customer.id)
    return plan


class AssignmentService:
    """Service layer for customer-to-staff assignment"""

    @staticmethod
    async def toggle_assignment(
        db: AsyncSession,
        staff_uid: str,
        customer_ids: List[UUID],
    ) -> TogglePlan:
        """
        Toggle ``staff_uid`` on every selected customer in a single transaction.

        Raises:
            ValueError: empty selection, unknown staff uid, or unknown customers
        """
        if not customer_ids:
            raise ValueError("Please select at least one customer.")
        staff = await StaffService.get_staff_by_uid(db, staff_uid)
        if not staff:
            raise ValueError(f"No staff member with uid {staff_uid}")

        customers = await CustomerService.get_customers_by_ids(db, customer_ids)
        missing = set(customer_ids) - {c.id for c in customers}
        if missing:
            raise ValueError(f"Unknown customers: {', '.join(sorted(str(m) for m in missing))}")

        plan = plan_toggle(staff_uid, customers)
        try:
            if plan.assigned:
                await db.execute(
                    update(Customer)
                    .where(Customer.id.in_(plan.assigned))
                    .values(assigned_to=staff_uid)
                )
            if plan.unassigned:
                # re-checked so a concurrent reassignment is not cleared
                await db.execute(
                    update(Customer)
                    .where(Customer.id.in_(plan.unassigned), Customer.assigned_to == staff_uid)
                    .values(assigned_to=None)
                )
            await db.commit()
        except Exception:
            await db.rollback()
            logger.error(
                "Assignment toggle failed",
                extra={"staff_uid": staff_uid, "customers": len(customer_ids)},
                exc_info=True,
            )
            raise

        await change_feed.publish(CUSTOMERS)
        logger.info(
            "Assignments toggled",
            extra={
                "staff_uid": staff_uid,
                "assigned": len(plan.assigned),
                "unassigned": len(plan.unassigned),
            },
        )
        return plan
