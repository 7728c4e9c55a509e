"""Customer Service - customer registry"""

from typing import Iterable, List, Optional
from uuid import UUID
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.events import CUSTOMERS, change_feed
from app.core.logging import get_logger
from app.models.customer import Customer
from app.schemas.customer import CustomerCreate, CustomerUpdate

logger = get_logger(__name__)


class CustomerService:
    """Service layer for customer profiles"""

    @staticmethod
    async def create_customer(db: AsyncSession, data: CustomerCreate) -> Customer:
        customer = Customer(
            name=data.name.strip(),
            connection_no=data.connection_no.strip(),
            cnic=data.cnic,
            phone=data.phone,
            address=data.address,
            status=data.status,
        )
        db.add(customer)
        await db.commit()
        await db.refresh(customer)
        await change_feed.publish(CUSTOMERS)
        logger.info("Customer created", extra={"customer_id": str(customer.id)})
        return customer

    @staticmethod
    async def get_customer(
        db: AsyncSession,
        customer_id: UUID,
        include_deleted: bool = False,
    ) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.id == customer_id)
        if not include_deleted:
            stmt = stmt.where(Customer.deleted_at.is_(None))
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_customers_by_ids(db: AsyncSession, customer_ids: Iterable[UUID]) -> List[Customer]:
        """Live customers among ``customer_ids``. One query for bulk lookup."""
        ids = list(customer_ids)
        if not ids:
            return []
        result = await db.execute(
            select(Customer).where(Customer.id.in_(ids), Customer.deleted_at.is_(None))
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_customers(
        db: AsyncSession,
        search: Optional[str] = None,
        assigned_to: Optional[str] = None,
    ) -> List[Customer]:
        """Live customers, optionally filtered by name/connection number and assignee uid."""
        stmt = select(Customer).where(Customer.deleted_at.is_(None))
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(Customer.name.ilike(pattern), Customer.connection_no.ilike(pattern))
            )
        if assigned_to is not None:
            stmt = stmt.where(Customer.assigned_to == assigned_to)
        result = await db.execute(stmt.order_by(Customer.name))
        return list(result.scalars().all())

    @staticmethod
    async def update_customer(
        db: AsyncSession, customer_id: UUID, data: CustomerUpdate
    ) -> Optional[Customer]:
        customer = await CustomerService.get_customer(db, customer_id)
        if not customer:
            return None
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("name", "connection_no", "status"):
                continue
            setattr(customer, field, value.strip() if isinstance(value, str) else value)
        await db.commit()
        await db.refresh(customer)
        await change_feed.publish(CUSTOMERS)
        return customer

    @staticmethod
    async def delete_customer(db: AsyncSession, customer_id: UUID) -> bool:
        """
        Soft delete. The customer drops out of generation and aggregation;
        bills already issued to it are kept.
        """
        customer = await CustomerService.get_customer(db, customer_id)
        if not customer:
            return False
        customer.soft_delete()
        await db.commit()
        await change_feed.publish(CUSTOMERS)
        logger.info("Customer deleted", extra={"customer_id": str(customer_id)})
        return True
