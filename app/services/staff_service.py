"""Staff Service - field staff registry"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.events import STAFF, change_feed
from app.core.logging import get_logger
from app.models.enums import StaffStatus, UserRole
from app.models.staff import Staff
from app.schemas.staff import StaffCreate, StaffUpdate
from app.services.user_service import UserService

logger = get_logger(__name__)


class StaffService:
    """Service layer for staff profiles"""

    @staticmethod
    async def create_staff(db: AsyncSession, data: StaffCreate) -> Staff:
        """
        Provision a collector: login account and profile in one transaction.
        The profile's uid is the new account's id.

        Raises:
            ValueError: if the email is already registered
        """
        try:
            user = await UserService.create_user(
                db,
                email=data.email,
                password=data.password,
                role=UserRole.STAFF,
                auto_commit=False,
            )
            staff = Staff(
                uid=user.uid,
                name=data.name.strip(),
                email=user.email,
                phone=data.phone,
                cnic=data.cnic,
                address=data.address,
                status=StaffStatus.ACTIVE,
            )
            db.add(staff)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        await db.refresh(staff)
        await change_feed.publish(STAFF)
        logger.info("Staff created", extra={"staff_id": str(staff.id), "uid": staff.uid})
        return staff

    @staticmethod
    async def get_staff(db: AsyncSession, staff_id: UUID) -> Optional[Staff]:
        result = await db.execute(select(Staff).where(Staff.id == staff_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_staff_by_uid(db: AsyncSession, uid: str) -> Optional[Staff]:
        result = await db.execute(select(Staff).where(Staff.uid == uid))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_staff(db: AsyncSession, search: Optional[str] = None) -> List[Staff]:
        stmt = select(Staff)
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(or_(Staff.name.ilike(pattern), Staff.email.ilike(pattern)))
        result = await db.execute(stmt.order_by(Staff.name))
        return list(result.scalars().all())

    @staticmethod
    async def update_staff(db: AsyncSession, staff_id: UUID, data: StaffUpdate) -> Optional[Staff]:
        """Profile edit. Marking a member Inactive also disables their login."""
        staff = await StaffService.get_staff(db, staff_id)
        if not staff:
            return None
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field in ("name", "status"):
                continue
            setattr(staff, field, value.strip() if isinstance(value, str) else value)
        if changes.get("status") is not None:
            await UserService.set_active(db, staff.uid, staff.status == StaffStatus.ACTIVE)
        await db.commit()
        await db.refresh(staff)
        await change_feed.publish(STAFF)
        return staff

    @staticmethod
    async def delete_staff(db: AsyncSession, staff_id: UUID) -> bool:
        """
        Remove the profile and disable the login. Customers still pointing at
        the uid are left alone and count as unassigned from now on.
        """
        staff = await StaffService.get_staff(db, staff_id)
        if not staff:
            return False
        await UserService.set_active(db, staff.uid, False)
        await db.delete(staff)
        await db.commit()
        await change_feed.publish(STAFF)
        logger.info("Staff deleted", extra={"staff_id": str(staff_id), "uid": staff.uid})
        return True
