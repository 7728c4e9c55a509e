"""User Service - identity provider accounts"""

from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.security import get_password_hash, verify_password
from app.models.enums import UserRole
from app.models.user import User

logger = get_logger(__name__)


class UserService:
    """Service layer for login accounts"""

    @staticmethod
    async def create_user(
        db: AsyncSession,
        email: str,
        password: str,
        role: UserRole = UserRole.STAFF,
        is_active: bool = True,
        auto_commit: bool = True,
    ) -> User:
        """
        Create a login account.
        When auto_commit=False, flushes instead of committing so the caller
        can bundle it with other writes.

        Raises:
            ValueError: if the email is already registered
        """
        email = email.strip().lower()
        if await UserService.get_user_by_email(db, email):
            raise ValueError(f"An account with email {email} already exists")

        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            role=role,
            is_active=is_active,
        )
        db.add(user)
        if auto_commit:
            await db.commit()
        else:
            await db.flush()
        await db.refresh(user)
        logger.info("User created", extra={"uid": str(user.id), "role": role.value})
        return user

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_uid(db: AsyncSession, uid: str) -> Optional[User]:
        """Look up by the opaque uid string carried in tokens."""
        try:
            user_id = UUID(uid)
        except (TypeError, ValueError):
            return None
        return await UserService.get_user_by_id(db, user_id)

    @staticmethod
    async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    @staticmethod
    async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
        """
        Authenticate by email and password.

        Returns:
            The active user, or None on any mismatch
        """
        user = await UserService.get_user_by_email(db, email)
        if not user or not user.is_active:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    async def set_active(db: AsyncSession, uid: str, is_active: bool) -> None:
        """Enable or disable an account; unknown uids are ignored. Does not commit."""
        user = await UserService.get_user_by_uid(db, uid)
        if user is not None:
            user.is_active = is_active
