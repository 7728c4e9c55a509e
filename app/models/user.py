"""Identity: login accounts issued by the identity provider"""

from sqlalchemy import Column, String, Boolean
from sqlalchemy.dialects.postgresql import ENUM

from app.models.base import BaseModel
from app.models.enums import UserRole, enum_values


class User(BaseModel):
    """
    Login account. ``str(user.id)`` is the opaque ``uid`` carried in tokens
    and stored on Staff profiles; it is deliberately distinct from the staff
    profile's own key.
    """
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(
        ENUM(UserRole, name="user_role", values_callable=enum_values),
        default=UserRole.STAFF,
        nullable=False,
        index=True,
    )
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    @property
    def uid(self) -> str:
        return str(self.id)

    @property
    def is_admin(self) -> bool:
        """Check if user is an administrator"""
        return self.role == UserRole.ADMIN

    @property
    def is_staff(self) -> bool:
        return self.role == UserRole.STAFF

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
