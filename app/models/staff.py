"""Staff Registry Model"""

from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import ENUM

from app.models.base import BaseModel
from app.models.enums import StaffStatus, enum_values


class Staff(BaseModel):
    """
    Field collector profile.

    ``uid`` is the identity-provider key and the only join key used for
    customer assignment; ``id`` is the registry's own document key.
    """
    __tablename__ = "staff"

    uid = Column(String(64), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(30), nullable=True)
    cnic = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    status = Column(
        ENUM(StaffStatus, name="staff_status", values_callable=enum_values),
        default=StaffStatus.ACTIVE,
        nullable=False,
    )

    @property
    def is_active(self) -> bool:
        return self.status == StaffStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<Staff {self.name} ({self.uid})>"
