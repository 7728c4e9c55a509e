"""Customer Registry Model"""

from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, SoftDeleteMixin
from app.models.enums import CustomerStatus, enum_values


class Customer(BaseModel, SoftDeleteMixin):
    """
    Water connection holder.

    ``assigned_to`` stores the collecting staff member's ``uid`` (not the
    staff profile key). It has no foreign key: a value that matches no staff
    uid is kept as-is and treated as unassigned by aggregation.
    """
    __tablename__ = "customers"

    name = Column(String(255), nullable=False)
    cnic = Column(String(20), nullable=True, index=True)
    phone = Column(String(30), nullable=True)
    address = Column(Text, nullable=True)
    connection_no = Column(String(50), nullable=False, index=True)

    assigned_to = Column(String(64), nullable=True, index=True)
    status = Column(
        ENUM(CustomerStatus, name="customer_status", values_callable=enum_values),
        default=CustomerStatus.ACTIVE,
        nullable=False,
    )

    bills = relationship("Bill", back_populates="customer")

    def __repr__(self) -> str:
        return f"<Customer {self.connection_no} {self.name}>"
