"""Billing Models: monthly bills and the billing settings singleton"""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric,
    String, Text, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID, ENUM
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.base import BaseModel
from app.models.enums import BillStatus, enum_values
from app.utils.time import get_utc_now

SETTINGS_SINGLETON_ID = 1


class Bill(BaseModel):
    """
    One monthly charge for one customer.

    ``billing_month`` ('YYYY-MM' of bill_date in the billing timezone) backs
    the one-bill-per-customer-per-month rule with a unique constraint.
    """
    __tablename__ = "bills"
    __table_args__ = (
        UniqueConstraint("customer_id", "billing_month", name="uq_bills_customer_month"),
        CheckConstraint("amount > 0", name="ck_bills_amount_positive"),
        CheckConstraint(
            "(status = 'paid') = (payment_date IS NOT NULL)",
            name="ck_bills_payment_date_iff_paid",
        ),
    )

    customer_id = Column(
        UUID(as_uuid=True),
        ForeignKey("customers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        ENUM(BillStatus, name="bill_status", values_callable=enum_values),
        default=BillStatus.PENDING,
        nullable=False,
        index=True,
    )
    bill_date = Column(DateTime, default=get_utc_now, nullable=False, index=True)
    payment_date = Column(DateTime, nullable=True)
    billing_month = Column(String(7), nullable=False, index=True)
    notes = Column(Text, nullable=True)

    customer = relationship("Customer", back_populates="bills")

    @property
    def is_paid(self) -> bool:
        return self.status == BillStatus.PAID

    def __repr__(self) -> str:
        return f"<Bill {self.amount} - {self.status}>"


class BillingSettings(Base):
    """
    Singleton settings row, always stored under SETTINGS_SINGLETON_ID so
    concurrent first writers converge on one record.
    """
    __tablename__ = "billing_settings"
    __table_args__ = (
        CheckConstraint("id = 1", name="ck_billing_settings_singleton"),
        CheckConstraint("fixed_price > 0", name="ck_billing_settings_price_positive"),
    )

    id = Column(Integer, primary_key=True, default=SETTINGS_SINGLETON_ID)
    fixed_price = Column(Numeric(10, 2), nullable=False)
    auto_bill_generation = Column(Boolean, default=False, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)

    def __repr__(self) -> str:
        return f"<BillingSettings price={self.fixed_price} auto={self.auto_bill_generation}>"
