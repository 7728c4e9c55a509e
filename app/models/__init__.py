"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, SoftDeleteMixin
from app.models.enums import (
    UserRole,
    CustomerStatus,
    StaffStatus,
    BillStatus,
    OUTSTANDING_STATUSES,
)
from app.models.user import User
from app.models.customer import Customer
from app.models.staff import Staff
from app.models.billing import Bill, BillingSettings, SETTINGS_SINGLETON_ID


__all__ = [
    # Base classes
    "BaseModel",
    "SoftDeleteMixin",

    # Enums
    "UserRole",
    "CustomerStatus",
    "StaffStatus",
    "BillStatus",
    "OUTSTANDING_STATUSES",

    # Identity
    "User",

    # Registries
    "Customer",
    "Staff",

    # Billing
    "Bill",
    "BillingSettings",
    "SETTINGS_SINGLETON_ID",
]
