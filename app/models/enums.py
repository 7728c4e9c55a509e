"""Centralized Enum Definitions"""

import enum


# Identity
class UserRole(str, enum.Enum):
    """Account roles for RBAC"""
    ADMIN = "admin"
    STAFF = "staff"


# Registries
class CustomerStatus(str, enum.Enum):
    """Customer connection status"""
    ACTIVE = "active"
    PENDING = "pending"


class StaffStatus(str, enum.Enum):
    """Field staff employment status"""
    ACTIVE = "Active"
    INACTIVE = "Inactive"


# Billing
class BillStatus(str, enum.Enum):
    """
    Bill lifecycle status.

    NOT_PAID is a collector's explicit "visited, not collected" marker and
    counts as outstanding alongside PENDING.
    """
    PENDING = "pending"
    PAID = "paid"
    NOT_PAID = "not paid"


OUTSTANDING_STATUSES = frozenset({BillStatus.PENDING, BillStatus.NOT_PAID})


class BillListStatus(str, enum.Enum):
    """Status filter accepted by bill listings"""
    ALL = "all"
    PENDING = "pending"
    PAID = "paid"
    NOT_PAID = "not paid"


class CollectionFilter(str, enum.Enum):
    """Staff dashboard filter over current-month standing"""
    ALL = "all"
    PENDING = "pending"
    PAID = "paid"


class MonthStanding(str, enum.Enum):
    """Customer standing for one calendar month"""
    PAID = "paid"
    PENDING = "pending"
    NO_BILL = "no bill"


def enum_values(enum_cls) -> list:
    """Persist enum values (not member names) in database enum types."""
    return [member.value for member in enum_cls]
