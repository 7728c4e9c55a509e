"""Dashboard read models"""

from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel

from app.models.enums import MonthStanding


class StaffRevenueSummary(BaseModel):
    staff_id: UUID
    uid: str
    name: str
    customer_count: int
    current_revenue: Decimal
    monthly_history: Dict[str, Decimal]


class AssignedCustomerRow(BaseModel):
    customer_id: UUID
    name: str
    connection_no: str
    phone: Optional[str] = None
    address: Optional[str] = None
    current_month_status: MonthStanding
    outstanding_bills: int
    outstanding_amount: Decimal
    collected_amount: Decimal


class StaffDashboard(BaseModel):
    staff_id: UUID
    uid: str
    name: str
    total_assigned: int
    total_collected: int
    collected_amount: Decimal
    outstanding_amount: Decimal
    customers: List[AssignedCustomerRow]


class AdminOverview(BaseModel):
    total_customers: int
    assigned_customers: int
    unassigned_customers: int
    total_staff: int
    active_staff: int
    current_month: str
    current_month_bills: int
    current_month_paid: int
    current_month_outstanding: int
    pending_total: Decimal
    paid_total: Decimal
