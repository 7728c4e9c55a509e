"""Billing Pydantic Schemas"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import BillListStatus, BillStatus


class BillResponse(BaseModel):
    id: UUID
    customer_id: UUID
    amount: Decimal
    status: BillStatus
    bill_date: datetime
    payment_date: Optional[datetime] = None
    billing_month: str
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BillWithCustomer(BillResponse):
    customer_name: str
    connection_no: str
    cnic: Optional[str] = None
    phone: Optional[str] = None


class BillListFilters(BaseModel):
    """Without a date range the listing covers the current calendar month."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: BillListStatus = BillListStatus.ALL
    search: Optional[str] = None

    @property
    def uses_date_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None


class BillListResponse(BaseModel):
    bills: List[BillWithCustomer]
    total_amount: Decimal
    status_counts: Dict[str, int]


class StatementEntry(BillResponse):
    display_date: datetime


class CustomerStatement(BaseModel):
    customer_id: UUID
    customer_name: str
    connection_no: str
    bills: List[StatementEntry]
    total_paid: Decimal
    total_pending: Decimal


class GenerationResult(BaseModel):
    generated: int
    billing_month: str
    fixed_price: Optional[Decimal] = None
    bill_ids: List[UUID] = []
    skipped_reason: Optional[str] = None


class BillingSettingsResponse(BaseModel):
    fixed_price: Decimal
    auto_bill_generation: bool
    is_default: bool = False


class FixedPriceUpdate(BaseModel):
    fixed_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, allow_inf_nan=False)


class BillingSettingsUpdate(BaseModel):
    fixed_price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2, allow_inf_nan=False)
    auto_bill_generation: Optional[bool] = None
