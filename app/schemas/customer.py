"""Customer Pydantic Schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import CustomerStatus


class CustomerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    connection_no: str = Field(..., min_length=1, max_length=50, description="Human-facing account number")
    cnic: Optional[str] = Field(None, max_length=20)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None


class CustomerCreate(CustomerBase):
    status: CustomerStatus = CustomerStatus.ACTIVE


class CustomerUpdate(BaseModel):
    """Profile edits only; assignment changes go through the assignment endpoint."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    connection_no: Optional[str] = Field(None, min_length=1, max_length=50)
    cnic: Optional[str] = Field(None, max_length=20)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None
    status: Optional[CustomerStatus] = None


class CustomerResponse(CustomerBase):
    id: UUID
    assigned_to: Optional[str] = None
    status: CustomerStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
