"""Staff Pydantic Schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.models.enums import StaffStatus


class StaffBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    cnic: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None


class StaffCreate(StaffBase):
    """Admin provisions a collector together with their login account."""
    email: EmailStr
    password: str = Field(..., min_length=8, description="Initial password, at least 8 characters")


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    cnic: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    status: Optional[StaffStatus] = None


class StaffResponse(StaffBase):
    id: UUID
    uid: str
    email: Optional[str] = None
    status: StaffStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
