from typing import Optional
from pydantic import BaseModel, EmailStr

from app.models.enums import UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    role: UserRole
    uid: str
    email: EmailStr


class Identity(BaseModel):
    """What the identity provider knows about the caller."""
    uid: str
    email: EmailStr
    role: UserRole
    staff_id: Optional[str] = None
