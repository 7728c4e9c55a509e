"""API Dependencies"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.core.security import decode_token
from app.models.staff import Staff
from app.models.user import User
from app.services.staff_service import StaffService
from app.services.user_service import UserService

__all__ = ["get_db", "get_current_user", "require_admin", "get_current_staff", "user_from_token"]

# Security scheme for bearer token
security = HTTPBearer()


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def user_from_token(db: AsyncSession, token: str) -> User:
    """
    Resolve an access token to an active user.

    Raises:
        HTTPException: invalid token, unknown or inactive user
    """
    payload = decode_token(token)
    if not payload:
        raise _unauthorized()
    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    uid: Optional[str] = payload.get("sub")
    if not uid:
        raise _unauthorized()

    user = await UserService.get_user_by_uid(db, uid)
    if not user:
        raise _unauthorized()
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )
    return user


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> User:
    """Current authenticated user from the bearer JWT."""
    return await user_from_token(db, credentials.credentials)


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Allow administrators only. The role comes from the account record."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    return current_user


async def get_current_staff(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Staff:
    """Staff profile of the caller, joined on uid."""
    staff = await StaffService.get_staff_by_uid(db, current_user.uid)
    if not staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No staff profile for this account"
        )
    if not staff.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff member is inactive"
        )
    return staff
