from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core import security
from app.core.rate_limit import LOGIN_LIMIT, limiter
from app.models.user import User
from app.schemas.auth import Identity, LoginRequest, RefreshRequest, Token
from app.schemas.responses import SuccessResponse
from app.services.staff_service import StaffService
from app.services.user_service import UserService

router = APIRouter()


def _issue_tokens(user: User) -> Token:
    claims = {"sub": user.uid, "email": user.email, "role": user.role.value}
    return Token(
        access_token=security.create_access_token(data=claims),
        refresh_token=security.create_refresh_token(data={"sub": user.uid}),
        token_type="bearer",
        role=user.role,
        uid=user.uid,
        email=user.email,
    )


@router.post("/login", response_model=SuccessResponse[Token])
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    login_data: LoginRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """
    Unified login for administrators and staff.
    Returns JWT access token, refresh token, role and uid.
    """
    user = await UserService.authenticate_user(db, email=login_data.email, password=login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return SuccessResponse(data=_issue_tokens(user), message="Login successful")


@router.post("/refresh", response_model=SuccessResponse[Token])
async def refresh(
    body: RefreshRequest,
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Exchange a refresh token for a new token pair."""
    payload = security.decode_token(body.refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    user = await UserService.get_user_by_uid(db, payload.get("sub") or "")
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")
    return SuccessResponse(data=_issue_tokens(user))


@router.get("/me", response_model=SuccessResponse[Identity])
async def me(
    current_user: User = Depends(deps.get_current_user),
    db: AsyncSession = Depends(deps.get_db)
) -> Any:
    """Identity of the caller, with the staff profile key when there is one."""
    staff = await StaffService.get_staff_by_uid(db, current_user.uid)
    return SuccessResponse(
        data=Identity(
            uid=current_user.uid,
            email=current_user.email,
            role=current_user.role,
            staff_id=str(staff.id) if staff else None,
        )
    )
