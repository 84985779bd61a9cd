from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from interviewiq.core.config import Settings
from interviewiq.core.deps import get_current_user, get_settings
from interviewiq.core.exceptions import AuthenticationError, ConflictError
from interviewiq.core.security import hash_password, new_token, token_expiry, verify_password
from interviewiq.db.session import get_db
from interviewiq.models.auth_token import AuthToken
from interviewiq.models.user import User
from interviewiq.schemas.auth import LoginIn, LoginOut, RegisterIn, UserOut
from interviewiq.schemas.common import ApiResponse

router: APIRouter = APIRouter()
logger = logging.getLogger("interviewiq.auth")


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/register", response_model=ApiResponse[UserOut], status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterIn, db: AsyncSession = Depends(get_db)) -> ApiResponse[UserOut]:
    """Create an account.

    Raises:
        ConflictError: email already registered (409).
    """
    email = _normalize_email(payload.email)
    res = await db.execute(select(User).where(User.email == email))
    if res.scalar_one_or_none() is not None:
        raise ConflictError("User already exists")

    user = User(email=email, name=payload.name.strip(), password_hash=hash_password(payload.password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info(f"User registered: {user.id}")
    return ApiResponse(message="User registered", data=UserOut.model_validate(user))


@router.post("/login", response_model=ApiResponse[LoginOut])
async def login(
    payload: LoginIn,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ApiResponse[LoginOut]:
    """Check credentials and issue a DB-stored bearer token.

    Raises:
        AuthenticationError: credentials do not match (401).
    """
    res = await db.execute(select(User).where(User.email == _normalize_email(payload.email)))
    user: User | None = res.scalar_one_or_none()

    if user is None or not verify_password(payload.password, user.password_hash):
        raise AuthenticationError("Invalid credentials")

    token = AuthToken(user_id=user.id, token=new_token(), expires_at=token_expiry(settings.TOKEN_TTL_MINUTES))
    db.add(token)
    await db.commit()
    return ApiResponse(data=LoginOut(token=token.token, expires_at=token.expires_at))


@router.get("/me", response_model=ApiResponse[UserOut])
async def me(user: User = Depends(get_current_user)) -> ApiResponse[UserOut]:
    return ApiResponse(data=UserOut.model_validate(user))
