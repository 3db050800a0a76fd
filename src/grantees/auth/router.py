"""Authentication router: all /api/v1/auth/* endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from grantees.auth.dependencies import get_current_user
from grantees.auth.jwt import create_access_token
from grantees.auth.password import PasswordStrengthError
from grantees.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from grantees.auth.service import EmailAlreadyRegisteredError, authenticate_user, register_user
from grantees.config import get_settings
from grantees.database import get_session
from grantees.db.models import User
from grantees.email.service import EmailDeliveryError, get_email_service
from grantees.redis_client import get_optional_redis

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


def _user_response(user: User) -> UserResponse:
    """Build a UserResponse from a User model."""
    return UserResponse(
        id=user.id,
        email=user.email,
        signup_method=user.signup_method,
        created_at=user.created_at,
        last_login=user.last_login,
    )


def _token_response(user: User) -> TokenResponse:
    settings = get_settings()
    return TokenResponse(
        access_token=create_access_token(user.id, user.email),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=_user_response(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_session),
) -> TokenResponse:
    """Create an account, credit the welcome bonus, and send the welcome email."""
    try:
        user, _profile = await register_user(db, body.email, body.password, referral_code=body.referral_code)
    except PasswordStrengthError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    await db.commit()

    # Welcome email is best-effort: delivery problems never fail registration.
    try:
        await get_email_service(redis=get_optional_redis()).send_template(user.email, "welcome", {})
    except EmailDeliveryError as e:
        logger.warning("welcome_email_failed", user_id=user.id, error=e.message)

    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> TokenResponse:
    """Exchange email + password for an access token."""
    try:
        user = await authenticate_user(db, body.email, body.password)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    await db.commit()
    logger.info("user_logged_in", user_id=user.id)
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    """The user behind the bearer token."""
    return _user_response(user)
