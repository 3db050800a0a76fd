"""
Authentication business logic.

Handles user creation (with profile, welcome bonus and referral credit)
and email/password login.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from grantees.auth.password import (
    check_needs_rehash,
    hash_password,
    validate_password_strength,
    verify_password,
)
from grantees.config import get_settings
from grantees.credits.service import grant_credits
from grantees.db.models import Profile, Referral, User
from grantees.middleware.logging import email_fingerprint
from grantees.profiles.referral_codes import generate_unique_referral_code, get_profile_by_referral_code

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


class EmailAlreadyRegisteredError(ValueError):
    """Raised when registering an email that already has an account."""


# ---------------------------------------------------------------------------
# User queries
# ---------------------------------------------------------------------------


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email (case-insensitive)."""
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


async def register_user(
    db: AsyncSession,
    email: str,
    password: str,
    referral_code: str | None = None,
) -> tuple[User, Profile]:
    """
    Register a new user with email + password.

    Creates the profile with a referral code, grants the welcome bonus, and
    credits the referrer when a valid referral code is given. An unknown
    referral code is ignored. Flushes only; the caller commits.

    Raises:
        PasswordStrengthError: If the password is weak.
        EmailAlreadyRegisteredError: If the email already has an account.
    """
    validate_password_strength(password)

    existing = await get_user_by_email(db, email)
    if existing is not None:
        msg = "Email already registered"
        raise EmailAlreadyRegisteredError(msg)

    now = datetime.now(timezone.utc)
    user = User(
        email=email.lower().strip(),
        password_hash=hash_password(password),
        signup_method="email",
        is_banned=False,
        created_at=now,
        last_login=now,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        msg = "Email already registered"
        raise EmailAlreadyRegisteredError(msg) from e

    profile = Profile(
        user_id=user.id,
        credits_balance=0,
        referral_code=await generate_unique_referral_code(db),
        niches=[],
        target_ecosystems=[],
        created_at=now,
    )
    db.add(profile)
    await db.flush()
    logger.info("user_created", user_id=user.id, email=email_fingerprint(user.email), method="email")

    settings = get_settings()
    if settings.welcome_bonus_credits > 0:
        await grant_credits(db, user.id, settings.welcome_bonus_credits, "bonus", "Welcome bonus")

    if referral_code:
        await _apply_referral(db, user, referral_code)

    await db.refresh(profile)
    return user, profile


async def _apply_referral(db: AsyncSession, user: User, referral_code: str) -> None:
    """Link the new user to the referrer and credit the referral bonus."""
    referrer_profile = await get_profile_by_referral_code(db, referral_code)
    if referrer_profile is None or referrer_profile.user_id == user.id:
        logger.info("referral_code_ignored", user_id=user.id, code=referral_code)
        return

    db.add(Referral(referrer_id=referrer_profile.user_id, referred_id=user.id, created_at=datetime.now(timezone.utc)))
    await db.flush()

    bonus = get_settings().referral_bonus_credits
    if bonus > 0:
        await grant_credits(db, referrer_profile.user_id, bonus, "referral", f"Referral bonus for {user.email}")
    logger.info("referral_recorded", referrer_id=referrer_profile.user_id, referred_id=user.id)


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    """
    Authenticate a user with email + password.

    Raises:
        ValueError: If credentials are invalid.
        PermissionError: If the account is banned.
    """
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash or ""):
        msg = "Invalid email or password"
        raise ValueError(msg)

    if user.is_banned:
        msg = "Account is banned"
        raise PermissionError(msg)

    user.last_login = datetime.now(timezone.utc)
    if user.password_hash and check_needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        logger.info("password_rehashed", user_id=user.id)
    await db.flush()
    return user
