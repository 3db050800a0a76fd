"""Profile business logic. Credit balance is never written here."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select

from grantees.auth.address_validation import validate_wallet_address
from grantees.db.models import Profile
from grantees.onboarding.wizard import STEP_IDS, OnboardingForm, OnboardingWizard

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def get_profile_for_user(db: AsyncSession, user_id: int) -> Profile | None:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    return result.scalar_one_or_none()


async def update_profile(
    db: AsyncSession,
    profile: Profile,
    display_name: str | None = None,
    wallet_address: str | None = None,
    region: str | None = None,
) -> Profile:
    """
    Update editable profile fields. None leaves a field unchanged.

    Raises:
        ValueError: If the wallet address is malformed.
    """
    if display_name is not None:
        profile.display_name = display_name.strip() or None
    if wallet_address is not None:
        try:
            profile.wallet_address = validate_wallet_address(wallet_address)
        except ValueError as e:
            msg = f"Invalid wallet address: {e}"
            raise ValueError(msg) from e
    if region is not None:
        profile.region = region.strip() or None

    profile.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return profile


async def update_premium_status(
    db: AsyncSession,
    profile: Profile,
    is_premium: bool,
    tx_hash: str | None = None,
) -> Profile:
    """Set or clear premium. The unlock time is stamped on enable and cleared on disable."""
    now = datetime.now(timezone.utc)
    profile.is_premium = is_premium
    profile.premium_unlocked_at = now if is_premium else None
    profile.stake_tx_hash = tx_hash if is_premium else None
    profile.updated_at = now
    await db.flush()
    logger.info("premium_status_updated", user_id=profile.user_id, is_premium=is_premium, tx_hash=tx_hash)
    return profile


async def save_builder_profile(db: AsyncSession, profile: Profile, form: OnboardingForm) -> Profile:
    """
    Persist a finished onboarding form onto the profile.

    Raises:
        ValueError: If any wizard step is incomplete.
    """
    incomplete = OnboardingWizard(form=form).first_incomplete_step()
    if incomplete is not None:
        msg = f"Onboarding step '{STEP_IDS[incomplete]}' is incomplete"
        raise ValueError(msg)

    for column, value in form.to_profile_fields().items():
        setattr(profile, column, value)
    profile.updated_at = datetime.now(timezone.utc)
    await db.flush()
    logger.info("builder_profile_saved", user_id=profile.user_id, role=profile.role)
    return profile
