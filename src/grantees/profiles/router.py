"""Profile router: /api/v1/profile/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from grantees.auth.dependencies import get_current_user
from grantees.database import get_session
from grantees.db.models import Profile, User
from grantees.onboarding.schemas import OnboardingFormRequest
from grantees.profiles.schemas import PremiumUpdateRequest, ProfileResponse, ProfileUpdateRequest
from grantees.profiles.service import (
    get_profile_for_user,
    save_builder_profile,
    update_premium_status,
    update_profile,
)

router = APIRouter(prefix="/api/v1/profile", tags=["Profile"])


async def _require_profile(db: AsyncSession, user: User) -> Profile:
    profile = await get_profile_for_user(db, user.id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    profile = await _require_profile(db, user)
    return ProfileResponse.model_validate(profile)


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """Update display_name, wallet_address, region."""
    profile = await _require_profile(db, user)
    try:
        profile = await update_profile(
            db,
            profile,
            display_name=body.display_name,
            wallet_address=body.wallet_address,
            region=body.region,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    await db.commit()
    return ProfileResponse.model_validate(profile)


@router.post("/me/premium", response_model=ProfileResponse)
async def set_premium(
    body: PremiumUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    profile = await _require_profile(db, user)
    profile = await update_premium_status(db, profile, body.is_premium, body.tx_hash)
    await db.commit()
    return ProfileResponse.model_validate(profile)


@router.put("/me/builder", response_model=ProfileResponse)
async def save_my_builder_profile(
    body: OnboardingFormRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """Save the completed onboarding form."""
    profile = await _require_profile(db, user)
    try:
        profile = await save_builder_profile(db, profile, body.to_form())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    await db.commit()
    return ProfileResponse.model_validate(profile)
