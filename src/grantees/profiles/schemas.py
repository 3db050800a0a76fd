"""Request/response schemas for profile endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    credits_balance: int
    wallet_address: str | None = None
    referral_code: str | None = None
    is_premium: bool = False
    premium_unlocked_at: datetime | None = None
    stake_tx_hash: str | None = None
    display_name: str | None = None
    role: str | None = None
    niches: list[str] = Field(default_factory=list)
    target_ecosystems: list[str] = Field(default_factory=list)
    project_maturity: str | None = None
    project_description: str | None = None
    region: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


class ProfileUpdateRequest(BaseModel):
    """Update editable profile fields. Omitted fields are left unchanged."""

    display_name: str | None = Field(None, max_length=64)
    wallet_address: str | None = Field(None, max_length=64)
    region: str | None = Field(None, max_length=64)


class PremiumUpdateRequest(BaseModel):
    is_premium: bool
    tx_hash: str | None = Field(None, max_length=128)
