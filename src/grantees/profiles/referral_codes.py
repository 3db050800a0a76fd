"""Referral code generation.

Codes are 8-character alphanumeric (A-Z, 0-9), generated server-side
with a cryptographic random source.
"""

from __future__ import annotations

import secrets
import string

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from grantees.db.models import Profile

REFERRAL_CHARSET = string.ascii_uppercase + string.digits
REFERRAL_LENGTH = 8


def generate_referral_code() -> str:
    """Generate a cryptographically random 8-character referral code."""
    return "".join(secrets.choice(REFERRAL_CHARSET) for _ in range(REFERRAL_LENGTH))


def normalize_referral_code(code: str) -> str:
    """Normalize a referral code for case-insensitive lookup."""
    return code.strip().upper()


async def generate_unique_referral_code(db: AsyncSession) -> str:
    """Generate a referral code that doesn't already exist in the database."""
    for _ in range(10):
        code = generate_referral_code()
        existing = await db.execute(select(Profile.id).where(Profile.referral_code == code))
        if existing.first() is None:
            return code
    raise RuntimeError("Failed to generate unique referral code after 10 attempts")


async def get_profile_by_referral_code(db: AsyncSession, code: str) -> Profile | None:
    """Find the profile that owns a referral code."""
    result = await db.execute(select(Profile).where(Profile.referral_code == normalize_referral_code(code)))
    return result.scalar_one_or_none()
