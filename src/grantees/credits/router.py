"""Credit read endpoints: /api/v1/credits/*."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from grantees.auth.dependencies import get_current_user
from grantees.credits.exceptions import CreditError
from grantees.credits.packages import PACKAGES
from grantees.credits.schemas import CreditSummaryResponse, PackageResponse, TransactionResponse
from grantees.credits.service import get_credit_summary, get_transactions
from grantees.database import get_session
from grantees.db.models import User

router = APIRouter(prefix="/api/v1/credits", tags=["Credits"])


@router.get("", response_model=CreditSummaryResponse, response_model_by_alias=True)
async def credit_summary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> CreditSummaryResponse:
    """Balance, latest transactions, and referral stats."""
    try:
        summary = await get_credit_summary(db, user.id)
    except CreditError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return CreditSummaryResponse.model_validate(summary)


@router.get("/transactions", response_model=list[TransactionResponse])
async def list_transactions(
    limit: int = Query(20, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> list[TransactionResponse]:
    """Ledger entries, newest first."""
    rows = await get_transactions(db, user.id, limit=limit)
    return [TransactionResponse.model_validate(row.to_dict()) for row in rows]


@router.get("/packages", response_model=list[PackageResponse], response_model_by_alias=True)
async def list_packages() -> list[PackageResponse]:
    """Purchasable credit packages."""
    return [PackageResponse.model_validate(p.to_dict()) for p in PACKAGES.values()]
