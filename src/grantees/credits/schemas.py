"""Request/response schemas for credit endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from grantees.credits.packages import DEFAULT_PACKAGE
from grantees.credits.service import DEFAULT_SPEND_DESCRIPTION


class ConsumeRequest(BaseModel):
    """Spend credits for a premium action."""

    amount: int = Field(1, ge=1, le=1_000_000)
    description: str = Field(DEFAULT_SPEND_DESCRIPTION, max_length=500)


class ConsumeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    credits_spent: int = Field(..., alias="creditsSpent")
    new_balance: int = Field(..., alias="newBalance")


class PurchaseRequest(BaseModel):
    """Buy a credit package paid from a wallet."""

    model_config = ConfigDict(populate_by_name=True)

    wallet_address: str | None = Field(None, max_length=64)
    package: str = Field(DEFAULT_PACKAGE, max_length=32)
    tx_hash: str | None = Field(None, max_length=128)


class PurchaseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    credits: int
    new_balance: int = Field(..., alias="newBalance")


class TransactionResponse(BaseModel):
    id: int
    type: str
    credits: int
    tx_hash: str | None = None
    description: str | None = None
    created_at: str | None = None


class CreditSummaryResponse(BaseModel):
    """Everything the client credit store is initialised from."""

    model_config = ConfigDict(populate_by_name=True)

    credits: int
    transactions: list[TransactionResponse]
    referral_code: str | None = Field(None, alias="referralCode")
    referral_count: int = Field(0, alias="referralCount")


class PackageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    credits: int
    avax_price: float = Field(..., alias="avaxPrice")
