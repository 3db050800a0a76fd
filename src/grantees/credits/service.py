"""
Credit ledger business logic.

The balance lives denormalized on ``profiles.credits_balance``; every
mutation appends one ``credit_transactions`` row in the same database
transaction. Balance changes are single conditional UPDATE ... RETURNING
statements, so concurrent spends for one user cannot both pass the balance
check.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from grantees.auth.address_validation import validate_wallet_address
from grantees.config import get_settings
from grantees.credits.exceptions import (
    DuplicateTransactionError,
    InsufficientCreditsError,
    InvalidPackageError,
    InvalidWalletAddressError,
    ProfileNotFoundError,
)
from grantees.credits.packages import CreditPackage, get_package
from grantees.credits.payments import PaymentVerifier, get_payment_verifier
from grantees.db.models import CreditTransaction, Profile, Referral

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

DEFAULT_SPEND_DESCRIPTION = "AI action"


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


async def get_profile(db: AsyncSession, user_id: int) -> Profile | None:
    """Fetch a user's profile."""
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    return result.scalar_one_or_none()


async def get_transactions(db: AsyncSession, user_id: int, limit: int = 20) -> list[CreditTransaction]:
    """Most recent ledger entries, newest first."""
    result = await db.execute(
        select(CreditTransaction)
        .where(CreditTransaction.user_id == user_id)
        .order_by(CreditTransaction.created_at.desc(), CreditTransaction.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def count_referrals(db: AsyncSession, user_id: int) -> int:
    """Number of users this user has referred."""
    result = await db.execute(select(func.count()).select_from(Referral).where(Referral.referrer_id == user_id))
    return int(result.scalar_one())


async def tx_hash_exists(db: AsyncSession, tx_hash: str) -> bool:
    """True when a ledger entry already carries this transaction hash."""
    result = await db.execute(select(CreditTransaction.id).where(CreditTransaction.tx_hash == tx_hash))
    return result.first() is not None


async def ledger_sum(db: AsyncSession, user_id: int) -> int:
    """Sum of all ledger entries for a user."""
    result = await db.execute(
        select(func.coalesce(func.sum(CreditTransaction.credits), 0)).where(CreditTransaction.user_id == user_id)
    )
    return int(result.scalar_one())


async def ledger_drift(db: AsyncSession, user_id: int) -> int:
    """
    Difference between the stored balance and the ledger sum.

    Zero for accounts whose every balance change went through this module.
    Reported only; balances are never rewritten from the ledger.

    Raises:
        ProfileNotFoundError: If the user has no profile.
    """
    profile = await get_profile(db, user_id)
    if profile is None:
        raise ProfileNotFoundError
    return profile.credits_balance - await ledger_sum(db, user_id)


def has_credits(balance: int, amount: int = 1) -> bool:
    """True when the balance covers the amount."""
    return balance >= amount


async def get_credit_summary(db: AsyncSession, user_id: int) -> dict[str, Any]:
    """
    Snapshot of a user's credit state: balance, recent ledger, referral info.

    Raises:
        ProfileNotFoundError: If the user has no profile.
    """
    profile = await get_profile(db, user_id)
    if profile is None:
        raise ProfileNotFoundError
    limit = get_settings().transaction_history_limit
    transactions = await get_transactions(db, user_id, limit=limit)
    return {
        "credits": profile.credits_balance,
        "transactions": [tx.to_dict() for tx in transactions],
        "referralCode": profile.referral_code,
        "referralCount": await count_referrals(db, user_id),
    }


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


async def _apply_delta(
    db: AsyncSession,
    user_id: int,
    delta: int,
    wallet_address: str | None = None,
) -> int | None:
    """
    Atomically add ``delta`` to the balance.

    Negative deltas only apply when the balance covers them. Returns the new
    balance, or None when no row matched (missing profile or insufficient funds).
    """
    values: dict[str, Any] = {
        "credits_balance": Profile.credits_balance + delta,
        "updated_at": datetime.now(timezone.utc),
    }
    if wallet_address is not None:
        values["wallet_address"] = wallet_address

    stmt = update(Profile).where(Profile.user_id == user_id)
    if delta < 0:
        stmt = stmt.where(Profile.credits_balance >= -delta)
    result = await db.execute(stmt.values(**values).returning(Profile.credits_balance))
    return result.scalar_one_or_none()


def _append_transaction(
    db: AsyncSession,
    user_id: int,
    tx_type: str,
    credits: int,
    description: str | None,
    tx_hash: str | None = None,
) -> CreditTransaction:
    entry = CreditTransaction(
        user_id=user_id,
        type=tx_type,
        credits=credits,
        description=description,
        tx_hash=tx_hash,
        created_at=datetime.now(timezone.utc),
    )
    db.add(entry)
    return entry


async def consume_credits(
    db: AsyncSession,
    user_id: int,
    amount: int = 1,
    description: str = DEFAULT_SPEND_DESCRIPTION,
) -> int:
    """
    Spend credits and log a ``spend`` entry. Commits on success.

    Returns:
        The new balance.

    Raises:
        ValueError: If amount is not a positive integer.
        ProfileNotFoundError: If the user has no profile.
        InsufficientCreditsError: If the balance is below amount (balance unchanged).
    """
    if amount < 1:
        msg = "Amount must be a positive integer"
        raise ValueError(msg)

    try:
        new_balance = await _apply_delta(db, user_id, -amount)
        if new_balance is None:
            profile = await get_profile(db, user_id)
            available = profile.credits_balance if profile is not None else None
            await db.rollback()
            if available is None:
                raise ProfileNotFoundError
            logger.info("credits_insufficient", user_id=user_id, required=amount, available=available)
            raise InsufficientCreditsError(required=amount, available=available)

        _append_transaction(db, user_id, "spend", -amount, description)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("credits_consumed", user_id=user_id, amount=amount, new_balance=new_balance)
    return new_balance


async def purchase_credits(
    db: AsyncSession,
    user_id: int,
    wallet_address: str | None,
    package_name: str,
    tx_hash: str | None = None,
    verifier: PaymentVerifier | None = None,
) -> tuple[CreditPackage, int]:
    """
    Credit a package purchase, store the wallet, log a ``purchase`` entry. Commits on success.

    Returns:
        Tuple of (package, new_balance).

    Raises:
        InvalidPackageError: Unknown package name.
        InvalidWalletAddressError: Missing or malformed wallet address.
        MissingTransactionHashError: tx_hash required by the verifier but absent.
        DuplicateTransactionError: tx_hash already credited.
        PaymentVerificationError / PaymentProviderError: payment not confirmed.
        ProfileNotFoundError: If the user has no profile.
    """
    package = get_package(package_name)
    if package is None:
        raise InvalidPackageError

    try:
        wallet = validate_wallet_address(wallet_address)
    except ValueError as e:
        raise InvalidWalletAddressError from e

    verifier = verifier or get_payment_verifier()
    recorded_hash = await verifier.resolve_tx_hash(tx_hash)
    if await tx_hash_exists(db, recorded_hash):
        raise DuplicateTransactionError
    await verifier.verify(recorded_hash, wallet, package)

    logger.info("credits_purchase_started", user_id=user_id, wallet=wallet, package=package.name)
    try:
        new_balance = await _apply_delta(db, user_id, package.credits, wallet_address=wallet)
        if new_balance is None:
            raise ProfileNotFoundError
        _append_transaction(
            db,
            user_id,
            "purchase",
            package.credits,
            f"Purchased {package.name} package ({package.credits} credits)",
            tx_hash=recorded_hash,
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateTransactionError from e
    except Exception:
        await db.rollback()
        raise

    logger.info("credits_purchased", user_id=user_id, credits=package.credits, new_balance=new_balance)
    return package, new_balance


async def grant_credits(
    db: AsyncSession,
    user_id: int,
    credits: int,
    tx_type: str,
    description: str,
) -> int:
    """
    Add bonus or referral credits. Flushes only; the caller owns the commit.

    Raises:
        ValueError: If credits is not positive or tx_type is not a grant type.
        ProfileNotFoundError: If the user has no profile.
    """
    if credits < 1:
        msg = "Granted credits must be positive"
        raise ValueError(msg)
    if tx_type not in ("bonus", "referral"):
        msg = f"Cannot grant credits as '{tx_type}'"
        raise ValueError(msg)

    new_balance = await _apply_delta(db, user_id, credits)
    if new_balance is None:
        raise ProfileNotFoundError
    _append_transaction(db, user_id, tx_type, credits, description)
    await db.flush()
    logger.info("credits_granted", user_id=user_id, credits=credits, type=tx_type, new_balance=new_balance)
    return new_balance
