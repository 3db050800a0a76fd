"""Tests for the credit ledger service layer."""

from __future__ import annotations

import pytest
from sqlalchemy import update

from grantees.credits.exceptions import (
    InsufficientCreditsError,
    InvalidPackageError,
    MissingTransactionHashError,
    ProfileNotFoundError,
)
from grantees.credits.payments import AvalanchePaymentVerifier
from grantees.credits.service import (
    consume_credits,
    get_credit_summary,
    get_transactions,
    grant_credits,
    has_credits,
    ledger_drift,
    ledger_sum,
    purchase_credits,
)
from grantees.db.models import Profile

WALLET = "0x2222222222222222222222222222222222222222"


class TestHasCredits:
    def test_default_amount(self):
        assert has_credits(1) is True
        assert has_credits(0) is False

    def test_explicit_amount(self):
        assert has_credits(5, 5) is True
        assert has_credits(4, 5) is False


class TestConsume:
    async def test_returns_new_balance(self, make_user, db_session, balance_of):
        user = await make_user(balance=10)
        assert await consume_credits(db_session, user["user_id"], 4) == 6
        assert await balance_of(user["user_id"]) == 6

    async def test_insufficient_carries_amounts(self, make_user, db_session, balance_of):
        user = await make_user(balance=2)
        with pytest.raises(InsufficientCreditsError) as exc_info:
            await consume_credits(db_session, user["user_id"], 3)
        assert exc_info.value.required == 3
        assert exc_info.value.available == 2
        assert exc_info.value.status_code == 402
        assert await balance_of(user["user_id"]) == 2

    async def test_missing_profile(self, make_user, db_session):
        user = await make_user(with_profile=False)
        with pytest.raises(ProfileNotFoundError):
            await consume_credits(db_session, user["user_id"], 1)

    async def test_rejects_non_positive_amount(self, make_user, db_session):
        user = await make_user(balance=2)
        with pytest.raises(ValueError, match="positive"):
            await consume_credits(db_session, user["user_id"], 0)


class TestPurchase:
    async def test_unknown_package_no_mutation(self, make_user, db_session, balance_of):
        user = await make_user(balance=1)
        with pytest.raises(InvalidPackageError):
            await purchase_credits(db_session, user["user_id"], WALLET, "gold")
        assert await balance_of(user["user_id"]) == 1

    async def test_onchain_requires_tx_hash(self, make_user, db_session, balance_of):
        user = await make_user()
        verifier = AvalanchePaymentVerifier("http://rpc.test", WALLET, 43114)
        with pytest.raises(MissingTransactionHashError):
            await purchase_credits(db_session, user["user_id"], WALLET, "starter", verifier=verifier)
        assert await balance_of(user["user_id"]) == 0

    async def test_returns_package_and_balance(self, make_user, db_session):
        user = await make_user(balance=3)
        package, new_balance = await purchase_credits(db_session, user["user_id"], WALLET, "starter")
        assert package.name == "starter"
        assert new_balance == 103


class TestGrant:
    async def test_grant_bonus(self, make_user, db_session, ledger_of):
        user = await make_user()
        assert await grant_credits(db_session, user["user_id"], 5, "bonus", "Welcome bonus") == 5
        await db_session.commit()
        assert await ledger_of(user["user_id"]) == [("bonus", 5, None)]

    async def test_rejects_spend_type(self, make_user, db_session):
        user = await make_user()
        with pytest.raises(ValueError, match="Cannot grant"):
            await grant_credits(db_session, user["user_id"], 5, "spend", "nope")

    async def test_rejects_non_positive(self, make_user, db_session):
        user = await make_user()
        with pytest.raises(ValueError, match="positive"):
            await grant_credits(db_session, user["user_id"], 0, "bonus", "nope")


class TestLedger:
    async def test_ledger_matches_balance_after_mixed_activity(self, make_user, db_session):
        user = await make_user(balance=5)
        await consume_credits(db_session, user["user_id"], 2)
        await purchase_credits(db_session, user["user_id"], WALLET, "pro")
        await consume_credits(db_session, user["user_id"], 100)
        assert await ledger_sum(db_session, user["user_id"]) == 403
        assert await ledger_drift(db_session, user["user_id"]) == 0

    async def test_drift_reported_not_repaired(self, make_user, db_session, balance_of):
        user = await make_user(balance=5)
        await db_session.execute(update(Profile).where(Profile.user_id == user["user_id"]).values(credits_balance=8))
        await db_session.commit()
        assert await ledger_drift(db_session, user["user_id"]) == 3
        assert await balance_of(user["user_id"]) == 8

    async def test_transactions_newest_first(self, make_user, db_session):
        user = await make_user(balance=5)
        await consume_credits(db_session, user["user_id"], 1)
        await consume_credits(db_session, user["user_id"], 2)
        rows = await get_transactions(db_session, user["user_id"])
        assert [r.credits for r in rows] == [-2, -1, 5]

    async def test_transactions_limit(self, make_user, db_session):
        user = await make_user(balance=30)
        for _ in range(25):
            await consume_credits(db_session, user["user_id"], 1)
        assert len(await get_transactions(db_session, user["user_id"], limit=20)) == 20

    async def test_summary(self, make_user, db_session):
        user = await make_user(balance=5)
        summary = await get_credit_summary(db_session, user["user_id"])
        assert summary["credits"] == 5
        assert len(summary["transactions"]) == 1
        assert len(summary["referralCode"]) == 8
        assert summary["referralCount"] == 0

    async def test_summary_missing_profile(self, make_user, db_session):
        user = await make_user(with_profile=False)
        with pytest.raises(ProfileNotFoundError):
            await get_credit_summary(db_session, user["user_id"])
