"""Tests for POST /functions/v1/credits-consume."""

from __future__ import annotations

from httpx import AsyncClient

CONSUME = "/functions/v1/credits-consume"


class TestConsumeSuccess:
    async def test_spend_decrements_and_logs(self, client: AsyncClient, make_user, balance_of, ledger_of):
        user = await make_user(balance=5)
        response = await client.post(CONSUME, json={"amount": 3, "description": "Grant match"}, headers=user["headers"])
        assert response.status_code == 200
        assert response.json() == {"success": True, "creditsSpent": 3, "newBalance": 2}
        assert await balance_of(user["user_id"]) == 2
        assert (await ledger_of(user["user_id"]))[-1] == ("spend", -3, None)

    async def test_default_amount_is_one(self, client: AsyncClient, make_user, balance_of):
        user = await make_user(balance=5)
        response = await client.post(CONSUME, headers=user["headers"])
        assert response.status_code == 200
        assert response.json()["creditsSpent"] == 1
        assert response.json()["newBalance"] == 4
        assert await balance_of(user["user_id"]) == 4

    async def test_empty_body_uses_defaults(self, client: AsyncClient, make_user):
        user = await make_user(balance=2)
        response = await client.post(CONSUME, json={}, headers=user["headers"])
        assert response.status_code == 200
        assert response.json()["newBalance"] == 1

    async def test_spend_entire_balance(self, client: AsyncClient, make_user, balance_of):
        user = await make_user(balance=3)
        response = await client.post(CONSUME, json={"amount": 3}, headers=user["headers"])
        assert response.status_code == 200
        assert response.json()["newBalance"] == 0
        assert await balance_of(user["user_id"]) == 0

    async def test_default_description_recorded(self, client: AsyncClient, make_user, db_session):
        from sqlalchemy import select

        from grantees.db.models import CreditTransaction

        user = await make_user(balance=1)
        await client.post(CONSUME, headers=user["headers"])
        result = await db_session.execute(
            select(CreditTransaction.description)
            .where(CreditTransaction.user_id == user["user_id"])
            .where(CreditTransaction.type == "spend")
        )
        assert result.scalar_one() == "AI action"


class TestConsumeFailures:
    async def test_insufficient_credits(self, client: AsyncClient, make_user, balance_of, ledger_of):
        user = await make_user(balance=2)
        before = await ledger_of(user["user_id"])
        response = await client.post(CONSUME, json={"amount": 3}, headers=user["headers"])
        assert response.status_code == 402
        assert response.json() == {"error": "Insufficient credits", "required": 3, "available": 2}
        assert await balance_of(user["user_id"]) == 2
        assert await ledger_of(user["user_id"]) == before

    async def test_zero_balance(self, client: AsyncClient, make_user):
        user = await make_user(balance=0)
        response = await client.post(CONSUME, headers=user["headers"])
        assert response.status_code == 402
        assert response.json()["available"] == 0
        assert response.json()["required"] == 1

    async def test_missing_token(self, client: AsyncClient):
        response = await client.post(CONSUME, json={"amount": 1})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    async def test_invalid_token(self, client: AsyncClient):
        response = await client.post(CONSUME, headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    async def test_banned_user(self, client: AsyncClient, make_user):
        user = await make_user(balance=5, is_banned=True)
        response = await client.post(CONSUME, headers=user["headers"])
        assert response.status_code == 403
        assert "error" in response.json()

    async def test_missing_profile(self, client: AsyncClient, make_user):
        user = await make_user(with_profile=False)
        response = await client.post(CONSUME, headers=user["headers"])
        assert response.status_code == 404
        assert response.json() == {"error": "Profile not found"}

    async def test_non_positive_amount_rejected(self, client: AsyncClient, make_user, balance_of):
        user = await make_user(balance=5)
        for amount in (0, -2):
            response = await client.post(CONSUME, json={"amount": amount}, headers=user["headers"])
            assert response.status_code == 400
            assert "error" in response.json()
        assert await balance_of(user["user_id"]) == 5

    async def test_unexpected_error_passes_message_through(self, client: AsyncClient, make_user, monkeypatch):
        async def _boom(*_args, **_kwargs):
            raise RuntimeError("database went away")

        monkeypatch.setattr("grantees.functions.router.consume_credits", _boom)
        user = await make_user(balance=5)
        response = await client.post(CONSUME, headers=user["headers"])
        assert response.status_code == 500
        assert response.json() == {"error": "database went away"}
