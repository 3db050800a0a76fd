"""Concurrent spends against one balance must never overspend."""

from __future__ import annotations

import asyncio

from httpx import AsyncClient

from grantees.credits.service import ledger_drift

CONSUME = "/functions/v1/credits-consume"


async def test_concurrent_consumes_never_overspend(client: AsyncClient, make_user, balance_of, db_session):
    user = await make_user(balance=3)

    responses = await asyncio.gather(
        *(client.post(CONSUME, json={"amount": 1}, headers=user["headers"]) for _ in range(8))
    )
    statuses = sorted(r.status_code for r in responses)

    assert statuses.count(200) == 3
    assert statuses.count(402) == 5
    assert await balance_of(user["user_id"]) == 0
    assert await ledger_drift(db_session, user["user_id"]) == 0


async def test_concurrent_mixed_amounts(client: AsyncClient, make_user, balance_of):
    user = await make_user(balance=10)

    responses = await asyncio.gather(
        *(client.post(CONSUME, json={"amount": 4}, headers=user["headers"]) for _ in range(4))
    )
    spent = sum(r.json()["creditsSpent"] for r in responses if r.status_code == 200)

    assert spent == 8
    assert await balance_of(user["user_id"]) == 2
