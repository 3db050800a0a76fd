"""Shared test fixtures.

Every test gets a fresh SQLite database (aiosqlite) built from the ORM
metadata. Redis is left uninitialized, so rate limiting and email throttling
pass through; the email provider is the log provider.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

# Settings are read when grantees.main is imported; point them away from Postgres/Redis first.
os.environ.setdefault("GRANTEES_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GRANTEES_REDIS_URL", "")
os.environ.setdefault("GRANTEES_EMAIL_PROVIDER", "log")

from grantees.auth.jwt import create_access_token, reset_keys  # noqa: E402
from grantees.config import get_settings  # noqa: E402
from grantees.credits.payments import reset_payment_verifier  # noqa: E402
from grantees.database import close_db, get_engine, get_session, init_db  # noqa: E402
from grantees.db.base import Base  # noqa: E402
from grantees.db.models import CreditTransaction, Profile, User  # noqa: E402
from grantees.email.service import reset_email_service  # noqa: E402
from grantees.main import create_app  # noqa: E402
from grantees.profiles.referral_codes import generate_referral_code  # noqa: E402

TEST_WALLET = "0x1111111111111111111111111111111111111111"


@pytest.fixture(autouse=True)
def _test_settings(tmp_path, monkeypatch):
    """Per-test settings: temp database, no Redis, log email provider, demo payments."""
    monkeypatch.setenv("GRANTEES_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setenv("GRANTEES_REDIS_URL", "")
    monkeypatch.setenv("GRANTEES_EMAIL_PROVIDER", "log")
    monkeypatch.setenv("GRANTEES_PAYMENT_MODE", "demo")
    get_settings.cache_clear()
    reset_keys()
    reset_payment_verifier()
    reset_email_service()
    yield
    get_settings.cache_clear()
    reset_payment_verifier()
    reset_email_service()


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[None, None]:
    """Initialize the engine and create the schema."""
    await init_db(get_settings().database_url)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await close_db()


@pytest_asyncio.fixture
async def client(database: None) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over the ASGI app."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session(database: None) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for setup and assertions."""
    async for session in get_session():
        yield session
        break


@pytest.fixture
def mock_email_service(monkeypatch):
    """Mock the email service to prevent actual email sending."""
    mock_service = MagicMock()
    mock_service.send_template = AsyncMock(return_value={"id": "test-email-id"})
    mock_service.send_email = AsyncMock(return_value={"id": "test-email-id"})

    monkeypatch.setattr("grantees.auth.router.get_email_service", lambda *a, **kw: mock_service)
    monkeypatch.setattr("grantees.functions.router.get_email_service", lambda *a, **kw: mock_service)
    return mock_service


MakeUser = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def make_user(db_session: AsyncSession) -> MakeUser:
    """
    Factory: create a user + profile with a given balance, return ids and an auth header.

    A non-zero starting balance is backed by a matching bonus ledger entry.
    """
    counter = {"n": 0}

    async def _make(
        balance: int = 0,
        email: str | None = None,
        wallet_address: str | None = None,
        is_banned: bool = False,
        with_profile: bool = True,
    ) -> dict[str, Any]:
        counter["n"] += 1
        email = email or f"builder{counter['n']}@example.com"
        now = datetime.now(timezone.utc)
        user = User(email=email, signup_method="email", is_banned=is_banned, created_at=now)
        db_session.add(user)
        await db_session.flush()
        if with_profile:
            db_session.add(
                Profile(
                    user_id=user.id,
                    credits_balance=balance,
                    wallet_address=wallet_address,
                    referral_code=generate_referral_code(),
                    niches=[],
                    target_ecosystems=[],
                    created_at=now,
                )
            )
            if balance:
                db_session.add(
                    CreditTransaction(
                        user_id=user.id, type="bonus", credits=balance, description="Starting balance", created_at=now
                    )
                )
        await db_session.commit()
        token = create_access_token(user.id, email)
        return {
            "user_id": user.id,
            "email": email,
            "token": token,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return _make


@pytest.fixture
def balance_of(db_session: AsyncSession) -> Callable[[int], Awaitable[int | None]]:
    """Read a user's stored balance, bypassing the session identity map."""

    async def _balance(user_id: int) -> int | None:
        result = await db_session.execute(select(Profile.credits_balance).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()

    return _balance


@pytest.fixture
def ledger_of(db_session: AsyncSession) -> Callable[[int], Awaitable[list[tuple[str, int, str | None]]]]:
    """Ledger rows for a user as (type, credits, tx_hash), oldest first."""

    async def _ledger(user_id: int) -> list[tuple[str, int, str | None]]:
        result = await db_session.execute(
            select(CreditTransaction.type, CreditTransaction.credits, CreditTransaction.tx_hash)
            .where(CreditTransaction.user_id == user_id)
            .order_by(CreditTransaction.id)
        )
        return [tuple(row) for row in result.all()]

    return _ledger
