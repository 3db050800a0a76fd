"""Initial schema: users, profiles, credit ledger, referrals.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables."""
    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.String(256), nullable=True),
        sa.Column("signup_method", sa.String(16), server_default="email", nullable=False),
        sa.Column("is_banned", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # --- profiles ---
    op.create_table(
        "profiles",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("credits_balance", sa.Integer(), server_default="0", nullable=False),
        sa.Column("wallet_address", sa.String(42), nullable=True),
        sa.Column("referral_code", sa.String(16), nullable=True),
        sa.Column("is_premium", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("premium_unlocked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("stake_tx_hash", sa.String(128), nullable=True),
        sa.Column("display_name", sa.String(64), nullable=True),
        sa.Column("role", sa.String(32), nullable=True),
        sa.Column("niches", sa.JSON(), nullable=True),
        sa.Column("target_ecosystems", sa.JSON(), nullable=True),
        sa.Column("project_maturity", sa.String(16), nullable=True),
        sa.Column("project_description", sa.Text(), nullable=True),
        sa.Column("region", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_profiles"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_profiles_user_id_users", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("user_id", name="uq_profiles_user_id"),
        sa.UniqueConstraint("referral_code", name="uq_profiles_referral_code"),
        sa.CheckConstraint("credits_balance >= 0", name="ck_profiles_credits_balance_non_negative"),
    )

    # --- credit_transactions (append-only) ---
    op.create_table(
        "credit_transactions",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("credits", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tx_hash", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_credit_transactions"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_credit_transactions_user_id_users", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("tx_hash", name="uq_credit_transactions_tx_hash"),
        sa.CheckConstraint(
            "type IN ('purchase', 'spend', 'referral', 'bonus')",
            name="ck_credit_transactions_credit_transaction_type",
        ),
    )
    op.create_index("ix_credit_transactions_user_id", "credit_transactions", ["user_id"])

    # --- referrals ---
    op.create_table(
        "referrals",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("referrer_id", sa.BigInteger(), nullable=False),
        sa.Column("referred_id", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_referrals"),
        sa.ForeignKeyConstraint(
            ["referrer_id"], ["users.id"], name="fk_referrals_referrer_id_users", ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["referred_id"], ["users.id"], name="fk_referrals_referred_id_users", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("referred_id", name="uq_referrals_referred_id"),
    )
    op.create_index("ix_referrals_referrer_id", "referrals", ["referrer_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_referrals_referrer_id", table_name="referrals")
    op.drop_table("referrals")
    op.drop_index("ix_credit_transactions_user_id", table_name="credit_transactions")
    op.drop_table("credit_transactions")
    op.drop_table("profiles")
    op.drop_table("users")
