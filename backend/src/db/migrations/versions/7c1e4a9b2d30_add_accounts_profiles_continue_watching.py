"""
Add accounts, profiles, continue_watching and search_history tables.

Revision ID: 7c1e4a9b2d30
Revises:
Create Date: 2026-10-19 09:12:40.118204
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "7c1e4a9b2d30"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=60), nullable=False, comment="bcrypt hash"),
        sa.Column("image", sa.String(length=500), server_default="", nullable=False),
        sa.Column("is_admin", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_accounts_email"), "accounts", ["email"], unique=True)
    op.create_index(op.f("ix_accounts_username"), "accounts", ["username"], unique=True)
    op.create_index(op.f("ix_accounts_updated_at"), "accounts", ["updated_at"], unique=False)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("is_default", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_profiles_account_id"), "profiles", ["account_id"], unique=False)
    op.create_index(op.f("ix_profiles_updated_at"), "profiles", ["updated_at"], unique=False)

    op.create_table(
        "continue_watching",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column("profile_id", sa.Uuid(), nullable=False),
        sa.Column("media_id", sa.Integer(), nullable=False, comment="Catalog (TMDB) id"),
        sa.Column("media_type", sa.String(length=10), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("backdrop_path", sa.String(length=500), nullable=True),
        sa.Column("poster_path", sa.String(length=500), nullable=True),
        sa.Column("current_season", sa.Integer(), nullable=True),
        sa.Column("current_episode", sa.Integer(), nullable=True),
        sa.Column("current_time_seconds", sa.Float(), server_default="0", nullable=False),
        sa.Column("total_duration", sa.Float(), nullable=True),
        sa.Column("last_watched_at", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("current_time_seconds >= 0", name="ck_continue_watching_time"),
        sa.CheckConstraint(
            "media_type IN ('movie', 'tv')",
            name="ck_continue_watching_media_type",
        ),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_continue_watching_account_id"),
        "continue_watching",
        ["account_id"],
        unique=False,
    )
    op.create_index(
        "ix_continue_watching_natural_key",
        "continue_watching",
        ["account_id", "profile_id", "media_id", "media_type"],
        unique=False,
    )
    op.create_index(
        "ix_continue_watching_profile_recency",
        "continue_watching",
        ["profile_id", "last_watched_at"],
        unique=False,
    )
    op.create_index(
        op.f("ix_continue_watching_updated_at"),
        "continue_watching",
        ["updated_at"],
        unique=False,
    )

    op.create_table(
        "search_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("account_id", sa.Uuid(), nullable=False),
        sa.Column("profile_id", sa.Uuid(), nullable=False),
        sa.Column(
            "media_id",
            sa.Integer(),
            nullable=False,
            comment="Catalog (TMDB) id of the top hit",
        ),
        sa.Column(
            "search_type",
            sa.String(length=10),
            nullable=False,
            comment="person, movie, or tv",
        ),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_search_history_account_id"), "search_history", ["account_id"], unique=False,
    )
    op.create_index(
        op.f("ix_search_history_profile_id"), "search_history", ["profile_id"], unique=False,
    )
    op.create_index(
        op.f("ix_search_history_created_at"), "search_history", ["created_at"], unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_search_history_created_at"), table_name="search_history")
    op.drop_index(op.f("ix_search_history_profile_id"), table_name="search_history")
    op.drop_index(op.f("ix_search_history_account_id"), table_name="search_history")
    op.drop_table("search_history")
    op.drop_index(op.f("ix_continue_watching_updated_at"), table_name="continue_watching")
    op.drop_index("ix_continue_watching_profile_recency", table_name="continue_watching")
    op.drop_index("ix_continue_watching_natural_key", table_name="continue_watching")
    op.drop_index(op.f("ix_continue_watching_account_id"), table_name="continue_watching")
    op.drop_table("continue_watching")
    op.drop_index(op.f("ix_profiles_updated_at"), table_name="profiles")
    op.drop_index(op.f("ix_profiles_account_id"), table_name="profiles")
    op.drop_table("profiles")
    op.drop_index(op.f("ix_accounts_updated_at"), table_name="accounts")
    op.drop_index(op.f("ix_accounts_username"), table_name="accounts")
    op.drop_index(op.f("ix_accounts_email"), table_name="accounts")
    op.drop_table("accounts")
