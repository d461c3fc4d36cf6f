"""Create users, tokens, companies, inventory and catalog tables."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_create_game_tables"
down_revision = None
branch_labels = None
depends_on = None

FLOW_DIRECTION = sa.Enum("input", "output", name="flow_direction")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "refresh_tokens",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.BigInteger(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("token_hash", name="uq_refresh_tokens_token_hash"),
    )
    op.create_index("ix_refresh_tokens_user_id", "refresh_tokens", ["user_id"])
    op.create_index("ix_refresh_tokens_expires_at", "refresh_tokens", ["expires_at"])

    op.create_table(
        "companies",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.BigInteger(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("money", sa.BigInteger(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", name="uq_companies_user_id"),
        sa.CheckConstraint("money >= 0", name="ck_companies_money_non_negative"),
    )

    op.create_table(
        "resources",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column("pack_size", sa.BigInteger(), nullable=False, server_default="1"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("pack_size >= 1", name="ck_resources_pack_size_positive"),
        sa.CheckConstraint("price >= 0", name="ck_resources_price_non_negative"),
    )

    op.create_table(
        "company_inventory",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "company_id",
            sa.BigInteger(),
            sa.ForeignKey("companies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "resource_id",
            sa.BigInteger(),
            sa.ForeignKey("resources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("quantity", sa.BigInteger(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint(
            "company_id", "resource_id", name="uq_company_inventory_company_resource"
        ),
        sa.CheckConstraint("quantity >= 0", name="ck_company_inventory_quantity"),
    )

    op.create_table(
        "production_buildings",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("cost", sa.BigInteger(), nullable=False, server_default="0"),
    )

    op.create_table(
        "production_processes",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column(
            "building_id",
            sa.BigInteger(),
            sa.ForeignKey("production_buildings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("processing_time_ms", sa.BigInteger(), nullable=False),
        sa.Column("window_start_hour", sa.Integer(), nullable=True),
        sa.Column("window_end_hour", sa.Integer(), nullable=True),
        sa.CheckConstraint(
            "processing_time_ms > 0", name="ck_production_processes_time_positive"
        ),
        sa.CheckConstraint(
            "(window_start_hour IS NULL AND window_end_hour IS NULL) OR "
            "(window_start_hour BETWEEN 0 AND 23 AND window_end_hour BETWEEN 0 AND 23 "
            "AND window_start_hour < window_end_hour)",
            name="ck_production_processes_window",
        ),
    )
    op.create_index(
        "ix_production_processes_building_id", "production_processes", ["building_id"]
    )

    op.create_table(
        "production_process_resources",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "process_id",
            sa.BigInteger(),
            sa.ForeignKey("production_processes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "resource_id",
            sa.BigInteger(),
            sa.ForeignKey("resources.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("direction", FLOW_DIRECTION, nullable=False),
        sa.Column("quantity", sa.BigInteger(), nullable=False),
        sa.UniqueConstraint(
            "process_id",
            "resource_id",
            "direction",
            name="uq_production_process_resources_flow",
        ),
        sa.CheckConstraint(
            "quantity > 0", name="ck_production_process_resources_quantity"
        ),
    )


def downgrade() -> None:
    op.drop_table("production_process_resources")
    op.drop_index(
        "ix_production_processes_building_id", table_name="production_processes"
    )
    op.drop_table("production_processes")
    op.drop_table("production_buildings")
    op.drop_table("company_inventory")
    op.drop_table("resources")
    op.drop_table("companies")
    op.drop_index("ix_refresh_tokens_expires_at", table_name="refresh_tokens")
    op.drop_index("ix_refresh_tokens_user_id", table_name="refresh_tokens")
    op.drop_table("refresh_tokens")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
    FLOW_DIRECTION.drop(op.get_bind(), checkfirst=True)
