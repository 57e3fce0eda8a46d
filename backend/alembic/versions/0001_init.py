"""init: users, access control, lookups and reference tables

Revision ID: 0001_init
Revises:
Create Date: 2026-10-18

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _watched_columns() -> list[sa.Column]:
    return [
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
    ]


def _watched_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_uuid", table, ["uuid"], unique=True)
    op.create_index(f"ix_{table}_status", table, ["status"])
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])


def _lookup_table(name: str, *extra: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        *extra,
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("email", sa.String(length=190), nullable=True, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            sa.Enum("ADMIN", "MANAGER", "SALES", "PLANNER", name="userrole"),
            nullable=False,
            server_default="SALES",
        ),
        *_watched_columns(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    _watched_indexes("users")

    for table in ("roles", "permissions"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("display_name", sa.String(length=150), nullable=True),
            sa.Column("description", sa.Text(), nullable=True),
            *_watched_columns(),
        )
        op.create_index(f"ix_{table}_name", table, ["name"], unique=True)
        _watched_indexes(table)

    _lookup_table("call_statuses")
    _lookup_table("lead_statuses", sa.Column("call_status", sa.JSON(), nullable=True))
    _lookup_table("priorities", sa.Column("call_status", sa.JSON(), nullable=True))
    _lookup_table("brief_statuses", sa.Column("percentage", sa.Integer(), nullable=True))
    _lookup_table("planner_statuses")

    op.create_table(
        "agencies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=190), nullable=False),
        sa.Column("slug", sa.String(length=190), nullable=True, unique=True),
        sa.Column("agency_type", sa.String(length=100), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        *_watched_columns(),
    )
    op.create_index("ix_agencies_name", "agencies", ["name"])
    _watched_indexes("agencies")

    op.create_table(
        "industries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False, unique=True),
        *_watched_columns(),
    )
    _watched_indexes("industries")

    op.create_table(
        "brands",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=190), nullable=False),
        sa.Column("slug", sa.String(length=190), nullable=True, unique=True),
        sa.Column("brand_type", sa.String(length=100), nullable=True),
        sa.Column("agency_id", sa.Integer(), sa.ForeignKey("agencies.id", ondelete="SET NULL"), nullable=True),
        sa.Column("industry_id", sa.Integer(), sa.ForeignKey("industries.id", ondelete="SET NULL"), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        *_watched_columns(),
    )
    op.create_index("ix_brands_name", "brands", ["name"])
    _watched_indexes("brands")

    for table in ("departments", "designations"):
        label = "title" if table == "designations" else "name"
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column(label, sa.String(length=150), nullable=False, unique=True),
            sa.Column("description", sa.Text(), nullable=True),
            *_watched_columns(),
        )
        _watched_indexes(table)

    op.create_table(
        "lead_sub_sources",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("source", sa.String(length=150), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_watched_columns(),
    )
    _watched_indexes("lead_sub_sources")

    op.create_table(
        "miss_campaigns",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=190), nullable=False),
        sa.Column("brand_id", sa.Integer(), sa.ForeignKey("brands.id", ondelete="SET NULL"), nullable=True),
        sa.Column("industry_id", sa.Integer(), sa.ForeignKey("industries.id", ondelete="SET NULL"), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        *_watched_columns(),
    )
    _watched_indexes("miss_campaigns")

    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("team_lead_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_watched_columns(),
    )
    _watched_indexes("teams")


def downgrade() -> None:
    for table in (
        "teams",
        "miss_campaigns",
        "lead_sub_sources",
        "designations",
        "departments",
        "brands",
        "industries",
        "agencies",
        "planner_statuses",
        "brief_statuses",
        "priorities",
        "lead_statuses",
        "call_statuses",
        "permissions",
        "roles",
        "users",
    ):
        op.drop_table(table)
    sa.Enum(name="userrole").drop(op.get_bind(), checkfirst=True)
