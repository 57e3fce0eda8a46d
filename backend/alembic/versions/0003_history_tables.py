"""lead, brief and planner history tables

Revision ID: 0003_history_tables
Revises: 0002_leads_briefs_planners
Create Date: 2026-10-18

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0003_history_tables"
down_revision = "0002_leads_briefs_planners"
branch_labels = None
depends_on = None


def _history_columns() -> list[sa.Column]:
    return [
        sa.Column("uuid", sa.String(length=36), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("status", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def _history_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_uuid", table, ["uuid"], unique=True)
    op.create_index(f"ix_{table}_action", table, ["action"])
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])


def upgrade() -> None:
    # lead_id has no foreign key: the trail outlives a hard-deleted lead.
    op.create_table(
        "lead_assign_histories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("lead_id", sa.Integer(), nullable=False),
        sa.Column("assign_user_id", sa.Integer(), nullable=True),
        sa.Column("current_user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("priority_id", sa.Integer(), nullable=True),
        sa.Column("lead_status_id", sa.Integer(), nullable=True),
        sa.Column("call_status_id", sa.Integer(), nullable=True),
        *_history_columns(),
    )
    op.create_index("ix_lead_assign_histories_lead_id", "lead_assign_histories", ["lead_id"])
    op.create_index("ix_lead_assign_histories_assign_user_id", "lead_assign_histories", ["assign_user_id"])
    op.create_index("ix_lead_assign_histories_current_user_id", "lead_assign_histories", ["current_user_id"])
    _history_indexes("lead_assign_histories")

    op.create_table(
        "brief_assign_histories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("brief_id", sa.Integer(), sa.ForeignKey("briefs.id", ondelete="CASCADE"), nullable=False),
        sa.Column("assign_by_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("assign_to_id", sa.Integer(), nullable=True),
        sa.Column("brief_status_id", sa.Integer(), nullable=True),
        sa.Column("brief_status_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("priority_id", sa.Integer(), nullable=True),
        sa.Column("submission_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        *_history_columns(),
    )
    op.create_index("ix_brief_assign_histories_brief_id", "brief_assign_histories", ["brief_id"])
    op.create_index("ix_brief_assign_histories_assign_by_id", "brief_assign_histories", ["assign_by_id"])
    op.create_index("ix_brief_assign_histories_assign_to_id", "brief_assign_histories", ["assign_to_id"])
    _history_indexes("brief_assign_histories")

    op.create_table(
        "planner_histories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("planner_id", sa.Integer(), sa.ForeignKey("planners.id", ondelete="CASCADE"), nullable=False),
        sa.Column("brief_id", sa.Integer(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("changed_by_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("planner_status_id", sa.Integer(), nullable=True),
        sa.Column("submitted_plan", sa.JSON(), nullable=True),
        sa.Column("backup_plan", sa.String(length=255), nullable=True),
        *_history_columns(),
    )
    op.create_index("ix_planner_histories_planner_id", "planner_histories", ["planner_id"])
    op.create_index("ix_planner_histories_brief_id", "planner_histories", ["brief_id"])
    op.create_index("ix_planner_histories_changed_by_id", "planner_histories", ["changed_by_id"])
    _history_indexes("planner_histories")


def downgrade() -> None:
    op.drop_table("planner_histories")
    op.drop_table("brief_assign_histories")
    op.drop_table("lead_assign_histories")
