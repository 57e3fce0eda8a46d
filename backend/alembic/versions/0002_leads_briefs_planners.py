"""leads, briefs, planners and meetings

Revision ID: 0002_leads_briefs_planners
Revises: 0001_init
Create Date: 2026-10-18

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0002_leads_briefs_planners"
down_revision = "0001_init"
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


def _fk(column: str, target: str, ondelete: str = "SET NULL") -> sa.Column:
    return sa.Column(column, sa.Integer(), sa.ForeignKey(target, ondelete=ondelete), nullable=True)


def upgrade() -> None:
    op.create_table(
        "leads",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=190), nullable=False),
        sa.Column("slug", sa.String(length=220), nullable=True),
        sa.Column("email", sa.String(length=190), nullable=True),
        sa.Column("profile_url", sa.String(length=255), nullable=True),
        sa.Column("mobile_number", sa.JSON(), nullable=True),
        sa.Column("type", sa.String(length=32), nullable=True),
        _fk("brand_id", "brands.id"),
        _fk("agency_id", "agencies.id"),
        _fk("designation_id", "designations.id"),
        _fk("department_id", "departments.id"),
        _fk("sub_source_id", "lead_sub_sources.id"),
        _fk("current_assign_user", "users.id"),
        _fk("priority_id", "priorities.id"),
        _fk("call_status", "call_statuses.id"),
        _fk("lead_status", "lead_statuses.id"),
        sa.Column("call_attempt", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("postal_code", sa.String(length=20), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        _fk("created_by", "users.id"),
        *_watched_columns(),
    )
    for column in ("name", "email", "brand_id", "agency_id", "current_assign_user", "priority_id"):
        op.create_index(f"ix_leads_{column}", "leads", [column])
    _watched_indexes("leads")

    op.create_table(
        "briefs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=190), nullable=False),
        sa.Column("slug", sa.String(length=220), nullable=True),
        sa.Column("product_name", sa.String(length=190), nullable=True),
        _fk("contact_person_id", "leads.id"),
        _fk("brand_id", "brands.id"),
        _fk("agency_id", "agencies.id"),
        sa.Column("mode_of_campaign", sa.String(length=32), nullable=True),
        sa.Column("media_type", sa.String(length=32), nullable=True),
        sa.Column("budget", sa.Numeric(14, 2), nullable=True),
        _fk("assign_user_id", "users.id"),
        _fk("created_by", "users.id"),
        _fk("brief_status_id", "brief_statuses.id"),
        sa.Column("brief_status_time", sa.DateTime(timezone=True), nullable=True),
        _fk("priority_id", "priorities.id"),
        sa.Column("submission_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
        *_watched_columns(),
    )
    for column in ("name", "brand_id", "agency_id", "assign_user_id", "brief_status_id"):
        op.create_index(f"ix_briefs_{column}", "briefs", [column])
    _watched_indexes("briefs")

    op.create_table(
        "planners",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("brief_id", sa.Integer(), sa.ForeignKey("briefs.id", ondelete="CASCADE"), nullable=False),
        _fk("created_by", "users.id"),
        _fk("planner_status_id", "planner_statuses.id"),
        sa.Column("submitted_plan", sa.JSON(), nullable=True),
        sa.Column("backup_plan", sa.String(length=255), nullable=True),
        *_watched_columns(),
    )
    op.create_index("ix_planners_brief_id", "planners", ["brief_id"])
    op.create_index("ix_planners_created_by", "planners", ["created_by"])
    _watched_indexes("planners")

    op.create_table(
        "meetings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=190), nullable=False),
        _fk("lead_id", "leads.id"),
        sa.Column("meeting_type", sa.String(length=32), nullable=True),
        sa.Column("meeting_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("agenda", sa.Text(), nullable=True),
        sa.Column("attendees", sa.JSON(), nullable=True),
        *_watched_columns(),
    )
    op.create_index("ix_meetings_lead_id", "meetings", ["lead_id"])
    op.create_index("ix_meetings_meeting_date", "meetings", ["meeting_date"])
    _watched_indexes("meetings")


def downgrade() -> None:
    op.drop_table("meetings")
    op.drop_table("planners")
    op.drop_table("briefs")
    op.drop_table("leads")
