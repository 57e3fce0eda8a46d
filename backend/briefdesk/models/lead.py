from __future__ import annotations

import datetime as dt

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from briefdesk.db.session import Base
from briefdesk.models.mixins import TimestampMixin, UuidMixin, WatchedMixin


class Lead(WatchedMixin, Base):
    __tablename__ = "leads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(190), index=True)
    slug: Mapped[str | None] = mapped_column(String(220), nullable=True)
    email: Mapped[str | None] = mapped_column(String(190), index=True, nullable=True)
    profile_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mobile_number: Mapped[list[str]] = mapped_column(JSON, default=list)
    type: Mapped[str | None] = mapped_column(String(32), nullable=True)  # brand | agency

    brand_id: Mapped[int | None] = mapped_column(ForeignKey("brands.id", ondelete="SET NULL"), nullable=True, index=True)
    agency_id: Mapped[int | None] = mapped_column(ForeignKey("agencies.id", ondelete="SET NULL"), nullable=True, index=True)
    designation_id: Mapped[int | None] = mapped_column(ForeignKey("designations.id", ondelete="SET NULL"), nullable=True)
    department_id: Mapped[int | None] = mapped_column(ForeignKey("departments.id", ondelete="SET NULL"), nullable=True)
    sub_source_id: Mapped[int | None] = mapped_column(ForeignKey("lead_sub_sources.id", ondelete="SET NULL"), nullable=True)

    # Assignment and pipeline state: these columns drive lead_assign_histories.
    current_assign_user: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    priority_id: Mapped[int | None] = mapped_column(ForeignKey("priorities.id", ondelete="SET NULL"), nullable=True, index=True)
    call_status: Mapped[int | None] = mapped_column(ForeignKey("call_statuses.id", ondelete="SET NULL"), nullable=True)
    lead_status: Mapped[int | None] = mapped_column(ForeignKey("lead_statuses.id", ondelete="SET NULL"), nullable=True)
    call_attempt: Mapped[int] = mapped_column(Integer, default=0)

    postal_code: Mapped[str | None] = mapped_column(String(20), nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)


class LeadAssignHistory(UuidMixin, TimestampMixin, Base):
    """
    Snapshot of a lead's assignment/pipeline columns after each qualifying change.

    lead_id deliberately has no FK constraint: a force-deleted lead keeps its trail.
    """

    __tablename__ = "lead_assign_histories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    lead_id: Mapped[int] = mapped_column(Integer, index=True)
    action: Mapped[str] = mapped_column(String(32), index=True)

    assign_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    current_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    priority_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    lead_status_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    call_status_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deleted_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
