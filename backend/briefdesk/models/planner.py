from __future__ import annotations

import datetime as dt

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from briefdesk.db.session import Base
from briefdesk.models.mixins import TimestampMixin, UuidMixin, WatchedMixin

MAX_SUBMITTED_PLANS = 2


class Planner(WatchedMixin, Base):
    """Media plan files prepared against a brief."""

    __tablename__ = "planners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    brief_id: Mapped[int] = mapped_column(ForeignKey("briefs.id", ondelete="CASCADE"), index=True)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    planner_status_id: Mapped[int | None] = mapped_column(
        ForeignKey("planner_statuses.id", ondelete="SET NULL"), nullable=True
    )
    submitted_plan: Mapped[list[str]] = mapped_column(JSON, default=list)  # file paths, max 2
    backup_plan: Mapped[str | None] = mapped_column(String(255), nullable=True)


class PlannerHistory(UuidMixin, TimestampMixin, Base):
    __tablename__ = "planner_histories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    planner_id: Mapped[int] = mapped_column(ForeignKey("planners.id", ondelete="CASCADE"), index=True)
    brief_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    action: Mapped[str] = mapped_column(String(32), index=True)

    created_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    changed_by_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    planner_status_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    submitted_plan: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    backup_plan: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deleted_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
