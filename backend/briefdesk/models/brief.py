from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from briefdesk.db.session import Base
from briefdesk.models.mixins import TimestampMixin, UuidMixin, WatchedMixin


class Brief(WatchedMixin, Base):
    __tablename__ = "briefs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(190), index=True)
    slug: Mapped[str | None] = mapped_column(String(220), nullable=True)
    product_name: Mapped[str | None] = mapped_column(String(190), nullable=True)
    contact_person_id: Mapped[int | None] = mapped_column(ForeignKey("leads.id", ondelete="SET NULL"), nullable=True)
    brand_id: Mapped[int | None] = mapped_column(ForeignKey("brands.id", ondelete="SET NULL"), nullable=True, index=True)
    agency_id: Mapped[int | None] = mapped_column(ForeignKey("agencies.id", ondelete="SET NULL"), nullable=True, index=True)

    mode_of_campaign: Mapped[str | None] = mapped_column(String(32), nullable=True)  # CampaignMode
    media_type: Mapped[str | None] = mapped_column(String(32), nullable=True)  # MediaType
    budget: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)

    assign_user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    brief_status_id: Mapped[int | None] = mapped_column(
        ForeignKey("brief_statuses.id", ondelete="SET NULL"), nullable=True, index=True
    )
    brief_status_time: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    priority_id: Mapped[int | None] = mapped_column(ForeignKey("priorities.id", ondelete="SET NULL"), nullable=True)
    submission_date: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)


class BriefAssignHistory(UuidMixin, TimestampMixin, Base):
    __tablename__ = "brief_assign_histories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    brief_id: Mapped[int] = mapped_column(ForeignKey("briefs.id", ondelete="CASCADE"), index=True)
    action: Mapped[str] = mapped_column(String(32), index=True)

    assign_by_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    assign_to_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    brief_status_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    brief_status_time: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    priority_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    submission_date: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[int | None] = mapped_column(Integer, nullable=True)
    deleted_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
