from __future__ import annotations

import datetime as dt

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from briefdesk.db.session import Base
from briefdesk.models.mixins import WatchedMixin


class Meeting(WatchedMixin, Base):
    __tablename__ = "meetings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(190))
    lead_id: Mapped[int | None] = mapped_column(ForeignKey("leads.id", ondelete="SET NULL"), nullable=True, index=True)
    meeting_type: Mapped[str | None] = mapped_column(String(32), nullable=True)  # online | offline
    meeting_date: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    agenda: Mapped[str | None] = mapped_column(Text, nullable=True)
    attendees: Mapped[list[int]] = mapped_column(JSON, default=list)  # user ids
