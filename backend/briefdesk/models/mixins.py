"""Column sets shared by the CRM tables."""

from __future__ import annotations

import datetime as dt
import uuid

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from briefdesk.models.enums import RecordStatus


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def new_uuid() -> str:
    return str(uuid.uuid4())


class UuidMixin:
    uuid: Mapped[str] = mapped_column(String(36), unique=True, index=True, default=new_uuid)


class TimestampMixin:
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True
    )
    updated_at: Mapped[dt.datetime | None] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )


class StatusMixin:
    """
    Tri-state lifecycle: active (1), deactivated (2), soft-deleted (15).

    Soft delete keeps the row and stamps deleted_at; restore clears it.
    """

    status: Mapped[int] = mapped_column(
        Integer, default=int(RecordStatus.ACTIVE), server_default=str(int(RecordStatus.ACTIVE)), index=True
    )
    deleted_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.status == RecordStatus.DELETED


class WatchedMixin(UuidMixin, StatusMixin, TimestampMixin):
    """Everything a tracked CRM entity carries besides its primary key."""

    # Attribute names never copied into history payloads.
    __audit_exclude__: frozenset[str] = frozenset()
