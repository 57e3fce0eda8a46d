"""
Read surface shared by every history table.

The generic activity log stores the entity type in a column; the specialized
tables are bound to one entity type. HistoryReader hides that difference so
callers get the same queries everywhere.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any

from sqlalchemy import false, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from briefdesk.services.pagination import Page, paginate


@dataclass(frozen=True)
class HistorySource:
    model: type
    entity_column: str
    actor_column: str
    type_column: str | None = None  # generic log only
    entity_type: str | None = None  # specialized tables only


@dataclass(frozen=True)
class HistoryFilters:
    actor_id: int | None = None
    entity_type: str | None = None
    entity_id: int | None = None
    action: str | None = None
    date_from: dt.datetime | None = None
    date_to: dt.datetime | None = None


class HistoryReader:
    def __init__(self, source: HistorySource) -> None:
        self.source = source

    def _col(self, name: str) -> Any:
        return getattr(self.source.model, name)

    def _newest_first(self, stmt: Select) -> Select:
        model = self.source.model
        return stmt.order_by(model.created_at.desc(), model.id.desc())

    def _where_entity_type(self, stmt: Select, entity_type: str) -> Select:
        if self.source.type_column is not None:
            return stmt.where(self._col(self.source.type_column) == entity_type)
        if entity_type != self.source.entity_type:
            return stmt.where(false())
        return stmt

    def list_for_entity(
        self, db: Session, entity_type: str, entity_id: int, page: int = 1, page_size: int | None = None
    ) -> Page:
        stmt = select(self.source.model).where(self._col(self.source.entity_column) == entity_id)
        stmt = self._where_entity_type(stmt, entity_type)
        return paginate(db, self._newest_first(stmt), page=page, page_size=page_size)

    def list_for_actor(self, db: Session, actor_id: int, page: int = 1, page_size: int | None = None) -> Page:
        stmt = select(self.source.model).where(self._col(self.source.actor_column) == actor_id)
        return paginate(db, self._newest_first(stmt), page=page, page_size=page_size)

    def list_by_action(self, db: Session, action: str, page: int = 1, page_size: int | None = None) -> Page:
        stmt = select(self.source.model).where(self.source.model.action == action)
        return paginate(db, self._newest_first(stmt), page=page, page_size=page_size)

    def list_recent(self, db: Session, limit: int = 10) -> list:
        stmt = self._newest_first(select(self.source.model)).limit(max(limit, 0))
        return list(db.execute(stmt).scalars().all())

    def get_by_uuid(self, db: Session, uuid: str) -> Any:
        return db.execute(select(self.source.model).where(self.source.model.uuid == uuid)).scalar_one_or_none()

    def list_filtered(
        self,
        db: Session,
        filters: HistoryFilters,
        page: int = 1,
        page_size: int | None = None,
        *,
        columns: dict[str, Any] | None = None,
    ) -> Page:
        """Filtered page. `columns` adds equality filters on table-specific columns; None values are skipped."""
        model = self.source.model
        stmt = select(model)
        for name, value in (columns or {}).items():
            if value is not None:
                stmt = stmt.where(self._col(name) == value)
        if filters.actor_id is not None:
            stmt = stmt.where(self._col(self.source.actor_column) == filters.actor_id)
        if filters.entity_type is not None:
            stmt = self._where_entity_type(stmt, filters.entity_type)
        if filters.entity_id is not None:
            stmt = stmt.where(self._col(self.source.entity_column) == filters.entity_id)
        if filters.action is not None:
            stmt = stmt.where(model.action == filters.action)
        if filters.date_from is not None:
            stmt = stmt.where(model.created_at >= filters.date_from)
        if filters.date_to is not None:
            stmt = stmt.where(model.created_at <= filters.date_to)
        return paginate(db, self._newest_first(stmt), page=page, page_size=page_size)
