"""
Generic CRUD over watched entities.

Every mutation commits the entity first, then hands a ChangeEvent to the
interceptor registry. History writing is best-effort: building the event and
running the interceptors never raise, so a mutation that committed is reported
as done.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

from fastapi import HTTPException, status
from sqlalchemy import inspect as sa_inspect, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from briefdesk.models.enums import ChangeAction, RecordStatus
from briefdesk.models.mixins import utcnow
from briefdesk.services.change_tracking import ChangeEvent, InterceptorRegistry, diff, entity_type_of, snapshot
from briefdesk.services.pagination import Page, paginate

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityRepository(Generic[T]):
    def __init__(
        self,
        model: type[T],
        *,
        label: str | None = None,
        search_fields: Iterable[str] = (),
        filter_fields: Iterable[str] = (),
        registry: InterceptorRegistry | None = None,
    ) -> None:
        self.model = model
        self.label = label or model.__name__
        self.search_fields = tuple(search_fields)
        self.filter_fields = frozenset(filter_fields)
        self._registry = registry

    @property
    def registry(self) -> InterceptorRegistry:
        if self._registry is None:
            from briefdesk.services.watchers import registry

            return registry
        return self._registry

    # Reads

    def get(self, db: Session, entity_id: int, *, include_deleted: bool = False) -> T | None:
        entity = db.get(self.model, entity_id)
        if entity is None:
            return None
        if not include_deleted and entity.status == RecordStatus.DELETED:
            return None
        return entity

    def get_or_404(self, db: Session, entity_id: int, *, include_deleted: bool = False) -> T:
        entity = self.get(db, entity_id, include_deleted=include_deleted)
        if entity is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{self.label} not found")
        return entity

    def get_by_uuid(self, db: Session, uuid: str) -> T | None:
        return db.execute(
            select(self.model).where(self.model.uuid == uuid, self.model.status != RecordStatus.DELETED)
        ).scalar_one_or_none()

    def list_page(
        self,
        db: Session,
        *,
        page: int = 1,
        page_size: int | None = None,
        search: str | None = None,
        filters: dict[str, Any] | None = None,
        include_deleted: bool = False,
    ) -> Page:
        stmt = select(self.model)
        if not include_deleted:
            stmt = stmt.where(self.model.status != RecordStatus.DELETED)
        if search and self.search_fields:
            like = f"%{search.strip()}%"
            stmt = stmt.where(or_(*(getattr(self.model, f).ilike(like) for f in self.search_fields)))
        for field, value in (filters or {}).items():
            if value is None or field not in self.filter_fields:
                continue
            stmt = stmt.where(getattr(self.model, field) == value)
        stmt = stmt.order_by(self.model.created_at.desc(), self.model.id.desc())
        return paginate(db, stmt, page=page, page_size=page_size)

    # Mutations

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning("%s write rejected: %s", self.label, e.orig)
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{self.label} conflicts with an existing record")

    def _after_commit(
        self,
        db: Session,
        entity_id: int,
        action: ChangeAction,
        actor_id: int | None,
        compose: Callable[[], tuple[dict[str, Any], dict[str, Any] | None, dict[str, Any] | None]],
    ) -> None:
        """Build the event from committed state and dispatch it. Never raises."""
        try:
            state, old, new = compose()
            event = ChangeEvent(
                action=action,
                entity_type=self.model.__name__,
                entity_id=entity_id,
                actor_id=actor_id,
                snapshot=state,
                old_values=old,
                new_values=new,
            )
        except Exception:
            db.rollback()
            logger.exception(
                "Change event build failed: entity=%s id=%s action=%s",
                self.model.__name__,
                entity_id,
                action.value,
            )
            return
        self.registry.dispatch(db, event)

    def create(self, db: Session, data: dict[str, Any], *, actor_id: int | None = None) -> T:
        entity = self.model(**data)
        db.add(entity)
        self._commit(db)

        def compose():
            db.refresh(entity)
            after = snapshot(entity)
            return after, None, after

        self._after_commit(db, _identity(entity), ChangeAction.CREATED, actor_id, compose)
        return entity

    def update(self, db: Session, entity: T, data: dict[str, Any], *, actor_id: int | None = None) -> T:
        before = snapshot(entity)
        for field, value in data.items():
            setattr(entity, field, value)
        old, new = diff(before, snapshot(entity))
        hidden = data.keys() & getattr(self.model, "__audit_exclude__", frozenset())
        if not new and not hidden:
            # Nothing changed: drop the pending assignments, write nothing.
            db.refresh(entity)
            return entity
        self._commit(db)

        def compose():
            db.refresh(entity)
            return snapshot(entity), old, new

        # A change confined to excluded fields is saved but not logged.
        self._after_commit(db, _identity(entity), ChangeAction.UPDATED, actor_id, compose)
        return entity

    def set_status(self, db: Session, entity: T, value: RecordStatus, *, actor_id: int | None = None) -> T:
        if value == RecordStatus.DELETED:
            return self.soft_delete(db, entity, actor_id=actor_id)
        return self.update(db, entity, {"status": int(value)}, actor_id=actor_id)

    def soft_delete(self, db: Session, entity: T, *, actor_id: int | None = None) -> T:
        if entity.status == RecordStatus.DELETED:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{self.label} is already deleted")
        before = snapshot(entity)
        entity.status = int(RecordStatus.DELETED)
        entity.deleted_at = utcnow()
        self._commit(db)

        def compose():
            db.refresh(entity)
            return before, before, None

        self._after_commit(db, _identity(entity), ChangeAction.DELETED, actor_id, compose)
        return entity

    def restore(self, db: Session, entity: T, *, actor_id: int | None = None) -> T:
        if entity.status != RecordStatus.DELETED:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{self.label} is not deleted")
        entity.status = int(RecordStatus.ACTIVE)
        entity.deleted_at = None
        self._commit(db)

        def compose():
            db.refresh(entity)
            return snapshot(entity), None, None

        self._after_commit(db, _identity(entity), ChangeAction.RESTORED, actor_id, compose)
        return entity

    def force_delete(self, db: Session, entity: T, *, actor_id: int | None = None) -> dict[str, Any]:
        before = snapshot(entity)
        entity_id = entity.id
        db.delete(entity)
        self._commit(db)
        self._after_commit(db, entity_id, ChangeAction.FORCE_DELETED, actor_id, lambda: (before, None, before))
        logger.info("%s %s force deleted by user %s", entity_type_of(entity), entity_id, actor_id)
        return before


def _identity(entity: Any) -> Any:
    # Primary key from the identity map; does not touch the expired row.
    return sa_inspect(entity).identity[0]
