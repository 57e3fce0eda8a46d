"""
Change interception for watched entities.

Mutation code builds a ChangeEvent after the entity row is committed and hands
it to an InterceptorRegistry. The registry fans the event out to every
interceptor registered for the entity type. Interceptors write history; a
failing interceptor is logged and skipped so the mutation itself always stands.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from briefdesk.models.enums import ChangeAction

logger = logging.getLogger(__name__)

# Bumped on every write; never part of a diff.
_DIFF_IGNORED = frozenset({"updated_at"})


@dataclass(frozen=True)
class ChangeEvent:
    action: ChangeAction
    entity_type: str
    entity_id: int
    actor_id: int | None
    # Full attribute state: after the change, or before it for deletes.
    snapshot: dict[str, Any] = field(default_factory=dict)
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None

    @property
    def changed_fields(self) -> frozenset[str]:
        return frozenset((self.new_values or {}).keys() | (self.old_values or {}).keys())


def entity_type_of(entity: Any) -> str:
    return type(entity).__name__


def snapshot(entity: Any) -> dict[str, Any]:
    """Column values of an ORM instance, minus the model's __audit_exclude__ names."""
    excluded = getattr(type(entity), "__audit_exclude__", frozenset())
    mapper = inspect(type(entity))
    return {
        attr.key: _copy_value(getattr(entity, attr.key))
        for attr in mapper.column_attrs
        if attr.key not in excluded
    }


def _copy_value(value: Any) -> Any:
    # JSON columns hand back mutable containers; freeze a copy for the snapshot.
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


def _same(a: Any, b: Any) -> bool:
    if isinstance(a, Decimal) or isinstance(b, Decimal):
        try:
            return Decimal(str(a)) == Decimal(str(b))
        except (ArithmeticError, ValueError):
            return False
    if isinstance(a, dt.datetime) and isinstance(b, dt.datetime):
        if (a.tzinfo is None) != (b.tzinfo is None):
            # SQLite drops tzinfo on the way back; compare on the wall clock.
            return a.replace(tzinfo=None) == b.replace(tzinfo=None)
        return a == b
    return a == b


def diff(before: dict[str, Any], after: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return (old, new) maps restricted to the keys whose values changed."""
    old: dict[str, Any] = {}
    new: dict[str, Any] = {}
    for key in before.keys() | after.keys():
        if key in _DIFF_IGNORED:
            continue
        if not _same(before.get(key), after.get(key)):
            old[key] = before.get(key)
            new[key] = after.get(key)
    return old, new


class ChangeInterceptor:
    """
    Base class for history writers hooked onto an entity type.

    Subclasses override the hooks they care about; the rest are no-ops.
    """

    name = "interceptor"

    def handle(self, db: Session, event: ChangeEvent) -> None:
        hook = {
            ChangeAction.CREATED: self.created,
            ChangeAction.UPDATED: self.updated,
            ChangeAction.DELETED: self.deleted,
            ChangeAction.RESTORED: self.restored,
            ChangeAction.FORCE_DELETED: self.force_deleted,
        }[event.action]
        hook(db, event)

    def created(self, db: Session, event: ChangeEvent) -> None:
        pass

    def updated(self, db: Session, event: ChangeEvent) -> None:
        pass

    def deleted(self, db: Session, event: ChangeEvent) -> None:
        pass

    def restored(self, db: Session, event: ChangeEvent) -> None:
        pass

    def force_deleted(self, db: Session, event: ChangeEvent) -> None:
        pass


class InterceptorRegistry:
    def __init__(self) -> None:
        self._by_type: dict[str, list[ChangeInterceptor]] = defaultdict(list)

    def register(self, entity_type: str | type, interceptor: ChangeInterceptor) -> None:
        key = entity_type if isinstance(entity_type, str) else entity_type.__name__
        if interceptor not in self._by_type[key]:
            self._by_type[key].append(interceptor)

    def interceptors_for(self, entity_type: str) -> list[ChangeInterceptor]:
        return list(self._by_type.get(entity_type, ()))

    def registered_types(self) -> list[str]:
        return sorted(k for k, v in self._by_type.items() if v)

    def dispatch(self, db: Session, event: ChangeEvent) -> int:
        """
        Run every interceptor for the event's entity type.

        Returns how many interceptors completed. Never raises: a failed history
        write is rolled back, logged and skipped.
        """
        if event.action == ChangeAction.UPDATED and not event.changed_fields:
            return 0

        done = 0
        for interceptor in self.interceptors_for(event.entity_type):
            try:
                interceptor.handle(db, event)
            except Exception:
                db.rollback()
                logger.exception(
                    "History write failed: interceptor=%s entity=%s id=%s action=%s",
                    interceptor.name,
                    event.entity_type,
                    event.entity_id,
                    event.action.value,
                )
                continue
            done += 1
        return done
