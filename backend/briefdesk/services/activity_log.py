"""Generic activity log: writer, interceptor and retention."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any

from fastapi.encoders import jsonable_encoder
from sqlalchemy import delete
from sqlalchemy.orm import Session

from briefdesk.models.activity_log import ActivityLog
from briefdesk.models.enums import ChangeAction, RecordStatus
from briefdesk.services.change_tracking import ChangeEvent, ChangeInterceptor
from briefdesk.services.history import HistoryReader, HistorySource

logger = logging.getLogger(__name__)


def _payload(data: dict[str, Any] | None) -> dict[str, Any] | None:
    if data is None:
        return None
    return jsonable_encoder(data)


def record_activity(
    db: Session,
    *,
    entity_type: str,
    entity_id: int,
    action: ChangeAction | str,
    actor_id: int | None = None,
    old_data: dict[str, Any] | None = None,
    new_data: dict[str, Any] | None = None,
    description: str | None = None,
) -> ActivityLog:
    entry = ActivityLog(
        user_id=actor_id,
        model=entity_type,
        model_id=entity_id,
        action=action.value if isinstance(action, ChangeAction) else action,
        description=description,
        old_data=_payload(old_data),
        new_data=_payload(new_data),
        status=int(RecordStatus.ACTIVE),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def log_created(db: Session, event: ChangeEvent, description: str | None = None) -> ActivityLog:
    return record_activity(
        db,
        entity_type=event.entity_type,
        entity_id=event.entity_id,
        action=ChangeAction.CREATED,
        actor_id=event.actor_id,
        new_data=event.new_values,
        description=description or f"{event.entity_type} created",
    )


def log_updated(db: Session, event: ChangeEvent, description: str | None = None) -> ActivityLog:
    # Only the changed fields are stored, old on one side and new on the other.
    return record_activity(
        db,
        entity_type=event.entity_type,
        entity_id=event.entity_id,
        action=ChangeAction.UPDATED,
        actor_id=event.actor_id,
        old_data=event.old_values,
        new_data=event.new_values,
        description=description or f"{event.entity_type} updated",
    )


def log_deleted(db: Session, event: ChangeEvent, description: str | None = None) -> ActivityLog:
    return record_activity(
        db,
        entity_type=event.entity_type,
        entity_id=event.entity_id,
        action=ChangeAction.DELETED,
        actor_id=event.actor_id,
        old_data=event.old_values,
        description=description or f"{event.entity_type} deleted",
    )


def log_restored(db: Session, event: ChangeEvent, description: str | None = None) -> ActivityLog:
    return record_activity(
        db,
        entity_type=event.entity_type,
        entity_id=event.entity_id,
        action=ChangeAction.RESTORED,
        actor_id=event.actor_id,
        description=description or f"{event.entity_type} restored",
    )


def log_force_deleted(db: Session, event: ChangeEvent, description: str | None = None) -> ActivityLog:
    return record_activity(
        db,
        entity_type=event.entity_type,
        entity_id=event.entity_id,
        action=ChangeAction.FORCE_DELETED,
        actor_id=event.actor_id,
        new_data=event.new_values,
        description=description or f"{event.entity_type} force deleted",
    )


def log_custom_action(
    db: Session,
    *,
    entity_type: str,
    entity_id: int,
    action: str,
    actor_id: int | None = None,
    description: str | None = None,
    data: dict[str, Any] | None = None,
) -> ActivityLog:
    return record_activity(
        db,
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        actor_id=actor_id,
        new_data=data,
        description=description,
    )


class ActivityLogInterceptor(ChangeInterceptor):
    name = "activity_log"

    def created(self, db: Session, event: ChangeEvent) -> None:
        log_created(db, event)

    def updated(self, db: Session, event: ChangeEvent) -> None:
        log_updated(db, event)

    def deleted(self, db: Session, event: ChangeEvent) -> None:
        log_deleted(db, event)

    def restored(self, db: Session, event: ChangeEvent) -> None:
        log_restored(db, event)

    def force_deleted(self, db: Session, event: ChangeEvent) -> None:
        log_force_deleted(db, event)


activity_reader = HistoryReader(
    HistorySource(
        model=ActivityLog,
        entity_column="model_id",
        actor_column="user_id",
        type_column="model",
    )
)


def get_activity_log(db: Session, log_id: int) -> ActivityLog | None:
    return db.get(ActivityLog, log_id)


def delete_old_activity_logs(db: Session, days: int) -> int:
    """Retention purge: hard-delete activity rows older than `days` days."""
    cutoff = dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=days)
    result = db.execute(
        delete(ActivityLog).where(ActivityLog.created_at < cutoff).execution_options(synchronize_session=False)
    )
    db.commit()
    deleted = result.rowcount or 0
    logger.info("Purged %s activity log rows older than %s days", deleted, days)
    return deleted
