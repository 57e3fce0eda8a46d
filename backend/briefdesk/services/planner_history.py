from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from briefdesk.models.planner import PlannerHistory
from briefdesk.services.change_tracking import ChangeEvent, ChangeInterceptor
from briefdesk.services.history import HistoryReader, HistorySource
from briefdesk.services.pagination import Page, paginate

logger = logging.getLogger(__name__)

PLANNER_SNAPSHOT_FIELDS = (
    "brief_id",
    "created_by",
    "planner_status_id",
    "submitted_plan",
    "backup_plan",
    "status",
)


def record_planner_history(db: Session, event: ChangeEvent) -> PlannerHistory:
    values = {field: event.snapshot.get(field) for field in PLANNER_SNAPSHOT_FIELDS}
    row = PlannerHistory(
        planner_id=event.entity_id,
        action=event.action.value,
        changed_by_id=event.actor_id,
        **values,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Planner history saved: planner_id=%s action=%s", event.entity_id, event.action.value)
    return row


class PlannerHistoryInterceptor(ChangeInterceptor):
    name = "planner_history"

    def created(self, db: Session, event: ChangeEvent) -> None:
        record_planner_history(db, event)

    def updated(self, db: Session, event: ChangeEvent) -> None:
        if event.changed_fields & set(PLANNER_SNAPSHOT_FIELDS):
            record_planner_history(db, event)

    def deleted(self, db: Session, event: ChangeEvent) -> None:
        record_planner_history(db, event)

    def restored(self, db: Session, event: ChangeEvent) -> None:
        record_planner_history(db, event)


planner_history_reader = HistoryReader(
    HistorySource(
        model=PlannerHistory,
        entity_column="planner_id",
        actor_column="changed_by_id",
        entity_type="Planner",
    )
)


def brief_planner_history(db: Session, brief_id: int, page: int = 1, page_size: int | None = None) -> Page:
    """Planner history across every planner of a brief, newest first."""
    stmt = (
        select(PlannerHistory)
        .where(PlannerHistory.brief_id == brief_id)
        .order_by(PlannerHistory.created_at.desc(), PlannerHistory.id.desc())
    )
    return paginate(db, stmt, page=page, page_size=page_size)


def planner_history_by_status(
    db: Session, planner_status_id: int, page: int = 1, page_size: int | None = None
) -> Page:
    stmt = (
        select(PlannerHistory)
        .where(PlannerHistory.planner_status_id == planner_status_id)
        .order_by(PlannerHistory.created_at.desc(), PlannerHistory.id.desc())
    )
    return paginate(db, stmt, page=page, page_size=page_size)
