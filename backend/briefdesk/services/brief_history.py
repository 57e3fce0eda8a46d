from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from briefdesk.models.brief import BriefAssignHistory
from briefdesk.services.change_tracking import ChangeEvent, ChangeInterceptor
from briefdesk.services.history import HistoryReader, HistorySource
from briefdesk.services.pagination import Page, paginate

BRIEF_SNAPSHOT_FIELDS = {
    "assign_user_id": "assign_to_id",
    "brief_status_id": "brief_status_id",
    "brief_status_time": "brief_status_time",
    "priority_id": "priority_id",
    "submission_date": "submission_date",
    "comment": "comment",
    "status": "status",
}


def record_brief_history(db: Session, event: ChangeEvent) -> BriefAssignHistory:
    values = {column: event.snapshot.get(field) for field, column in BRIEF_SNAPSHOT_FIELDS.items()}
    row = BriefAssignHistory(
        brief_id=event.entity_id,
        action=event.action.value,
        assign_by_id=event.actor_id,
        **values,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


class BriefHistoryInterceptor(ChangeInterceptor):
    name = "brief_assign_history"

    def created(self, db: Session, event: ChangeEvent) -> None:
        record_brief_history(db, event)

    def updated(self, db: Session, event: ChangeEvent) -> None:
        if event.changed_fields & BRIEF_SNAPSHOT_FIELDS.keys():
            record_brief_history(db, event)

    def deleted(self, db: Session, event: ChangeEvent) -> None:
        record_brief_history(db, event)

    def restored(self, db: Session, event: ChangeEvent) -> None:
        record_brief_history(db, event)


brief_history_reader = HistoryReader(
    HistorySource(
        model=BriefAssignHistory,
        entity_column="brief_id",
        actor_column="assign_by_id",
        entity_type="Brief",
    )
)


def briefs_assigned_to(db: Session, user_id: int, page: int = 1, page_size: int | None = None) -> Page:
    """History rows where the brief was handed to `user_id`."""
    stmt = (
        select(BriefAssignHistory)
        .where(BriefAssignHistory.assign_to_id == user_id)
        .order_by(BriefAssignHistory.created_at.desc(), BriefAssignHistory.id.desc())
    )
    return paginate(db, stmt, page=page, page_size=page_size)
