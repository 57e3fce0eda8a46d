from __future__ import annotations

from sqlalchemy.orm import Session

from briefdesk.models.lead import LeadAssignHistory
from briefdesk.services.change_tracking import ChangeEvent, ChangeInterceptor
from briefdesk.services.history import HistoryReader, HistorySource

# Lead column -> history column. Any change to these writes a new snapshot.
LEAD_SNAPSHOT_FIELDS = {
    "current_assign_user": "assign_user_id",
    "priority_id": "priority_id",
    "lead_status": "lead_status_id",
    "call_status": "call_status_id",
    "status": "status",
}


def record_lead_history(db: Session, event: ChangeEvent) -> LeadAssignHistory:
    values = {column: event.snapshot.get(field) for field, column in LEAD_SNAPSHOT_FIELDS.items()}
    row = LeadAssignHistory(
        lead_id=event.entity_id,
        action=event.action.value,
        current_user_id=event.actor_id,
        **values,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


class LeadHistoryInterceptor(ChangeInterceptor):
    name = "lead_assign_history"

    def created(self, db: Session, event: ChangeEvent) -> None:
        record_lead_history(db, event)

    def updated(self, db: Session, event: ChangeEvent) -> None:
        if event.changed_fields & LEAD_SNAPSHOT_FIELDS.keys():
            record_lead_history(db, event)

    def deleted(self, db: Session, event: ChangeEvent) -> None:
        record_lead_history(db, event)

    def restored(self, db: Session, event: ChangeEvent) -> None:
        record_lead_history(db, event)


lead_history_reader = HistoryReader(
    HistorySource(
        model=LeadAssignHistory,
        entity_column="lead_id",
        actor_column="current_user_id",
        entity_type="Lead",
    )
)


def lead_history_page(db: Session, lead_id: int, page: int = 1, page_size: int | None = None):
    return lead_history_reader.list_for_entity(db, "Lead", lead_id, page=page, page_size=page_size)
