from __future__ import annotations

import logging
import re
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from briefdesk.models.enums import RecordStatus
from briefdesk.models.lead import Lead
from briefdesk.models.lookups import CallStatus, LeadStatus, Priority
from briefdesk.services.pagination import Page
from briefdesk.services.repository import EntityRepository

logger = logging.getLogger(__name__)

leads = EntityRepository(
    Lead,
    search_fields=("name", "email", "postal_code"),
    filter_fields=("type", "brand_id", "agency_id", "current_assign_user", "priority_id", "lead_status", "call_status", "status"),
)


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "lead"


def normalize_mobile_numbers(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(v).strip() for v in value if str(v).strip()]


def derive_from_call_status(db: Session, call_status_id: int) -> dict[str, Any]:
    """
    Lead status and priority implied by a call status.

    Each LeadStatus/Priority lists the call status ids that move a lead into it;
    the first match wins. No match leaves the field unset.
    """
    if db.get(CallStatus, call_status_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Call status not found")
    values: dict[str, Any] = {"call_status": call_status_id}
    for model, field in ((LeadStatus, "lead_status"), (Priority, "priority_id")):
        for row in db.execute(select(model).order_by(model.id)).scalars():
            if call_status_id in (row.call_status or []):
                values[field] = row.id
                break
    return values


def list_leads(
    db: Session,
    *,
    page: int = 1,
    page_size: int | None = None,
    search: str | None = None,
    filters: dict[str, Any] | None = None,
) -> Page:
    return leads.list_page(db, page=page, page_size=page_size, search=search, filters=filters)


def get_lead(db: Session, lead_id: int, *, include_deleted: bool = False) -> Lead:
    return leads.get_or_404(db, lead_id, include_deleted=include_deleted)


def create_lead(db: Session, payload, *, actor_id: int | None = None) -> Lead:
    data = payload.model_dump(exclude_unset=True)
    call_status_id = data.pop("call_status_id", None)

    data["slug"] = data.get("slug") or slugify(data["name"])
    data["mobile_number"] = normalize_mobile_numbers(data.get("mobile_number"))
    if data.get("created_by") is None:
        data["created_by"] = actor_id
    if call_status_id is not None:
        data.update(derive_from_call_status(db, call_status_id))
        data["call_attempt"] = 1

    lead = leads.create(db, data, actor_id=actor_id)
    logger.info("Lead created: id=%s by user %s", lead.id, actor_id)
    return lead


def update_lead(db: Session, lead: Lead, payload, *, actor_id: int | None = None) -> Lead:
    data = payload.model_dump(exclude_unset=True)
    if "mobile_number" in data:
        data["mobile_number"] = normalize_mobile_numbers(data["mobile_number"])
    if data.get("name") and "slug" not in data:
        data["slug"] = slugify(data["name"])
    return leads.update(db, lead, data, actor_id=actor_id)


def assign_lead(db: Session, lead: Lead, user_id: int | None, *, actor_id: int | None = None) -> Lead:
    return leads.update(db, lead, {"current_assign_user": user_id}, actor_id=actor_id)


def update_priority(db: Session, lead: Lead, priority_id: int | None, *, actor_id: int | None = None) -> Lead:
    if priority_id is not None and db.get(Priority, priority_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Priority not found")
    return leads.update(db, lead, {"priority_id": priority_id}, actor_id=actor_id)


def update_status(db: Session, lead: Lead, value: RecordStatus, *, actor_id: int | None = None) -> Lead:
    return leads.set_status(db, lead, value, actor_id=actor_id)


def add_call_status(db: Session, lead: Lead, call_status_id: int, *, actor_id: int | None = None) -> Lead:
    data = derive_from_call_status(db, call_status_id)
    data["call_attempt"] = (lead.call_attempt or 0) + 1
    return leads.update(db, lead, data, actor_id=actor_id)


def remove_call_status(db: Session, lead: Lead, call_status_id: int, *, actor_id: int | None = None) -> Lead:
    if lead.call_status != call_status_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Call status is not set on this lead")
    return leads.update(db, lead, {"call_status": None, "lead_status": None}, actor_id=actor_id)


def delete_lead(db: Session, lead: Lead, *, actor_id: int | None = None) -> Lead:
    return leads.soft_delete(db, lead, actor_id=actor_id)


def restore_lead(db: Session, lead: Lead, *, actor_id: int | None = None) -> Lead:
    return leads.restore(db, lead, actor_id=actor_id)


def force_delete_lead(db: Session, lead: Lead, *, actor_id: int | None = None) -> dict[str, Any]:
    return leads.force_delete(db, lead, actor_id=actor_id)
