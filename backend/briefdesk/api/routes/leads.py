from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from briefdesk.api.deps import PageParams, require_admin, require_auth
from briefdesk.db.session import get_db
from briefdesk.models.user import User
from briefdesk.schemas.common import PageOut, StatusChange, page_payload
from briefdesk.schemas.history import LeadAssignHistoryOut
from briefdesk.schemas.lead import LeadAssign, LeadCallStatus, LeadCreate, LeadOut, LeadPriority, LeadUpdate
from briefdesk.services import leads as lead_service
from briefdesk.services.lead_history import lead_history_page

router = APIRouter()


@router.get("/", response_model=PageOut[LeadOut])
def list_leads(
    search: str | None = None,
    type: str | None = None,
    brand_id: int | None = None,
    agency_id: int | None = None,
    current_assign_user: int | None = None,
    priority_id: int | None = None,
    lead_status: int | None = None,
    call_status: int | None = None,
    status: int | None = None,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    filters = {
        "type": type,
        "brand_id": brand_id,
        "agency_id": agency_id,
        "current_assign_user": current_assign_user,
        "priority_id": priority_id,
        "lead_status": lead_status,
        "call_status": call_status,
        "status": status,
    }
    page = lead_service.list_leads(db, page=paging.page, page_size=paging.page_size, search=search, filters=filters)
    return page_payload(page)


@router.post("/", response_model=LeadOut, status_code=201)
def create_lead(payload: LeadCreate, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    return lead_service.create_lead(db, payload, actor_id=user.id)


@router.get("/{lead_id}", response_model=LeadOut)
def get_lead(lead_id: int, db: Session = Depends(get_db), _=Depends(require_auth)):
    return lead_service.get_lead(db, lead_id)


@router.patch("/{lead_id}", response_model=LeadOut)
def update_lead(lead_id: int, payload: LeadUpdate, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    lead = lead_service.get_lead(db, lead_id)
    return lead_service.update_lead(db, lead, payload, actor_id=user.id)


@router.post("/{lead_id}/assign", response_model=LeadOut)
def assign_lead(lead_id: int, payload: LeadAssign, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    lead = lead_service.get_lead(db, lead_id)
    return lead_service.assign_lead(db, lead, payload.user_id, actor_id=user.id)


@router.post("/{lead_id}/priority", response_model=LeadOut)
def update_priority(
    lead_id: int, payload: LeadPriority, db: Session = Depends(get_db), user: User = Depends(require_auth)
):
    lead = lead_service.get_lead(db, lead_id)
    return lead_service.update_priority(db, lead, payload.priority_id, actor_id=user.id)


@router.post("/{lead_id}/status", response_model=LeadOut)
def update_status(lead_id: int, payload: StatusChange, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    lead = lead_service.get_lead(db, lead_id)
    return lead_service.update_status(db, lead, payload.status, actor_id=user.id)


@router.post("/{lead_id}/call-status", response_model=LeadOut)
def add_call_status(
    lead_id: int, payload: LeadCallStatus, db: Session = Depends(get_db), user: User = Depends(require_auth)
):
    lead = lead_service.get_lead(db, lead_id)
    return lead_service.add_call_status(db, lead, payload.call_status_id, actor_id=user.id)


@router.delete("/{lead_id}/call-status/{call_status_id}", response_model=LeadOut)
def remove_call_status(
    lead_id: int, call_status_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)
):
    lead = lead_service.get_lead(db, lead_id)
    return lead_service.remove_call_status(db, lead, call_status_id, actor_id=user.id)


@router.delete("/{lead_id}", response_model=LeadOut)
def delete_lead(lead_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    lead = lead_service.get_lead(db, lead_id)
    return lead_service.delete_lead(db, lead, actor_id=user.id)


@router.post("/{lead_id}/restore", response_model=LeadOut)
def restore_lead(lead_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    lead = lead_service.get_lead(db, lead_id, include_deleted=True)
    return lead_service.restore_lead(db, lead, actor_id=user.id)


@router.delete("/{lead_id}/force")
def force_delete_lead(lead_id: int, db: Session = Depends(get_db), user: User = Depends(require_admin)):
    lead = lead_service.get_lead(db, lead_id, include_deleted=True)
    lead_service.force_delete_lead(db, lead, actor_id=user.id)
    return {"ok": True}


@router.get("/{lead_id}/history", response_model=PageOut[LeadAssignHistoryOut])
def lead_history(lead_id: int, paging: PageParams = Depends(), db: Session = Depends(get_db), _=Depends(require_auth)):
    return page_payload(lead_history_page(db, lead_id, page=paging.page, page_size=paging.page_size))
