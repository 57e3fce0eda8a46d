from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from briefdesk.api.deps import PageParams, require_auth
from briefdesk.db.session import get_db
from briefdesk.models.user import User
from briefdesk.schemas.brief import BriefAssign, BriefCreate, BriefOut, BriefStatusChange, BriefUpdate
from briefdesk.schemas.common import PageOut, page_payload
from briefdesk.schemas.history import BriefAssignHistoryOut, PlannerHistoryOut
from briefdesk.services import briefs as brief_service
from briefdesk.services.brief_history import brief_history_reader, briefs_assigned_to
from briefdesk.services.history import HistoryFilters
from briefdesk.services.planner_history import brief_planner_history

router = APIRouter()


@router.get("/", response_model=PageOut[BriefOut])
def list_briefs(
    search: str | None = None,
    brand_id: int | None = None,
    agency_id: int | None = None,
    assign_user_id: int | None = None,
    brief_status_id: int | None = None,
    priority_id: int | None = None,
    mode_of_campaign: str | None = None,
    status: int | None = None,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    filters = {
        "brand_id": brand_id,
        "agency_id": agency_id,
        "assign_user_id": assign_user_id,
        "brief_status_id": brief_status_id,
        "priority_id": priority_id,
        "mode_of_campaign": mode_of_campaign,
        "status": status,
    }
    page = brief_service.list_briefs(db, page=paging.page, page_size=paging.page_size, search=search, filters=filters)
    return page_payload(page)


@router.get("/history", response_model=PageOut[BriefAssignHistoryOut])
def brief_history_index(
    brief_id: int | None = None,
    assign_by_id: int | None = None,
    assign_to_id: int | None = None,
    action: str | None = None,
    from_date: dt.datetime | None = None,
    to_date: dt.datetime | None = None,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    filters = HistoryFilters(
        actor_id=assign_by_id,
        entity_id=brief_id,
        action=action,
        date_from=from_date,
        date_to=to_date,
    )
    page = brief_history_reader.list_filtered(
        db, filters, page=paging.page, page_size=paging.page_size, columns={"assign_to_id": assign_to_id}
    )
    return page_payload(page)


@router.get("/history/recent", response_model=list[BriefAssignHistoryOut])
def recent_brief_history(
    limit: int = Query(default=10, ge=1, le=50),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    return brief_history_reader.list_recent(db, limit)


@router.get("/history/assigned-to/{user_id}", response_model=PageOut[BriefAssignHistoryOut])
def brief_history_assigned_to(
    user_id: int, paging: PageParams = Depends(), db: Session = Depends(get_db), _=Depends(require_auth)
):
    return page_payload(briefs_assigned_to(db, user_id, page=paging.page, page_size=paging.page_size))


@router.get("/history/uuid/{history_uuid}", response_model=BriefAssignHistoryOut)
def brief_history_entry(history_uuid: str, db: Session = Depends(get_db), _=Depends(require_auth)):
    entry = brief_history_reader.get_by_uuid(db, history_uuid)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brief history entry not found")
    return entry


@router.post("/", response_model=BriefOut, status_code=201)
def create_brief(payload: BriefCreate, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    return brief_service.create_brief(db, payload, actor_id=user.id)


@router.get("/{brief_id}", response_model=BriefOut)
def get_brief(brief_id: int, db: Session = Depends(get_db), _=Depends(require_auth)):
    return brief_service.get_brief(db, brief_id)


@router.patch("/{brief_id}", response_model=BriefOut)
def update_brief(brief_id: int, payload: BriefUpdate, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    brief = brief_service.get_brief(db, brief_id)
    return brief_service.update_brief(db, brief, payload, actor_id=user.id)


@router.post("/{brief_id}/assign", response_model=BriefOut)
def assign_brief(brief_id: int, payload: BriefAssign, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    brief = brief_service.get_brief(db, brief_id)
    return brief_service.assign_brief(db, brief, payload.user_id, actor_id=user.id)


@router.post("/{brief_id}/status", response_model=BriefOut)
def change_brief_status(
    brief_id: int, payload: BriefStatusChange, db: Session = Depends(get_db), user: User = Depends(require_auth)
):
    brief = brief_service.get_brief(db, brief_id)
    return brief_service.change_brief_status(
        db, brief, payload.brief_status_id, comment=payload.comment, actor_id=user.id
    )


@router.delete("/{brief_id}", response_model=BriefOut)
def delete_brief(brief_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    brief = brief_service.get_brief(db, brief_id)
    return brief_service.delete_brief(db, brief, actor_id=user.id)


@router.post("/{brief_id}/restore", response_model=BriefOut)
def restore_brief(brief_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    brief = brief_service.get_brief(db, brief_id, include_deleted=True)
    return brief_service.restore_brief(db, brief, actor_id=user.id)


@router.get("/{brief_id}/history", response_model=PageOut[BriefAssignHistoryOut])
def brief_history(brief_id: int, paging: PageParams = Depends(), db: Session = Depends(get_db), _=Depends(require_auth)):
    page = brief_history_reader.list_for_entity(db, "Brief", brief_id, page=paging.page, page_size=paging.page_size)
    return page_payload(page)


@router.get("/{brief_id}/planner-history", response_model=PageOut[PlannerHistoryOut])
def planner_history_for_brief(
    brief_id: int, paging: PageParams = Depends(), db: Session = Depends(get_db), _=Depends(require_auth)
):
    return page_payload(brief_planner_history(db, brief_id, page=paging.page, page_size=paging.page_size))
