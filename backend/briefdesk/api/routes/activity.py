"""Activity log API."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from briefdesk.api.deps import PageParams, require_auth
from briefdesk.db.session import get_db
from briefdesk.schemas.common import PageOut, page_payload
from briefdesk.schemas.history import ActivityLogOut
from briefdesk.services.activity_log import activity_reader, get_activity_log
from briefdesk.services.history import HistoryFilters

router = APIRouter()


@router.get("/", response_model=PageOut[ActivityLogOut])
def list_activity(
    user_id: int | None = None,
    model: str | None = None,
    model_id: int | None = None,
    action: str | None = None,
    from_date: dt.datetime | None = None,
    to_date: dt.datetime | None = None,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    filters = HistoryFilters(
        actor_id=user_id,
        entity_type=model,
        entity_id=model_id,
        action=action,
        date_from=from_date,
        date_to=to_date,
    )
    page = activity_reader.list_filtered(db, filters, page=paging.page, page_size=paging.page_size)
    return page_payload(page)


@router.get("/recent", response_model=list[ActivityLogOut])
def recent_activity(
    limit: int = Query(default=10, ge=1, le=50),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    return activity_reader.list_recent(db, limit)


@router.get("/model/{model}/{model_id}", response_model=PageOut[ActivityLogOut])
def activity_for_entity(
    model: str,
    model_id: int,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    page = activity_reader.list_for_entity(db, model, model_id, page=paging.page, page_size=paging.page_size)
    return page_payload(page)


@router.get("/user/{user_id}", response_model=PageOut[ActivityLogOut])
def activity_for_user(
    user_id: int,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    page = activity_reader.list_for_actor(db, user_id, page=paging.page, page_size=paging.page_size)
    return page_payload(page)


@router.get("/action/{action}", response_model=PageOut[ActivityLogOut])
def activity_by_action(
    action: str,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    page = activity_reader.list_by_action(db, action, page=paging.page, page_size=paging.page_size)
    return page_payload(page)


@router.get("/{log_id}", response_model=ActivityLogOut)
def get_activity(log_id: int, db: Session = Depends(get_db), _=Depends(require_auth)):
    entry = get_activity_log(db, log_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity log not found")
    return entry
