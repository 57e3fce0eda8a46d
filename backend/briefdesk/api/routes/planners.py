from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from briefdesk.api.deps import PageParams, require_auth
from briefdesk.db.session import get_db
from briefdesk.models.user import User
from briefdesk.schemas.common import PageOut, page_payload
from briefdesk.schemas.history import PlannerHistoryOut
from briefdesk.schemas.planner import PlannerCreate, PlannerOut, PlannerUpdate, SubmittedPlanIn
from briefdesk.services import planners as planner_service
from briefdesk.services.history import HistoryFilters
from briefdesk.services.planner_history import planner_history_by_status, planner_history_reader

router = APIRouter()


@router.get("/", response_model=PageOut[PlannerOut])
def list_planners(
    brief_id: int | None = None,
    created_by: int | None = None,
    planner_status_id: int | None = None,
    status: int | None = None,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    filters = {
        "brief_id": brief_id,
        "created_by": created_by,
        "planner_status_id": planner_status_id,
        "status": status,
    }
    return page_payload(planner_service.list_planners(db, page=paging.page, page_size=paging.page_size, filters=filters))


@router.get("/history", response_model=PageOut[PlannerHistoryOut])
def planner_history_index(
    planner_id: int | None = None,
    changed_by_id: int | None = None,
    planner_status_id: int | None = None,
    action: str | None = None,
    from_date: dt.datetime | None = None,
    to_date: dt.datetime | None = None,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    filters = HistoryFilters(
        actor_id=changed_by_id,
        entity_id=planner_id,
        action=action,
        date_from=from_date,
        date_to=to_date,
    )
    page = planner_history_reader.list_filtered(
        db, filters, page=paging.page, page_size=paging.page_size, columns={"planner_status_id": planner_status_id}
    )
    return page_payload(page)


@router.get("/history/recent", response_model=list[PlannerHistoryOut])
def recent_planner_history(
    limit: int = Query(default=10, ge=1, le=50),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    return planner_history_reader.list_recent(db, limit)


@router.get("/history/status/{planner_status_id}", response_model=PageOut[PlannerHistoryOut])
def planner_history_for_status(
    planner_status_id: int, paging: PageParams = Depends(), db: Session = Depends(get_db), _=Depends(require_auth)
):
    page = planner_history_by_status(db, planner_status_id, page=paging.page, page_size=paging.page_size)
    return page_payload(page)


@router.post("/", response_model=PlannerOut, status_code=201)
def create_planner(payload: PlannerCreate, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    return planner_service.create_planner(db, payload, actor_id=user.id)


@router.get("/{planner_id}", response_model=PlannerOut)
def get_planner(planner_id: int, db: Session = Depends(get_db), _=Depends(require_auth)):
    return planner_service.get_planner(db, planner_id)


@router.patch("/{planner_id}", response_model=PlannerOut)
def update_planner(
    planner_id: int, payload: PlannerUpdate, db: Session = Depends(get_db), user: User = Depends(require_auth)
):
    planner = planner_service.get_planner(db, planner_id)
    return planner_service.update_planner(db, planner, payload, actor_id=user.id)


@router.post("/{planner_id}/submitted-plans", response_model=PlannerOut)
def add_submitted_plan(
    planner_id: int, payload: SubmittedPlanIn, db: Session = Depends(get_db), user: User = Depends(require_auth)
):
    planner = planner_service.get_planner(db, planner_id)
    return planner_service.add_submitted_plan(db, planner, payload.path, actor_id=user.id)


@router.delete("/{planner_id}/submitted-plans/{index}", response_model=PlannerOut)
def remove_submitted_plan(
    planner_id: int, index: int, db: Session = Depends(get_db), user: User = Depends(require_auth)
):
    planner = planner_service.get_planner(db, planner_id)
    return planner_service.remove_submitted_plan(db, planner, index, actor_id=user.id)


@router.delete("/{planner_id}", response_model=PlannerOut)
def delete_planner(planner_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    planner = planner_service.get_planner(db, planner_id)
    return planner_service.delete_planner(db, planner, actor_id=user.id)


@router.post("/{planner_id}/restore", response_model=PlannerOut)
def restore_planner(planner_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)):
    planner = planner_service.get_planner(db, planner_id, include_deleted=True)
    return planner_service.restore_planner(db, planner, actor_id=user.id)


@router.get("/{planner_id}/history", response_model=PageOut[PlannerHistoryOut])
def planner_history(
    planner_id: int, paging: PageParams = Depends(), db: Session = Depends(get_db), _=Depends(require_auth)
):
    page = planner_history_reader.list_for_entity(
        db, "Planner", planner_id, page=paging.page, page_size=paging.page_size
    )
    return page_payload(page)
