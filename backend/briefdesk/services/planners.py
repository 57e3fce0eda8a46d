from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from briefdesk.models.brief import Brief
from briefdesk.models.enums import RecordStatus
from briefdesk.models.planner import MAX_SUBMITTED_PLANS, Planner
from briefdesk.services.pagination import Page
from briefdesk.services.repository import EntityRepository

planners = EntityRepository(
    Planner,
    search_fields=("backup_plan",),
    filter_fields=("brief_id", "created_by", "planner_status_id", "status"),
)


def list_planners(
    db: Session, *, page: int = 1, page_size: int | None = None, filters: dict[str, Any] | None = None
) -> Page:
    return planners.list_page(db, page=page, page_size=page_size, filters=filters)


def get_planner(db: Session, planner_id: int, *, include_deleted: bool = False) -> Planner:
    return planners.get_or_404(db, planner_id, include_deleted=include_deleted)


def _check_plans(plans: list[str]) -> list[str]:
    if len(plans) > MAX_SUBMITTED_PLANS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"A planner holds at most {MAX_SUBMITTED_PLANS} submitted plans",
        )
    return list(plans)


def create_planner(db: Session, payload, *, actor_id: int | None = None) -> Planner:
    data = payload.model_dump(exclude_unset=True)
    brief = db.get(Brief, data["brief_id"])
    if brief is None or brief.status == RecordStatus.DELETED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brief not found")
    data["submitted_plan"] = _check_plans(data.get("submitted_plan") or [])
    if data.get("created_by") is None:
        data["created_by"] = actor_id
    return planners.create(db, data, actor_id=actor_id)


def update_planner(db: Session, planner: Planner, payload, *, actor_id: int | None = None) -> Planner:
    data = payload.model_dump(exclude_unset=True)
    if "submitted_plan" in data:
        data["submitted_plan"] = _check_plans(data["submitted_plan"] or [])
    return planners.update(db, planner, data, actor_id=actor_id)


def add_submitted_plan(db: Session, planner: Planner, path: str, *, actor_id: int | None = None) -> Planner:
    plans = _check_plans([*(planner.submitted_plan or []), path])
    return planners.update(db, planner, {"submitted_plan": plans}, actor_id=actor_id)


def remove_submitted_plan(db: Session, planner: Planner, index: int, *, actor_id: int | None = None) -> Planner:
    plans = list(planner.submitted_plan or [])
    if index < 0 or index >= len(plans):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submitted plan not found")
    del plans[index]
    return planners.update(db, planner, {"submitted_plan": plans}, actor_id=actor_id)


def delete_planner(db: Session, planner: Planner, *, actor_id: int | None = None) -> Planner:
    return planners.soft_delete(db, planner, actor_id=actor_id)


def restore_planner(db: Session, planner: Planner, *, actor_id: int | None = None) -> Planner:
    return planners.restore(db, planner, actor_id=actor_id)
