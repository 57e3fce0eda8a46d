from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from briefdesk.models.brief import Brief
from briefdesk.models.enums import MEDIA_TYPES_BY_MODE, CampaignMode, MediaType
from briefdesk.models.lookups import BriefStatus
from briefdesk.models.mixins import utcnow
from briefdesk.services.leads import slugify
from briefdesk.services.pagination import Page
from briefdesk.services.repository import EntityRepository

briefs = EntityRepository(
    Brief,
    search_fields=("name", "product_name"),
    filter_fields=("brand_id", "agency_id", "assign_user_id", "brief_status_id", "priority_id", "mode_of_campaign", "status"),
)


def check_media_type(mode: str | None, media_type: str | None) -> None:
    if mode is None or media_type is None:
        return
    allowed = MEDIA_TYPES_BY_MODE.get(CampaignMode(mode), ())
    if MediaType(media_type) not in allowed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Media type {media_type} is not available for {mode} campaigns",
        )


def list_briefs(
    db: Session,
    *,
    page: int = 1,
    page_size: int | None = None,
    search: str | None = None,
    filters: dict[str, Any] | None = None,
) -> Page:
    return briefs.list_page(db, page=page, page_size=page_size, search=search, filters=filters)


def get_brief(db: Session, brief_id: int, *, include_deleted: bool = False) -> Brief:
    return briefs.get_or_404(db, brief_id, include_deleted=include_deleted)


def create_brief(db: Session, payload, *, actor_id: int | None = None) -> Brief:
    data = payload.model_dump(exclude_unset=True)
    check_media_type(data.get("mode_of_campaign"), data.get("media_type"))
    data["slug"] = data.get("slug") or slugify(data["name"])
    if data.get("created_by") is None:
        data["created_by"] = actor_id
    if data.get("brief_status_id") is not None:
        data["brief_status_time"] = utcnow()
    return briefs.create(db, data, actor_id=actor_id)


def update_brief(db: Session, brief: Brief, payload, *, actor_id: int | None = None) -> Brief:
    data = payload.model_dump(exclude_unset=True)
    check_media_type(
        data.get("mode_of_campaign", brief.mode_of_campaign),
        data.get("media_type", brief.media_type),
    )
    if data.get("brief_status_id") is not None and data["brief_status_id"] != brief.brief_status_id:
        data["brief_status_time"] = utcnow()
    return briefs.update(db, brief, data, actor_id=actor_id)


def assign_brief(db: Session, brief: Brief, user_id: int | None, *, actor_id: int | None = None) -> Brief:
    return briefs.update(db, brief, {"assign_user_id": user_id}, actor_id=actor_id)


def change_brief_status(
    db: Session, brief: Brief, brief_status_id: int, *, comment: str | None = None, actor_id: int | None = None
) -> Brief:
    if db.get(BriefStatus, brief_status_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Brief status not found")
    if brief.brief_status_id == brief_status_id and comment is None:
        return brief
    data: dict[str, Any] = {"brief_status_id": brief_status_id, "brief_status_time": utcnow()}
    if comment is not None:
        data["comment"] = comment
    return briefs.update(db, brief, data, actor_id=actor_id)


def delete_brief(db: Session, brief: Brief, *, actor_id: int | None = None) -> Brief:
    return briefs.soft_delete(db, brief, actor_id=actor_id)


def restore_brief(db: Session, brief: Brief, *, actor_id: int | None = None) -> Brief:
    return briefs.restore(db, brief, actor_id=actor_id)
