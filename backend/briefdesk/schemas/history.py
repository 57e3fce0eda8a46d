from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict

from briefdesk.schemas.common import ApiModel


class ActorOut(ApiModel):
    id: int
    username: str
    name: str | None = None


class ActivityLogOut(BaseModel):
    # "model_id" collides with pydantic's protected "model_" prefix.
    model_config = ConfigDict(from_attributes=True, protected_namespaces=())

    id: int
    uuid: str
    user_id: int | None
    user: ActorOut | None = None
    model: str
    model_id: int
    action: str
    description: str | None
    old_data: dict[str, Any] | None
    new_data: dict[str, Any] | None
    created_at: dt.datetime


class LeadAssignHistoryOut(ApiModel):
    id: int
    uuid: str
    lead_id: int
    action: str
    assign_user_id: int | None
    current_user_id: int | None
    priority_id: int | None
    lead_status_id: int | None
    call_status_id: int | None
    status: int | None
    created_at: dt.datetime
    deleted_at: dt.datetime | None = None


class BriefAssignHistoryOut(ApiModel):
    id: int
    uuid: str
    brief_id: int
    action: str
    assign_by_id: int | None
    assign_to_id: int | None
    brief_status_id: int | None
    brief_status_time: dt.datetime | None
    priority_id: int | None
    submission_date: dt.datetime | None
    comment: str | None
    status: int | None
    created_at: dt.datetime
    deleted_at: dt.datetime | None = None


class PlannerHistoryOut(ApiModel):
    id: int
    uuid: str
    planner_id: int
    brief_id: int | None
    action: str
    created_by: int | None
    changed_by_id: int | None
    planner_status_id: int | None
    submitted_plan: list[str] | None
    backup_plan: str | None
    status: int | None
    created_at: dt.datetime
    deleted_at: dt.datetime | None = None


class PurgeResult(BaseModel):
    deleted: int
    retention_days: int
