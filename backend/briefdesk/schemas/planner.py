from __future__ import annotations

from pydantic import BaseModel, Field

from briefdesk.models.planner import MAX_SUBMITTED_PLANS
from briefdesk.schemas.common import WatchedOut


class PlannerCreate(BaseModel):
    brief_id: int
    planner_status_id: int | None = None
    submitted_plan: list[str] = Field(default_factory=list, max_length=MAX_SUBMITTED_PLANS)
    backup_plan: str | None = Field(default=None, max_length=255)
    created_by: int | None = None


class PlannerUpdate(BaseModel):
    planner_status_id: int | None = None
    submitted_plan: list[str] | None = Field(default=None, max_length=MAX_SUBMITTED_PLANS)
    backup_plan: str | None = Field(default=None, max_length=255)


class SubmittedPlanIn(BaseModel):
    path: str = Field(min_length=1, max_length=255)


class PlannerOut(WatchedOut):
    brief_id: int
    created_by: int | None
    planner_status_id: int | None
    submitted_plan: list[str]
    backup_plan: str | None
