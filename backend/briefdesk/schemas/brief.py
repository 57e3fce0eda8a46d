from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from briefdesk.models.enums import CampaignMode, MediaType
from briefdesk.schemas.common import PatchModel, WatchedOut


class BriefBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    product_name: str | None = Field(default=None, max_length=190)
    contact_person_id: int | None = None
    brand_id: int | None = None
    agency_id: int | None = None
    mode_of_campaign: CampaignMode | None = None
    media_type: MediaType | None = None
    budget: Decimal | None = Field(default=None, ge=0)
    assign_user_id: int | None = None
    brief_status_id: int | None = None
    priority_id: int | None = None
    submission_date: dt.datetime | None = None
    comment: str | None = None


class BriefCreate(BriefBase):
    name: str = Field(min_length=1, max_length=190)
    created_by: int | None = None


class BriefUpdate(BriefBase, PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=190)


class BriefAssign(BaseModel):
    user_id: int | None


class BriefStatusChange(BaseModel):
    brief_status_id: int
    comment: str | None = None


class BriefOut(WatchedOut):
    name: str
    slug: str | None
    product_name: str | None
    contact_person_id: int | None
    brand_id: int | None
    agency_id: int | None
    mode_of_campaign: str | None
    media_type: str | None
    budget: Decimal | None
    assign_user_id: int | None
    created_by: int | None
    brief_status_id: int | None
    brief_status_time: dt.datetime | None
    priority_id: int | None
    submission_date: dt.datetime | None
    comment: str | None
