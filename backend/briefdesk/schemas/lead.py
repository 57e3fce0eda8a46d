from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from briefdesk.models.enums import LeadType
from briefdesk.schemas.common import PatchModel, WatchedOut


class LeadBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    email: str | None = Field(default=None, max_length=190)
    profile_url: str | None = Field(default=None, max_length=255)
    # A single comma separated string is accepted as well as a list.
    mobile_number: list[str] | str | None = None
    type: LeadType | None = None
    brand_id: int | None = None
    agency_id: int | None = None
    designation_id: int | None = None
    department_id: int | None = None
    sub_source_id: int | None = None
    current_assign_user: int | None = None
    priority_id: int | None = None
    postal_code: str | None = Field(default=None, max_length=20)
    comment: str | None = None


class LeadCreate(LeadBase):
    name: str = Field(min_length=1, max_length=190)
    call_status_id: int | None = None
    created_by: int | None = None


class LeadUpdate(LeadBase, PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=190)


class LeadAssign(BaseModel):
    user_id: int | None


class LeadPriority(BaseModel):
    priority_id: int | None


class LeadCallStatus(BaseModel):
    call_status_id: int


class LeadOut(WatchedOut):
    name: str
    slug: str | None
    email: str | None
    profile_url: str | None
    mobile_number: list[str]
    type: str | None
    brand_id: int | None
    agency_id: int | None
    designation_id: int | None
    department_id: int | None
    sub_source_id: int | None
    current_assign_user: int | None
    priority_id: int | None
    call_status: int | None
    lead_status: int | None
    call_attempt: int
    postal_code: str | None
    comment: str | None
    created_by: int | None
