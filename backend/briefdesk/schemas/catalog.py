"""Request and response bodies for the reference entities."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from briefdesk.schemas.common import PatchModel, WatchedOut


class AgencyIn(BaseModel):
    name: str = Field(min_length=1, max_length=190)
    agency_type: str | None = Field(default=None, max_length=100)
    website: str | None = Field(default=None, max_length=255)


class AgencyPatch(PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=190)
    agency_type: str | None = Field(default=None, max_length=100)
    website: str | None = Field(default=None, max_length=255)


class AgencyOut(WatchedOut):
    name: str
    slug: str | None
    agency_type: str | None
    website: str | None


class BrandIn(BaseModel):
    name: str = Field(min_length=1, max_length=190)
    brand_type: str | None = Field(default=None, max_length=100)
    agency_id: int | None = None
    industry_id: int | None = None
    website: str | None = Field(default=None, max_length=255)


class BrandPatch(PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=190)
    brand_type: str | None = Field(default=None, max_length=100)
    agency_id: int | None = None
    industry_id: int | None = None
    website: str | None = Field(default=None, max_length=255)


class BrandOut(WatchedOut):
    name: str
    slug: str | None
    brand_type: str | None
    agency_id: int | None
    industry_id: int | None
    website: str | None


class IndustryIn(BaseModel):
    name: str = Field(min_length=1, max_length=150)


class IndustryPatch(PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=150)


class IndustryOut(WatchedOut):
    name: str


class DepartmentIn(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    description: str | None = None


class DepartmentPatch(PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = None


class DepartmentOut(WatchedOut):
    name: str
    description: str | None


class DesignationIn(BaseModel):
    title: str = Field(min_length=1, max_length=150)
    description: str | None = None


class DesignationPatch(PatchModel):
    not_null = ("title",)

    title: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = None


class DesignationOut(WatchedOut):
    title: str
    description: str | None


class LeadSubSourceIn(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    source: str | None = Field(default=None, max_length=150)
    description: str | None = None


class LeadSubSourcePatch(PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=150)
    source: str | None = Field(default=None, max_length=150)
    description: str | None = None


class LeadSubSourceOut(WatchedOut):
    name: str
    source: str | None
    description: str | None


class MissCampaignIn(BaseModel):
    name: str = Field(min_length=1, max_length=190)
    brand_id: int | None = None
    industry_id: int | None = None
    comment: str | None = None


class MissCampaignPatch(PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=190)
    brand_id: int | None = None
    industry_id: int | None = None
    comment: str | None = None


class MissCampaignOut(WatchedOut):
    name: str
    brand_id: int | None
    industry_id: int | None
    comment: str | None


class MeetingIn(BaseModel):
    title: str = Field(min_length=1, max_length=190)
    lead_id: int | None = None
    meeting_type: str | None = Field(default=None, max_length=32)
    meeting_date: dt.datetime | None = None
    location: str | None = Field(default=None, max_length=255)
    agenda: str | None = None
    attendees: list[int] = Field(default_factory=list)


class MeetingPatch(PatchModel):
    not_null = ("title", "attendees")

    title: str | None = Field(default=None, min_length=1, max_length=190)
    lead_id: int | None = None
    meeting_type: str | None = Field(default=None, max_length=32)
    meeting_date: dt.datetime | None = None
    location: str | None = Field(default=None, max_length=255)
    agenda: str | None = None
    attendees: list[int] | None = None


class MeetingOut(WatchedOut):
    title: str
    lead_id: int | None
    meeting_type: str | None
    meeting_date: dt.datetime | None
    location: str | None
    agenda: str | None
    attendees: list[int]


class TeamIn(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    description: str | None = None
    team_lead_id: int | None = None


class TeamPatch(PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = None
    team_lead_id: int | None = None


class TeamOut(WatchedOut):
    name: str
    description: str | None
    team_lead_id: int | None


# Roles and permissions share one shape.
class AccessIn(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    display_name: str | None = Field(default=None, max_length=150)
    description: str | None = None


class AccessPatch(PatchModel):
    not_null = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    display_name: str | None = Field(default=None, max_length=150)
    description: str | None = None


class AccessOut(WatchedOut):
    name: str
    display_name: str | None
    description: str | None
