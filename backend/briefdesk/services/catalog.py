"""Repositories for the reference entities managed through plain CRUD."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from briefdesk.models import (
    Agency,
    Brand,
    Department,
    Designation,
    Industry,
    LeadSubSource,
    Meeting,
    MissCampaign,
    Permission,
    Role,
    Team,
)
from briefdesk.services.leads import slugify
from briefdesk.services.repository import EntityRepository

agencies = EntityRepository(Agency, search_fields=("name", "website"), filter_fields=("agency_type", "status"))
brands = EntityRepository(
    Brand, search_fields=("name", "website"), filter_fields=("brand_type", "agency_id", "industry_id", "status")
)
industries = EntityRepository(Industry, search_fields=("name",), filter_fields=("status",))
departments = EntityRepository(Department, search_fields=("name",), filter_fields=("status",))
designations = EntityRepository(Designation, search_fields=("title",), filter_fields=("status",))
lead_sub_sources = EntityRepository(
    LeadSubSource, label="Lead sub-source", search_fields=("name", "source"), filter_fields=("source", "status")
)
miss_campaigns = EntityRepository(
    MissCampaign, label="Missed campaign", search_fields=("name",), filter_fields=("brand_id", "industry_id", "status")
)
meetings = EntityRepository(Meeting, search_fields=("title", "location"), filter_fields=("lead_id", "meeting_type", "status"))
teams = EntityRepository(Team, search_fields=("name",), filter_fields=("team_lead_id", "status"))
roles = EntityRepository(Role, search_fields=("name", "display_name"), filter_fields=("status",))
permissions = EntityRepository(Permission, search_fields=("name", "display_name"), filter_fields=("status",))


def create_entry(db: Session, repo: EntityRepository, payload, *, actor_id: int | None = None):
    data: dict[str, Any] = payload.model_dump(exclude_unset=True)
    # Agencies and brands carry a slug derived from the name.
    if hasattr(repo.model, "slug") and not data.get("slug") and data.get("name"):
        data["slug"] = slugify(data["name"])
    return repo.create(db, data, actor_id=actor_id)


def update_entry(db: Session, repo: EntityRepository, entity, payload, *, actor_id: int | None = None):
    data: dict[str, Any] = payload.model_dump(exclude_unset=True)
    return repo.update(db, entity, data, actor_id=actor_id)
