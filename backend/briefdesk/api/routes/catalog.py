"""
CRUD routers for the reference entities.

Each resource gets the same seven endpoints; only the repository and the
request/response bodies differ. Annotations stay eager here: FastAPI
resolves the closure parameter types at registration.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from briefdesk.api.deps import PageParams, require_admin, require_auth
from briefdesk.db.session import get_db
from briefdesk.models.user import User
from briefdesk.schemas import catalog as schemas
from briefdesk.schemas.common import PageOut, page_payload
from briefdesk.services import catalog
from briefdesk.services.repository import EntityRepository


def build_crud_router(
    repo: EntityRepository,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    out_schema: type[BaseModel],
) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_model=PageOut[out_schema])
    def list_entries(
        search: str | None = None,
        status: int | None = None,
        paging: PageParams = Depends(),
        db: Session = Depends(get_db),
        _=Depends(require_auth),
    ):
        page = repo.list_page(
            db, page=paging.page, page_size=paging.page_size, search=search, filters={"status": status}
        )
        return page_payload(page)

    @router.post("/", response_model=out_schema, status_code=201)
    def create_entry(payload: create_schema, db: Session = Depends(get_db), user: User = Depends(require_auth)):
        return catalog.create_entry(db, repo, payload, actor_id=user.id)

    @router.get("/{entry_id}", response_model=out_schema)
    def get_entry(entry_id: int, db: Session = Depends(get_db), _=Depends(require_auth)):
        return repo.get_or_404(db, entry_id)

    @router.patch("/{entry_id}", response_model=out_schema)
    def update_entry(
        entry_id: int, payload: update_schema, db: Session = Depends(get_db), user: User = Depends(require_auth)
    ):
        entity = repo.get_or_404(db, entry_id)
        return catalog.update_entry(db, repo, entity, payload, actor_id=user.id)

    @router.delete("/{entry_id}", response_model=out_schema)
    def delete_entry(entry_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)):
        entity = repo.get_or_404(db, entry_id)
        return repo.soft_delete(db, entity, actor_id=user.id)

    @router.post("/{entry_id}/restore", response_model=out_schema)
    def restore_entry(entry_id: int, db: Session = Depends(get_db), user: User = Depends(require_auth)):
        entity = repo.get_or_404(db, entry_id, include_deleted=True)
        return repo.restore(db, entity, actor_id=user.id)

    @router.delete("/{entry_id}/force")
    def force_delete_entry(entry_id: int, db: Session = Depends(get_db), user: User = Depends(require_admin)):
        entity = repo.get_or_404(db, entry_id, include_deleted=True)
        repo.force_delete(db, entity, actor_id=user.id)
        return {"ok": True}

    return router


# prefix -> (repository, create body, update body, response body)
RESOURCES = {
    "agencies": (catalog.agencies, schemas.AgencyIn, schemas.AgencyPatch, schemas.AgencyOut),
    "brands": (catalog.brands, schemas.BrandIn, schemas.BrandPatch, schemas.BrandOut),
    "departments": (catalog.departments, schemas.DepartmentIn, schemas.DepartmentPatch, schemas.DepartmentOut),
    "designations": (catalog.designations, schemas.DesignationIn, schemas.DesignationPatch, schemas.DesignationOut),
    "industries": (catalog.industries, schemas.IndustryIn, schemas.IndustryPatch, schemas.IndustryOut),
    "lead-sub-sources": (
        catalog.lead_sub_sources,
        schemas.LeadSubSourceIn,
        schemas.LeadSubSourcePatch,
        schemas.LeadSubSourceOut,
    ),
    "miss-campaigns": (catalog.miss_campaigns, schemas.MissCampaignIn, schemas.MissCampaignPatch, schemas.MissCampaignOut),
    "meetings": (catalog.meetings, schemas.MeetingIn, schemas.MeetingPatch, schemas.MeetingOut),
    "teams": (catalog.teams, schemas.TeamIn, schemas.TeamPatch, schemas.TeamOut),
    "roles": (catalog.roles, schemas.AccessIn, schemas.AccessPatch, schemas.AccessOut),
    "permissions": (catalog.permissions, schemas.AccessIn, schemas.AccessPatch, schemas.AccessOut),
}
