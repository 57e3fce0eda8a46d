from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from briefdesk.api.deps import PageParams, require_admin, require_auth
from briefdesk.db.session import get_db
from briefdesk.models.user import User
from briefdesk.schemas.common import PageOut, StatusChange, page_payload
from briefdesk.schemas.user import UserCreate, UserOut, UserUpdate
from briefdesk.services import users as user_service

router = APIRouter()


@router.get("/", response_model=PageOut[UserOut])
def list_users(
    search: str | None = None,
    role: str | None = None,
    status: int | None = None,
    paging: PageParams = Depends(),
    db: Session = Depends(get_db),
    _=Depends(require_auth),
):
    page = user_service.users.list_page(
        db, page=paging.page, page_size=paging.page_size, search=search, filters={"role": role, "status": status}
    )
    return page_payload(page)


@router.post("/", response_model=UserOut, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return user_service.create_user(
        db,
        username=payload.username,
        password=payload.password,
        role=payload.role,
        name=payload.name,
        email=payload.email,
        actor_id=admin.id,
    )


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db), _=Depends(require_auth)):
    return user_service.users.get_or_404(db, user_id)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    user = user_service.users.get_or_404(db, user_id)
    return user_service.update_user(db, user, payload, actor_id=admin.id)


@router.post("/{user_id}/status", response_model=UserOut)
def set_user_status(
    user_id: int, payload: StatusChange, db: Session = Depends(get_db), admin: User = Depends(require_admin)
):
    user = user_service.users.get_or_404(db, user_id)
    return user_service.users.set_status(db, user, payload.status, actor_id=admin.id)


@router.delete("/{user_id}", response_model=UserOut)
def delete_user(user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    user = user_service.users.get_or_404(db, user_id)
    return user_service.users.soft_delete(db, user, actor_id=admin.id)


@router.post("/{user_id}/restore", response_model=UserOut)
def restore_user(user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    user = user_service.users.get_or_404(db, user_id, include_deleted=True)
    return user_service.users.restore(db, user, actor_id=admin.id)


@router.delete("/{user_id}/force")
def force_delete_user(user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    user = user_service.users.get_or_404(db, user_id, include_deleted=True)
    user_service.users.force_delete(db, user, actor_id=admin.id)
    return {"ok": True}
