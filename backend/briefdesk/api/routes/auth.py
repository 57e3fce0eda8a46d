from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from briefdesk.api.deps import get_optional_user, require_auth
from briefdesk.core.config import settings
from briefdesk.core.security import create_access_token, create_csrf_token
from briefdesk.db.session import get_db
from briefdesk.models.user import User
from briefdesk.schemas.auth import LoginRequest, SessionUserOut
from briefdesk.services.users import authenticate_user

logger = logging.getLogger(__name__)

router = APIRouter()


def _session_out(user: User, csrf: str) -> SessionUserOut:
    role = user.role.value if hasattr(user.role, "value") else str(user.role)
    return SessionUserOut(id=user.id, username=user.username, name=user.name, role=role, csrf_token=csrf)


@router.post("/login", response_model=SessionUserOut)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = authenticate_user(db, payload.username, payload.password)
    token = create_access_token(subject=str(user.id))
    csrf = create_csrf_token()
    production = settings.environment == "production"
    # SameSite=None so the cookie is sent on cross-origin requests from the frontend host.
    samesite = "none" if production else "lax"
    response.set_cookie(
        settings.jwt_cookie_name,
        token,
        httponly=True,
        secure=production,
        samesite=samesite,
        max_age=settings.jwt_expires_minutes * 60,
        path="/",
    )
    # Readable by JS; echoed in X-CSRF-Token on unsafe methods in production.
    response.set_cookie(
        settings.csrf_cookie_name,
        csrf,
        httponly=False,
        secure=production,
        samesite=samesite,
        max_age=settings.jwt_expires_minutes * 60,
        path="/",
    )
    logger.info("User %s logged in", user.username)
    return _session_out(user, csrf)


@router.post("/logout")
def logout(response: Response, user: User | None = Depends(get_optional_user)):
    if user is not None:
        logger.info("User %s logged out", user.username)
    response.delete_cookie(settings.jwt_cookie_name, path="/")
    response.delete_cookie(settings.csrf_cookie_name, path="/")
    return {"ok": True}


@router.get("/me", response_model=SessionUserOut)
def me(response: Response, user: User = Depends(require_auth)):
    csrf = create_csrf_token()
    response.set_cookie(
        settings.csrf_cookie_name,
        csrf,
        httponly=False,
        secure=settings.environment == "production",
        samesite="none" if settings.environment == "production" else "lax",
        max_age=settings.jwt_expires_minutes * 60,
        path="/",
    )
    return _session_out(user, csrf)
