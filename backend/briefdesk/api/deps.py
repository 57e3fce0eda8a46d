from __future__ import annotations

from fastapi import Depends, HTTPException, Query, Request, status
from jose import JWTError
from sqlalchemy.orm import Session

from briefdesk.core.config import settings
from briefdesk.core.security import decode_access_token
from briefdesk.db.session import get_db
from briefdesk.models.enums import RecordStatus, UserRole
from briefdesk.models.user import User


def _user_from_cookie(request: Request, db: Session) -> User | None:
    token = request.cookies.get(settings.jwt_cookie_name)
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except (JWTError, KeyError, ValueError):
        return None
    user = db.get(User, int(payload.sub))
    if not user or user.status != RecordStatus.ACTIVE:
        return None
    return user


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    if not request.cookies.get(settings.jwt_cookie_name):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    user = _user_from_cookie(request, db)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid session")
    return user


def require_auth(user: User = Depends(get_current_user)) -> User:
    return user


def require_admin(user: User = Depends(require_auth)) -> User:
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin only")
    return user


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> User | None:
    """Best-effort auth: the session user when the cookie is present and valid, otherwise None."""
    return _user_from_cookie(request, db)


class PageParams:
    def __init__(
        self,
        page: int = Query(default=1, ge=1),
        page_size: int | None = Query(default=None, ge=1, le=settings.max_page_size),
    ) -> None:
        self.page = page
        self.page_size = page_size
