from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from briefdesk.core.security import hash_password, verify_password
from briefdesk.models.enums import RecordStatus, UserRole
from briefdesk.models.user import User
from briefdesk.services.repository import EntityRepository

users = EntityRepository(User, search_fields=("username", "name", "email"), filter_fields=("role", "status"))


def get_by_username(db: Session, username: str) -> User | None:
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def authenticate_user(db: Session, username: str, password: str) -> User:
    user = get_by_username(db, username)
    if not user or user.status != RecordStatus.ACTIVE:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not verify_password(password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return user


def create_user(
    db: Session,
    *,
    username: str,
    password: str,
    role: UserRole = UserRole.SALES,
    name: str | None = None,
    email: str | None = None,
    actor_id: int | None = None,
) -> User:
    if get_by_username(db, username) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")
    data = {
        "username": username,
        "password_hash": hash_password(password),
        "role": role,
        "name": name,
        "email": email,
    }
    return users.create(db, data, actor_id=actor_id)


def update_user(db: Session, user: User, payload, *, actor_id: int | None = None) -> User:
    data: dict[str, Any] = payload.model_dump(exclude_unset=True)
    password = data.pop("password", None)
    if password:
        data["password_hash"] = hash_password(password)
    return users.update(db, user, data, actor_id=actor_id)
