from __future__ import annotations

from pydantic import BaseModel, Field

from briefdesk.models.enums import UserRole
from briefdesk.schemas.common import PatchModel, WatchedOut


class UserCreate(BaseModel):
    username: str = Field(min_length=2, max_length=50)
    password: str = Field(min_length=7, max_length=200)
    name: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=190)
    role: UserRole = UserRole.SALES


class UserUpdate(PatchModel):
    not_null = ("role", "password")

    name: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=190)
    role: UserRole | None = None
    password: str | None = Field(default=None, min_length=7, max_length=200)


class UserOut(WatchedOut):
    username: str
    name: str | None
    email: str | None
    role: UserRole
