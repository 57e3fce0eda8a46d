from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from briefdesk.models.enums import RecordStatus
from briefdesk.services.pagination import Page

T = TypeVar("T")


class ApiModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class Timestamped(ApiModel):
    created_at: datetime
    updated_at: datetime | None = None


class WatchedOut(Timestamped):
    id: int
    uuid: str
    status: int
    deleted_at: datetime | None = None


class PatchModel(BaseModel):
    """Partial update body. Omitted fields are left alone; `not_null` fields reject an explicit null."""

    not_null: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _reject_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = [f for f in cls.not_null if f in data and data[f] is None]
            if nulls:
                raise ValueError(f"{', '.join(nulls)} may not be null")
        return data


class StatusChange(BaseModel):
    status: RecordStatus = Field(description="1 active, 2 deactivated, 15 deleted")


class PageOut(BaseModel, Generic[T]):
    items: list[T]
    total: int
    page: int
    page_size: int
    pages: int


def page_payload(page: Page) -> dict[str, Any]:
    # Items stay ORM objects; the response model validates them from attributes.
    return {
        "items": page.items,
        "total": page.total,
        "page": page.page,
        "page_size": page.page_size,
        "pages": page.pages,
    }
