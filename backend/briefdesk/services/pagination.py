from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from briefdesk.core.config import settings


@dataclass
class Page:
    items: list[Any]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        return (self.total + self.page_size - 1) // self.page_size if self.page_size > 0 else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


def clamp_page_size(page_size: int | None) -> int:
    if not page_size or page_size < 1:
        return settings.default_page_size
    return min(page_size, settings.max_page_size)


def paginate(db: Session, stmt: Select, *, page: int = 1, page_size: int | None = None) -> Page:
    """Run an ordered select for one page (1-indexed) and count the full result."""
    page = max(page, 1)
    size = clamp_page_size(page_size)
    total = db.execute(select(func.count()).select_from(stmt.order_by(None).subquery())).scalar_one()
    items = db.execute(stmt.offset((page - 1) * size).limit(size)).scalars().all()
    return Page(items=list(items), total=total, page=page, page_size=size)
