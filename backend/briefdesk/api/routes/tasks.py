from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session

from briefdesk.core.config import settings
from briefdesk.core.security import constant_time_equals
from briefdesk.db.session import get_db
from briefdesk.schemas.history import PurgeResult
from briefdesk.services.activity_log import delete_old_activity_logs

router = APIRouter()


@router.post("/purge-activity-logs", response_model=PurgeResult)
def purge_activity_logs(
    days: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    x_tasks_token: str | None = Header(default=None),
):
    if not constant_time_equals(x_tasks_token, settings.tasks_secret):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid tasks token")
    retention = days or settings.activity_log_retention_days
    deleted = delete_old_activity_logs(db, retention)
    return PurgeResult(deleted=deleted, retention_days=retention)
