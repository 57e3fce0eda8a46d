from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from briefdesk.core.config import settings
from briefdesk.models.enums import UserRole
from briefdesk.models.lookups import BriefStatus, CallStatus, LeadStatus, PlannerStatus, Priority
from briefdesk.models.user import User
from briefdesk.services.users import create_user

logger = logging.getLogger(__name__)

CALL_STATUSES = ["Connected", "Not Reachable", "Call Back Later", "Not Interested", "Wrong Number"]
# name -> call status names that move a lead into it
LEAD_STATUSES = {
    "Interested": ["Connected"],
    "Follow Up": ["Call Back Later", "Not Reachable"],
    "Closed": ["Not Interested", "Wrong Number"],
}
PRIORITIES = {
    "High": ["Connected"],
    "Medium": ["Call Back Later"],
    "Low": ["Not Reachable", "Not Interested", "Wrong Number"],
}
BRIEF_STATUSES = {"New": 0, "In Planning": 25, "Plan Submitted": 50, "Negotiation": 75, "Won": 100, "Lost": 100}
PLANNER_STATUSES = ["Pending", "In Progress", "Submitted", "Revised"]


def seed_lookups(db: Session) -> None:
    """Insert the lookup rows that are missing; existing rows are left alone."""
    for name in CALL_STATUSES:
        if db.execute(select(CallStatus).where(CallStatus.name == name)).scalar_one_or_none() is None:
            db.add(CallStatus(name=name))
    db.flush()
    call_ids = {c.name: c.id for c in db.execute(select(CallStatus)).scalars()}

    for model, mapping in ((LeadStatus, LEAD_STATUSES), (Priority, PRIORITIES)):
        for name, calls in mapping.items():
            if db.execute(select(model).where(model.name == name)).scalar_one_or_none() is None:
                db.add(model(name=name, call_status=[call_ids[c] for c in calls]))

    for name, percentage in BRIEF_STATUSES.items():
        if db.execute(select(BriefStatus).where(BriefStatus.name == name)).scalar_one_or_none() is None:
            db.add(BriefStatus(name=name, percentage=percentage))

    for name in PLANNER_STATUSES:
        if db.execute(select(PlannerStatus).where(PlannerStatus.name == name)).scalar_one_or_none() is None:
            db.add(PlannerStatus(name=name))
    db.commit()


def ensure_seeded(db: Session) -> None:
    seed_lookups(db)
    if db.execute(select(User).limit(1)).scalar_one_or_none() is not None:
        return
    create_user(
        db,
        username=settings.seed_admin_username,
        password=settings.seed_admin_password,
        role=UserRole.ADMIN,
        name="Administrator",
    )
    logger.info("Seeded admin user %s", settings.seed_admin_username)


if __name__ == "__main__":
    from briefdesk.db.session import SessionLocal

    db = SessionLocal()
    try:
        ensure_seeded(db)
        print("Seeded lookups and admin user.")
    finally:
        db.close()
