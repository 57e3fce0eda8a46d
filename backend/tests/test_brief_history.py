import datetime as dt

import pytest
from fastapi import HTTPException

from briefdesk.models.lookups import BriefStatus
from briefdesk.schemas.brief import BriefCreate, BriefUpdate
from briefdesk.services import briefs
from briefdesk.services.activity_log import activity_reader
from briefdesk.services.brief_history import brief_history_reader, briefs_assigned_to


def _page(db, brief_id, page, page_size=10):
    return brief_history_reader.list_for_entity(db, "Brief", brief_id, page=page, page_size=page_size)


def test_history_pages_newest_first(db, actor):
    brief = briefs.create_brief(db, BriefCreate(name="Summer launch"), actor_id=actor.id)
    for i in range(1, 15):
        briefs.update_brief(db, brief, BriefUpdate(comment=f"note {i}"), actor_id=actor.id)

    first = _page(db, brief.id, 1)
    second = _page(db, brief.id, 2)

    assert first.total == 15
    assert first.pages == 2
    assert len(first.items) == 10
    assert len(second.items) == 5
    assert first.items[0].comment == "note 14"
    assert second.items[-1].action == "created"

    ids = [row.id for row in first.items + second.items]
    assert ids == sorted(ids, reverse=True)
    assert len(set(ids)) == 15


def test_assign_records_actor_and_assignee(db, actor, make_user):
    planner_user = make_user("rina")
    brief = briefs.create_brief(db, BriefCreate(name="Summer launch"), actor_id=actor.id)

    briefs.assign_brief(db, brief, planner_user.id, actor_id=actor.id)

    latest = _page(db, brief.id, 1).items[0]
    assert latest.action == "updated"
    assert latest.assign_by_id == actor.id
    assert latest.assign_to_id == planner_user.id
    assert briefs_assigned_to(db, planner_user.id).total == 1


def test_status_change_stamps_time(db, actor):
    status = BriefStatus(name="In Planning", percentage=25)
    db.add(status)
    db.commit()
    brief = briefs.create_brief(db, BriefCreate(name="Summer launch"), actor_id=actor.id)
    assert brief.brief_status_time is None

    briefs.change_brief_status(db, brief, status.id, comment="Kick-off done", actor_id=actor.id)

    assert brief.brief_status_id == status.id
    assert brief.brief_status_time is not None
    latest = _page(db, brief.id, 1).items[0]
    assert latest.brief_status_id == status.id
    assert latest.comment == "Kick-off done"


def test_untracked_change_skips_brief_history(db, actor):
    brief = briefs.create_brief(db, BriefCreate(name="Summer launch"), actor_id=actor.id)

    briefs.update_brief(db, brief, BriefUpdate(product_name="Cola Zero"), actor_id=actor.id)

    assert _page(db, brief.id, 1).total == 1


def test_media_type_must_match_campaign_mode(db, actor):
    with pytest.raises(HTTPException) as exc:
        briefs.create_brief(
            db, BriefCreate(name="Summer launch", mode_of_campaign="programmatic", media_type="ooh"), actor_id=actor.id
        )
    assert exc.value.status_code == 400

    brief = briefs.create_brief(
        db, BriefCreate(name="Summer launch", mode_of_campaign="programmatic", media_type="ctv"), actor_id=actor.id
    )
    assert brief.media_type == "ctv"


def test_same_submission_date_after_round_trip_is_not_a_change(db, actor):
    due = dt.datetime(2026, 3, 1, 9, 30, tzinfo=dt.timezone.utc)
    brief = briefs.create_brief(db, BriefCreate(name="Summer launch", submission_date=due), actor_id=actor.id)
    # SQLite hands the column back without its offset.
    assert brief.submission_date.tzinfo is None

    briefs.update_brief(db, brief, BriefUpdate(submission_date=due), actor_id=actor.id)

    assert _page(db, brief.id, 1).total == 1
    assert activity_reader.list_for_entity(db, "Brief", brief.id).total == 1
    assert brief.submission_date == due.replace(tzinfo=None)
