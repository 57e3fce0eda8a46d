import logging

import pytest
from fastapi import HTTPException
from sqlalchemy import select

from briefdesk.models.activity_log import ActivityLog
from briefdesk.models.enums import RecordStatus
from briefdesk.models.lead import Lead, LeadAssignHistory
from briefdesk.models.lookups import CallStatus, LeadStatus, Priority
from briefdesk.schemas.lead import LeadCreate, LeadUpdate
from briefdesk.services import lead_history, leads
from briefdesk.services.lead_history import lead_history_page, lead_history_reader


@pytest.fixture
def lookups(db):
    connected = CallStatus(name="Connected")
    no_answer = CallStatus(name="Not Reachable")
    db.add_all([connected, no_answer])
    db.flush()
    high = Priority(name="High", call_status=[connected.id])
    low = Priority(name="Low", call_status=[no_answer.id])
    interested = LeadStatus(name="Interested", call_status=[connected.id])
    follow_up = LeadStatus(name="Follow Up", call_status=[no_answer.id])
    db.add_all([high, low, interested, follow_up])
    db.commit()
    return {
        "connected": connected.id,
        "no_answer": no_answer.id,
        "high": high.id,
        "low": low.id,
        "interested": interested.id,
        "follow_up": follow_up.id,
    }


def _history(db, lead_id):
    return lead_history_page(db, lead_id, page_size=50).items


def test_create_snapshots_assignment(db, actor, make_user, lookups):
    assignee = make_user("sam")

    lead = leads.create_lead(
        db, LeadCreate(name="Dana Levi", priority_id=lookups["low"], current_assign_user=assignee.id), actor_id=actor.id
    )

    (row,) = _history(db, lead.id)
    assert row.action == "created"
    assert row.assign_user_id == assignee.id
    assert row.priority_id == lookups["low"]
    assert row.current_user_id == actor.id
    assert row.lead_status_id is None
    assert row.call_status_id is None
    assert row.status == RecordStatus.ACTIVE


def test_update_writes_full_current_state(db, actor, make_user, lookups):
    assignee = make_user("sam")
    lead = leads.create_lead(
        db, LeadCreate(name="Dana Levi", priority_id=lookups["low"], current_assign_user=assignee.id), actor_id=actor.id
    )

    leads.update_priority(db, lead, lookups["high"], actor_id=actor.id)

    latest, first = _history(db, lead.id)
    assert first.priority_id == lookups["low"]
    assert latest.action == "updated"
    assert latest.priority_id == lookups["high"]
    # Unchanged columns are carried over, not left empty.
    assert latest.assign_user_id == assignee.id
    assert latest.lead_status_id is None
    assert latest.call_status_id is None


def test_untracked_field_change_skips_lead_history(db, actor):
    lead = leads.create_lead(db, LeadCreate(name="Dana Levi"), actor_id=actor.id)

    leads.update_lead(db, lead, LeadUpdate(comment="Met at the expo"), actor_id=actor.id)

    assert len(_history(db, lead.id)) == 1
    activity = db.execute(select(ActivityLog).where(ActivityLog.model == "Lead")).scalars().all()
    assert [a.action for a in activity] == ["created", "updated"]


def test_call_status_moves_lead_status_and_priority(db, actor, lookups):
    lead = leads.create_lead(db, LeadCreate(name="Dana Levi"), actor_id=actor.id)

    leads.add_call_status(db, lead, lookups["connected"], actor_id=actor.id)

    assert lead.call_status == lookups["connected"]
    assert lead.lead_status == lookups["interested"]
    assert lead.priority_id == lookups["high"]
    assert lead.call_attempt == 1
    latest = _history(db, lead.id)[0]
    assert latest.call_status_id == lookups["connected"]
    assert latest.lead_status_id == lookups["interested"]

    leads.add_call_status(db, lead, lookups["no_answer"], actor_id=actor.id)
    assert lead.lead_status == lookups["follow_up"]
    assert lead.call_attempt == 2


def test_create_with_call_status_derives_pipeline(db, actor, lookups):
    lead = leads.create_lead(
        db, LeadCreate(name="Dana Levi", call_status_id=lookups["no_answer"]), actor_id=actor.id
    )

    assert lead.call_status == lookups["no_answer"]
    assert lead.lead_status == lookups["follow_up"]
    assert lead.priority_id == lookups["low"]
    assert lead.call_attempt == 1


def test_remove_call_status_only_when_matching(db, actor, lookups):
    lead = leads.create_lead(db, LeadCreate(name="Dana Levi", call_status_id=lookups["connected"]), actor_id=actor.id)

    with pytest.raises(HTTPException) as exc:
        leads.remove_call_status(db, lead, lookups["no_answer"], actor_id=actor.id)
    assert exc.value.status_code == 400

    leads.remove_call_status(db, lead, lookups["connected"], actor_id=actor.id)
    assert lead.call_status is None
    assert lead.lead_status is None


def test_lead_defaults(db, actor):
    lead = leads.create_lead(db, LeadCreate(name="Dana  Levi!", mobile_number="050-1, 050-2 "), actor_id=actor.id)

    assert lead.slug == "dana-levi"
    assert lead.mobile_number == ["050-1", "050-2"]
    assert lead.created_by == actor.id
    assert len(lead.uuid) == 36


def test_history_write_failure_keeps_the_lead(db, actor, monkeypatch, caplog):
    def boom(db, event):
        raise RuntimeError("history table locked")

    monkeypatch.setattr(lead_history, "record_lead_history", boom)

    with caplog.at_level(logging.ERROR):
        lead = leads.create_lead(db, LeadCreate(name="Dana Levi"), actor_id=actor.id)

    assert db.get(Lead, lead.id) is not None
    assert db.execute(select(LeadAssignHistory)).scalars().all() == []
    assert "interceptor=lead_assign_history" in caplog.text
    # The generic log is independent of the failing writer.
    assert db.execute(select(ActivityLog).where(ActivityLog.model == "Lead")).scalars().all() != []


def test_history_survives_force_delete(db, actor):
    lead = leads.create_lead(db, LeadCreate(name="Dana Levi"), actor_id=actor.id)
    lead_id = lead.id
    leads.delete_lead(db, lead, actor_id=actor.id)
    leads.restore_lead(db, lead, actor_id=actor.id)
    leads.force_delete_lead(db, lead, actor_id=actor.id)

    assert db.get(Lead, lead_id) is None
    # force_deleted is not snapshotted into the lead trail.
    assert [row.action for row in _history(db, lead_id)] == ["restored", "deleted", "created"]


def test_specialized_reader_ignores_other_entity_types(db, actor):
    lead = leads.create_lead(db, LeadCreate(name="Dana Levi"), actor_id=actor.id)

    assert lead_history_reader.list_for_entity(db, "Lead", lead.id).total == 1
    assert lead_history_reader.list_for_entity(db, "Brief", lead.id).total == 0
    assert lead_history_reader.list_for_actor(db, actor.id).total == 1
