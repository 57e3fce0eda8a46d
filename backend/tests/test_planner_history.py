import pytest
from fastapi import HTTPException

from briefdesk.schemas.brief import BriefCreate
from briefdesk.schemas.planner import PlannerCreate, PlannerUpdate
from briefdesk.services import briefs, planners
from briefdesk.services.activity_log import activity_reader
from briefdesk.services.planner_history import brief_planner_history, planner_history_reader


@pytest.fixture
def brief(db, actor):
    return briefs.create_brief(db, BriefCreate(name="Summer launch"), actor_id=actor.id)


def _history(db, planner_id):
    return planner_history_reader.list_for_entity(db, "Planner", planner_id, page_size=50).items


def test_submitted_plans_are_capped_and_reindexed(db, actor, brief):
    planner = planners.create_planner(db, PlannerCreate(brief_id=brief.id), actor_id=actor.id)

    planners.add_submitted_plan(db, planner, "plans/v1.pdf", actor_id=actor.id)
    planners.add_submitted_plan(db, planner, "plans/v2.pdf", actor_id=actor.id)
    with pytest.raises(HTTPException) as exc:
        planners.add_submitted_plan(db, planner, "plans/v3.pdf", actor_id=actor.id)
    assert exc.value.status_code == 400

    planners.remove_submitted_plan(db, planner, 0, actor_id=actor.id)
    assert planner.submitted_plan == ["plans/v2.pdf"]

    history = _history(db, planner.id)
    assert [row.action for row in history] == ["updated", "updated", "updated", "created"]
    assert history[0].submitted_plan == ["plans/v2.pdf"]
    assert history[1].submitted_plan == ["plans/v1.pdf", "plans/v2.pdf"]
    assert all(row.changed_by_id == actor.id for row in history)
    assert all(row.brief_id == brief.id for row in history)
    assert all(row.deleted_at is None for row in history)


def test_remove_missing_plan_index(db, actor, brief):
    planner = planners.create_planner(db, PlannerCreate(brief_id=brief.id), actor_id=actor.id)
    with pytest.raises(HTTPException) as exc:
        planners.remove_submitted_plan(db, planner, 3, actor_id=actor.id)
    assert exc.value.status_code == 404


def test_delete_restore_and_brief_view(db, actor, brief):
    first = planners.create_planner(db, PlannerCreate(brief_id=brief.id), actor_id=actor.id)
    second = planners.create_planner(db, PlannerCreate(brief_id=brief.id, backup_plan="backup.xlsx"), actor_id=actor.id)

    planners.update_planner(db, second, PlannerUpdate(backup_plan="backup-v2.xlsx"), actor_id=actor.id)
    planners.delete_planner(db, first, actor_id=actor.id)
    planners.restore_planner(db, first, actor_id=actor.id)

    assert [row.action for row in _history(db, first.id)] == ["restored", "deleted", "created"]
    page = brief_planner_history(db, brief.id)
    assert page.total == 5
    assert page.items[0].planner_id == first.id
    assert page.items[0].action == "restored"


def test_planner_changes_are_not_in_activity_log(db, actor, brief):
    planner = planners.create_planner(db, PlannerCreate(brief_id=brief.id), actor_id=actor.id)

    assert activity_reader.list_for_entity(db, "Planner", planner.id).total == 0
