import datetime as dt
import logging
from decimal import Decimal

from briefdesk.models.catalog import Brand
from briefdesk.models.enums import ChangeAction
from briefdesk.models.user import User
from briefdesk.services.change_tracking import ChangeEvent, ChangeInterceptor, InterceptorRegistry, diff, snapshot
from briefdesk.services.repository import EntityRepository
from briefdesk.services.watchers import build_registry


class Recorder(ChangeInterceptor):
    name = "recorder"

    def __init__(self):
        self.events = []

    def created(self, db, event):
        self.events.append(event)

    def updated(self, db, event):
        self.events.append(event)

    def deleted(self, db, event):
        self.events.append(event)

    def restored(self, db, event):
        self.events.append(event)

    def force_deleted(self, db, event):
        self.events.append(event)


class Broken(ChangeInterceptor):
    name = "broken"

    def created(self, db, event):
        raise RuntimeError("disk full")


def _event(action=ChangeAction.CREATED, **kw):
    return ChangeEvent(action=action, entity_type="Brand", entity_id=1, actor_id=None, **kw)


def test_diff_keeps_only_changed_fields():
    before = {"name": "Acme", "website": None, "updated_at": 1}
    after = {"name": "Acme Corp", "website": None, "updated_at": 2}
    assert diff(before, after) == ({"name": "Acme"}, {"name": "Acme Corp"})


def test_diff_treats_equal_decimals_as_unchanged():
    assert diff({"budget": Decimal("10.00")}, {"budget": Decimal("10")}) == ({}, {})


def test_diff_compares_naive_and_aware_datetimes_on_wall_clock():
    aware = dt.datetime(2026, 3, 1, 9, 30, tzinfo=dt.timezone.utc)
    assert diff({"submission_date": aware.replace(tzinfo=None)}, {"submission_date": aware}) == ({}, {})
    later = aware + dt.timedelta(hours=1)
    assert diff({"submission_date": aware.replace(tzinfo=None)}, {"submission_date": later})[1] == {"submission_date": later}


def test_snapshot_skips_excluded_fields(db):
    user = User(username="iris", password_hash="x" * 20)
    db.add(user)
    db.commit()
    state = snapshot(user)
    assert state["username"] == "iris"
    assert "password_hash" not in state


def test_register_is_idempotent_per_instance():
    registry = InterceptorRegistry()
    rec = Recorder()
    registry.register("Brand", rec)
    registry.register(Brand, rec)
    assert registry.interceptors_for("Brand") == [rec]
    assert registry.registered_types() == ["Brand"]


def test_dispatch_skips_empty_update(db):
    registry = InterceptorRegistry()
    rec = Recorder()
    registry.register("Brand", rec)
    assert registry.dispatch(db, _event(ChangeAction.UPDATED, old_values={}, new_values={})) == 0
    assert rec.events == []


def test_dispatch_ignores_unregistered_types(db):
    registry = InterceptorRegistry()
    assert registry.dispatch(db, _event()) == 0


def test_failing_interceptor_is_logged_and_skipped(db, caplog):
    registry = InterceptorRegistry()
    rec = Recorder()
    registry.register("Brand", Broken())
    registry.register("Brand", rec)

    with caplog.at_level(logging.ERROR):
        done = registry.dispatch(db, _event(new_values={"name": "Acme"}))

    assert done == 1
    assert len(rec.events) == 1
    assert "History write failed" in caplog.text
    assert "interceptor=broken" in caplog.text


def test_repository_event_payloads(db, actor):
    registry = InterceptorRegistry()
    rec = Recorder()
    registry.register(Brand, rec)
    brands = EntityRepository(Brand, registry=registry)

    brand = brands.create(db, {"name": "Acme"}, actor_id=actor.id)
    brands.update(db, brand, {"name": "Acme Corp"}, actor_id=actor.id)
    brands.soft_delete(db, brand, actor_id=actor.id)
    brands.restore(db, brand, actor_id=actor.id)
    brand_id = brand.id
    brands.force_delete(db, brand, actor_id=actor.id)

    created, updated, deleted, restored, forced = rec.events
    assert [e.action for e in rec.events] == [
        ChangeAction.CREATED,
        ChangeAction.UPDATED,
        ChangeAction.DELETED,
        ChangeAction.RESTORED,
        ChangeAction.FORCE_DELETED,
    ]
    assert all(e.actor_id == actor.id and e.entity_id == brand_id for e in rec.events)

    assert created.old_values is None
    assert created.new_values["name"] == "Acme"

    assert updated.old_values == {"name": "Acme"}
    assert updated.new_values == {"name": "Acme Corp"}
    assert updated.snapshot["name"] == "Acme Corp"

    assert deleted.new_values is None
    assert deleted.old_values["status"] == 1
    assert deleted.snapshot["name"] == "Acme Corp"

    assert restored.old_values is None and restored.new_values is None
    assert restored.snapshot["status"] == 1

    assert forced.old_values is None
    assert forced.new_values["name"] == "Acme Corp"
    assert db.get(Brand, brand_id) is None


def test_event_build_failure_keeps_the_committed_write(db, actor, monkeypatch, caplog):
    registry = InterceptorRegistry()
    rec = Recorder()
    registry.register(Brand, rec)
    brands = EntityRepository(Brand, registry=registry)
    brand = brands.create(db, {"name": "Acme"}, actor_id=actor.id)
    brands.soft_delete(db, brand, actor_id=actor.id)

    def unavailable(entity):
        raise RuntimeError("snapshot unavailable")

    monkeypatch.setattr("briefdesk.services.repository.snapshot", unavailable)
    with caplog.at_level(logging.ERROR):
        restored = brands.restore(db, brand, actor_id=actor.id)
        created = brands.create(db, {"name": "Globex"}, actor_id=actor.id)

    assert [e.action for e in rec.events] == [ChangeAction.CREATED, ChangeAction.DELETED]
    assert "Change event build failed" in caplog.text
    assert "action=restored" in caplog.text
    assert db.get(Brand, restored.id).status == 1
    assert db.get(Brand, created.id).name == "Globex"


def test_default_registry_wiring():
    registry = build_registry()
    assert [i.name for i in registry.interceptors_for("Lead")] == ["activity_log", "lead_assign_history"]
    assert [i.name for i in registry.interceptors_for("Brief")] == ["activity_log", "brief_assign_history"]
    assert [i.name for i in registry.interceptors_for("Planner")] == ["planner_history"]
    assert [i.name for i in registry.interceptors_for("Permission")] == ["activity_log"]
    assert len(registry.registered_types()) == 15
