import datetime as dt

from sqlalchemy import func, select

from briefdesk.models.activity_log import ActivityLog
from briefdesk.models.enums import UserRole
from briefdesk.schemas.catalog import AccessIn, AccessPatch, BrandIn, BrandPatch, IndustryIn
from briefdesk.schemas.user import UserUpdate
from briefdesk.services import catalog
from briefdesk.services.activity_log import activity_reader, delete_old_activity_logs, log_custom_action
from briefdesk.services.history import HistoryFilters
from briefdesk.services.users import create_user, update_user


def _count(db):
    return db.execute(select(func.count()).select_from(ActivityLog)).scalar_one()


def _logs_for(db, model, model_id):
    return activity_reader.list_for_entity(db, model, model_id, page_size=50).items


def test_create_writes_full_new_data(db, actor):
    role = catalog.create_entry(db, catalog.roles, AccessIn(name="editor", display_name="Editor"), actor_id=actor.id)

    (entry,) = _logs_for(db, "Role", role.id)
    assert entry.action == "created"
    assert entry.user_id == actor.id
    assert entry.description == "Role created"
    assert entry.old_data is None
    assert entry.new_data["name"] == "editor"
    assert entry.new_data["display_name"] == "Editor"
    assert entry.new_data["uuid"] == role.uuid


def test_update_without_changes_writes_nothing(db, actor):
    role = catalog.create_entry(
        db, catalog.roles, AccessIn(name="editor", display_name="Editor", description="Edits"), actor_id=actor.id
    )
    before = _count(db)

    same = AccessPatch(name="editor", display_name="Editor", description="Edits")
    catalog.update_entry(db, catalog.roles, role, same, actor_id=actor.id)

    assert _count(db) == before


def test_update_logs_only_changed_fields(db, actor):
    brand = catalog.create_entry(db, catalog.brands, BrandIn(name="Acme", website="acme.test"), actor_id=actor.id)

    catalog.update_entry(db, catalog.brands, brand, BrandPatch(name="Acme Corp"), actor_id=actor.id)

    latest = _logs_for(db, "Brand", brand.id)[0]
    assert latest.action == "updated"
    assert latest.old_data == {"name": "Acme"}
    assert latest.new_data == {"name": "Acme Corp"}
    assert latest.description == "Brand updated"


def test_force_delete_keeps_attributes_in_new_data(db, actor):
    perm = catalog.create_entry(
        db, catalog.permissions, AccessIn(name="leads.export", display_name="Export leads"), actor_id=actor.id
    )
    perm_id, perm_uuid = perm.id, perm.uuid

    catalog.permissions.force_delete(db, perm, actor_id=actor.id)

    latest = _logs_for(db, "Permission", perm_id)[0]
    assert latest.action == "force_deleted"
    assert latest.old_data is None
    assert latest.new_data["id"] == perm_id
    assert latest.new_data["uuid"] == perm_uuid
    assert latest.new_data["name"] == "leads.export"
    assert latest.new_data["display_name"] == "Export leads"


def test_delete_then_restore_reads_newest_first(db, actor):
    industry = catalog.create_entry(db, catalog.industries, IndustryIn(name="Retail"), actor_id=actor.id)
    catalog.industries.soft_delete(db, industry, actor_id=actor.id)
    catalog.industries.restore(db, industry, actor_id=actor.id)

    logs = _logs_for(db, "Industry", industry.id)
    assert [log.action for log in logs] == ["restored", "deleted", "created"]
    deleted = logs[1]
    assert deleted.old_data["name"] == "Retail"
    assert deleted.new_data is None


def test_user_password_never_logged(db, actor):
    user = create_user(db, username="iris", password="iris1234", role=UserRole.SALES, actor_id=actor.id)
    update_user(db, user, UserUpdate(password="another-secret"), actor_id=actor.id)

    logs = _logs_for(db, "User", user.id)
    # The password-only update is saved but produces no diff.
    assert [log.action for log in logs] == ["created"]
    assert "password_hash" not in logs[0].new_data


def test_custom_action_and_filters(db, actor, make_user):
    other = make_user("sam")
    brand = catalog.create_entry(db, catalog.brands, BrandIn(name="Acme"), actor_id=actor.id)
    log_custom_action(
        db, entity_type="Brand", entity_id=brand.id, action="exported", actor_id=other.id, description="CSV export"
    )

    by_other = activity_reader.list_filtered(db, HistoryFilters(actor_id=other.id))
    assert [log.action for log in by_other.items] == ["exported"]

    exported = activity_reader.list_by_action(db, "exported")
    assert exported.total == 1
    assert exported.items[0].description == "CSV export"

    assert activity_reader.list_for_actor(db, actor.id).total == 1
    assert activity_reader.list_filtered(db, HistoryFilters(entity_type="Lead")).total == 0


def test_retention_purge_removes_only_old_rows(db, actor):
    old = ActivityLog(
        model="Brand",
        model_id=1,
        action="created",
        created_at=dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=120),
    )
    db.add(old)
    db.commit()
    catalog.create_entry(db, catalog.brands, BrandIn(name="Fresh"), actor_id=actor.id)

    assert delete_old_activity_logs(db, 90) == 1
    remaining = activity_reader.list_recent(db, 10)
    assert [log.model for log in remaining] == ["Brand"]
    assert remaining[0].new_data["name"] == "Fresh"
