from briefdesk.core.config import settings
from briefdesk.models.lookups import PlannerStatus


def test_brand_changes_are_browsable(client, actor):
    created = client.post("/brands/", json={"name": "Acme", "website": "acme.test"})
    assert created.status_code == 201
    brand_id = created.json()["id"]

    updated = client.patch(f"/brands/{brand_id}", json={"name": "Acme Corp"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Acme Corp"

    res = client.get(f"/activity-logs/model/Brand/{brand_id}")
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 2
    latest, first = body["items"]
    assert latest["action"] == "updated"
    assert latest["old_data"] == {"name": "Acme"}
    assert latest["new_data"] == {"name": "Acme Corp"}
    assert latest["user"]["username"] == actor.username
    assert first["action"] == "created"

    single = client.get(f"/activity-logs/{latest['id']}")
    assert single.status_code == 200
    assert single.json()["model_id"] == brand_id


def test_filtered_index_and_paging(client, actor):
    for name in ("Alpha", "Beta", "Gamma"):
        client.post("/industries/", json={"name": name})

    res = client.get("/activity-logs/", params={"model": "Industry", "action": "created", "page_size": 2})
    body = res.json()
    assert body["total"] == 3
    assert body["pages"] == 2
    assert [item["new_data"]["name"] for item in body["items"]] == ["Gamma", "Beta"]

    by_user = client.get(f"/activity-logs/user/{actor.id}").json()
    assert by_user["total"] == 3

    recent = client.get("/activity-logs/recent", params={"limit": 1}).json()
    assert len(recent) == 1


def test_missing_log_is_404(client):
    assert client.get("/activity-logs/999").status_code == 404


def test_lead_flow_through_api(client, actor):
    res = client.post("/leads/", json={"name": "Dana Levi", "current_assign_user": actor.id})
    assert res.status_code == 201
    lead_id = res.json()["id"]

    assert client.delete(f"/leads/{lead_id}").status_code == 200
    assert client.get(f"/leads/{lead_id}").status_code == 404
    assert client.post(f"/leads/{lead_id}/restore").status_code == 200
    assert client.post(f"/leads/{lead_id}/restore").status_code == 400

    history = client.get(f"/leads/{lead_id}/history").json()
    assert [row["action"] for row in history["items"]] == ["restored", "deleted", "created"]
    assert history["items"][0]["assign_user_id"] == actor.id


def test_purge_requires_tasks_token(client):
    assert client.post("/tasks/purge-activity-logs").status_code == 401

    res = client.post("/tasks/purge-activity-logs", headers={"X-Tasks-Token": settings.tasks_secret})
    assert res.status_code == 200
    assert res.json() == {"deleted": 0, "retention_days": settings.activity_log_retention_days}


def test_lead_patch_with_null_name_is_rejected(client):
    lead_id = client.post("/leads/", json={"name": "Dana Levi"}).json()["id"]

    res = client.patch(f"/leads/{lead_id}", json={"name": None})
    assert res.status_code == 422

    lead = client.get(f"/leads/{lead_id}").json()
    assert lead["name"] == "Dana Levi"
    assert lead["slug"] == "dana-levi"
    assert client.get(f"/activity-logs/model/Lead/{lead_id}").json()["total"] == 1


def test_catalog_patch_rejects_null_for_required_columns(client):
    brand_id = client.post("/brands/", json={"name": "Acme", "website": "acme.test"}).json()["id"]
    designation_id = client.post("/designations/", json={"title": "Media Buyer"}).json()["id"]

    assert client.patch(f"/brands/{brand_id}", json={"name": None}).status_code == 422
    assert client.patch(f"/designations/{designation_id}", json={"title": None}).status_code == 422

    # Nullable columns still accept an explicit null.
    res = client.patch(f"/brands/{brand_id}", json={"website": None})
    assert res.status_code == 200
    assert res.json()["name"] == "Acme"
    assert res.json()["website"] is None


def test_brief_history_reads(client, actor, make_user):
    rina = make_user("rina")
    brief_id = client.post("/briefs/", json={"name": "Summer launch"}).json()["id"]
    assert client.post(f"/briefs/{brief_id}/assign", json={"user_id": rina.id}).status_code == 200

    assigned = client.get(f"/briefs/history/assigned-to/{rina.id}").json()
    assert assigned["total"] == 1
    row = assigned["items"][0]
    assert row["assign_to_id"] == rina.id
    assert row["assign_by_id"] == actor.id
    assert row["deleted_at"] is None

    assert client.get("/briefs/history").json()["total"] == 2
    filtered = client.get("/briefs/history", params={"assign_to_id": rina.id}).json()
    assert [item["id"] for item in filtered["items"]] == [row["id"]]

    recent = client.get("/briefs/history/recent", params={"limit": 1}).json()
    assert [item["id"] for item in recent] == [row["id"]]

    single = client.get(f"/briefs/history/uuid/{row['uuid']}")
    assert single.status_code == 200
    assert single.json()["brief_id"] == brief_id
    assert client.get("/briefs/history/uuid/missing").status_code == 404


def test_planner_history_reads(client, db):
    draft = PlannerStatus(name="Draft")
    submitted = PlannerStatus(name="Submitted")
    db.add_all([draft, submitted])
    db.commit()

    brief_id = client.post("/briefs/", json={"name": "Summer launch"}).json()["id"]
    res = client.post("/planners/", json={"brief_id": brief_id, "planner_status_id": draft.id})
    assert res.status_code == 201
    planner_id = res.json()["id"]
    client.patch(f"/planners/{planner_id}", json={"planner_status_id": submitted.id})

    by_status = client.get(f"/planners/history/status/{submitted.id}").json()
    assert by_status["total"] == 1
    assert by_status["items"][0]["action"] == "updated"
    assert by_status["items"][0]["deleted_at"] is None
    assert client.get(f"/planners/history/status/{draft.id}").json()["items"][0]["action"] == "created"

    filtered = client.get("/planners/history", params={"planner_status_id": draft.id}).json()
    assert filtered["total"] == 1
    assert filtered["items"][0]["planner_id"] == planner_id

    recent = client.get("/planners/history/recent", params={"limit": 1}).json()
    assert len(recent) == 1
    assert recent[0]["planner_status_id"] == submitted.id
