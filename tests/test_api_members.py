"""Integration tests for member management endpoints."""
import json

from churchdash.config import settings

ADMIN = {"X-Auth-Claims": json.dumps({"app_metadata": {"roles": ["admin"]}})}


def _create(client, **overrides):
    payload = {"name": "María Rojas", "person_id": "12.345.678-9", "declared_frequency": "sunday"}
    payload.update(overrides)
    return client.post("/members", json=payload)


def test_register_visitor_with_id(client):
    resp = _create(client)
    assert resp.status_code == 201
    data = resp.json()
    assert data["person_id"] == "12.345.678-9"
    assert data["registration_type"] == "visitor"
    assert data["is_active"] is True


def test_visitor_without_id_gets_surrogate(client):
    resp = _create(client, person_id="  ")
    assert resp.status_code == 201
    assert resp.json()["person_id"].startswith("VISITOR-")


def test_duplicate_person_id_is_conflict(client):
    assert _create(client).status_code == 201
    resp = _create(client, name="Otra Persona")
    assert resp.status_code == 409


def test_validation_rules(client):
    assert _create(client, name="  Al ").status_code == 422
    assert _create(client, person_id="123").status_code == 422
    assert _create(client, declared_frequency="daily").status_code == 422


def test_list_members_search_and_order(client):
    _create(client, name="Zoe Díaz", person_id="11.111.111-1")
    _create(client, name="Ana Rojas", person_id="22.222.222-2", declared_frequency="friday")

    names = [m["name"] for m in client.get("/members").json()["items"]]
    assert names == ["Ana Rojas", "Zoe Díaz"]

    found = client.get("/members", params={"q": "FRIDAY"}).json()
    assert [m["name"] for m in found["items"]] == ["Ana Rojas"]
    assert found["items"][0]["last_attendance"] is None


def test_update_frequency(client):
    member_id = _create(client).json()["id"]
    resp = client.patch(f"/members/{member_id}", json={"declared_frequency": "all"})
    assert resp.status_code == 200
    assert resp.json()["declared_frequency"] == "all"


def test_update_unknown_member_is_404(client):
    assert client.patch("/members/999", json={"declared_frequency": "all"}).status_code == 404
    assert client.get("/members/999/history").status_code == 404


def test_admin_required_without_bypass(client, monkeypatch):
    monkeypatch.setattr(settings, "BYPASS_ADMIN", False)

    assert _create(client).status_code == 403
    denied = client.post(
        "/members", headers={"X-Auth-Claims": "not json"},
        json={"name": "María Rojas"},
    )
    assert denied.status_code == 403
    assert denied.json()["detail"] == "Malformed session claims"

    member = {"X-Auth-Claims": json.dumps({"user_metadata": {"role": "member"}})}
    assert client.post("/members", headers=member, json={"name": "María Rojas"}).status_code == 403

    assert client.post("/members", headers=ADMIN, json={"name": "María Rojas"}).status_code == 201
    # Reads stay open.
    assert client.get("/members").status_code == 200
