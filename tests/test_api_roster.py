"""Integration tests for roster, dashboard and service endpoints."""
from datetime import date

from churchdash.domain.exceptions import NetworkError


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_service_endpoint_shape(client):
    data = client.get("/service").json()
    assert data["weekday"] in {"sunday", "wednesday", "friday"}
    assert data["weekday_label"] in {"domingo", "miércoles", "viernes"}
    assert date.fromisoformat(data["service_date"])


def test_roster_snapshot_is_loaded_once(client, fake_loader):
    first = client.get("/roster")
    assert first.status_code == 200
    body = first.json()
    assert [m["name"] for m in body["members"]] == ["Ana Pérez", "Juan Soto", "Niño Díaz"]
    assert body["members"][0]["has_transport"] == "yes"
    assert body["members"][2]["ministries"] == ["Jóvenes"]

    client.get("/dashboard")
    assert fake_loader.calls == 1


def test_refresh_refetches(client, fake_loader):
    client.get("/roster")
    resp = client.post("/roster/refresh")
    assert resp.status_code == 200
    assert fake_loader.calls == 2


def test_dashboard_metrics(client):
    m = client.get("/dashboard").json()
    assert m["total_members"] == 3
    assert m["gender"] == {"male": 2, "female": 1}
    assert m["active_members"] == 2
    assert m["new_members"] == 2
    assert m["with_transport"] == 1
    assert m["communes"][0] == {"label": "Maipú", "count": 2}
    assert len(m["age_ranges"]) == 7


def test_birthdays_endpoint_lists_sorted_window(client):
    data = client.get("/dashboard/birthdays").json()
    assert data["total"] == len(data["items"])
    dates = [b["occurs_on"] for b in data["items"]]
    assert dates == sorted(dates)


def test_roster_members_filters(client):
    data = client.get("/roster/members", params={"kind": "active"}).json()
    assert [m["name"] for m in data["items"]] == ["Ana Pérez", "Juan Soto"]

    data = client.get("/roster/members", params={"q": "puente"}).json()
    assert data["total"] == 1


def test_unknown_selection_is_rejected(client):
    assert client.get("/roster/members", params={"kind": "bogus"}).status_code == 422


def test_network_error_maps_to_502(client, fake_loader):
    fake_loader.error = NetworkError("Roster fetch failed with status 503")
    resp = client.get("/roster")
    assert resp.status_code == 502
    assert "503" in resp.json()["detail"]


def test_failed_refresh_keeps_previous_snapshot(client, fake_loader):
    client.get("/roster")
    fake_loader.error = NetworkError("down")
    assert client.post("/roster/refresh").status_code == 502

    fake_loader.error = None
    assert client.get("/dashboard").json()["total_members"] == 3
    assert fake_loader.calls == 2
