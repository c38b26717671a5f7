"""Tests for the UI's typed HTTP client (no Streamlit runtime needed)."""
import json

import httpx
import pytest

from churchdash.ui.api_client import APIError, ChurchDashClient


def _client(handler, claims=None) -> ChurchDashClient:
    return ChurchDashClient(
        base_url="http://api.test", claims=claims, transport=httpx.MockTransport(handler),
    )


def test_claims_are_forwarded_as_header():
    seen = {}

    def handler(request):
        seen["claims"] = request.headers.get("x-auth-claims")
        return httpx.Response(200, json={"status": "ok"})

    claims = {"app_metadata": {"role": "admin"}}
    assert _client(handler, claims).health() == {"status": "ok"}
    assert json.loads(seen["claims"]) == claims


def test_error_detail_is_raised_as_api_error():
    def handler(request):
        return httpx.Response(409, json={"detail": "Record already exists"})

    with pytest.raises(APIError) as excinfo:
        _client(handler).save_attendance([1])
    assert excinfo.value.is_conflict
    assert excinfo.value.detail == "Record already exists"


def test_empty_query_params_are_dropped():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"items": [], "total": 0})

    _client(handler).list_roster_members(q="", kind="active")
    assert seen["params"] == {"kind": "active"}


def test_export_reads_filename_from_disposition():
    def handler(request):
        return httpx.Response(
            200, content=b"person_id,name\n",
            headers={"Content-Disposition": 'attachment; filename="attendance-2026-10-18.csv"'},
        )

    filename, body = _client(handler).export_attendance()
    assert filename == "attendance-2026-10-18.csv"
    assert body == b"person_id,name\n"


def test_base_url_defaults_to_settings(monkeypatch):
    from churchdash.config import settings
    monkeypatch.setattr(settings, "API_BASE_URL", "http://backend.internal:9000")
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"status": "ok"})

    ChurchDashClient(transport=httpx.MockTransport(handler)).health()
    assert seen["url"] == "http://backend.internal:9000/health"
