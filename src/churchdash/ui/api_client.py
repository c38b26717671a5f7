"""Typed HTTP client for Streamlit pages.

Only imports from ``churchdash.api.schemas``; never ORM, never DB.
Instantiate via ``get_client()`` which caches per Streamlit session.
"""
from __future__ import annotations

import json
from typing import Any

import httpx
import streamlit as st

from churchdash.config import settings
from churchdash.api.schemas.service import ServiceInfoRead
from churchdash.api.schemas.roster import MemberRecordList, RosterSnapshotRead
from churchdash.api.schemas.dashboard import BirthdayList, DashboardMetricsRead
from churchdash.api.schemas.members import MemberList, MemberRead, MemberUpdate, VisitorCreate
from churchdash.api.schemas.attendance import (
    AbsenceAlertList, AttendanceList, AttendanceSaveResponse, PersonSummaryList,
)


class APIError(Exception):
    """Raised when the backend returns a 4xx/5xx response."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409


class ChurchDashClient:
    """One method per backend endpoint.  All return pure Pydantic DTOs."""

    def __init__(
        self,
        base_url: str | None = None,
        claims: dict[str, Any] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"X-Auth-Claims": json.dumps(claims)} if claims else {}
        self._client = httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=30.0, headers=headers, transport=transport,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        raise APIError(resp.status_code, str(detail))

    def _get(self, path: str, **params: Any) -> httpx.Response:
        clean = {k: v for k, v in params.items() if v not in (None, "")}
        resp = self._client.get(path, params=clean)
        self._raise_for_status(resp)
        return resp

    # ------------------------------------------------------------------
    # Service & roster
    # ------------------------------------------------------------------

    def get_service(self) -> ServiceInfoRead:
        return ServiceInfoRead.model_validate(self._get("/service").json())

    def get_roster(self) -> RosterSnapshotRead:
        return RosterSnapshotRead.model_validate(self._get("/roster").json())

    def refresh_roster(self) -> RosterSnapshotRead:
        resp = self._client.post("/roster/refresh")
        self._raise_for_status(resp)
        return RosterSnapshotRead.model_validate(resp.json())

    def list_roster_members(self, q: str | None = None, kind: str | None = None) -> MemberRecordList:
        return MemberRecordList.model_validate(self._get("/roster/members", q=q, kind=kind).json())

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def get_dashboard(self) -> DashboardMetricsRead:
        return DashboardMetricsRead.model_validate(self._get("/dashboard").json())

    def get_birthdays(self) -> BirthdayList:
        return BirthdayList.model_validate(self._get("/dashboard/birthdays").json())

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def list_members(self, q: str | None = None) -> MemberList:
        return MemberList.model_validate(self._get("/members", q=q).json())

    def register_visitor(self, payload: VisitorCreate) -> MemberRead:
        resp = self._client.post("/members", json=payload.model_dump(mode="json"))
        self._raise_for_status(resp)
        return MemberRead.model_validate(resp.json())

    def update_member(self, member_id: int, payload: MemberUpdate) -> MemberRead:
        resp = self._client.patch(f"/members/{member_id}", json=payload.model_dump())
        self._raise_for_status(resp)
        return MemberRead.model_validate(resp.json())

    def member_history(self, member_id: int) -> AttendanceList:
        return AttendanceList.model_validate(self._get(f"/members/{member_id}/history").json())

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    def save_attendance(self, member_ids: list[int]) -> AttendanceSaveResponse:
        resp = self._client.post("/attendance", json={"member_ids": member_ids})
        self._raise_for_status(resp)
        return AttendanceSaveResponse.model_validate(resp.json())

    def attendance_summary(self) -> PersonSummaryList:
        return PersonSummaryList.model_validate(self._get("/attendance/summary").json())

    def recent_attendance(self) -> AttendanceList:
        return AttendanceList.model_validate(self._get("/attendance/recent").json())

    def absence_alerts(self) -> AbsenceAlertList:
        return AbsenceAlertList.model_validate(self._get("/attendance/alerts").json())

    def export_attendance(self) -> tuple[str, bytes]:
        """Return ``(filename, csv_bytes)``."""
        resp = self._get("/attendance/export")
        disposition = resp.headers.get("content-disposition", "")
        filename = "attendance.csv"
        if "filename=" in disposition:
            filename = disposition.split("filename=", 1)[1].strip('"')
        return filename, resp.content

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health(self) -> dict:
        return self._get("/health").json()


# ------------------------------------------------------------------
# Streamlit helper: one client per session
# ------------------------------------------------------------------

def get_client() -> ChurchDashClient:
    """Return a cached ``ChurchDashClient`` for the current Streamlit session."""
    if "churchdash_api_client" not in st.session_state:
        from churchdash.ui.state import get_claims
        base_url = st.session_state.get("churchdash_api_url", settings.API_BASE_URL)
        st.session_state["churchdash_api_client"] = ChurchDashClient(
            base_url=base_url, claims=get_claims(),
        )
    return st.session_state["churchdash_api_client"]


def reset_client() -> None:
    st.session_state.pop("churchdash_api_client", None)
