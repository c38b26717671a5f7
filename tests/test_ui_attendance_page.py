"""Streamlit AppTest runs of the attendance page against an in-memory client."""
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from churchdash.api.schemas.attendance import AbsenceAlertList, AttendanceSaveResponse
from churchdash.api.schemas.members import MemberList, MemberRead
from churchdash.api.schemas.service import ServiceInfoRead
from churchdash.domain.service_date import ServiceDay
from churchdash.ui.api_client import APIError

PAGE = Path(__file__).parent.parent / "src" / "churchdash" / "ui" / "pages" / "2_attendance.py"


def _member(member_id: int, name: str, frequency: str) -> MemberRead:
    return MemberRead(
        id=member_id, person_id=f"{member_id}1.111.111-1", name=name,
        declared_frequency=frequency, registration_type="member", is_active=True,
    )


class FakeClient:
    def __init__(self, members: list[MemberRead]) -> None:
        self.members = members
        self.saved: list[list[int]] = []
        self.updates: list[tuple[int, str]] = []
        self.update_error: APIError | None = None

    def get_service(self):
        return ServiceInfoRead(
            service_date=date(2026, 10, 18), weekday=ServiceDay.SUNDAY, weekday_label="domingo",
            registered_at=datetime(2026, 10, 18, 15, tzinfo=timezone.utc),
        )

    def absence_alerts(self):
        return AbsenceAlertList(items=[], total=0)

    def list_members(self, q=None):
        return MemberList(items=self.members, total=len(self.members))

    def save_attendance(self, member_ids):
        self.saved.append(list(member_ids))
        return AttendanceSaveResponse(
            service_date=date(2026, 10, 18), weekday=ServiceDay.SUNDAY, saved=len(member_ids),
        )

    def update_member(self, member_id, payload):
        self.updates.append((member_id, payload.declared_frequency))
        if self.update_error is not None:
            raise self.update_error
        return next(m for m in self.members if m.id == member_id)


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient([
        _member(1, "Ana Pérez", "sunday"),
        _member(2, "Juan Soto", "all"),
    ])


@pytest.fixture
def page(fake_client) -> AppTest:
    at = AppTest.from_file(str(PAGE), default_timeout=30)
    at.session_state["churchdash_api_client"] = fake_client
    at.run()
    assert not at.exception
    return at


def _ticks(at: AppTest) -> list[bool]:
    return [at.checkbox(key=f"present_{i}").value for i in (1, 2)]


def test_select_results_ticks_every_listed_member(page):
    page.button(key="select_results").click().run()
    assert page.session_state["selected_members"] == {1, 2}
    assert _ticks(page) == [True, True]

    page.button(key="select_results").click().run()
    assert page.session_state["selected_members"] == set()
    assert _ticks(page) == [False, False]


def test_checkbox_updates_selection(page):
    page.checkbox(key="present_2").check().run()
    assert page.session_state["selected_members"] == {2}
    page.checkbox(key="present_2").uncheck().run()
    assert page.session_state["selected_members"] == set()


def test_save_sends_selection_then_clears_it(page, fake_client):
    page.checkbox(key="present_1").check().run()
    page.button(key="save_attendance").click().run()
    page.run()

    assert fake_client.saved == [[1]]
    assert page.session_state["selected_members"] == set()
    assert _ticks(page) == [False, False]
    assert page.session_state["last_saved_service"] == ("2026-10-18", "domingo")


def test_viewing_page_never_rewrites_frequencies(fake_client):
    fake_client.members.append(_member(3, "Rosa Díaz", "weekly"))
    at = AppTest.from_file(str(PAGE), default_timeout=30)
    at.session_state["churchdash_api_client"] = fake_client
    at.run()
    at.run()
    assert fake_client.updates == []
    assert at.selectbox(key="freq_3").value == "weekly"


def test_frequency_change_is_saved_once(page, fake_client):
    page.selectbox(key="freq_1").select("all").run()
    page.run()
    assert fake_client.updates == [(1, "all")]


def test_failed_frequency_update_is_not_retried(page, fake_client):
    fake_client.update_error = APIError(403, "Admin role required")
    page.selectbox(key="freq_1").select("friday").run()
    assert any("Admin role required" in e.value for e in page.error)
    assert page.selectbox(key="freq_1").value == "sunday"

    page.run()
    assert fake_client.updates == [(1, "friday")]
    assert not page.error
