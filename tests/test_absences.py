"""Tests for consecutive-absence alerts."""
from datetime import date

from churchdash.domain.absences import (
    ALERT_TYPE, ExpectedMember, HeldService, consecutive_absence_alerts, count_consecutive_absences,
)
from churchdash.domain.service_date import ServiceDay

SUN, WED, FRI = ServiceDay.SUNDAY, ServiceDay.WEDNESDAY, ServiceDay.FRIDAY

HELD = [
    HeldService(date(2026, 9, 27), SUN),
    HeldService(date(2026, 9, 30), WED),
    HeldService(date(2026, 10, 4), SUN),
    HeldService(date(2026, 10, 9), FRI),
    HeldService(date(2026, 10, 11), SUN),
    HeldService(date(2026, 10, 18), SUN),
]


def test_counts_only_expected_weekdays_until_last_attendance():
    missed = count_consecutive_absences(frozenset({SUN}), HELD, {date(2026, 9, 27)})
    assert missed == [date(2026, 10, 18), date(2026, 10, 11), date(2026, 10, 4)]


def test_attending_latest_service_resets_streak():
    assert count_consecutive_absences(frozenset({SUN}), HELD, {date(2026, 10, 18)}) == []


def test_alerts_respect_threshold_and_sort_by_streak():
    members = [
        ExpectedMember(1, "P1", "Ana", "sunday"),
        ExpectedMember(2, "P2", "Juan", "all"),
        ExpectedMember(3, "P3", "Visita", "occasional"),
        ExpectedMember(4, "P4", "Rosa", "friday"),
    ]
    attended = {"P1": {date(2026, 9, 27)}}
    alerts = consecutive_absence_alerts(members, HELD, attended, threshold=3)

    assert [a.name for a in alerts] == ["Juan", "Ana"]
    juan, ana = alerts
    assert juan.consecutive_absences == 6
    assert ana.consecutive_absences == 3
    assert ana.alert_type == ALERT_TYPE
    assert ana.detail == (
        "Missed 3 expected services in a row (latest: 2026-10-18, 2026-10-11, 2026-10-04)"
    )


def test_no_held_services_means_no_alerts():
    members = [ExpectedMember(1, "P1", "Ana", "sunday")]
    assert consecutive_absence_alerts(members, [], {}, threshold=1) == []
