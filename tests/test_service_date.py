"""Tests for service-date resolution in the congregation's timezone."""
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from churchdash.domain.service_date import (
    DECLARED_FREQUENCIES, ServiceDay, expected_service_days, local_now, resolve_service,
)

TZ = "America/Santiago"


def _utc(year, month, day, hour=15):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


# 2026-10-18 is a Sunday; Santiago is UTC-3 in October.
@pytest.mark.parametrize("day,expected_date,expected_weekday", [
    (18, date(2026, 10, 18), ServiceDay.SUNDAY),
    (19, date(2026, 10, 18), ServiceDay.SUNDAY),
    (20, date(2026, 10, 18), ServiceDay.SUNDAY),
    (21, date(2026, 10, 21), ServiceDay.WEDNESDAY),
    (22, date(2026, 10, 21), ServiceDay.WEDNESDAY),
    (23, date(2026, 10, 23), ServiceDay.FRIDAY),
    (24, date(2026, 10, 23), ServiceDay.FRIDAY),
])
def test_every_weekday_maps_to_latest_service(day, expected_date, expected_weekday):
    info = resolve_service(_utc(2026, 10, day), TZ)
    assert info.service_date == expected_date
    assert info.weekday is expected_weekday


def test_uses_local_date_not_utc_date():
    # 02:00 UTC Monday is still Sunday 23:00 in Santiago.
    info = resolve_service(datetime(2026, 10, 19, 2, tzinfo=timezone.utc), TZ)
    assert info.service_date == date(2026, 10, 18)
    assert info.weekday is ServiceDay.SUNDAY
    assert info.service_date_iso == "2026-10-18"


def test_registered_at_is_local_instant():
    now = _utc(2026, 10, 21)
    info = resolve_service(now, ZoneInfo(TZ))
    assert info.registered_at.tzinfo is not None
    assert info.registered_at == now
    assert info.registered_at.hour == 12


def test_naive_datetime_is_treated_as_utc():
    assert local_now(datetime(2026, 10, 19, 2), TZ).date() == date(2026, 10, 18)


def test_backward_mapping_crosses_month_boundary():
    # 2026-11-02 is a Monday; the previous Sunday is in October.
    info = resolve_service(_utc(2026, 11, 2), TZ)
    assert info.service_date == date(2026, 11, 1)
    info = resolve_service(_utc(2026, 12, 1), TZ)  # Tuesday
    assert info.service_date == date(2026, 11, 29)


def test_labels():
    assert ServiceDay.SUNDAY.label == "domingo"
    assert ServiceDay.WEDNESDAY.label == "miércoles"
    assert ServiceDay.FRIDAY.label == "viernes"


@pytest.mark.parametrize("frequency,expected", [
    ("sunday", {ServiceDay.SUNDAY}),
    ("sunday/friday", {ServiceDay.SUNDAY, ServiceDay.FRIDAY}),
    ("all", set(ServiceDay)),
    ("occasional", set()),
    (None, set()),
    ("Sunday / Wednesday", {ServiceDay.SUNDAY, ServiceDay.WEDNESDAY}),
])
def test_expected_service_days(frequency, expected):
    assert expected_service_days(frequency) == expected


def test_declared_frequencies_all_resolve():
    for frequency in DECLARED_FREQUENCIES:
        if frequency == "occasional":
            continue
        assert expected_service_days(frequency), frequency
