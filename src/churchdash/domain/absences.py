"""Consecutive-absence alerts.

A member is expected at the services their declared frequency names. Walking
the held services of those weekdays from newest to oldest, the alert counts
how many in a row the member missed.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Sequence

from churchdash.domain.service_date import ServiceDay, expected_service_days

ALERT_TYPE = "consecutive_absences"


@dataclass(frozen=True)
class HeldService:
    service_date: date
    weekday: ServiceDay


@dataclass(frozen=True)
class ExpectedMember:
    member_id: int
    person_id: str
    name: str
    declared_frequency: str


@dataclass(frozen=True)
class AbsenceAlert:
    member_id: int
    person_id: str
    name: str
    declared_frequency: str
    consecutive_absences: int
    missed_dates: list[date]
    alert_type: str
    detail: str


def count_consecutive_absences(
    expected: frozenset[ServiceDay],
    held: Sequence[HeldService],
    attended: set[date],
) -> list[date]:
    """Missed dates, newest first, up to the most recent attended service."""
    missed: list[date] = []
    for service in sorted(held, key=lambda s: s.service_date, reverse=True):
        if service.weekday not in expected:
            continue
        if service.service_date in attended:
            break
        missed.append(service.service_date)
    return missed


def consecutive_absence_alerts(
    members: Sequence[ExpectedMember],
    held: Sequence[HeldService],
    attended_by_person: Mapping[str, set[date]],
    threshold: int,
) -> list[AbsenceAlert]:
    alerts: list[AbsenceAlert] = []
    for member in members:
        expected = expected_service_days(member.declared_frequency)
        if not expected:
            continue
        missed = count_consecutive_absences(
            expected, held, attended_by_person.get(member.person_id, set()),
        )
        if len(missed) < threshold:
            continue
        dates = ", ".join(d.isoformat() for d in missed[:threshold])
        alerts.append(AbsenceAlert(
            member_id=member.member_id,
            person_id=member.person_id,
            name=member.name,
            declared_frequency=member.declared_frequency,
            consecutive_absences=len(missed),
            missed_dates=missed,
            alert_type=ALERT_TYPE,
            detail=f"Missed {len(missed)} expected services in a row (latest: {dates})",
        ))
    alerts.sort(key=lambda a: a.consecutive_absences, reverse=True)
    return alerts
