"""Dashboard aggregates over a roster snapshot.

Every function here is pure and total: an empty roster yields zero counts and
zero percentages.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Callable, Iterable, Sequence

from churchdash.domain.roster import MINISTRIES, MemberRecord, YesNo

NOT_SPECIFIED = "not specified"

AGE_RANGES: list[tuple[str, int, int | None]] = [
    ("0-10", 0, 10),
    ("11-20", 11, 20),
    ("21-30", 21, 30),
    ("31-40", 31, 40),
    ("41-50", 41, 50),
    ("51-60", 51, 60),
    ("61+", 61, None),
]

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

BIRTHDAY_WINDOW_DAYS = 7

# Fragile contract with the upstream form vocabulary; see DESIGN.md.
ACTIVE_MARKERS = ("todos", "viernes y domingo")
NEW_MARKERS = ("mes", "2-5", "1-3")


@dataclass(frozen=True)
class Bucket:
    label: str
    count: int


@dataclass(frozen=True)
class GenderSplit:
    male: int
    female: int


@dataclass(frozen=True)
class UpcomingBirthday:
    name: str
    birth_date: str
    age: int
    weekday: str
    occurs_on: date
    is_past: bool = False


@dataclass(frozen=True)
class DashboardMetrics:
    total_members: int
    gender: GenderSplit
    age_ranges: list[Bucket]
    group_participants: int
    attendance_frequency: list[Bucket]
    technology_access_rate: float
    communes: list[Bucket]
    tenure: list[Bucket]
    with_transport: int
    active_members: int
    new_members: int
    upcoming_birthdays: list[UpcomingBirthday]
    active_share: float = 0.0
    group_share: float = 0.0
    ministries: list[Bucket] = field(default_factory=list)


def percent(part: int, total: int) -> float:
    return (part / total) * 100 if total > 0 else 0.0


def is_active(member: MemberRecord) -> bool:
    days = member.attendance_days.lower()
    return any(marker in days for marker in ACTIVE_MARKERS)


def is_new(member: MemberRecord) -> bool:
    tenure = member.attendance_tenure.lower()
    return any(marker in tenure for marker in NEW_MARKERS)


def _histogram(values: Iterable[str]) -> list[Bucket]:
    counts: dict[str, int] = {}
    for value in values:
        label = value or NOT_SPECIFIED
        counts[label] = counts.get(label, 0) + 1
    return [Bucket(label, count) for label, count in counts.items()]


def age_histogram(members: Sequence[MemberRecord]) -> list[Bucket]:
    return [
        Bucket(label, sum(
            1 for m in members if m.age >= low and (high is None or m.age <= high)
        ))
        for label, low, high in AGE_RANGES
    ]


def ministry_histogram(members: Sequence[MemberRecord]) -> list[Bucket]:
    counts = {name: 0 for name in MINISTRIES}
    for member in members:
        for name in member.ministries:
            counts[name] += 1
    return [Bucket(name, count) for name, count in counts.items()]


def next_birthday(birth_date: str, today: date) -> date | None:
    """Next occurrence (today included) of a ``DD/MM/YYYY`` birthday.

    Returns ``None`` for malformed input. 29/02 falls on 01/03 in common years.
    """
    parts = birth_date.strip().split("/")
    if len(parts) != 3:
        return None
    try:
        day, month = int(parts[0]), int(parts[1])
    except ValueError:
        return None

    def occurrence(year: int) -> date | None:
        try:
            return date(year, month, day)
        except ValueError:
            if (month, day) == (2, 29):
                return date(year, 3, 1)
            return None

    this_year = occurrence(today.year)
    if this_year is None:
        return None
    if this_year < today:
        return occurrence(today.year + 1)
    return this_year


def upcoming_birthdays(members: Sequence[MemberRecord], today: date) -> list[UpcomingBirthday]:
    """Birthdays in ``[today, today + 7 days]``, in roster order."""
    window_end = today + timedelta(days=BIRTHDAY_WINDOW_DAYS)
    result: list[UpcomingBirthday] = []
    for member in members:
        if not member.birth_date or not member.birth_date.strip():
            continue
        occurs_on = next_birthday(member.birth_date, today)
        if occurs_on is None or not (today <= occurs_on <= window_end):
            continue
        result.append(UpcomingBirthday(
            name=member.name,
            birth_date=member.birth_date,
            age=member.age,
            weekday=WEEKDAY_NAMES[occurs_on.weekday()],
            occurs_on=occurs_on,
        ))
    return result


def birthdays_for_display(members: Sequence[MemberRecord], today: date) -> list[UpcomingBirthday]:
    """Same window, sorted by date, with ``is_past`` set on today's entries."""
    ordered = sorted(upcoming_birthdays(members, today), key=lambda b: b.occurs_on)
    return [replace(b, is_past=b.occurs_on <= today) for b in ordered]


def compute_metrics(members: Sequence[MemberRecord], today: date | None = None) -> DashboardMetrics:
    today = today or date.today()
    total = len(members)

    male = sum(1 for m in members if "masculino" in m.gender.lower())
    female = sum(1 for m in members if "femenino" in m.gender.lower())
    group_participants = sum(1 for m in members if m.in_groups is YesNo.YES)
    with_computer = sum(1 for m in members if m.has_computer_access is YesNo.YES)
    active = sum(1 for m in members if is_active(m))

    communes = sorted(
        _histogram(m.residence_area for m in members), key=lambda b: b.count, reverse=True,
    )

    return DashboardMetrics(
        total_members=total,
        gender=GenderSplit(male=male, female=female),
        age_ranges=age_histogram(members),
        group_participants=group_participants,
        attendance_frequency=_histogram(m.attendance_days for m in members),
        technology_access_rate=percent(with_computer, total),
        communes=communes,
        tenure=_histogram(m.attendance_tenure for m in members),
        with_transport=sum(1 for m in members if m.has_transport is YesNo.YES),
        active_members=active,
        new_members=sum(1 for m in members if is_new(m)),
        upcoming_birthdays=upcoming_birthdays(members, today),
        active_share=percent(active, total),
        group_share=percent(group_participants, total),
        ministries=ministry_histogram(members),
    )


# ── Roster drill-downs ──────────────────────────────────────────────────────

MEMBER_SELECTORS: dict[str, Callable[[MemberRecord], bool]] = {
    "active": is_active,
    "new": is_new,
    "transport": lambda m: m.has_transport is YesNo.YES,
    "no_transport": lambda m: m.has_transport is not YesNo.YES,
    "groups": lambda m: m.in_groups is YesNo.YES,
}


def select_members(members: Sequence[MemberRecord], kind: str) -> list[MemberRecord]:
    try:
        predicate = MEMBER_SELECTORS[kind]
    except KeyError:
        raise ValueError(f"Unknown member selection: {kind!r}") from None
    return [m for m in members if predicate(m)]


def filter_members(members: Sequence[MemberRecord], term: str | None) -> list[MemberRecord]:
    """Case-insensitive match on name or commune."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(members)
    return [
        m for m in members
        if needle in m.name.lower() or needle in m.residence_area.lower()
    ]
