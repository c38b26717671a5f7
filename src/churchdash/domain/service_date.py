"""Which service a registration made "now" belongs to.

Services are held on Sunday, Wednesday and Friday. Any other day maps back to
the most recent service, never forward, so late data entry still lands on the
service it describes.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from zoneinfo import ZoneInfo


class ServiceDay(str, Enum):
    SUNDAY = "sunday"
    WEDNESDAY = "wednesday"
    FRIDAY = "friday"

    @property
    def label(self) -> str:
        """Display label in the congregation's locale."""
        return _LABELS[self]


_LABELS = {
    ServiceDay.SUNDAY: "domingo",
    ServiceDay.WEDNESDAY: "miércoles",
    ServiceDay.FRIDAY: "viernes",
}

# Weekday index (Sunday=0) -> (day offset, service day).
_OFFSETS: dict[int, tuple[int, ServiceDay]] = {
    0: (0, ServiceDay.SUNDAY),
    1: (-1, ServiceDay.SUNDAY),
    2: (-2, ServiceDay.SUNDAY),
    3: (0, ServiceDay.WEDNESDAY),
    4: (-1, ServiceDay.WEDNESDAY),
    5: (0, ServiceDay.FRIDAY),
    6: (-1, ServiceDay.FRIDAY),
}


@dataclass(frozen=True)
class ServiceInfo:
    service_date: date
    weekday: ServiceDay
    registered_at: datetime

    @property
    def service_date_iso(self) -> str:
        return self.service_date.isoformat()


def _zone(tz: ZoneInfo | str) -> ZoneInfo:
    return tz if isinstance(tz, ZoneInfo) else ZoneInfo(tz)


def local_now(now: datetime, tz: ZoneInfo | str) -> datetime:
    """Convert *now* into *tz*. Naive datetimes are taken as UTC."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(_zone(tz))


def resolve_service(now: datetime, tz: ZoneInfo | str) -> ServiceInfo:
    zone = _zone(tz)
    localized = local_now(now, zone)
    weekday_index = localized.isoweekday() % 7
    offset, day = _OFFSETS.get(weekday_index, (0, ServiceDay.SUNDAY))

    # Pin to local noon so the date never drifts across a day boundary.
    target = datetime.combine(localized.date() + timedelta(days=offset), time(12), tzinfo=zone)
    return ServiceInfo(service_date=target.date(), weekday=day, registered_at=localized)


DECLARED_FREQUENCIES: list[str] = [
    "sunday",
    "wednesday",
    "friday",
    "sunday/wednesday",
    "sunday/friday",
    "wednesday/friday",
    "sunday/wednesday/friday",
    "all",
    "occasional",
]


def expected_service_days(frequency: str | None) -> frozenset[ServiceDay]:
    """Service days a declared frequency commits the person to."""
    value = (frequency or "").strip().lower()
    if value == "all":
        return frozenset(ServiceDay)
    days = set()
    for part in value.split("/"):
        try:
            days.add(ServiceDay(part.strip()))
        except ValueError:
            continue
    return frozenset(days)
