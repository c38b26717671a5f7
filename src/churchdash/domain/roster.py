"""Roster records built from spreadsheet rows."""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from enum import Enum

from churchdash.domain.csv_parse import parse_line

logger = logging.getLogger(__name__)

MIN_FIELDS = 16

_LEADING_DIGITS = re.compile(r"^\d+")


class YesNo(str, Enum):
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"

    @classmethod
    def from_text(cls, text: str) -> "YesNo":
        lowered = (text or "").lower()
        if "si" in lowered:
            return cls.YES
        if "no" in lowered:
            return cls.NO
        return cls.UNKNOWN


# Canonical ministry name -> any-of substrings (all groups must match).
MINISTRIES: dict[str, tuple[tuple[str, ...], ...]] = {
    "Jóvenes": (("joven", "jóven"),),
    "Dorcas": (("dorcas",),),
    "Varones": (("varon", "varón"),),
    "Escuela Dominical": (("escuela",), ("dominical",)),
}


def normalize_ministries(text: str) -> list[str]:
    """Map free-text group participation to canonical ministry names.

    >>> normalize_ministries("si, jovenes, Escuela dominical")
    ['Jóvenes', 'Escuela Dominical']
    """
    if not text or not text.strip():
        return []
    found: list[str] = []
    for part in text.split(","):
        lowered = part.strip().lower()
        for name, groups in MINISTRIES.items():
            if all(any(s in lowered for s in alternatives) for alternatives in groups):
                if name not in found:
                    found.append(name)
                break
    return found


@dataclass(frozen=True)
class MemberRecord:
    name: str
    phone: str = ""
    national_id: str = ""
    birth_date: str = ""
    month: str = ""
    age: int = 0
    address: str = ""
    has_messaging_app: YesNo = YesNo.UNKNOWN
    residence_area: str = ""
    has_transport: YesNo = YesNo.UNKNOWN
    gender: str = ""
    attendance_tenure: str = ""
    attendance_days: str = ""
    attends_with: str = ""
    group_participation: str = ""
    has_computer_access: YesNo = YesNo.UNKNOWN
    in_groups: YesNo = YesNo.UNKNOWN

    @property
    def ministries(self) -> list[str]:
        return normalize_ministries(self.group_participation)


def parse_age(text: str) -> int:
    """Leading digits of *text*, or 0."""
    match = _LEADING_DIGITS.match((text or "").strip())
    return int(match.group()) if match else 0


def record_from_fields(values: list[str]) -> MemberRecord | None:
    """Build a record, or ``None`` when the row is too short or unnamed."""
    if len(values) < MIN_FIELDS or not values[0].strip():
        return None
    return MemberRecord(
        name=values[0],
        phone=values[1],
        national_id=values[2],
        birth_date=values[3],
        month=values[4],
        age=parse_age(values[5]),
        address=values[6],
        has_messaging_app=YesNo.from_text(values[7]),
        residence_area=values[8],
        has_transport=YesNo.from_text(values[9]),
        gender=values[10],
        attendance_tenure=values[11],
        attendance_days=values[12],
        attends_with=values[13],
        group_participation=values[14],
        has_computer_access=YesNo.from_text(values[15]),
        in_groups=YesNo.from_text(values[14]),
    )


def parse_roster(text: str) -> list[MemberRecord]:
    """Parse a whole CSV document. The first non-blank line is the header."""
    lines = [line for line in text.split("\n") if line.strip()]
    if len(lines) <= 1:
        return []

    members: list[MemberRecord] = []
    skipped = 0
    for line in lines[1:]:
        record = record_from_fields(parse_line(line))
        if record is None:
            skipped += 1
            continue
        members.append(record)

    if skipped:
        logger.debug("Skipped %d roster line(s) without a name or with too few fields", skipped)
    return members
