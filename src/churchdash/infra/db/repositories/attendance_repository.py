"""Repository for Attendance rows and the read views built on them."""
from __future__ import annotations
from datetime import date
from typing import Any
from sqlalchemy import case, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session, desc, select
from churchdash.models.core import Attendance

# Columns overwritten when (person_id, service_date) already exists.
_UPSERT_COLUMNS = (
    "name",
    "registered_at",
    "service_weekday",
    "attended",
    "declared_frequency",
    "registration_type",
    "ip_address",
    "user_agent",
)


class AttendanceRepository:
    def __init__(self, session: Session) -> None:
        self._s = session

    def upsert_many(self, rows: list[dict[str, Any]]) -> int:
        """Insert rows; on (person_id, service_date) conflict the new values win."""
        if not rows:
            return 0
        dialect = self._s.get_bind().dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert
        stmt = insert(Attendance).values(rows)
        stmt = stmt.on_conflict_do_update(
            index_elements=["person_id", "service_date"],
            set_={name: stmt.excluded[name] for name in _UPSERT_COLUMNS},
        )
        self._s.exec(stmt)
        return len(rows)

    def history(self, person_id: str, limit: int = 30) -> list[Attendance]:
        stmt = (
            select(Attendance)
            .where(Attendance.person_id == person_id)
            .order_by(desc(Attendance.service_date))
            .limit(limit)
        )
        return list(self._s.exec(stmt).all())

    def recent(self, since: date) -> list[Attendance]:
        stmt = (
            select(Attendance)
            .where(Attendance.service_date >= since)
            .order_by(desc(Attendance.service_date), Attendance.name)
        )
        return list(self._s.exec(stmt).all())

    def counts_by_person(self) -> dict[str, tuple[int, int, int]]:
        """person_id -> (attended, absent, total)."""
        stmt = select(
            Attendance.person_id,
            func.sum(case((Attendance.attended == True, 1), else_=0)),  # noqa: E712
            func.sum(case((Attendance.attended == False, 1), else_=0)),  # noqa: E712
            func.count(),
        ).group_by(Attendance.person_id)
        return {
            person_id: (int(present or 0), int(absent or 0), int(total))
            for person_id, present, absent, total in self._s.exec(stmt).all()
        }

    def last_attended_by_person(self) -> dict[str, date]:
        stmt = (
            select(Attendance.person_id, func.max(Attendance.service_date))
            .where(Attendance.attended == True)  # noqa: E712
            .group_by(Attendance.person_id)
        )
        return {person_id: last for person_id, last in self._s.exec(stmt).all()}

    def held_services(self, since: date) -> list[tuple[date, str]]:
        stmt = (
            select(Attendance.service_date, Attendance.service_weekday)
            .where(Attendance.service_date >= since)
            .distinct()
        )
        return list(self._s.exec(stmt).all())

    def attended_dates_by_person(self, since: date) -> dict[str, set[date]]:
        stmt = select(Attendance.person_id, Attendance.service_date).where(
            Attendance.service_date >= since, Attendance.attended == True,  # noqa: E712
        )
        result: dict[str, set[date]] = {}
        for person_id, service_date in self._s.exec(stmt).all():
            result.setdefault(person_id, set()).add(service_date)
        return result
