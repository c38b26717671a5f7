"""Attendance registration, read views and CSV export."""
from __future__ import annotations
import logging
from datetime import date, datetime, timedelta, timezone

from churchdash.config import settings
from churchdash.domain.absences import (
    ExpectedMember, HeldService, consecutive_absence_alerts,
)
from churchdash.domain.attendance_csv import EXPORT_COLUMNS, serialize_attendance
from churchdash.domain.exceptions import NotFoundError, ValidationError
from churchdash.domain.service_date import ServiceDay, ServiceInfo, local_now, resolve_service
from churchdash.infra.db.uow import UnitOfWork
from churchdash.infra.db.repositories.attendance_repository import AttendanceRepository
from churchdash.infra.db.repositories.member_repository import MemberRepository
from churchdash.api.schemas.attendance import (
    AbsenceAlertList, AbsenceAlertRead, AttendanceList, AttendanceRead,
    AttendanceSaveResponse, PersonSummaryList, PersonSummaryRead,
)
from churchdash.api.schemas.service import ServiceInfoRead

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def current_service(now: datetime | None = None) -> ServiceInfo:
    return resolve_service(now or _utcnow(), settings.SERVICE_TIMEZONE)


def service_info_read(info: ServiceInfo) -> ServiceInfoRead:
    return ServiceInfoRead(
        service_date=info.service_date,
        weekday=info.weekday,
        weekday_label=info.weekday.label,
        registered_at=info.registered_at,
    )


class AttendanceService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def _today(self, now: datetime | None) -> date:
        return local_now(now or _utcnow(), settings.SERVICE_TIMEZONE).date()

    def register(
        self,
        member_ids: list[int],
        *,
        now: datetime | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> AttendanceSaveResponse:
        ids = list(dict.fromkeys(member_ids))
        if not ids:
            raise ValidationError("Select at least one person")

        members = MemberRepository(self._uow.session).list_by_ids(ids)
        found = {m.id for m in members if m.is_active}
        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFoundError(f"Active member(s) not found: {missing}")

        info = current_service(now)
        registered_at = info.registered_at.astimezone(timezone.utc)
        created_at = _utcnow()
        rows = [
            {
                "person_id": m.person_id,
                "name": m.name,
                "registered_at": registered_at,
                "service_date": info.service_date,
                "service_weekday": info.weekday.value,
                "attended": True,
                "declared_frequency": m.declared_frequency,
                "registration_type": m.registration_type.value,
                "ip_address": ip_address,
                "user_agent": user_agent,
                "created_at": created_at,
            }
            for m in members
        ]
        saved = AttendanceRepository(self._uow.session).upsert_many(rows)
        self._uow.commit()
        logger.info(
            "Saved attendance for %d person(s) at %s service %s",
            saved, info.weekday.value, info.service_date_iso,
        )
        return AttendanceSaveResponse(service_date=info.service_date, weekday=info.weekday, saved=saved)

    def summary(self) -> PersonSummaryList:
        members = MemberRepository(self._uow.session).list_active()
        repo = AttendanceRepository(self._uow.session)
        counts = repo.counts_by_person()
        last_seen = repo.last_attended_by_person()
        items = []
        for m in members:
            attended, absences, total = counts.get(m.person_id, (0, 0, 0))
            items.append(PersonSummaryRead(
                member_id=m.id,
                person_id=m.person_id,
                name=m.name,
                declared_frequency=m.declared_frequency,
                registration_type=m.registration_type.value,
                attended=attended,
                absences=absences,
                total=total,
                last_date=last_seen.get(m.person_id),
            ))
        return PersonSummaryList(items=items, total=len(items))

    def recent(self, now: datetime | None = None) -> AttendanceList:
        since = self._today(now) - timedelta(days=settings.RECENT_ATTENDANCE_DAYS)
        rows = AttendanceRepository(self._uow.session).recent(since)
        return AttendanceList(
            items=[AttendanceRead.model_validate(r) for r in rows],
            total=len(rows),
        )

    def alerts(self, now: datetime | None = None) -> AbsenceAlertList:
        since = self._today(now) - timedelta(days=settings.RECENT_ATTENDANCE_DAYS)
        repo = AttendanceRepository(self._uow.session)
        held = []
        for service_date, weekday in repo.held_services(since):
            try:
                held.append(HeldService(service_date, ServiceDay(weekday)))
            except ValueError:
                logger.warning("Ignoring attendance with unknown weekday %r", weekday)
        members = [
            ExpectedMember(m.id, m.person_id, m.name, m.declared_frequency)
            for m in MemberRepository(self._uow.session).list_active()
        ]
        alerts = consecutive_absence_alerts(
            members, held, repo.attended_dates_by_person(since), settings.ABSENCE_ALERT_THRESHOLD,
        )
        return AbsenceAlertList(
            items=[AbsenceAlertRead.model_validate(a) for a in alerts],
            total=len(alerts),
        )

    def export_csv(self, now: datetime | None = None) -> tuple[str, str]:
        """Return ``(filename, csv_text)`` for the recent-attendance window."""
        info = current_service(now)
        rows = [
            item.model_dump(include=set(EXPORT_COLUMNS))
            for item in self.recent(now).items
        ]
        ordered = [{column: row[column] for column in EXPORT_COLUMNS} for row in rows]
        return f"attendance-{info.service_date_iso}.csv", serialize_attendance(ordered)
