"""Dashboard use-case service."""
from __future__ import annotations
from datetime import date, datetime, timezone

from churchdash.config import settings
from churchdash.domain.metrics import birthdays_for_display
from churchdash.domain.service_date import local_now
from churchdash.services.roster_service import RosterService
from churchdash.api.schemas.dashboard import BirthdayList, BirthdayRead, DashboardMetricsRead


class DashboardService:
    def __init__(self, roster: RosterService) -> None:
        self._roster = roster

    def get_metrics(self) -> DashboardMetricsRead:
        return DashboardMetricsRead.model_validate(self._roster.snapshot().metrics)

    def get_birthdays(self, today: date | None = None) -> BirthdayList:
        if today is None:
            today = local_now(datetime.now(timezone.utc), settings.SERVICE_TIMEZONE).date()
        birthdays = birthdays_for_display(self._roster.snapshot().members, today)
        return BirthdayList(
            items=[BirthdayRead.model_validate(b) for b in birthdays],
            total=len(birthdays),
        )
