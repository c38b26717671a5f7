"""Roster snapshot use-cases.

The snapshot (members + metrics) is replaced wholesale on every successful
refresh. Refreshes can overlap because FastAPI runs sync endpoints in a
threadpool; the holder makes sure an older fetch that completes late never
replaces the result of a newer one.
"""
from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone

from churchdash.config import settings
from churchdash.domain.exceptions import NetworkError
from churchdash.domain.metrics import DashboardMetrics, compute_metrics, filter_members, select_members
from churchdash.domain.roster import MemberRecord
from churchdash.domain.service_date import local_now
from churchdash.infra.roster.loader import RosterLoader
from churchdash.api.schemas.roster import (
    MemberRecordList, MemberRecordRead, MemberSelection, RosterSnapshotRead,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterSnapshot:
    loaded_at: datetime
    members: list[MemberRecord]
    metrics: DashboardMetrics


class RosterSnapshotHolder:
    """Latest-request-wins store for the current roster snapshot."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0
        self._snapshot: RosterSnapshot | None = None

    def begin(self) -> int:
        """Issue a ticket for a new fetch."""
        with self._lock:
            self._issued += 1
            return self._issued

    def apply(self, ticket: int, snapshot: RosterSnapshot) -> bool:
        """Install *snapshot* unless a newer fetch already landed."""
        with self._lock:
            if ticket <= self._applied:
                logger.info("Discarding stale roster snapshot (ticket %d <= %d)", ticket, self._applied)
                return False
            self._applied = ticket
            self._snapshot = snapshot
            return True

    @property
    def current(self) -> RosterSnapshot | None:
        with self._lock:
            return self._snapshot

    def clear(self) -> None:
        with self._lock:
            self._snapshot = None
            self._applied = self._issued


roster_holder = RosterSnapshotHolder()


class RosterService:
    def __init__(self, loader: RosterLoader, holder: RosterSnapshotHolder) -> None:
        self._loader = loader
        self._holder = holder

    def refresh(self, now: datetime | None = None) -> RosterSnapshot:
        """Fetch, recompute and install. ``NetworkError`` leaves the old snapshot."""
        ticket = self._holder.begin()
        try:
            members = self._loader.load()
        except NetworkError:
            logger.exception("Roster refresh failed; keeping the previous snapshot")
            raise
        now = now or datetime.now(timezone.utc)
        today = local_now(now, settings.SERVICE_TIMEZONE).date()
        snapshot = RosterSnapshot(
            loaded_at=now, members=members, metrics=compute_metrics(members, today),
        )
        self._holder.apply(ticket, snapshot)
        # A newer fetch may have won the race; report whatever is installed.
        return self._holder.current or snapshot

    def snapshot(self) -> RosterSnapshot:
        return self._holder.current or self.refresh()

    def get_snapshot(self) -> RosterSnapshotRead:
        return RosterSnapshotRead.model_validate(self.snapshot())

    def refresh_snapshot(self) -> RosterSnapshotRead:
        return RosterSnapshotRead.model_validate(self.refresh())

    def list_members(
        self, search: str | None = None, kind: MemberSelection | None = None,
    ) -> MemberRecordList:
        members = self.snapshot().members
        if kind is not None:
            members = select_members(members, kind.value)
        members = filter_members(members, search)
        return MemberRecordList(
            items=[MemberRecordRead.model_validate(m) for m in members],
            total=len(members),
        )
