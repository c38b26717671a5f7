"""Fetch the roster spreadsheet export over HTTP."""
from __future__ import annotations
import logging
import httpx
from churchdash.config import settings
from churchdash.domain.exceptions import NetworkError
from churchdash.domain.roster import MemberRecord, parse_roster

logger = logging.getLogger(__name__)


class RosterLoader:
    """One blocking GET per ``load()``; nothing is cached between calls.

    Pass an ``httpx.Client`` to control transport (tests use ``MockTransport``).
    """

    def __init__(
        self,
        url: str | None = None,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self._url = url or settings.ROSTER_CSV_URL
        self._client = client or httpx.Client(
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS, follow_redirects=True,
        )

    @property
    def url(self) -> str:
        return self._url

    def fetch_text(self) -> str:
        try:
            resp = self._client.get(self._url)
        except httpx.HTTPError as exc:
            raise NetworkError(f"Roster fetch failed: {exc}") from exc
        if not resp.is_success:
            raise NetworkError(f"Roster fetch failed with status {resp.status_code}")
        return resp.text

    def close(self) -> None:
        self._client.close()

    def load(self) -> list[MemberRecord]:
        logger.info("Fetching roster from %s", self._url)
        members = parse_roster(self.fetch_text())
        logger.info("Roster loaded: %d member(s)", len(members))
        return members
