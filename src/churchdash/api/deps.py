"""FastAPI dependencies."""
from __future__ import annotations
import json
from typing import Generator
from fastapi import Header
from churchdash.config import settings
from churchdash.domain.auth import is_admin
from churchdash.domain.exceptions import ForbiddenError
from churchdash.infra.db.uow import UnitOfWork
from churchdash.infra.roster.loader import RosterLoader
from churchdash.services.roster_service import RosterService, roster_holder


def get_uow() -> Generator[UnitOfWork, None, None]:
    """Yield one UnitOfWork per request; commit/rollback in __exit__."""
    with UnitOfWork() as uow:
        yield uow


_roster_loader: RosterLoader | None = None


def get_roster_loader() -> RosterLoader:
    """Process-wide loader; its HTTP client is reused across requests."""
    global _roster_loader
    if _roster_loader is None:
        _roster_loader = RosterLoader()
    return _roster_loader


def close_roster_loader() -> None:
    global _roster_loader
    if _roster_loader is not None:
        _roster_loader.close()
        _roster_loader = None


def get_roster_service() -> RosterService:
    return RosterService(get_roster_loader(), roster_holder)


def require_admin(x_auth_claims: str | None = Header(default=None)) -> None:
    """Gate registration actions.

    The auth gateway in front of the API forwards the session's claims as
    JSON in ``X-Auth-Claims``.
    """
    if settings.BYPASS_ADMIN:
        return
    if not x_auth_claims:
        raise ForbiddenError("Admin session required")
    try:
        claims = json.loads(x_auth_claims)
    except ValueError:
        raise ForbiddenError("Malformed session claims") from None
    if not isinstance(claims, dict) or not is_admin(claims):
        raise ForbiddenError("Admin role required")
