"""Unit of Work: one session per request or command.

Either everything the operation wrote is committed, or nothing is.
"""
from __future__ import annotations
import logging
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
from churchdash.domain.exceptions import ConflictError
from churchdash.infra.db.engine import engine

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Context manager wrapping a single DB session.

    Commits on clean exit, rolls back on exception, always closes. Unique
    constraint violations surface as ``ConflictError``.
    """

    def __init__(self) -> None:
        self._session: Session | None = None

    def __enter__(self) -> "UnitOfWork":
        self._session = Session(engine)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                logger.debug("Rolling back unit of work after %s", exc_type.__name__)
                self._session.rollback()
        finally:
            self._session.close()
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork is not active; use it as a context manager.")
        return self._session

    def commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError(f"Record already exists: {exc.orig}") from exc

    def rollback(self) -> None:
        self.session.rollback()
