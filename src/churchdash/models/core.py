"""ORM tables for members and attendance."""
from __future__ import annotations
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RegistrationType(str, Enum):
    MEMBER = "member"
    VISITOR = "visitor"


class Member(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    person_id: str = Field(index=True, unique=True)
    name: str = Field(index=True)
    declared_frequency: str = "occasional"
    registration_type: RegistrationType = RegistrationType.MEMBER
    is_active: bool = True
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class Attendance(SQLModel, table=True):
    """One person at one service. ``(person_id, service_date)`` is the upsert key."""
    __table_args__ = (
        UniqueConstraint("person_id", "service_date", name="uq_attendance_person_service"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    person_id: str = Field(index=True)
    name: str
    registered_at: datetime
    service_date: date = Field(index=True)
    service_weekday: str
    attended: bool = True
    declared_frequency: str
    registration_type: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
