"""Attendance DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date, datetime
from pydantic import BaseModel
from churchdash.domain.service_date import ServiceDay


class AttendanceCreate(BaseModel):
    member_ids: list[int]


class AttendanceSaveResponse(BaseModel):
    service_date: date
    weekday: ServiceDay
    saved: int


class AttendanceRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    person_id: str
    name: str
    registered_at: datetime
    service_date: date
    service_weekday: str
    attended: bool
    declared_frequency: str
    registration_type: str


class AttendanceList(BaseModel):
    items: list[AttendanceRead]
    total: int


class PersonSummaryRead(BaseModel):
    member_id: int
    person_id: str
    name: str
    declared_frequency: str
    registration_type: str
    attended: int
    absences: int
    total: int
    last_date: date | None = None


class PersonSummaryList(BaseModel):
    items: list[PersonSummaryRead]
    total: int


class AbsenceAlertRead(BaseModel):
    model_config = {"from_attributes": True}

    member_id: int
    person_id: str
    name: str
    declared_frequency: str
    consecutive_absences: int
    missed_dates: list[date]
    alert_type: str
    detail: str


class AbsenceAlertList(BaseModel):
    items: list[AbsenceAlertRead]
    total: int
