"""Member DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date, datetime
from enum import Enum
from pydantic import BaseModel, field_validator
from churchdash.domain.service_date import DECLARED_FREQUENCIES


class RegistrationTypeDTO(str, Enum):
    MEMBER = "member"
    VISITOR = "visitor"


def _check_frequency(v: str) -> str:
    if v not in DECLARED_FREQUENCIES:
        raise ValueError(f"declared_frequency must be one of {DECLARED_FREQUENCIES}")
    return v


class VisitorCreate(BaseModel):
    name: str
    person_id: str | None = None
    declared_frequency: str = "occasional"
    registration_type: RegistrationTypeDTO = RegistrationTypeDTO.VISITOR

    @field_validator("name")
    @classmethod
    def name_min_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("name must have at least 3 characters")
        return v

    @field_validator("person_id")
    @classmethod
    def person_id_min_length(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if len(v) < 6:
            raise ValueError("person_id must have at least 6 characters")
        return v

    @field_validator("declared_frequency")
    @classmethod
    def frequency_known(cls, v: str) -> str:
        return _check_frequency(v)


class MemberUpdate(BaseModel):
    declared_frequency: str

    @field_validator("declared_frequency")
    @classmethod
    def frequency_known(cls, v: str) -> str:
        return _check_frequency(v)


class MemberRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    person_id: str
    name: str
    declared_frequency: str
    registration_type: RegistrationTypeDTO
    is_active: bool
    last_attendance: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MemberList(BaseModel):
    items: list[MemberRead]
    total: int
