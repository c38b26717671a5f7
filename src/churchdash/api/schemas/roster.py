"""Roster DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import datetime
from enum import Enum
from pydantic import BaseModel
from churchdash.api.schemas.dashboard import DashboardMetricsRead
from churchdash.domain.roster import YesNo


class MemberSelection(str, Enum):
    ACTIVE = "active"
    NEW = "new"
    TRANSPORT = "transport"
    NO_TRANSPORT = "no_transport"
    GROUPS = "groups"


class MemberRecordRead(BaseModel):
    model_config = {"from_attributes": True}

    name: str
    phone: str
    national_id: str
    birth_date: str
    month: str
    age: int
    address: str
    has_messaging_app: YesNo
    residence_area: str
    has_transport: YesNo
    gender: str
    attendance_tenure: str
    attendance_days: str
    attends_with: str
    group_participation: str
    has_computer_access: YesNo
    in_groups: YesNo
    ministries: list[str]


class MemberRecordList(BaseModel):
    items: list[MemberRecordRead]
    total: int


class RosterSnapshotRead(BaseModel):
    model_config = {"from_attributes": True}

    loaded_at: datetime
    members: list[MemberRecordRead]
    metrics: DashboardMetricsRead
