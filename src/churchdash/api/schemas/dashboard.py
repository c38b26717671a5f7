"""Dashboard DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date
from pydantic import BaseModel


class BucketRead(BaseModel):
    model_config = {"from_attributes": True}

    label: str
    count: int


class GenderSplitRead(BaseModel):
    model_config = {"from_attributes": True}

    male: int
    female: int


class BirthdayRead(BaseModel):
    model_config = {"from_attributes": True}

    name: str
    birth_date: str
    age: int
    weekday: str
    occurs_on: date
    is_past: bool = False


class BirthdayList(BaseModel):
    items: list[BirthdayRead]
    total: int


class DashboardMetricsRead(BaseModel):
    model_config = {"from_attributes": True}

    total_members: int
    gender: GenderSplitRead
    age_ranges: list[BucketRead]
    group_participants: int
    attendance_frequency: list[BucketRead]
    technology_access_rate: float
    communes: list[BucketRead]
    tenure: list[BucketRead]
    with_transport: int
    active_members: int
    new_members: int
    upcoming_birthdays: list[BirthdayRead]
    active_share: float
    group_share: float
    ministries: list[BucketRead]
