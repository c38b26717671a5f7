"""Service-date DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date, datetime
from pydantic import BaseModel
from churchdash.domain.service_date import ServiceDay


class ServiceInfoRead(BaseModel):
    model_config = {"from_attributes": True}

    service_date: date
    weekday: ServiceDay
    weekday_label: str
    registered_at: datetime
