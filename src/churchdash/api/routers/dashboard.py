"""Dashboard endpoints."""
from fastapi import APIRouter, Depends
from churchdash.api.deps import get_roster_service
from churchdash.api.schemas.dashboard import BirthdayList, DashboardMetricsRead
from churchdash.services.dashboard_service import DashboardService
from churchdash.services.roster_service import RosterService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardMetricsRead)
def get_metrics(roster: RosterService = Depends(get_roster_service)) -> DashboardMetricsRead:
    return DashboardService(roster).get_metrics()


@router.get("/birthdays", response_model=BirthdayList)
def get_birthdays(roster: RosterService = Depends(get_roster_service)) -> BirthdayList:
    return DashboardService(roster).get_birthdays()
