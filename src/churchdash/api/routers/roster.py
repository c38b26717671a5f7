"""Roster snapshot endpoints."""
from fastapi import APIRouter, Depends
from churchdash.api.deps import get_roster_service
from churchdash.api.schemas.roster import MemberRecordList, MemberSelection, RosterSnapshotRead
from churchdash.services.roster_service import RosterService

router = APIRouter(prefix="/roster", tags=["roster"])


@router.get("", response_model=RosterSnapshotRead)
def get_roster(svc: RosterService = Depends(get_roster_service)) -> RosterSnapshotRead:
    return svc.get_snapshot()


@router.post("/refresh", response_model=RosterSnapshotRead)
def refresh_roster(svc: RosterService = Depends(get_roster_service)) -> RosterSnapshotRead:
    return svc.refresh_snapshot()


@router.get("/members", response_model=MemberRecordList)
def list_roster_members(
    q: str | None = None,
    kind: MemberSelection | None = None,
    svc: RosterService = Depends(get_roster_service),
) -> MemberRecordList:
    return svc.list_members(search=q, kind=kind)
