"""Attendance registration, read views and export."""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from churchdash.api.deps import get_uow, require_admin
from churchdash.api.schemas.attendance import (
    AbsenceAlertList, AttendanceCreate, AttendanceList, AttendanceSaveResponse, PersonSummaryList,
)
from churchdash.infra.db.uow import UnitOfWork
from churchdash.services.attendance_service import AttendanceService

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("", response_model=AttendanceSaveResponse, dependencies=[Depends(require_admin)])
def save_attendance(
    payload: AttendanceCreate, request: Request, uow: UnitOfWork = Depends(get_uow),
) -> AttendanceSaveResponse:
    return AttendanceService(uow).register(
        payload.member_ids,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


@router.get("/summary", response_model=PersonSummaryList)
def attendance_summary(uow: UnitOfWork = Depends(get_uow)) -> PersonSummaryList:
    return AttendanceService(uow).summary()


@router.get("/recent", response_model=AttendanceList)
def recent_attendance(uow: UnitOfWork = Depends(get_uow)) -> AttendanceList:
    return AttendanceService(uow).recent()


@router.get("/alerts", response_model=AbsenceAlertList)
def absence_alerts(uow: UnitOfWork = Depends(get_uow)) -> AbsenceAlertList:
    return AttendanceService(uow).alerts()


@router.get("/export", dependencies=[Depends(require_admin)])
def export_attendance(uow: UnitOfWork = Depends(get_uow)) -> Response:
    filename, text = AttendanceService(uow).export_csv()
    return Response(
        content=text.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
