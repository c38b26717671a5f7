"""Member management endpoints."""
from fastapi import APIRouter, Depends
from churchdash.api.deps import get_uow, require_admin
from churchdash.api.schemas.attendance import AttendanceList
from churchdash.api.schemas.members import MemberList, MemberRead, MemberUpdate, VisitorCreate
from churchdash.infra.db.uow import UnitOfWork
from churchdash.services.members_service import MembersService

router = APIRouter(prefix="/members", tags=["members"])


@router.get("", response_model=MemberList)
def list_members(q: str | None = None, uow: UnitOfWork = Depends(get_uow)) -> MemberList:
    return MembersService(uow).list_active(search=q)


@router.post("", response_model=MemberRead, status_code=201, dependencies=[Depends(require_admin)])
def register_visitor(payload: VisitorCreate, uow: UnitOfWork = Depends(get_uow)) -> MemberRead:
    return MembersService(uow).register_visitor(payload)


@router.patch("/{member_id}", response_model=MemberRead, dependencies=[Depends(require_admin)])
def update_member(
    member_id: int, payload: MemberUpdate, uow: UnitOfWork = Depends(get_uow),
) -> MemberRead:
    return MembersService(uow).update_frequency(member_id, payload)


@router.get("/{member_id}/history", response_model=AttendanceList)
def member_history(member_id: int, uow: UnitOfWork = Depends(get_uow)) -> AttendanceList:
    return MembersService(uow).history(member_id)
