"""Member management use-case service."""
from __future__ import annotations
import logging
import uuid
from churchdash.domain.exceptions import ConflictError, NotFoundError
from churchdash.infra.db.uow import UnitOfWork
from churchdash.infra.db.repositories.member_repository import MemberRepository
from churchdash.infra.db.repositories.attendance_repository import AttendanceRepository
from churchdash.models.core import RegistrationType
from churchdash.api.schemas.members import MemberList, MemberRead, MemberUpdate, VisitorCreate
from churchdash.api.schemas.attendance import AttendanceList, AttendanceRead

logger = logging.getLogger(__name__)

VISITOR_PREFIX = "VISITOR-"
HISTORY_LIMIT = 30


def visitor_person_id(person_id: str | None) -> str:
    """Use the given national id, or mint a per-visit surrogate."""
    if person_id and person_id.strip():
        return person_id.strip()
    return f"{VISITOR_PREFIX}{uuid.uuid4()}"


class MembersService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def _get_member(self, member_id: int):
        member = MemberRepository(self._uow.session).get_by_id(member_id)
        if member is None:
            raise NotFoundError(f"Member {member_id} not found")
        return member

    def list_active(self, search: str | None = None) -> MemberList:
        members = MemberRepository(self._uow.session).list_active(search=search)
        last_seen = AttendanceRepository(self._uow.session).last_attended_by_person()
        items = [
            MemberRead.model_validate(m).model_copy(
                update={"last_attendance": last_seen.get(m.person_id)}
            )
            for m in members
        ]
        return MemberList(items=items, total=len(items))

    def register_visitor(self, payload: VisitorCreate) -> MemberRead:
        repo = MemberRepository(self._uow.session)
        person_id = visitor_person_id(payload.person_id)
        if repo.get_by_person_id(person_id) is not None:
            raise ConflictError(f"A person with id {person_id} is already registered")
        member = repo.create(
            person_id=person_id,
            name=payload.name,
            declared_frequency=payload.declared_frequency,
            registration_type=RegistrationType(payload.registration_type.value),
        )
        self._uow.commit()
        logger.info("Registered %s %s (%s)", member.registration_type.value, member.name, person_id)
        return MemberRead.model_validate(member)

    def update_frequency(self, member_id: int, payload: MemberUpdate) -> MemberRead:
        member = self._get_member(member_id)
        MemberRepository(self._uow.session).set_frequency(member, payload.declared_frequency)
        self._uow.commit()
        return MemberRead.model_validate(member)

    def history(self, member_id: int) -> AttendanceList:
        member = self._get_member(member_id)
        rows = AttendanceRepository(self._uow.session).history(member.person_id, limit=HISTORY_LIMIT)
        return AttendanceList(
            items=[AttendanceRead.model_validate(r) for r in rows],
            total=len(rows),
        )
