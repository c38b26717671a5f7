"""Repository for Member records. No business logic; caller owns the transaction."""
from __future__ import annotations
from datetime import datetime, timezone
from sqlalchemy import func, or_
from sqlmodel import Session, col, select
from churchdash.models.core import Member, RegistrationType


class MemberRepository:
    def __init__(self, session: Session) -> None:
        self._s = session

    def get_by_id(self, member_id: int) -> Member | None:
        return self._s.get(Member, member_id)

    def get_by_person_id(self, person_id: str) -> Member | None:
        return self._s.exec(select(Member).where(Member.person_id == person_id)).first()

    def list_by_ids(self, member_ids: list[int]) -> list[Member]:
        if not member_ids:
            return []
        return list(self._s.exec(select(Member).where(col(Member.id).in_(member_ids))).all())

    def list_active(self, search: str | None = None) -> list[Member]:
        stmt = select(Member).where(Member.is_active == True)  # noqa: E712
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(or_(
                func.lower(Member.name).like(pattern),
                func.lower(Member.person_id).like(pattern),
                func.lower(Member.declared_frequency).like(pattern),
            ))
        return list(self._s.exec(stmt.order_by(Member.name)).all())

    def create(
        self, *, person_id: str, name: str, declared_frequency: str,
        registration_type: RegistrationType,
    ) -> Member:
        member = Member(
            person_id=person_id,
            name=name,
            declared_frequency=declared_frequency,
            registration_type=registration_type,
        )
        self._s.add(member)
        self._s.flush()  # surfaces unique violations and assigns the PK
        return member

    def set_frequency(self, member: Member, declared_frequency: str) -> Member:
        member.declared_frequency = declared_frequency
        member.updated_at = datetime.now(timezone.utc)
        self._s.add(member)
        self._s.flush()
        return member
