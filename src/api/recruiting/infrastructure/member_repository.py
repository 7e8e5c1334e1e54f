"""PostgreSQL implementation of IMemberRepository."""

from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from recruiting.domain.aggregates import Member
from recruiting.domain.value_objects import MemberId
from recruiting.infrastructure.models import MemberModel
from recruiting.infrastructure.observability import (
    DefaultRecruitingRepositoryProbe,
    RecruitingRepositoryProbe,
)
from recruiting.infrastructure.queries import member_scope
from recruiting.ports.repositories import IMemberRepository

_PROFILE_COLUMNS = (
    "name",
    "email",
    "role",
    "seniority",
    "city",
    "country",
    "availability",
    "linkedin_url",
    "job_type",
)


class MemberRepository(IMemberRepository):
    """Repository for the talent pool."""

    def __init__(
        self,
        session: AsyncSession,
        probe: RecruitingRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultRecruitingRepositoryProbe()

    async def add(self, member: Member) -> None:
        model = MemberModel(id=member.id.value, organization_id=member.organization_id)
        self._apply(member, model)
        self._session.add(model)
        await self._session.flush()
        self._probe.member_saved(member.id.value, member.organization_id)

    async def save(self, member: Member) -> None:
        model = await self._get_model(member.organization_id, member.id)
        if model is None:
            await self.add(member)
            return
        self._apply(member, model)
        await self._session.flush()
        self._probe.member_saved(member.id.value, member.organization_id)

    async def get(self, organization_id: str, member_id: MemberId) -> Member | None:
        model = await self._get_model(organization_id, member_id)
        return self._to_domain(model) if model is not None else None

    async def list_all(
        self, organization_id: str, search: str | None = None
    ) -> list[Member]:
        stmt = member_scope(organization_id)
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    MemberModel.name.ilike(pattern),
                    MemberModel.email.ilike(pattern),
                    MemberModel.role.ilike(pattern),
                )
            )
        stmt = stmt.order_by(MemberModel.name)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def _get_model(
        self, organization_id: str, member_id: MemberId
    ) -> MemberModel | None:
        stmt = member_scope(organization_id).where(MemberModel.id == member_id.value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _apply(member: Member, model: MemberModel) -> None:
        for name in _PROFILE_COLUMNS:
            setattr(model, name, getattr(member, name))
        # Reassign so the JSONB column is flagged dirty
        model.custom_fields = dict(member.custom_fields)

    @staticmethod
    def _to_domain(model: MemberModel) -> Member:
        return Member(
            id=MemberId(value=model.id),
            organization_id=model.organization_id,
            custom_fields=dict(model.custom_fields or {}),
            **{name: getattr(model, name) for name in _PROFILE_COLUMNS},
        )
