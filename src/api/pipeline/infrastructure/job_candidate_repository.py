"""PostgreSQL implementation of IJobCandidateRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from pipeline.domain.board import CandidateCard
from pipeline.infrastructure.rows import card_query, to_card
from pipeline.ports.exceptions import DuplicateCandidateError
from pipeline.ports.store import IJobCandidateRepository
from recruiting.infrastructure.models import (
    JobCandidateModel,
    MemberModel,
    PipelineStageModel,
)
from recruiting.infrastructure.queries import (
    job_candidate_scope,
    member_scope,
    scoped_job_ids,
    stage_scope,
)
from shared_kernel.middleware.tenant_context import TenantContext


class JobCandidateRepository(IJobCandidateRepository):
    """Candidate assignments, scoped by the caller's organization.

    Runs inside the caller's transaction.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def first_stage_id(self, ctx: TenantContext, job_id: str) -> str | None:
        result = await self._session.execute(
            stage_scope(ctx.tenant_id)
            .where(PipelineStageModel.job_id == job_id)
            .order_by(PipelineStageModel.position)
            .limit(1)
        )
        stage = result.scalars().first()
        return stage.id if stage is not None else None

    async def stage_in_job(
        self, ctx: TenantContext, job_id: str, stage_id: str
    ) -> bool:
        result = await self._session.execute(
            stage_scope(ctx.tenant_id)
            .where(PipelineStageModel.job_id == job_id)
            .where(PipelineStageModel.id == stage_id)
        )
        return result.scalars().first() is not None

    async def member_exists(self, ctx: TenantContext, member_id: str) -> bool:
        result = await self._session.execute(
            member_scope(ctx.tenant_id).where(MemberModel.id == member_id)
        )
        return result.scalars().first() is not None

    async def add(
        self, ctx: TenantContext, job_id: str, member_id: str, stage_id: str
    ) -> CandidateCard:
        existing = await self._session.execute(
            job_candidate_scope(ctx.tenant_id)
            .where(JobCandidateModel.job_id == job_id)
            .where(JobCandidateModel.member_id == member_id)
        )
        if existing.scalars().first() is not None:
            raise DuplicateCandidateError(
                f"Member {member_id} is already in job {job_id}"
            )

        model = JobCandidateModel(
            id=str(ULID()),
            organization_id=ctx.tenant_id,
            job_id=job_id,
            member_id=member_id,
            stage_id=stage_id,
            version=1,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            if "uq_job_candidates_job_member" in str(e):
                raise DuplicateCandidateError(
                    f"Member {member_id} is already in job {job_id}"
                ) from e
            raise

        row = (
            await self._session.execute(
                card_query(ctx.tenant_id).where(JobCandidateModel.id == model.id)
            )
        ).one()
        return to_card(*row)

    async def remove(self, ctx: TenantContext, job_candidate_id: str) -> bool:
        org = ctx.tenant_id
        result = await self._session.execute(
            delete(JobCandidateModel)
            .where(JobCandidateModel.id == job_candidate_id)
            .where(JobCandidateModel.organization_id == org)
            .where(JobCandidateModel.job_id.in_(scoped_job_ids(org)))
            .execution_options(synchronize_session=False)
        )
        return bool(result.rowcount)
