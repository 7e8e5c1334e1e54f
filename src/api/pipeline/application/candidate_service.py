"""Application service for adding members to a job's pipeline."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pipeline.application.observability import DefaultPipelineProbe, PipelineProbe
from pipeline.domain.board import CandidateCard
from pipeline.ports.exceptions import DuplicateCandidateError
from pipeline.ports.store import IJobCandidateRepository
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.results import ActionResult, ErrorCode


class CandidateService:
    """Assigns talent-pool members to jobs.

    A member appears at most once per job; moving between stages goes
    through the pipeline engine, never through a second assignment.
    """

    def __init__(
        self,
        session: AsyncSession,
        candidate_repository: IJobCandidateRepository,
        probe: PipelineProbe | None = None,
    ):
        self._session = session
        self._candidates = candidate_repository
        self._probe = probe or DefaultPipelineProbe()

    async def add_candidate_to_job(
        self,
        ctx: TenantContext,
        job_id: str,
        member_id: str,
        stage_id: str | None = None,
    ) -> ActionResult[CandidateCard]:
        """Place a member in the job's pipeline, in the first stage unless
        `stage_id` names another stage of the job."""
        try:
            async with self._session.begin():
                if stage_id is None:
                    stage_id = await self._candidates.first_stage_id(ctx, job_id)
                    if stage_id is None:
                        return ActionResult.failure(
                            ErrorCode.NOT_FOUND, "Job not found or has no stages"
                        )
                elif not await self._candidates.stage_in_job(ctx, job_id, stage_id):
                    return ActionResult.failure(ErrorCode.NOT_FOUND, "Stage not found")

                if not await self._candidates.member_exists(ctx, member_id):
                    return ActionResult.failure(ErrorCode.NOT_FOUND, "Member not found")

                card = await self._candidates.add(ctx, job_id, member_id, stage_id)
        except DuplicateCandidateError:
            return ActionResult.failure(
                ErrorCode.CONFLICT, "Member is already a candidate for this job"
            )
        except SQLAlchemyError as e:
            self._probe.persistence_failed("add_candidate_to_job", e)
            return ActionResult.failure(
                ErrorCode.PERSISTENCE, "Could not add candidate"
            )

        self._probe.candidate_added(job_id, member_id, stage_id)
        return ActionResult.success(card)

    async def remove_candidate(
        self, ctx: TenantContext, job_candidate_id: str
    ) -> ActionResult[None]:
        try:
            async with self._session.begin():
                removed = await self._candidates.remove(ctx, job_candidate_id)
        except SQLAlchemyError as e:
            self._probe.persistence_failed("remove_candidate", e)
            return ActionResult.failure(
                ErrorCode.PERSISTENCE, "Could not remove candidate"
            )
        if not removed:
            return ActionResult.failure(ErrorCode.NOT_FOUND, "Candidate not found")

        self._probe.candidate_removed(job_candidate_id)
        return ActionResult.success()
