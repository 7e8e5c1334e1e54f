"""Application service for a job's pipeline stages.

Positions stay dense (0..N-1) after every create, reorder and delete,
and each operation runs in a single transaction.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recruiting.application.job_service import JOB_NOT_FOUND, parse_job_id
from recruiting.application.observability import (
    DefaultJobServiceProbe,
    JobServiceProbe,
)
from recruiting.domain.aggregates import PipelineStage
from recruiting.domain.aggregates.stage import densify, insert_stage, reorder
from recruiting.domain.exceptions import InvalidStageError, InvalidStageOrderError
from recruiting.ports.repositories import IJobRepository, IStageRepository
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.results import ActionResult, ErrorCode

STAGE_NOT_FOUND = "Stage not found"


class _Failure(Exception):
    """Aborts the surrounding transaction with a result to return."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.result: ActionResult = ActionResult.failure(code, message)


class StageService:
    """Create, reorder and delete pipeline stages."""

    def __init__(
        self,
        session: AsyncSession,
        job_repository: IJobRepository,
        stage_repository: IStageRepository,
        probe: JobServiceProbe | None = None,
    ):
        self._session = session
        self._jobs = job_repository
        self._stages = stage_repository
        self._probe = probe or DefaultJobServiceProbe()

    async def create_stage(
        self,
        ctx: TenantContext,
        job_id: str,
        name: str,
        color: str | None = None,
        position: int | None = None,
    ) -> ActionResult[PipelineStage]:
        """Append a stage, or insert it at `position` and shift the rest."""
        try:
            async with self._session.begin():
                job_key, stages = await self._load(ctx, job_id)
                try:
                    stage = PipelineStage.create(job_key, name, color, len(stages))
                except InvalidStageError as e:
                    raise _Failure(ErrorCode.VALIDATION, str(e)) from e
                ordered = insert_stage(stages, stage, position)
                await self._stages.add_all([stage])
                await self._stages.save_positions(ctx.tenant_id, job_key, ordered)
        except _Failure as failure:
            return failure.result
        except SQLAlchemyError as e:
            self._probe.persistence_failed("create_stage", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not save stage")

        self._probe.stage_created(job_key.value, stage.id.value, stage.position)
        return ActionResult.success(stage)

    async def reorder_stages(
        self, ctx: TenantContext, job_id: str, ordered_ids: Sequence[str]
    ) -> ActionResult[list[PipelineStage]]:
        """Rewrite every position from `ordered_ids`, all or nothing.

        `ordered_ids` must name each of the job's stages exactly once.
        """
        try:
            async with self._session.begin():
                job_key, stages = await self._load(ctx, job_id)
                try:
                    ordered = reorder(stages, ordered_ids)
                except InvalidStageOrderError as e:
                    raise _Failure(ErrorCode.VALIDATION, str(e)) from e
                await self._stages.save_positions(ctx.tenant_id, job_key, ordered)
        except _Failure as failure:
            return failure.result
        except SQLAlchemyError as e:
            self._probe.persistence_failed("reorder_stages", e)
            return ActionResult.failure(
                ErrorCode.PERSISTENCE, "Could not save stage order"
            )

        self._probe.stages_reordered(job_key.value, len(ordered))
        return ActionResult.success(ordered)

    async def delete_stage(
        self,
        ctx: TenantContext,
        job_id: str,
        stage_id: str,
        reassign_to: str | None = None,
    ) -> ActionResult[list[PipelineStage]]:
        """Delete a stage and return the remaining ones.

        A stage that still holds candidates is only deleted when
        `reassign_to` names another stage of the same job; its candidates
        move there first.
        """
        reassigned = 0
        try:
            async with self._session.begin():
                job_key, stages = await self._load(ctx, job_id)
                by_id = {stage.id.value: stage for stage in stages}
                stage = by_id.get(stage_id)
                if stage is None:
                    raise _Failure(ErrorCode.NOT_FOUND, STAGE_NOT_FOUND)

                count = await self._stages.count_candidates(ctx.tenant_id, stage.id)
                if count and reassign_to is None:
                    self._probe.stage_delete_blocked(job_key.value, stage_id, count)
                    raise _Failure(
                        ErrorCode.CONFLICT,
                        f"Stage has {count} candidate(s); "
                        "choose a stage to move them to",
                    )
                if count:
                    target = by_id.get(reassign_to)
                    if target is None or target is stage:
                        raise _Failure(
                            ErrorCode.VALIDATION,
                            "Candidates must move to another stage of the same job",
                        )
                    reassigned = await self._stages.move_candidates(
                        ctx.tenant_id, stage.id, target.id
                    )

                await self._stages.delete(ctx.tenant_id, stage.id)
                remaining = densify(s for s in stages if s is not stage)
                await self._stages.save_positions(ctx.tenant_id, job_key, remaining)
        except _Failure as failure:
            return failure.result
        except SQLAlchemyError as e:
            self._probe.persistence_failed("delete_stage", e)
            return ActionResult.failure(ErrorCode.PERSISTENCE, "Could not delete stage")

        self._probe.stage_deleted(job_key.value, stage_id, reassigned)
        return ActionResult.success(remaining)

    async def _load(self, ctx: TenantContext, job_id: str):
        job_key = parse_job_id(job_id)
        if job_key is None or await self._jobs.get(ctx.tenant_id, job_key) is None:
            raise _Failure(ErrorCode.NOT_FOUND, JOB_NOT_FOUND)
        return job_key, await self._stages.list_for_job(ctx.tenant_id, job_key)
