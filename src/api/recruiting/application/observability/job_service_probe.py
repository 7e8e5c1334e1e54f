"""Domain probe for job and pipeline-stage management.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class JobServiceProbe(Protocol):
    """Domain probe for job and stage operations."""

    def job_created(self, job_id: str, organization_id: str, stage_count: int) -> None:
        ...

    def job_updated(self, job_id: str, fields: list[str]) -> None:
        ...

    def job_status_changed(self, job_id: str, status: str) -> None:
        ...

    def stage_created(self, job_id: str, stage_id: str, position: int) -> None:
        ...

    def stages_reordered(self, job_id: str, count: int) -> None:
        ...

    def stage_deleted(self, job_id: str, stage_id: str, reassigned: int) -> None:
        ...

    def stage_delete_blocked(self, job_id: str, stage_id: str, candidates: int) -> None:
        ...

    def persistence_failed(self, operation: str, error: Exception) -> None:
        ...

    def with_context(self, context: ObservationContext) -> JobServiceProbe:
        ...


class DefaultJobServiceProbe:
    """Default implementation of JobServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultJobServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultJobServiceProbe(logger=self._logger, context=context)

    def job_created(self, job_id: str, organization_id: str, stage_count: int) -> None:
        self._logger.info(
            "job_created",
            job_id=job_id,
            organization_id=organization_id,
            stage_count=stage_count,
            **self._get_context_kwargs(),
        )

    def job_updated(self, job_id: str, fields: list[str]) -> None:
        self._logger.info(
            "job_updated",
            job_id=job_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def job_status_changed(self, job_id: str, status: str) -> None:
        self._logger.info(
            "job_status_changed",
            job_id=job_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def stage_created(self, job_id: str, stage_id: str, position: int) -> None:
        self._logger.info(
            "pipeline_stage_created",
            job_id=job_id,
            stage_id=stage_id,
            position=position,
            **self._get_context_kwargs(),
        )

    def stages_reordered(self, job_id: str, count: int) -> None:
        self._logger.info(
            "pipeline_stages_reordered",
            job_id=job_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def stage_deleted(self, job_id: str, stage_id: str, reassigned: int) -> None:
        self._logger.info(
            "pipeline_stage_deleted",
            job_id=job_id,
            stage_id=stage_id,
            reassigned=reassigned,
            **self._get_context_kwargs(),
        )

    def stage_delete_blocked(self, job_id: str, stage_id: str, candidates: int) -> None:
        self._logger.warning(
            "pipeline_stage_delete_blocked",
            job_id=job_id,
            stage_id=stage_id,
            candidates=candidates,
            **self._get_context_kwargs(),
        )

    def persistence_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "recruiting_persistence_failed",
            operation=operation,
            error=str(error),
            **self._get_context_kwargs(),
        )
