"""Domain probe for the pipeline engine and candidate assignment.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PipelineProbe(Protocol):
    """Domain probe for pipeline operations."""

    def board_loaded(self, job_id: str, stages: int, candidates: int) -> None:
        ...

    def candidate_moved(
        self, job_id: str, candidate_id: str, from_stage_id: str, to_stage_id: str
    ) -> None:
        ...

    def move_reverted(self, job_id: str, candidate_id: str, reason: str) -> None:
        ...

    def stages_reordered(self, job_id: str, count: int) -> None:
        ...

    def stage_reorder_reverted(self, job_id: str, reason: str) -> None:
        ...

    def change_event_applied(self, job_id: str, event_type: str, changed: bool) -> None:
        ...

    def board_reloaded(self, job_id: str, table: str, stages: int) -> None:
        ...

    def candidate_fetch_failed(
        self, job_id: str, candidate_id: str, error: Exception
    ) -> None:
        ...

    def candidate_added(self, job_id: str, member_id: str, stage_id: str) -> None:
        ...

    def candidate_removed(self, job_candidate_id: str) -> None:
        ...

    def persistence_failed(self, operation: str, error: Exception) -> None:
        ...

    def with_context(self, context: ObservationContext) -> PipelineProbe:
        ...


class DefaultPipelineProbe:
    """Default implementation of PipelineProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPipelineProbe:
        """Create a new probe with observation context bound."""
        return DefaultPipelineProbe(logger=self._logger, context=context)

    def board_loaded(self, job_id: str, stages: int, candidates: int) -> None:
        self._logger.debug(
            "pipeline_board_loaded",
            job_id=job_id,
            stages=stages,
            candidates=candidates,
            **self._get_context_kwargs(),
        )

    def candidate_moved(
        self, job_id: str, candidate_id: str, from_stage_id: str, to_stage_id: str
    ) -> None:
        self._logger.info(
            "pipeline_candidate_moved",
            job_id=job_id,
            candidate_id=candidate_id,
            from_stage_id=from_stage_id,
            to_stage_id=to_stage_id,
            **self._get_context_kwargs(),
        )

    def move_reverted(self, job_id: str, candidate_id: str, reason: str) -> None:
        self._logger.warning(
            "pipeline_move_reverted",
            job_id=job_id,
            candidate_id=candidate_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def stages_reordered(self, job_id: str, count: int) -> None:
        self._logger.info(
            "pipeline_stages_reordered",
            job_id=job_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def stage_reorder_reverted(self, job_id: str, reason: str) -> None:
        self._logger.warning(
            "pipeline_stage_reorder_reverted",
            job_id=job_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def change_event_applied(self, job_id: str, event_type: str, changed: bool) -> None:
        self._logger.debug(
            "pipeline_change_event_applied",
            job_id=job_id,
            event_type=event_type,
            changed=changed,
            **self._get_context_kwargs(),
        )

    def board_reloaded(self, job_id: str, table: str, stages: int) -> None:
        self._logger.info(
            "pipeline_board_reloaded",
            job_id=job_id,
            table=table,
            stages=stages,
            **self._get_context_kwargs(),
        )

    def candidate_fetch_failed(
        self, job_id: str, candidate_id: str, error: Exception
    ) -> None:
        self._logger.error(
            "pipeline_candidate_fetch_failed",
            job_id=job_id,
            candidate_id=candidate_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def candidate_added(self, job_id: str, member_id: str, stage_id: str) -> None:
        self._logger.info(
            "pipeline_candidate_added",
            job_id=job_id,
            member_id=member_id,
            stage_id=stage_id,
            **self._get_context_kwargs(),
        )

    def candidate_removed(self, job_candidate_id: str) -> None:
        self._logger.info(
            "pipeline_candidate_removed",
            job_candidate_id=job_candidate_id,
            **self._get_context_kwargs(),
        )

    def persistence_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "pipeline_persistence_failed",
            operation=operation,
            error=str(error),
            **self._get_context_kwargs(),
        )
