"""Domain probe for recruiting repositories.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from recruiting.domain.events import DomainEvent
    from shared_kernel.observability_context import ObservationContext


class RecruitingRepositoryProbe(Protocol):
    """Domain probe for job, stage and member persistence."""

    def job_saved(self, job_id: str, organization_id: str) -> None:
        ...

    def stages_saved(self, job_id: str, count: int) -> None:
        ...

    def candidates_reassigned(
        self, from_stage_id: str, to_stage_id: str, count: int
    ) -> None:
        ...

    def member_saved(self, member_id: str, organization_id: str) -> None:
        ...

    def domain_event_recorded(self, event: DomainEvent) -> None:
        ...

    def with_context(self, context: ObservationContext) -> RecruitingRepositoryProbe:
        ...


class DefaultRecruitingRepositoryProbe:
    """Default implementation of RecruitingRepositoryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultRecruitingRepositoryProbe:
        return DefaultRecruitingRepositoryProbe(logger=self._logger, context=context)

    def job_saved(self, job_id: str, organization_id: str) -> None:
        self._logger.debug(
            "job_saved",
            job_id=job_id,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def stages_saved(self, job_id: str, count: int) -> None:
        self._logger.debug(
            "pipeline_stages_saved",
            job_id=job_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def candidates_reassigned(
        self, from_stage_id: str, to_stage_id: str, count: int
    ) -> None:
        self._logger.info(
            "pipeline_candidates_reassigned",
            from_stage_id=from_stage_id,
            to_stage_id=to_stage_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def member_saved(self, member_id: str, organization_id: str) -> None:
        self._logger.debug(
            "member_saved",
            member_id=member_id,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def domain_event_recorded(self, event: DomainEvent) -> None:
        payload = {
            key: value for key, value in vars(event).items() if key != "occurred_at"
        }
        self._logger.info(
            "recruiting_domain_event",
            event_type=type(event).__name__,
            occurred_at=event.occurred_at.isoformat(),
            **payload,
            **self._get_context_kwargs(),
        )
