"""Domain probe for talent-pool management.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MemberServiceProbe(Protocol):
    """Domain probe for member operations."""

    def member_created(self, member_id: str, organization_id: str) -> None:
        ...

    def member_updated(self, member_id: str, fields: list[str]) -> None:
        ...

    def member_note_added(self, member_id: str, author_id: str) -> None:
        ...

    def persistence_failed(self, operation: str, error: Exception) -> None:
        ...

    def with_context(self, context: ObservationContext) -> MemberServiceProbe:
        ...


class DefaultMemberServiceProbe:
    """Default implementation of MemberServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMemberServiceProbe:
        return DefaultMemberServiceProbe(logger=self._logger, context=context)

    def member_created(self, member_id: str, organization_id: str) -> None:
        self._logger.info(
            "member_created",
            member_id=member_id,
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def member_updated(self, member_id: str, fields: list[str]) -> None:
        self._logger.info(
            "member_updated",
            member_id=member_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def member_note_added(self, member_id: str, author_id: str) -> None:
        self._logger.info(
            "member_note_added",
            member_id=member_id,
            author_id=author_id,
            **self._get_context_kwargs(),
        )

    def persistence_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "member_persistence_failed",
            operation=operation,
            error=str(error),
            **self._get_context_kwargs(),
        )
