"""Domain probes for IAM repository operations.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from iam.domain.events import DomainEvent
    from shared_kernel.observability_context import ObservationContext


class OrganizationRepositoryProbe(Protocol):
    """Domain probe for organization persistence."""

    def organization_saved(self, organization_id: str, slug: str) -> None:
        ...

    def organization_retrieved(self, organization_id: str) -> None:
        ...

    def organizations_listed(self, count: int) -> None:
        ...

    def duplicate_organization_slug(self, slug: str) -> None:
        ...

    def domain_event_recorded(self, event: DomainEvent) -> None:
        """Record an aggregate event in the audit log."""
        ...

    def with_context(self, context: ObservationContext) -> OrganizationRepositoryProbe:
        ...


class PortalRepositoryProbe(Protocol):
    """Domain probe for portal account and passcode storage."""

    def passcodes_purged(self, portal: str, account_id: str, count: int) -> None:
        ...

    def passcode_consumed(self, portal: str, passcode_id: str) -> None:
        ...


class DefaultOrganizationRepositoryProbe:
    """Default implementation of OrganizationRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultOrganizationRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultOrganizationRepositoryProbe(logger=self._logger, context=context)

    def organization_saved(self, organization_id: str, slug: str) -> None:
        self._logger.info(
            "organization_saved",
            organization_id=organization_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def organization_retrieved(self, organization_id: str) -> None:
        self._logger.debug(
            "organization_retrieved",
            organization_id=organization_id,
            **self._get_context_kwargs(),
        )

    def organizations_listed(self, count: int) -> None:
        self._logger.debug(
            "organizations_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_organization_slug(self, slug: str) -> None:
        self._logger.warning(
            "organization_duplicate_slug",
            slug=slug,
            **self._get_context_kwargs(),
        )

    def domain_event_recorded(self, event: DomainEvent) -> None:
        payload = {
            key: value
            for key, value in vars(event).items()
            if key != "occurred_at"
        }
        self._logger.info(
            "iam_domain_event",
            event_type=type(event).__name__,
            occurred_at=event.occurred_at.isoformat(),
            **payload,
            **self._get_context_kwargs(),
        )


class DefaultPortalRepositoryProbe:
    """Default implementation of PortalRepositoryProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def passcodes_purged(self, portal: str, account_id: str, count: int) -> None:
        self._logger.debug(
            "portal_passcodes_purged",
            portal=str(portal),
            account_id=account_id,
            count=count,
        )

    def passcode_consumed(self, portal: str, passcode_id: str) -> None:
        self._logger.debug(
            "portal_passcode_consumed",
            portal=str(portal),
            passcode_id=passcode_id,
        )
