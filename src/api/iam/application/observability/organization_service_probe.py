"""Domain probe for organization management and platform capabilities.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OrganizationServiceProbe(Protocol):
    """Domain probe for organization service operations."""

    def organization_created(self, organization_id: str, slug: str) -> None:
        ...

    def duplicate_organization_slug(self, slug: str) -> None:
        ...

    def organization_activation_changed(
        self, organization_id: str, is_active: bool
    ) -> None:
        ...

    def organization_settings_updated(self, organization_id: str, user_id: str) -> None:
        ...

    def settings_update_forbidden(self, organization_id: str, user_id: str) -> None:
        ...

    def master_admin_changed(self, user_id: str, promote: bool) -> None:
        ...

    def capability_granted(self, user_id: str, provider: str) -> None:
        ...

    def capability_provider_failed(
        self, user_id: str, provider: str, error: Exception
    ) -> None:
        ...

    def persistence_failed(self, operation: str, error: Exception) -> None:
        ...

    def with_context(self, context: ObservationContext) -> OrganizationServiceProbe:
        ...


class DefaultOrganizationServiceProbe:
    """Default implementation of OrganizationServiceProbe using structlog."""

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
    ) -> DefaultOrganizationServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultOrganizationServiceProbe(logger=self._logger, context=context)

    def organization_created(self, organization_id: str, slug: str) -> None:
        self._logger.info(
            "organization_created",
            organization_id=organization_id,
            slug=slug,
            **self._get_context_kwargs(),
        )

    def duplicate_organization_slug(self, slug: str) -> None:
        self._logger.warning(
            "organization_duplicate_slug",
            slug=slug,
            **self._get_context_kwargs(),
        )

    def organization_activation_changed(
        self, organization_id: str, is_active: bool
    ) -> None:
        self._logger.info(
            "organization_activation_changed",
            organization_id=organization_id,
            is_active=is_active,
            **self._get_context_kwargs(),
        )

    def organization_settings_updated(self, organization_id: str, user_id: str) -> None:
        self._logger.info(
            "organization_settings_updated",
            organization_id=organization_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def settings_update_forbidden(self, organization_id: str, user_id: str) -> None:
        self._logger.warning(
            "organization_settings_forbidden",
            organization_id=organization_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def master_admin_changed(self, user_id: str, promote: bool) -> None:
        self._logger.info(
            "master_admin_changed",
            target_user_id=user_id,
            promote=promote,
            **self._get_context_kwargs(),
        )

    def capability_granted(self, user_id: str, provider: str) -> None:
        self._logger.debug(
            "master_admin_capability_granted",
            target_user_id=user_id,
            provider=provider,
            **self._get_context_kwargs(),
        )

    def capability_provider_failed(
        self, user_id: str, provider: str, error: Exception
    ) -> None:
        """Record that one capability source could not be consulted."""
        self._logger.error(
            "capability_provider_failed",
            target_user_id=user_id,
            provider=provider,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def persistence_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "organization_persistence_failed",
            operation=operation,
            error=str(error),
            **self._get_context_kwargs(),
        )
