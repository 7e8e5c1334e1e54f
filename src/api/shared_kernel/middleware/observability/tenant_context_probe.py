"""Domain probe for reading tenant context in request handlers.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context consumption."""

    def tenant_context_loaded(self, tenant_id: str, user_id: str) -> None:
        """Record that a handler received a complete tenant context."""
        ...

    def tenant_context_missing(self, path: str, missing: list[str]) -> None:
        """Record that a tenant-protected handler ran without context."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_context_loaded(self, tenant_id: str, user_id: str) -> None:
        self._logger.debug(
            "tenant_context_loaded",
            tenant_id=tenant_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def tenant_context_missing(self, path: str, missing: list[str]) -> None:
        """Record that a tenant-protected handler ran without context."""
        self._logger.error(
            "tenant_context_missing",
            path=path,
            missing=missing,
            message="Tenant-protected route reached without access gate context",
            **self._get_context_kwargs(),
        )
