"""Domain probe for the access gate and tenant resolver.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessGateProbe(Protocol):
    """Domain probe for request access decisions."""

    def request_classified(self, path: str, kind: str) -> None:
        ...

    def request_redirected(self, path: str, location: str, reason: str) -> None:
        ...

    def tenant_access_granted(self, tenant_id: str, user_id: str, role: str) -> None:
        ...

    def tenant_access_denied(self, tenant_slug: str, user_id: str) -> None:
        ...

    def membership_lookup_failed(
        self, tenant_slug: str, user_id: str, error: Exception
    ) -> None:
        ...

    def with_context(self, context: ObservationContext) -> AccessGateProbe:
        ...


class DefaultAccessGateProbe:
    """Default implementation of AccessGateProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAccessGateProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessGateProbe(logger=self._logger, context=context)

    def request_classified(self, path: str, kind: str) -> None:
        self._logger.debug(
            "access_gate_request_classified",
            path=path,
            kind=str(kind),
            **self._get_context_kwargs(),
        )

    def request_redirected(self, path: str, location: str, reason: str) -> None:
        self._logger.info(
            "access_gate_redirect",
            path=path,
            location=location,
            reason=str(reason),
            **self._get_context_kwargs(),
        )

    def tenant_access_granted(self, tenant_id: str, user_id: str, role: str) -> None:
        self._logger.debug(
            "tenant_access_granted",
            tenant_id=tenant_id,
            user_id=user_id,
            role=str(role),
            **self._get_context_kwargs(),
        )

    def tenant_access_denied(self, tenant_slug: str, user_id: str) -> None:
        """Record that a user has no membership in an active organization."""
        self._logger.warning(
            "tenant_access_denied",
            tenant_slug=tenant_slug,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def membership_lookup_failed(
        self, tenant_slug: str, user_id: str, error: Exception
    ) -> None:
        self._logger.error(
            "tenant_membership_lookup_failed",
            tenant_slug=tenant_slug,
            user_id=user_id,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
