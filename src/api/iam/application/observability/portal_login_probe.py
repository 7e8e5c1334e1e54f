"""Domain probe for portal passcode logins.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PortalLoginProbe(Protocol):
    """Domain probe for candidate and client portal logins."""

    def code_issued(self, portal: str, account_id: str, purged: int) -> None:
        ...

    def code_for_development(self, portal: str, email: str, code: str) -> None:
        """Expose an issued code in development, where no email is sent."""
        ...

    def unknown_email(self, portal: str, email: str) -> None:
        ...

    def code_rejected(self, portal: str, account_id: str) -> None:
        ...

    def login_succeeded(self, portal: str, account_id: str) -> None:
        ...

    def with_context(self, context: ObservationContext) -> PortalLoginProbe:
        ...


class DefaultPortalLoginProbe:
    """Default implementation of PortalLoginProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPortalLoginProbe:
        """Create a new probe with observation context bound."""
        return DefaultPortalLoginProbe(logger=self._logger, context=context)

    def code_issued(self, portal: str, account_id: str, purged: int) -> None:
        self._logger.info(
            "portal_code_issued",
            portal=str(portal),
            account_id=account_id,
            purged_codes=purged,
            **self._get_context_kwargs(),
        )

    def code_for_development(self, portal: str, email: str, code: str) -> None:
        self._logger.warning(
            "portal_code_development_delivery",
            portal=str(portal),
            email=email,
            code=code,
            **self._get_context_kwargs(),
        )

    def unknown_email(self, portal: str, email: str) -> None:
        self._logger.info(
            "portal_login_unknown_email",
            portal=str(portal),
            email=email,
            **self._get_context_kwargs(),
        )

    def code_rejected(self, portal: str, account_id: str) -> None:
        self._logger.info(
            "portal_code_rejected",
            portal=str(portal),
            account_id=account_id,
            **self._get_context_kwargs(),
        )

    def login_succeeded(self, portal: str, account_id: str) -> None:
        self._logger.info(
            "portal_login_succeeded",
            portal=str(portal),
            account_id=account_id,
            **self._get_context_kwargs(),
        )
