"""Observation context for domain-oriented observability.

Observation contexts carry request-scoped metadata that every probe adds
to the events it emits, so that log lines from one request can be
correlated across bounded contexts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Attributes:
        request_id: Unique identifier for the current request.
        user_id: Identifier of the acting user (if known).
        tenant_id: Organization the request is scoped to (if resolved).
        tenant_slug: URL slug of that organization (if resolved).
        extra: Additional contextual metadata.
    """

    request_id: str | None = None
    user_id: str | None = None
    tenant_id: str | None = None
    tenant_slug: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.user_id is not None:
            result["user_id"] = self.user_id
        if self.tenant_id is not None:
            result["tenant_id"] = self.tenant_id
        if self.tenant_slug is not None:
            result["tenant_slug"] = self.tenant_slug
        result.update(self.extra)
        return result

    def with_tenant(self, tenant_id: str, tenant_slug: str) -> ObservationContext:
        """Create a new context scoped to a resolved organization."""
        return ObservationContext(
            request_id=self.request_id,
            user_id=self.user_id,
            tenant_id=tenant_id,
            tenant_slug=tenant_slug,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            user_id=self.user_id,
            tenant_id=self.tenant_id,
            tenant_slug=self.tenant_slug,
            extra={**self.extra, **kwargs},
        )
