"""Tenant context value object for resolved tenant identification.

The access gate resolves the tenant once per request and forwards it to
handlers as four request headers. This module holds the value object that
handlers work with and the header names that make up that channel. The
resolution itself lives in the IAM bounded context.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

TENANT_ID_HEADER = "x-tenant-id"
TENANT_SLUG_HEADER = "x-tenant-slug"
USER_ID_HEADER = "x-user-id"
USER_ROLE_HEADER = "x-user-role"

TENANT_CONTEXT_HEADERS: tuple[str, ...] = (
    TENANT_ID_HEADER,
    TENANT_SLUG_HEADER,
    USER_ID_HEADER,
    USER_ROLE_HEADER,
)


class TenantContextMissingError(Exception):
    """Raised when a tenant-protected handler runs without injected context.

    This is a configuration error (a route reachable without passing the
    access gate), never a client error.
    """

    def __init__(self, missing: list[str]):
        super().__init__(f"Tenant context headers missing: {', '.join(missing)}")
        self.missing = missing


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        tenant_id: Organization id the request is scoped to.
        tenant_slug: URL slug of that organization.
        user_id: Platform user id of the caller.
        user_role: The caller's role within the organization.
    """

    tenant_id: str
    tenant_slug: str
    user_id: str
    user_role: str

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> TenantContext:
        """Read the context injected by the access gate.

        Raises:
            TenantContextMissingError: If any of the four headers is absent
                or empty.
        """
        values = {name: headers.get(name) or "" for name in TENANT_CONTEXT_HEADERS}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise TenantContextMissingError(missing)
        return cls(
            tenant_id=values[TENANT_ID_HEADER],
            tenant_slug=values[TENANT_SLUG_HEADER],
            user_id=values[USER_ID_HEADER],
            user_role=values[USER_ROLE_HEADER],
        )

    def as_headers(self) -> dict[str, str]:
        """Render the context as the headers the access gate injects."""
        return {
            TENANT_ID_HEADER: self.tenant_id,
            TENANT_SLUG_HEADER: self.tenant_slug,
            USER_ID_HEADER: self.user_id,
            USER_ROLE_HEADER: self.user_role,
        }
