"""Repository protocols (ports) for IAM bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from iam.domain.aggregates import OneTimePasscode, Organization
from iam.domain.principals import TenantAccess
from iam.domain.value_objects import OrganizationId, PortalKind


@runtime_checkable
class IOrganizationRepository(Protocol):
    """Repository for Organization aggregate persistence."""

    async def save(self, organization: Organization) -> None:
        """Insert or update an organization.

        Raises:
            DuplicateOrganizationSlugError: If the slug is already taken
        """
        ...

    async def get_by_id(self, organization_id: OrganizationId) -> Organization | None:
        ...

    async def get_by_slug(self, slug: str) -> Organization | None:
        ...

    async def list_all(self) -> list[Organization]:
        ...


@runtime_checkable
class IMembershipLookup(Protocol):
    """Point lookup of a platform user's membership in an organization.

    Only active organizations produce a match.
    """

    async def find_membership(
        self, user_id: str, organization_slug: str
    ) -> TenantAccess | None:
        ...

    async def list_memberships(self, user_id: str) -> list[TenantAccess]:
        """All memberships of a user in active organizations, by slug."""
        ...


@runtime_checkable
class ICapabilityProvider(Protocol):
    """One source of truth for a platform-wide capability flag."""

    name: str

    async def has_capability(self, user_id: str) -> bool:
        ...


@runtime_checkable
class IMasterAdminStore(Protocol):
    """Writes the master admin flag to every capability source."""

    async def set_master_admin(self, user_id: str, promote: bool) -> None:
        ...


@dataclass(frozen=True)
class PortalAccount:
    """A candidate (member) or client (company user) login identity."""

    id: str
    email: str
    name: str | None


@runtime_checkable
class IPortalAccountRepository(Protocol):
    """Looks up portal accounts by email for one portal."""

    kind: PortalKind

    async def find_by_email(self, email: str) -> PortalAccount | None:
        """Find an account by its normalized (trimmed, lowercased) email."""
        ...


@runtime_checkable
class IOneTimePasscodeRepository(Protocol):
    """Storage for portal one-time passcodes."""

    kind: PortalKind

    async def purge_for_account(self, account_id: str) -> int:
        """Delete every passcode for an account. Returns the count removed."""
        ...

    async def add(self, passcode: OneTimePasscode) -> None:
        ...

    async def find_live(
        self, account_id: str, code: str, now: datetime
    ) -> OneTimePasscode | None:
        """Find a matching passcode whose expiry is after `now`."""
        ...

    async def delete(self, passcode_id: str) -> bool:
        ...
