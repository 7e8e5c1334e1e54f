"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class OrganizationId:
    """Identifier for an Organization (tenant) aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> OrganizationId:
        """Generate a new OrganizationId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> OrganizationId:
        """Create OrganizationId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid OrganizationId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class UserId:
    """Identifier for a platform user.

    Platform user ids come from the identity provider's subject claim and
    are therefore opaque strings, not ULIDs.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Raises:
            ValueError: If value is empty or longer than 255 characters
        """
        if not value or len(value) > 255:
            raise ValueError(f"Invalid UserId: {value!r}")
        return cls(value=value)


class OrganizationRole(StrEnum):
    """Role of a platform user within an organization.

    Roles are ordered by privilege: owner > admin > member > viewer.
    """

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


SETTINGS_ROLES: frozenset[OrganizationRole] = frozenset(
    {OrganizationRole.OWNER, OrganizationRole.ADMIN}
)


class PortalKind(StrEnum):
    """The two external portals, each its own trust domain."""

    CANDIDATE = "candidate"
    CLIENT = "client"

    @property
    def subject_claim(self) -> str:
        """Token claim carrying the portal account id."""
        if self is PortalKind.CANDIDATE:
            return "member_id"
        return "company_user_id"
