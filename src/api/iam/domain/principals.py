"""Authenticated principals and rejection values.

A request is authenticated in exactly one of three independent domains.
Resolvers return one of the principal types below or a `Rejected` value;
they never raise past their boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Union

from iam.domain.value_objects import OrganizationRole


class RejectionReason(StrEnum):
    """Why a resolver refused a request."""

    NO_SESSION = "no_session"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Rejected:
    """A resolution failure. The access gate decides where to redirect."""

    reason: RejectionReason
    detail: str | None = None


@dataclass(frozen=True)
class PlatformPrincipal:
    """A staff user authenticated through the platform session."""

    user_id: str
    email: str | None


@dataclass(frozen=True)
class CandidatePrincipal:
    """A candidate authenticated through the candidate portal token."""

    member_id: str
    email: str


@dataclass(frozen=True)
class ClientPrincipal:
    """A client-company user authenticated through the client portal token."""

    company_user_id: str
    email: str


Principal = Union[PlatformPrincipal, CandidatePrincipal, ClientPrincipal]


@dataclass(frozen=True)
class TenantAccess:
    """A platform principal's resolved membership in one organization."""

    tenant_id: str
    tenant_slug: str
    role: OrganizationRole
