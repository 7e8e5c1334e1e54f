"""Pydantic models for IAM API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from iam.domain.aggregates import Organization
from iam.domain.principals import TenantAccess


class RequestCodeRequest(BaseModel):
    """Ask for a one-time passcode."""

    email: str = Field(..., min_length=3, max_length=320)


class VerifyCodeRequest(BaseModel):
    """Exchange a one-time passcode for a portal session."""

    email: str = Field(..., min_length=3, max_length=320)
    otp: str = Field(..., min_length=1, max_length=10)


class MessageResponse(BaseModel):
    success: bool = True
    message: str | None = None


class PortalSessionResponse(BaseModel):
    """The portal account a session belongs to."""

    account_id: str
    email: str
    name: str | None = None


class CreateOrganizationRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=50)


class SetActiveRequest(BaseModel):
    is_active: bool


class SetMasterAdminRequest(BaseModel):
    promote: bool


class UpdateOrganizationSettingsRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    logo_url: str | None = Field(default=None, max_length=1024)


class OrganizationResponse(BaseModel):
    """Response model for organization."""

    id: str = Field(..., description="Organization ID (ULID format)")
    name: str
    slug: str
    is_active: bool
    disabled_at: datetime | None = None
    logo_url: str | None = None

    @classmethod
    def from_domain(cls, organization: Organization) -> OrganizationResponse:
        return cls(
            id=organization.id.value,
            name=organization.name,
            slug=organization.slug,
            is_active=organization.is_active,
            disabled_at=organization.disabled_at,
            logo_url=organization.logo_url,
        )


class MembershipResponse(BaseModel):
    tenant_id: str
    tenant_slug: str
    role: str

    @classmethod
    def from_domain(cls, access: TenantAccess) -> MembershipResponse:
        return cls(
            tenant_id=access.tenant_id,
            tenant_slug=access.tenant_slug,
            role=access.role.value,
        )


class HomeResponse(BaseModel):
    """The signed-in platform user and their organizations."""

    user_id: str
    email: str | None
    organizations: list[MembershipResponse]


class DashboardResponse(BaseModel):
    tenant_id: str
    tenant_slug: str
    user_id: str
    user_role: str
