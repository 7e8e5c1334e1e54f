"""HTTP routes for platform administration.

Every route requires a master admin; anyone else is redirected.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from iam.application.organization_service import OrganizationService
from iam.dependencies.guards import require_master_admin
from iam.dependencies.services import get_organization_service
from iam.domain.principals import PlatformPrincipal
from iam.presentation.models import (
    CreateOrganizationRequest,
    MessageResponse,
    OrganizationResponse,
    SetActiveRequest,
    SetMasterAdminRequest,
)
from infrastructure.http_errors import raise_for_failure

router = APIRouter(
    prefix="/platform-admin",
    tags=["platform-admin"],
    dependencies=[Depends(require_master_admin)],
)


@router.get("/organizations")
async def list_organizations(
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> list[OrganizationResponse]:
    """List every organization, active or not."""
    organizations = await service.list_organizations()
    return [OrganizationResponse.from_domain(o) for o in organizations]


@router.post("/organizations", status_code=status.HTTP_201_CREATED)
async def create_organization(
    body: CreateOrganizationRequest,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Create an organization. The slug is derived from the name when omitted."""
    organization = raise_for_failure(
        await service.create_organization(name=body.name, slug=body.slug)
    )
    return OrganizationResponse.from_domain(organization)


@router.patch("/organizations/{organization_id}/active")
async def set_organization_active(
    organization_id: str,
    body: SetActiveRequest,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    organization = raise_for_failure(
        await service.set_organization_active(organization_id, body.is_active)
    )
    return OrganizationResponse.from_domain(organization)


@router.delete("/organizations/{organization_id}")
async def disable_organization(
    organization_id: str,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> OrganizationResponse:
    """Soft-disable an organization."""
    organization = raise_for_failure(
        await service.disable_organization(organization_id)
    )
    return OrganizationResponse.from_domain(organization)


@router.put("/users/{user_id}/master-admin")
async def set_master_admin(
    user_id: str,
    body: SetMasterAdminRequest,
    admin: Annotated[PlatformPrincipal, Depends(require_master_admin)],
    service: Annotated[OrganizationService, Depends(get_organization_service)],
) -> MessageResponse:
    raise_for_failure(await service.set_master_admin(user_id, body.promote))
    action = "promoted" if body.promote else "demoted"
    return MessageResponse(message=f"User {user_id} {action} by {admin.user_id}")
