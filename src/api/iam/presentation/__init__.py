"""IAM presentation layer.

Portal login routes, platform administration and the organization
routes platform users reach through their tenant slug.
"""

from __future__ import annotations

from fastapi import APIRouter

from iam.presentation import platform_admin, portal, tenant

router = APIRouter()

router.include_router(portal.candidate_router)
router.include_router(portal.client_router)
router.include_router(portal.pages_router)
router.include_router(platform_admin.router)
router.include_router(tenant.router)

__all__ = ["router"]
