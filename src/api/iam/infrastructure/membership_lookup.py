"""PostgreSQL implementation of IMembershipLookup.

The lookup runs inside the access gate middleware, before FastAPI
dependency injection, so it opens its own short-lived session.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam.domain.principals import TenantAccess
from iam.domain.value_objects import OrganizationRole
from iam.infrastructure.models import OrganizationModel, OrganizationUserModel
from iam.ports.repositories import IMembershipLookup


def membership_query(user_id: str, organization_slug: str):
    """Point lookup joining memberships to active organizations by slug."""
    return (
        select(
            OrganizationModel.id,
            OrganizationModel.slug,
            OrganizationUserModel.role,
        )
        .join(
            OrganizationModel,
            OrganizationModel.id == OrganizationUserModel.organization_id,
        )
        .where(OrganizationUserModel.user_id == user_id)
        .where(OrganizationModel.slug == organization_slug)
        .where(OrganizationModel.is_active.is_(True))
    )


class SqlMembershipLookup(IMembershipLookup):
    """Resolves a user's membership with one indexed query."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def find_membership(
        self, user_id: str, organization_slug: str
    ) -> TenantAccess | None:
        async with self._session_factory() as session:
            result = await session.execute(
                membership_query(user_id, organization_slug)
            )
            row = result.one_or_none()

        if row is None:
            return None
        return TenantAccess(
            tenant_id=row.id,
            tenant_slug=row.slug,
            role=OrganizationRole(row.role),
        )

    async def list_memberships(self, user_id: str) -> list[TenantAccess]:
        stmt = (
            select(
                OrganizationModel.id,
                OrganizationModel.slug,
                OrganizationUserModel.role,
            )
            .join(
                OrganizationModel,
                OrganizationModel.id == OrganizationUserModel.organization_id,
            )
            .where(OrganizationUserModel.user_id == user_id)
            .where(OrganizationModel.is_active.is_(True))
            .order_by(OrganizationModel.slug)
        )
        async with self._session_factory() as session:
            rows = (await session.execute(stmt)).all()
        return [
            TenantAccess(
                tenant_id=row.id,
                tenant_slug=row.slug,
                role=OrganizationRole(row.role),
            )
            for row in rows
        ]
