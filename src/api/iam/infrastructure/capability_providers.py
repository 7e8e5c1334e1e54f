"""Master admin capability sources and their writer."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from iam.infrastructure.models import LegacyProfileModel, UserProfileModel
from iam.infrastructure.models.profile import DEFAULT_PROFILE_ROLE, MASTER_ADMIN_ROLE
from iam.ports.repositories import ICapabilityProvider, IMasterAdminStore


class ProfileRoleCapabilityProvider(ICapabilityProvider):
    """Current source: `user_profiles.role`."""

    name = "user_profiles"

    def __init__(self, session: AsyncSession):
        self._session = session

    async def has_capability(self, user_id: str) -> bool:
        stmt = select(UserProfileModel.role).where(UserProfileModel.user_id == user_id)
        role = (await self._session.execute(stmt)).scalar_one_or_none()
        return role == MASTER_ADMIN_ROLE


class LegacyFlagCapabilityProvider(ICapabilityProvider):
    """Legacy source: `profiles.is_master_admin`."""

    name = "profiles"

    def __init__(self, session: AsyncSession):
        self._session = session

    async def has_capability(self, user_id: str) -> bool:
        stmt = select(LegacyProfileModel.is_master_admin).where(
            LegacyProfileModel.id == user_id
        )
        flag = (await self._session.execute(stmt)).scalar_one_or_none()
        return bool(flag)


class MasterAdminStore(IMasterAdminStore):
    """Keeps both capability sources in step."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def set_master_admin(self, user_id: str, promote: bool) -> None:
        role = MASTER_ADMIN_ROLE if promote else DEFAULT_PROFILE_ROLE
        profile_stmt = insert(UserProfileModel).values(user_id=user_id, role=role)
        await self._session.execute(
            profile_stmt.on_conflict_do_update(
                index_elements=[UserProfileModel.user_id],
                set_={"role": role},
            )
        )
        legacy_stmt = insert(LegacyProfileModel).values(
            id=user_id, is_master_admin=promote
        )
        await self._session.execute(
            legacy_stmt.on_conflict_do_update(
                index_elements=[LegacyProfileModel.id],
                set_={"is_master_admin": promote},
            )
        )
