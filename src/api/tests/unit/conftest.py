"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.settings import RoutingSettings
from shared_kernel.middleware.tenant_context import TenantContext

ACME_ID = "01JAAAAAAAAAAAAAAAAAAAAAAA"
OTHER_ORG_ID = "01JBBBBBBBBBBBBBBBBBBBBBBB"


@pytest.fixture
def routing_settings() -> RoutingSettings:
    """Routing settings with the default path classification."""
    return RoutingSettings()


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose begin() works as an async context manager."""
    session = Mock(spec=AsyncSession)

    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)

    session.begin = Mock(return_value=ctx_manager)
    return session


@pytest.fixture
def make_tenant():
    """Factory for tenant contexts in the `acme` organization."""

    def factory(role: str = "owner", user_id: str = "user-1") -> TenantContext:
        return TenantContext(
            tenant_id=ACME_ID,
            tenant_slug="acme",
            user_id=user_id,
            user_role=role,
        )

    return factory


@pytest.fixture
def tenant(make_tenant) -> TenantContext:
    """Tenant context of an owner of the `acme` organization."""
    return make_tenant()
