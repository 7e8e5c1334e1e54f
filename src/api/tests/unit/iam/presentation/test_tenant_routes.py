"""Unit tests for tenant pages: dashboard, settings and the home page."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from iam.application.organization_service import OrganizationService
from iam.domain.aggregates import Organization
from iam.domain.principals import PlatformPrincipal, TenantAccess
from iam.domain.value_objects import OrganizationRole
from shared_kernel.results import ActionResult

ACME_ID = "01JAAAAAAAAAAAAAAAAAAAAAAA"


def context_headers(role: str) -> dict[str, str]:
    return {
        "x-tenant-id": ACME_ID,
        "x-tenant-slug": "acme",
        "x-user-id": "user-1",
        "x-user-role": role,
    }


@pytest.fixture
def mock_organization_service() -> AsyncMock:
    service = AsyncMock(spec=OrganizationService)
    organization = Organization.create("Acme")
    service.get_organization.return_value = ActionResult.success(organization)
    service.update_organization_settings.return_value = ActionResult.success(
        organization
    )
    return service


@pytest.fixture
def mock_lookup() -> AsyncMock:
    lookup = AsyncMock()
    lookup.list_memberships.return_value = [
        TenantAccess(tenant_id=ACME_ID, tenant_slug="acme", role=OrganizationRole.OWNER)
    ]
    return lookup


@pytest.fixture
def client(mock_organization_service, mock_lookup) -> TestClient:
    from iam.dependencies.authentication import get_membership_lookup
    from iam.dependencies.services import get_organization_service
    from iam.presentation.tenant import get_platform_principal, router

    app = FastAPI()
    app.dependency_overrides[get_organization_service] = (
        lambda: mock_organization_service
    )
    app.dependency_overrides[get_membership_lookup] = lambda: mock_lookup
    app.dependency_overrides[get_platform_principal] = lambda: PlatformPrincipal(
        user_id="user-1", email="u@example.com"
    )
    app.include_router(router)
    return TestClient(app, follow_redirects=False)


class TestSettingsRole:
    def test_viewer_is_sent_to_dashboard(self, client, mock_organization_service):
        response = client.get("/acme/configuracoes", headers=context_headers("viewer"))

        assert response.status_code == 307
        assert response.headers["location"] == "/acme/dashboard"
        mock_organization_service.get_organization.assert_not_called()

    def test_member_cannot_update_settings(self, client, mock_organization_service):
        response = client.patch(
            "/acme/configuracoes",
            json={"name": "New"},
            headers=context_headers("member"),
        )

        assert response.status_code == 307
        mock_organization_service.update_organization_settings.assert_not_called()

    @pytest.mark.parametrize("role", ["owner", "admin"])
    def test_owner_and_admin_see_settings(self, client, role):
        response = client.get("/acme/configuracoes", headers=context_headers(role))

        assert response.status_code == 200
        assert response.json()["slug"] == "acme"


class TestDashboard:
    def test_dashboard_reflects_injected_context(self, client):
        response = client.get("/acme/dashboard", headers=context_headers("viewer"))

        assert response.status_code == 200
        body = response.json()
        assert body["tenant_id"] == ACME_ID
        assert body["user_role"] == "viewer"


class TestHome:
    def test_home_lists_memberships(self, client, mock_lookup):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["organizations"][0]["tenant_slug"] == "acme"
        mock_lookup.list_memberships.assert_awaited_once_with("user-1")
