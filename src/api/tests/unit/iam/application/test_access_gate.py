"""Unit tests for the access gate decision logic."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.application.access_gate import AccessGate, Allow, Redirect
from iam.application.observability import AccessGateProbe
from iam.application.routing import PathKind
from iam.domain.principals import (
    CandidatePrincipal,
    ClientPrincipal,
    PlatformPrincipal,
    Rejected,
    RejectionReason,
    TenantAccess,
)
from iam.domain.value_objects import OrganizationRole
from infrastructure.settings import RoutingSettings

ACME_ID = "01JAAAAAAAAAAAAAAAAAAAAAAA"


@pytest.fixture
def platform_resolver() -> AsyncMock:
    resolver = AsyncMock()
    resolver.resolve.return_value = PlatformPrincipal(
        user_id="user-1", email="u@example.com"
    )
    return resolver


@pytest.fixture
def candidate_resolver() -> AsyncMock:
    resolver = AsyncMock()
    resolver.resolve.return_value = CandidatePrincipal(
        member_id="member-1", email="c@example.com"
    )
    return resolver


@pytest.fixture
def client_resolver() -> AsyncMock:
    resolver = AsyncMock()
    resolver.resolve.return_value = ClientPrincipal(
        company_user_id="cu-1", email="client@example.com"
    )
    return resolver


@pytest.fixture
def tenant_resolver() -> AsyncMock:
    resolver = AsyncMock()
    resolver.resolve.return_value = TenantAccess(
        tenant_id=ACME_ID, tenant_slug="acme", role=OrganizationRole.ADMIN
    )
    return resolver


@pytest.fixture
def mock_probe() -> MagicMock:
    return MagicMock(spec=AccessGateProbe)


@pytest.fixture
def gate(
    routing_settings: RoutingSettings,
    platform_resolver,
    candidate_resolver,
    client_resolver,
    tenant_resolver,
    mock_probe,
) -> AccessGate:
    return AccessGate(
        routing=routing_settings,
        platform_resolver=platform_resolver,
        candidate_resolver=candidate_resolver,
        client_resolver=client_resolver,
        tenant_resolver=tenant_resolver,
        probe=mock_probe,
    )


class TestTenantFlow:
    @pytest.mark.asyncio
    async def test_member_is_allowed_with_tenant_context(self, gate: AccessGate):
        decision = await gate.evaluate("/acme/dashboard", {"rivehr_session": "t"})

        assert isinstance(decision, Allow)
        assert decision.kind == PathKind.TENANT
        assert decision.tenant is not None
        assert decision.tenant.tenant_id == ACME_ID
        assert decision.tenant.tenant_slug == "acme"
        assert decision.tenant.user_id == "user-1"
        assert decision.tenant.user_role == "admin"

    @pytest.mark.asyncio
    async def test_anonymous_request_redirects_to_auth_with_return_path(
        self, gate: AccessGate, platform_resolver, tenant_resolver
    ):
        platform_resolver.resolve.return_value = Rejected(RejectionReason.NO_SESSION)

        decision = await gate.evaluate("/acme/dashboard", {})

        assert isinstance(decision, Redirect)
        assert decision.location == "/auth?redirect=%2Facme%2Fdashboard"
        assert decision.reason == RejectionReason.NO_SESSION
        tenant_resolver.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_member_redirects_to_unauthorized(
        self, gate: AccessGate, tenant_resolver
    ):
        tenant_resolver.resolve.return_value = Rejected(RejectionReason.FORBIDDEN)

        decision = await gate.evaluate("/acme/dashboard", {"rivehr_session": "t"})

        assert isinstance(decision, Redirect)
        assert decision.location == "/unauthorized"
        assert decision.reason == RejectionReason.FORBIDDEN

    @pytest.mark.asyncio
    async def test_tenant_resolver_receives_slug_from_path(
        self, gate: AccessGate, tenant_resolver, platform_resolver
    ):
        await gate.evaluate("/globex/vagas", {"rivehr_session": "t"})

        principal = platform_resolver.resolve.return_value
        tenant_resolver.resolve.assert_awaited_once_with(principal, "globex")

    @pytest.mark.asyncio
    async def test_redirect_is_reported_to_probe(
        self, gate: AccessGate, platform_resolver, mock_probe
    ):
        platform_resolver.resolve.return_value = Rejected(RejectionReason.NO_SESSION)

        await gate.evaluate("/acme/dashboard", {})

        mock_probe.request_redirected.assert_called_once_with(
            "/acme/dashboard",
            "/auth?redirect=%2Facme%2Fdashboard",
            RejectionReason.NO_SESSION,
        )


class TestRootPath:
    @pytest.mark.asyncio
    async def test_root_allows_signed_in_user_without_tenant(
        self, gate: AccessGate, tenant_resolver
    ):
        decision = await gate.evaluate("/", {"rivehr_session": "t"})

        assert isinstance(decision, Allow)
        assert decision.kind == PathKind.AUTHENTICATED
        assert decision.tenant is None
        tenant_resolver.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_root_redirects_anonymous_user(self, gate, platform_resolver):
        platform_resolver.resolve.return_value = Rejected(RejectionReason.NO_SESSION)

        decision = await gate.evaluate("/", {})

        assert isinstance(decision, Redirect)
        assert decision.location == "/auth?redirect=%2F"


class TestPortalFlows:
    @pytest.mark.asyncio
    async def test_candidate_portal_uses_only_candidate_resolver(
        self, gate, candidate_resolver, platform_resolver, client_resolver
    ):
        decision = await gate.evaluate("/meu-portal", {"candidate_token": "t"})

        assert isinstance(decision, Allow)
        assert isinstance(decision.principal, CandidatePrincipal)
        assert decision.tenant is None
        candidate_resolver.resolve.assert_awaited_once()
        platform_resolver.resolve.assert_not_called()
        client_resolver.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_candidate_without_token_goes_to_candidate_login(
        self, gate, candidate_resolver
    ):
        candidate_resolver.resolve.return_value = Rejected(
            RejectionReason.UNAUTHENTICATED
        )

        decision = await gate.evaluate("/meu-portal/vagas", {})

        assert isinstance(decision, Redirect)
        assert decision.location == "/candidato/login"

    @pytest.mark.asyncio
    async def test_client_without_token_goes_to_client_login(
        self, gate, client_resolver
    ):
        client_resolver.resolve.return_value = Rejected(
            RejectionReason.UNAUTHENTICATED
        )

        decision = await gate.evaluate("/portal-cliente", {})

        assert isinstance(decision, Redirect)
        assert decision.location == "/cliente/login"

    @pytest.mark.asyncio
    async def test_platform_session_does_not_open_candidate_portal(
        self, gate, candidate_resolver
    ):
        candidate_resolver.resolve.return_value = Rejected(
            RejectionReason.UNAUTHENTICATED
        )

        decision = await gate.evaluate("/meu-portal", {"rivehr_session": "t"})

        assert isinstance(decision, Redirect)


class TestPassThrough:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path", ["/auth", "/acme/public/vaga/x--1", "/api/cliente/verify-otp"]
    )
    async def test_public_and_reserved_paths_skip_resolvers(
        self, gate, path, platform_resolver, tenant_resolver
    ):
        decision = await gate.evaluate(path, {})

        assert isinstance(decision, Allow)
        assert decision.principal is None
        platform_resolver.resolve.assert_not_called()
        tenant_resolver.resolve.assert_not_called()
