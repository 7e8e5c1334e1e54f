"""Unit tests for request path classification."""

import pytest

from iam.application.routing import PathKind, classify_path
from infrastructure.settings import RoutingSettings


class TestPortalPaths:
    @pytest.mark.parametrize("path", ["/meu-portal", "/meu-portal/vagas/123"])
    def test_candidate_portal(self, routing_settings: RoutingSettings, path: str):
        result = classify_path(path, routing_settings)
        assert result.kind == PathKind.CANDIDATE_PORTAL
        assert result.tenant_slug is None

    def test_client_portal(self, routing_settings: RoutingSettings):
        result = classify_path("/portal-cliente/shortlist", routing_settings)
        assert result.kind == PathKind.CLIENT_PORTAL

    def test_portal_prefix_must_match_whole_segment(
        self, routing_settings: RoutingSettings
    ):
        """'/meu-portalx' is a tenant slug, not the candidate portal."""
        result = classify_path("/meu-portalx/dashboard", routing_settings)
        assert result.kind == PathKind.TENANT
        assert result.tenant_slug == "meu-portalx"


class TestPublicPaths:
    @pytest.mark.parametrize(
        "path",
        [
            "/auth",
            "/auth/callback",
            "/empresas",
            "/s/abc123",
            "/public/vaga/designer--01JAAAAAAAAAAAAAAAAAAAAAAA",
            "/candidato/login",
            "/cliente/login",
        ],
    )
    def test_public_prefixes(self, routing_settings: RoutingSettings, path: str):
        assert classify_path(path, routing_settings).kind == PathKind.PUBLIC

    @pytest.mark.parametrize(
        "path",
        [
            "/acme/public/vaga/designer--01JAAAAAAAAAAAAAAAAAAAAAAA",
            "/acme/empresas",
            "/acme/shortlists/abc",
        ],
    )
    def test_public_pages_under_a_tenant_slug(
        self, routing_settings: RoutingSettings, path: str
    ):
        result = classify_path(path, routing_settings)
        assert result.kind == PathKind.PUBLIC
        assert result.tenant_slug is None


class TestReservedPaths:
    @pytest.mark.parametrize(
        "path",
        [
            "/unauthorized",
            "/api/candidato/request-otp",
            "/_next/static/chunk.js",
            "/favicon.ico",
            "/platform-admin/organizations",
            "/health",
        ],
    )
    def test_reserved_first_segment_never_becomes_a_slug(
        self, routing_settings: RoutingSettings, path: str
    ):
        result = classify_path(path, routing_settings)
        assert result.kind == PathKind.RESERVED
        assert result.tenant_slug is None


class TestTenantPaths:
    def test_root_requires_only_a_platform_session(
        self, routing_settings: RoutingSettings
    ):
        assert classify_path("/", routing_settings).kind == PathKind.AUTHENTICATED

    @pytest.mark.parametrize(
        "path,slug",
        [
            ("/acme", "acme"),
            ("/acme/dashboard", "acme"),
            ("/acme/vagas/detalhes/01JAAAAAAAAAAAAAAAAAAAAAAA", "acme"),
            ("/authors/dashboard", "authors"),
        ],
    )
    def test_first_segment_is_the_slug(
        self, routing_settings: RoutingSettings, path: str, slug: str
    ):
        result = classify_path(path, routing_settings)
        assert result.kind == PathKind.TENANT
        assert result.tenant_slug == slug

    def test_classification_is_total(self, routing_settings: RoutingSettings):
        """Every path lands in exactly one flow; only tenant paths carry a slug."""
        paths = ["/", "/x", "/x/y", "/api", "/auth", "/meu-portal", "//acme//team"]
        for path in paths:
            result = classify_path(path, routing_settings)
            assert result.kind in set(PathKind)
            assert (result.tenant_slug is not None) == (result.kind == PathKind.TENANT)

    def test_custom_reserved_segments(self):
        settings = RoutingSettings(reserved_segments=["internal"])
        assert classify_path("/internal/x", settings).kind == PathKind.RESERVED
        assert classify_path("/api/x", settings).kind == PathKind.TENANT
