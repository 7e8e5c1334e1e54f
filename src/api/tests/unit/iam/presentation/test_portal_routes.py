"""Unit tests for candidate and client portal routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from iam.application.portal_login import PortalLogin, PortalLoginService
from iam.domain.value_objects import PortalKind
from iam.ports.repositories import PortalAccount
from shared_kernel.results import ActionResult, ErrorCode

SECRET = "portal-route-secret"


@pytest.fixture(autouse=True)
def portal_secret(monkeypatch):
    """Configure the portal secret and reset the cached codecs around it."""
    from iam.dependencies.authentication import (
        get_portal_resolver,
        get_portal_token_codec,
    )
    from infrastructure.settings import get_portal_auth_settings

    monkeypatch.setenv("RIVEHR_PORTAL_JWT_SECRET", SECRET)
    caches = (get_portal_auth_settings, get_portal_token_codec, get_portal_resolver)
    for cached in caches:
        cached.cache_clear()
    yield
    for cached in caches:
        cached.cache_clear()


@pytest.fixture
def candidate_service() -> AsyncMock:
    return AsyncMock(spec=PortalLoginService)


@pytest.fixture
def client(candidate_service) -> TestClient:
    from iam.dependencies.services import get_candidate_login_service
    from iam.presentation import portal

    app = FastAPI()
    app.dependency_overrides[get_candidate_login_service] = lambda: candidate_service
    app.include_router(portal.candidate_router)
    app.include_router(portal.client_router)
    app.include_router(portal.pages_router)
    return TestClient(app, follow_redirects=False)


def candidate_token() -> str:
    from iam.dependencies.authentication import get_portal_token_codec

    return get_portal_token_codec(PortalKind.CANDIDATE).issue(
        "member-1", "ana@example.com"
    )


class TestLogin:
    def test_request_otp(self, client, candidate_service):
        candidate_service.request_code.return_value = ActionResult.success()

        response = client.post(
            "/api/candidato/request-otp", json={"email": "ana@example.com"}
        )

        assert response.status_code == 200
        candidate_service.request_code.assert_awaited_once_with("ana@example.com")

    def test_unknown_email_is_400(self, client, candidate_service):
        candidate_service.request_code.return_value = ActionResult.failure(
            ErrorCode.VALIDATION, "Email not found"
        )

        response = client.post(
            "/api/candidato/request-otp", json={"email": "x@example.com"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Email not found"

    def test_verify_sets_http_only_candidate_cookie(self, client, candidate_service):
        account = PortalAccount(id="member-1", email="ana@example.com", name="Ana")
        candidate_service.verify_code.return_value = ActionResult.success(
            PortalLogin(token="signed-token", account=account)
        )

        response = client.post(
            "/api/candidato/verify-otp",
            json={"email": "ana@example.com", "otp": "123456"},
        )

        assert response.status_code == 200
        assert response.json()["account_id"] == "member-1"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("candidate_token=signed-token")
        assert "HttpOnly" in cookie
        assert "samesite=lax" in cookie.lower()

    def test_logout_clears_cookie(self, client):
        response = client.post("/api/candidato/logout")

        assert response.status_code == 200
        assert 'candidate_token=""' in response.headers["set-cookie"]


class TestPortalPages:
    def test_candidate_home_with_token(self, client):
        client.cookies.set("candidate_token", candidate_token())

        response = client.get("/meu-portal")

        assert response.status_code == 200
        assert response.json()["account_id"] == "member-1"

    def test_candidate_home_without_token_goes_to_login(self, client):
        response = client.get("/meu-portal")

        assert response.status_code == 307
        assert response.headers["location"] == "/candidato/login"

    def test_candidate_token_does_not_open_client_portal(self, client):
        client.cookies.set("client_token", candidate_token())

        response = client.get("/portal-cliente")

        assert response.status_code == 307
        assert response.headers["location"] == "/cliente/login"
