"""HTTP routes for the candidate and client portals.

Login endpoints live under `/api/candidato` and `/api/cliente`; portal
home pages under `/meu-portal` and `/portal-cliente`. Each portal uses its
own cookie, and a portal session never grants tenant access.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from iam.application.identity import PortalIdentityResolver
from iam.application.portal_login import PortalLoginService
from iam.dependencies.authentication import get_portal_resolver, portal_cookie_name
from iam.dependencies.guards import redirect_to
from iam.dependencies.services import (
    get_candidate_login_service,
    get_client_login_service,
)
from iam.domain.principals import CandidatePrincipal, ClientPrincipal, Rejected
from iam.domain.value_objects import PortalKind
from iam.presentation.models import (
    MessageResponse,
    PortalSessionResponse,
    RequestCodeRequest,
    VerifyCodeRequest,
)
from infrastructure.http_errors import raise_for_failure
from infrastructure.settings import (
    get_portal_auth_settings,
    get_routing_settings,
    get_settings,
)


def _set_session_cookie(response: Response, kind: PortalKind, token: str) -> None:
    settings = get_portal_auth_settings()
    response.set_cookie(
        key=portal_cookie_name(kind),
        value=token,
        max_age=int(settings.token_ttl.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.cookie_secure or get_settings().is_production,
        samesite="lax",
    )


def _portal_router(
    kind: PortalKind,
    prefix: str,
    service_dependency: Callable[..., PortalLoginService],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[f"{kind.value}-portal"])

    @router.post("/request-otp")
    async def request_otp(
        body: RequestCodeRequest,
        service: Annotated[PortalLoginService, Depends(service_dependency)],
    ) -> MessageResponse:
        """Send a one-time passcode to the account's email."""
        raise_for_failure(await service.request_code(body.email))
        return MessageResponse(message="Code sent")

    @router.post("/verify-otp")
    async def verify_otp(
        body: VerifyCodeRequest,
        response: Response,
        service: Annotated[PortalLoginService, Depends(service_dependency)],
    ) -> PortalSessionResponse:
        """Consume a passcode and start a portal session."""
        login = raise_for_failure(await service.verify_code(body.email, body.otp))
        _set_session_cookie(response, kind, login.token)
        return PortalSessionResponse(
            account_id=login.account.id,
            email=login.account.email,
            name=login.account.name,
        )

    @router.post("/logout")
    async def logout(response: Response) -> MessageResponse:
        response.delete_cookie(portal_cookie_name(kind), path="/")
        return MessageResponse()

    return router


candidate_router = _portal_router(
    PortalKind.CANDIDATE, "/api/candidato", get_candidate_login_service
)
client_router = _portal_router(
    PortalKind.CLIENT, "/api/cliente", get_client_login_service
)


def require_portal_principal(
    kind: PortalKind,
) -> Callable[..., Awaitable[CandidatePrincipal | ClientPrincipal]]:
    """Re-check the portal cookie on portal pages.

    The access gate has already verified the token; pages check again and
    send the user to the portal login if it is gone.
    """

    async def dependency(request: Request) -> CandidatePrincipal | ClientPrincipal:
        resolver: PortalIdentityResolver = get_portal_resolver(kind)
        principal = await resolver.resolve(request.cookies)
        if isinstance(principal, Rejected):
            routing = get_routing_settings()
            login = (
                routing.candidate_login_path
                if kind is PortalKind.CANDIDATE
                else routing.client_login_path
            )
            raise redirect_to(login)
        return principal

    return dependency


pages_router = APIRouter(tags=["portals"])


@pages_router.get("/meu-portal")
async def candidate_home(
    principal: Annotated[
        CandidatePrincipal, Depends(require_portal_principal(PortalKind.CANDIDATE))
    ],
) -> PortalSessionResponse:
    return PortalSessionResponse(account_id=principal.member_id, email=principal.email)


@pages_router.get("/portal-cliente")
async def client_home(
    principal: Annotated[
        ClientPrincipal, Depends(require_portal_principal(PortalKind.CLIENT))
    ],
) -> PortalSessionResponse:
    return PortalSessionResponse(
        account_id=principal.company_user_id, email=principal.email
    )
