"""Access gate: per-request authentication and tenant authorization.

The gate classifies the request path, runs the identity resolver for the
matching domain and, for tenant paths, the tenant resolver. It produces a
decision value; the HTTP middleware turns that into a forwarded request
or a redirect.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Union
from urllib.parse import urlencode

from iam.application.identity import PlatformIdentityResolver, PortalIdentityResolver
from iam.application.observability import AccessGateProbe, DefaultAccessGateProbe
from iam.application.routing import PathKind, classify_path
from iam.application.tenant_resolver import TenantResolver
from iam.domain.principals import Principal, Rejected, RejectionReason
from infrastructure.settings import RoutingSettings
from shared_kernel.middleware.tenant_context import TenantContext


@dataclass(frozen=True)
class Allow:
    """Forward the request.

    `tenant` is set only for tenant-protected paths and is the sole
    source of the headers injected downstream.
    """

    kind: PathKind
    principal: Principal | None = None
    tenant: TenantContext | None = None


@dataclass(frozen=True)
class Redirect:
    """Send the client elsewhere (login or unauthorized page)."""

    location: str
    reason: RejectionReason


GateDecision = Union[Allow, Redirect]


class AccessGate:
    """Decides what happens to each incoming request."""

    def __init__(
        self,
        routing: RoutingSettings,
        platform_resolver: PlatformIdentityResolver,
        candidate_resolver: PortalIdentityResolver,
        client_resolver: PortalIdentityResolver,
        tenant_resolver: TenantResolver,
        probe: AccessGateProbe | None = None,
    ):
        self._routing = routing
        self._platform_resolver = platform_resolver
        self._candidate_resolver = candidate_resolver
        self._client_resolver = client_resolver
        self._tenant_resolver = tenant_resolver
        self._probe = probe or DefaultAccessGateProbe()

    async def evaluate(self, path: str, cookies: Mapping[str, str]) -> GateDecision:
        classification = classify_path(path, self._routing)
        self._probe.request_classified(path, classification.kind)

        match classification.kind:
            case PathKind.CANDIDATE_PORTAL:
                return await self._portal_flow(
                    path,
                    cookies,
                    PathKind.CANDIDATE_PORTAL,
                    self._candidate_resolver,
                    self._routing.candidate_login_path,
                )
            case PathKind.CLIENT_PORTAL:
                return await self._portal_flow(
                    path,
                    cookies,
                    PathKind.CLIENT_PORTAL,
                    self._client_resolver,
                    self._routing.client_login_path,
                )
            case PathKind.PUBLIC | PathKind.RESERVED:
                return Allow(kind=classification.kind)
            case PathKind.AUTHENTICATED:
                principal = await self._platform_resolver.resolve(cookies)
                if isinstance(principal, Rejected):
                    return self._redirect(path, self._login_location(path), principal)
                return Allow(kind=classification.kind, principal=principal)

        assert classification.tenant_slug is not None
        return await self._tenant_flow(path, cookies, classification.tenant_slug)

    async def _portal_flow(
        self,
        path: str,
        cookies: Mapping[str, str],
        kind: PathKind,
        resolver: PortalIdentityResolver,
        login_path: str,
    ) -> GateDecision:
        principal = await resolver.resolve(cookies)
        if isinstance(principal, Rejected):
            return self._redirect(path, login_path, principal)
        return Allow(kind=kind, principal=principal)

    async def _tenant_flow(
        self, path: str, cookies: Mapping[str, str], tenant_slug: str
    ) -> GateDecision:
        principal = await self._platform_resolver.resolve(cookies)
        if isinstance(principal, Rejected):
            return self._redirect(path, self._login_location(path), principal)

        access = await self._tenant_resolver.resolve(principal, tenant_slug)
        if isinstance(access, Rejected):
            return self._redirect(path, self._routing.unauthorized_path, access)

        return Allow(
            kind=PathKind.TENANT,
            principal=principal,
            tenant=TenantContext(
                tenant_id=access.tenant_id,
                tenant_slug=access.tenant_slug,
                user_id=principal.user_id,
                user_role=access.role.value,
            ),
        )

    def _login_location(self, path: str) -> str:
        return f"{self._routing.auth_path}?{urlencode({'redirect': path})}"

    def _redirect(self, path: str, location: str, rejected: Rejected) -> Redirect:
        self._probe.request_redirected(path, location, rejected.reason)
        return Redirect(location=location, reason=rejected.reason)
