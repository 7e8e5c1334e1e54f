"""Identity resolver and access gate dependencies.

Resolvers and the gate are process-wide singletons: the JWT validator
keeps its JWKS cache on the instance.
"""

from functools import lru_cache

from iam.application.access_gate import AccessGate
from iam.application.identity import PlatformIdentityResolver, PortalIdentityResolver
from iam.application.tenant_resolver import TenantResolver
from iam.domain.value_objects import PortalKind
from iam.infrastructure.membership_lookup import SqlMembershipLookup
from infrastructure.database.dependencies import get_write_sessionmaker
from infrastructure.settings import (
    get_oidc_settings,
    get_portal_auth_settings,
    get_routing_settings,
)
from shared_kernel.auth import (
    DefaultJWTValidatorProbe,
    DefaultPortalTokenProbe,
    JWTValidator,
    PortalTokenCodec,
)


@lru_cache
def get_jwt_validator() -> JWTValidator:
    """Get cached platform session validator."""
    settings = get_oidc_settings()
    return JWTValidator(
        issuer_url=settings.issuer_url,
        audience=settings.audience,
        probe=DefaultJWTValidatorProbe(),
        user_id_claim=settings.user_id_claim,
        email_claim=settings.email_claim,
    )


@lru_cache
def get_platform_resolver() -> PlatformIdentityResolver:
    return PlatformIdentityResolver(
        validator=get_jwt_validator(),
        cookie_name=get_oidc_settings().session_cookie,
    )


@lru_cache
def get_portal_token_codec(kind: PortalKind) -> PortalTokenCodec:
    """Get the token codec for one portal."""
    settings = get_portal_auth_settings()
    return PortalTokenCodec(
        secret=settings.jwt_secret.get_secret_value(),
        subject_claim=kind.subject_claim,
        ttl=settings.token_ttl,
        probe=DefaultPortalTokenProbe(),
    )


def portal_cookie_name(kind: PortalKind) -> str:
    settings = get_portal_auth_settings()
    if kind is PortalKind.CANDIDATE:
        return settings.candidate_cookie
    return settings.client_cookie


@lru_cache
def get_portal_resolver(kind: PortalKind) -> PortalIdentityResolver:
    return PortalIdentityResolver(
        kind=kind,
        codec=get_portal_token_codec(kind),
        cookie_name=portal_cookie_name(kind),
    )


@lru_cache
def get_membership_lookup() -> SqlMembershipLookup:
    return SqlMembershipLookup(get_write_sessionmaker())


@lru_cache
def get_access_gate() -> AccessGate:
    """Get the application-wide access gate."""
    return AccessGate(
        routing=get_routing_settings(),
        platform_resolver=get_platform_resolver(),
        candidate_resolver=get_portal_resolver(PortalKind.CANDIDATE),
        client_resolver=get_portal_resolver(PortalKind.CLIENT),
        tenant_resolver=TenantResolver(get_membership_lookup()),
    )
