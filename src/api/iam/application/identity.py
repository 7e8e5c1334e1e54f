"""Identity resolvers for the three authentication domains.

Each resolver reads its own cookie and returns a principal or a
`Rejected` value. Verification failures never propagate as exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping

from iam.domain.principals import (
    CandidatePrincipal,
    ClientPrincipal,
    PlatformPrincipal,
    Rejected,
    RejectionReason,
)
from iam.domain.value_objects import PortalKind
from shared_kernel.auth import InvalidTokenError, JWTValidator, PortalTokenCodec


class PlatformIdentityResolver:
    """Resolves staff users from the platform session cookie."""

    def __init__(self, validator: JWTValidator, cookie_name: str):
        self._validator = validator
        self._cookie_name = cookie_name

    async def resolve(
        self, cookies: Mapping[str, str]
    ) -> PlatformPrincipal | Rejected:
        token = cookies.get(self._cookie_name)
        if not token:
            return Rejected(RejectionReason.NO_SESSION)
        try:
            claims = await self._validator.validate_token(token)
        except InvalidTokenError as e:
            return Rejected(RejectionReason.NO_SESSION, detail=str(e))
        return PlatformPrincipal(user_id=claims.sub, email=claims.email)


class PortalIdentityResolver:
    """Resolves candidate or client principals from a portal token cookie.

    Candidate and client resolvers are two instances of this class with
    different cookies and codecs.
    """

    def __init__(self, kind: PortalKind, codec: PortalTokenCodec, cookie_name: str):
        self.kind = kind
        self._codec = codec
        self._cookie_name = cookie_name

    async def resolve(
        self, cookies: Mapping[str, str]
    ) -> CandidatePrincipal | ClientPrincipal | Rejected:
        token = cookies.get(self._cookie_name)
        if not token:
            return Rejected(RejectionReason.UNAUTHENTICATED, detail="missing cookie")
        try:
            claims = self._codec.verify(token)
        except InvalidTokenError as e:
            return Rejected(RejectionReason.UNAUTHENTICATED, detail=str(e))

        account_id = str(claims[self.kind.subject_claim])
        email = str(claims["email"])
        if self.kind is PortalKind.CANDIDATE:
            return CandidatePrincipal(member_id=account_id, email=email)
        return ClientPrincipal(company_user_id=account_id, email=email)
