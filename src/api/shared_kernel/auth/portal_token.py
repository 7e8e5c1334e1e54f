"""Signed bearer tokens for the candidate and client portals.

Portal users log in with a one-time passcode and receive an HS256 token
signed with a shared secret. The same codec class serves both portals;
each portal gets its own instance (and cookie), so tokens are never
interchangeable between them.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from shared_kernel.auth.jwt_validator import InvalidTokenError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import PortalTokenProbe

PORTAL_TOKEN_ALGORITHM = "HS256"


class PortalTokenCodec:
    """Issues and verifies portal bearer tokens.

    Args:
        secret: Shared HS256 secret.
        subject_claim: Claim naming the portal account id
            (`member_id` or `company_user_id`).
        ttl: Token lifetime.
        probe: Observability probe.
    """

    def __init__(
        self,
        secret: str,
        subject_claim: str,
        ttl: timedelta,
        probe: PortalTokenProbe,
    ):
        if not secret:
            raise ValueError("Portal token secret must not be empty")
        self._secret = secret
        self._subject_claim = subject_claim
        self._ttl = ttl
        self._probe = probe

    @property
    def subject_claim(self) -> str:
        return self._subject_claim

    def issue(
        self, account_id: str, email: str, now: datetime | None = None
    ) -> str:
        """Sign a token for a portal account."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            self._subject_claim: account_id,
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=PORTAL_TOKEN_ALGORITHM)
        self._probe.token_issued(self._subject_claim, account_id)
        return token

    def verify(self, token: str) -> dict[str, Any]:
        """Verify signature and expiry and return the claims.

        Raises:
            InvalidTokenError: On a bad signature, an expired token or a
                payload without the subject claim.
        """
        try:
            claims = jwt.decode(
                token, self._secret, algorithms=[PORTAL_TOKEN_ALGORITHM]
            )
        except ExpiredSignatureError as e:
            self._probe.token_rejected(self._subject_claim, "expired")
            raise InvalidTokenError("Portal token has expired") from e
        except JWTError as e:
            self._probe.token_rejected(self._subject_claim, "invalid")
            raise InvalidTokenError(f"Invalid portal token: {e}") from e

        if not claims.get(self._subject_claim) or not claims.get("email"):
            self._probe.token_rejected(self._subject_claim, "missing_claims")
            raise InvalidTokenError(
                f"Portal token missing {self._subject_claim} or email"
            )
        return claims
