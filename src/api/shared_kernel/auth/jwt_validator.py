"""Platform session token validation.

Platform users authenticate against an OIDC provider. The access token it
issues is carried in the platform session cookie and validated here
against the provider's JWKS, which is fetched once and cached.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import httpx
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Validated platform session claims."""

    sub: str
    email: str | None


class InvalidTokenError(Exception):
    """Raised when a token fails validation."""

    pass


class JWTValidator:
    """Validates platform session tokens using the OIDC provider's JWKS.

    Checks signature, expiry, issuer and audience. JWKS are cached for
    `jwks_cache_ttl`; concurrent cache misses share a single fetch.
    """

    def __init__(
        self,
        issuer_url: str,
        audience: str,
        probe: JWTValidatorProbe,
        user_id_claim: str = "sub",
        email_claim: str = "email",
        jwks_cache_ttl: timedelta = timedelta(hours=24),
    ):
        self._issuer_url = issuer_url.rstrip("/")
        self._audience = audience
        self._probe = probe
        self._user_id_claim = user_id_claim
        self._email_claim = email_claim
        self._jwks_cache_ttl = jwks_cache_ttl

        self._jwks: dict[str, Any] | None = None
        self._jwks_fetched_at: datetime | None = None
        self._jwks_lock = asyncio.Lock()

    async def validate_token(self, token: str) -> TokenClaims:
        """Validate a session token and return its claims.

        Raises:
            InvalidTokenError: If the token is malformed, expired, issued
                for another audience or issuer, or badly signed.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            self._fail(f"Malformed token: {e}")
        if not header:
            self._fail("Missing token header")

        jwks = await self._get_jwks()

        try:
            claims = jwt.decode(
                token=token,
                key=jwks,
                algorithms=["RS256"],
                audience=self._audience,
                issuer=self._issuer_url,
            )
        except ExpiredSignatureError as e:
            self._fail("Token expired", cause=e)
        except JWTClaimsError as e:
            message = str(e).lower()
            if "audience" in message:
                self._fail("Invalid audience", cause=e)
            if "issuer" in message:
                self._fail("Invalid issuer", cause=e)
            self._fail(f"Claims error: {e}", cause=e)
        except JWTError as e:
            if "signature" in str(e).lower():
                self._fail("Invalid signature", cause=e)
            self._fail(f"JWT error: {e}", cause=e)

        user_id = claims.get(self._user_id_claim)
        if user_id is None:
            self._fail(f"Missing {self._user_id_claim} claim")

        email = claims.get(self._email_claim)
        self._probe.token_validated(user_id=str(user_id))
        return TokenClaims(
            sub=str(user_id),
            email=str(email) if email is not None else None,
        )

    def _fail(self, reason: str, cause: Exception | None = None) -> Any:
        self._probe.token_validation_failed(reason=reason)
        raise InvalidTokenError(reason) from cause

    async def _get_jwks(self) -> dict[str, Any]:
        """Get JWKS, fetching from the issuer if the cache expired."""
        if self._is_cache_valid():
            self._probe.jwks_cache_hit()
            return self._jwks  # type: ignore[return-value]

        async with self._jwks_lock:
            if self._is_cache_valid():
                self._probe.jwks_cache_hit()
                return self._jwks  # type: ignore[return-value]
            return await self._fetch_jwks()

    def _is_cache_valid(self) -> bool:
        if self._jwks is None or self._jwks_fetched_at is None:
            return False
        age = datetime.now(tz=timezone.utc) - self._jwks_fetched_at
        return age < self._jwks_cache_ttl

    async def _fetch_jwks(self) -> dict[str, Any]:
        """Fetch JWKS through the provider's discovery document.

        Raises:
            InvalidTokenError: If discovery or the key fetch fails.
        """
        discovery_url = f"{self._issuer_url}/.well-known/openid-configuration"
        try:
            async with httpx.AsyncClient() as client:
                config_response = await client.get(discovery_url)
                config_response.raise_for_status()
                jwks_uri = config_response.json().get("jwks_uri")
                if not jwks_uri:
                    self._probe.jwks_fetch_failed(error="Missing jwks_uri")
                    raise InvalidTokenError(
                        "OIDC provider missing jwks_uri in configuration"
                    )

                jwks_response = await client.get(jwks_uri)
                jwks_response.raise_for_status()
                jwks = jwks_response.json()
        except httpx.HTTPError as e:
            self._probe.jwks_fetch_failed(error=str(e))
            raise InvalidTokenError(f"Failed to fetch JWKS: {e}") from e

        self._jwks = jwks
        self._jwks_fetched_at = datetime.now(tz=timezone.utc)
        self._probe.jwks_fetched(key_count=len(jwks.get("keys", [])))
        return jwks
