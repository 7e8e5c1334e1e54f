"""Authentication shared kernel module."""

from shared_kernel.auth.jwt_validator import (
    InvalidTokenError,
    JWTValidator,
    TokenClaims,
)
from shared_kernel.auth.observability import (
    DefaultJWTValidatorProbe,
    DefaultPortalTokenProbe,
    JWTValidatorProbe,
    PortalTokenProbe,
)
from shared_kernel.auth.portal_token import PortalTokenCodec

__all__ = [
    "InvalidTokenError",
    "JWTValidator",
    "JWTValidatorProbe",
    "DefaultJWTValidatorProbe",
    "DefaultPortalTokenProbe",
    "PortalTokenCodec",
    "PortalTokenProbe",
    "TokenClaims",
]
