"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        RIVEHR_DB_HOST: Database host (default: localhost)
        RIVEHR_DB_PORT: Database port (default: 5432)
        RIVEHR_DB_DATABASE: Database name (default: rivehr)
        RIVEHR_DB_USERNAME: Database user (default: rivehr)
        RIVEHR_DB_PASSWORD: Database password (required in production)
        RIVEHR_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        RIVEHR_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        RIVEHR_DB_CHANGE_CHANNEL: NOTIFY channel carrying row changes
    """

    model_config = SettingsConfigDict(
        env_prefix="RIVEHR_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="rivehr", description="Database name")
    username: str = Field(default="rivehr", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    change_channel: str = Field(
        default="row_changes",
        description="PostgreSQL NOTIFY channel for row-level change events",
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class OIDCSettings(BaseSettings):
    """Platform user authentication settings.

    Platform users sign in through an OIDC provider; the access token is
    kept in the platform session cookie and validated on every request.

    Environment variables:
        RIVEHR_OIDC_ISSUER_URL: OIDC issuer URL
        RIVEHR_OIDC_AUDIENCE: Expected audience claim
        RIVEHR_OIDC_USER_ID_CLAIM: Claim holding the user id (default: sub)
        RIVEHR_OIDC_EMAIL_CLAIM: Claim holding the email (default: email)
        RIVEHR_OIDC_SESSION_COOKIE: Session cookie name (default: rivehr_session)
    """

    model_config = SettingsConfigDict(
        env_prefix="RIVEHR_OIDC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    issuer_url: str = Field(
        default="http://localhost:8080/realms/rivehr",
        description="OIDC issuer URL",
    )
    audience: str = Field(default="rivehr-api", description="Expected audience")
    user_id_claim: str = Field(default="sub", description="User id claim")
    email_claim: str = Field(default="email", description="Email claim")
    session_cookie: str = Field(
        default="rivehr_session",
        description="Cookie carrying the platform access token",
    )


class PortalAuthSettings(BaseSettings):
    """Candidate and client portal authentication settings.

    Environment variables:
        RIVEHR_PORTAL_JWT_SECRET: Shared secret for portal bearer tokens (required)
        RIVEHR_PORTAL_TOKEN_TTL_DAYS: Token validity in days (default: 7)
        RIVEHR_PORTAL_OTP_LENGTH: Number of digits in an OTP (default: 6)
        RIVEHR_PORTAL_OTP_TTL_MINUTES: OTP validity in minutes (default: 10)
        RIVEHR_PORTAL_COOKIE_SECURE: Mark portal cookies secure (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="RIVEHR_PORTAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret: SecretStr = Field(
        description="HS256 secret shared by the portal token issuer and verifier",
    )
    token_ttl_days: int = Field(default=7, ge=1, le=90)
    otp_length: int = Field(default=6, ge=4, le=10)
    otp_ttl_minutes: int = Field(default=10, ge=1, le=60)
    cookie_secure: bool = Field(default=False)
    candidate_cookie: str = Field(default="candidate_token")
    client_cookie: str = Field(default="client_token")

    @field_validator("jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, value: SecretStr) -> SecretStr:
        """Reject a blank secret: portal tokens cannot be signed without one."""
        if not value.get_secret_value().strip():
            raise ValueError("jwt_secret must not be empty")
        return value

    @property
    def token_ttl(self) -> timedelta:
        """Portal token lifetime."""
        return timedelta(days=self.token_ttl_days)

    @property
    def otp_ttl(self) -> timedelta:
        """One-time passcode lifetime."""
        return timedelta(minutes=self.otp_ttl_minutes)


class RoutingSettings(BaseSettings):
    """Path classification settings for the access gate.

    Environment variables use the RIVEHR_ROUTING_ prefix; list values are
    given as JSON arrays.
    """

    model_config = SettingsConfigDict(
        env_prefix="RIVEHR_ROUTING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    candidate_portal_prefix: str = Field(default="/meu-portal")
    candidate_login_path: str = Field(default="/candidato/login")
    client_portal_prefix: str = Field(default="/portal-cliente")
    client_login_path: str = Field(default="/cliente/login")
    auth_path: str = Field(default="/auth")
    unauthorized_path: str = Field(default="/unauthorized")
    public_prefixes: list[str] = Field(
        default=[
            "/auth",
            "/empresas",
            "/s/",
            "/public",
            "/candidato",
            "/cliente",
        ],
        description="Path prefixes that never require authentication",
    )
    tenant_public_segments: list[str] = Field(
        default=["empresas", "public", "shortlists"],
        description="Second path segments under a tenant slug that are public",
    )
    reserved_segments: list[str] = Field(
        default=[
            "unauthorized",
            "api",
            "_next",
            "favicon.ico",
            "platform-admin",
            "health",
            "docs",
            "redoc",
            "openapi.json",
        ],
        description="First path segments that can never be tenant slugs",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="RIVEHR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="RIVEHR API", description="Application name")
    environment: str = Field(default="development", description="Environment")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_production(self) -> bool:
        """Whether the service runs in production."""
        return self.environment == "production"

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_oidc_settings() -> OIDCSettings:
    """Get cached OIDC settings."""
    return OIDCSettings()


@lru_cache
def get_portal_auth_settings() -> PortalAuthSettings:
    """Get cached portal authentication settings."""
    return PortalAuthSettings()


@lru_cache
def get_routing_settings() -> RoutingSettings:
    """Get cached routing settings."""
    return RoutingSettings()
