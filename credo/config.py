"""Application configuration."""

from typing import Literal
from pydantic import BaseModel, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Database configuration."""

    # SQLite through aiosqlite by default, PostgreSQL via postgresql+asyncpg://
    url: str = "sqlite+aiosqlite:///./auth.db"
    pool_size: int = 5
    max_overflow: int = 10


class AuthSettings(BaseModel):
    """Authentication configuration."""

    # bcrypt cost factor
    bcrypt_rounds: int = 10

    min_password_length: int = 8

    # Verification codes are valid for 24 hours after issue
    verification_code_ttl_hours: int = 24

    # Sessions expire 24 hours after creation (absolute, not sliding)
    session_ttl_hours: int = 24
    session_cookie_name: str = "session_id"

    # When True: an OAuth login whose (provider-verified) email matches an
    # existing user is linked to that user
    # When False: only the provider's external id is used for lookup
    link_accounts_by_email: bool = True

    # Where the browser lands after an OAuth callback
    login_redirect_url: str = "/"
    login_failure_redirect_url: str = "/?error=oauth_failed"


class OAuthClientSettings(BaseModel):
    """Credentials for a single OAuth provider.

    A provider is enabled only when both client_id and client_secret are set.
    """

    client_id: str | None = None
    client_secret: str | None = None

    # Set by Settings validator from api.base_url unless given explicitly
    callback_url: str | None = None

    @property
    def enabled(self) -> bool:
        """Whether the provider has credentials configured."""
        return bool(self.client_id and self.client_secret)


class OAuthSettings(BaseModel):
    """Third-party identity provider configuration."""

    google: OAuthClientSettings = OAuthClientSettings()
    microsoft: OAuthClientSettings = OAuthClientSettings()
    amazon: OAuthClientSettings = OAuthClientSettings()
    idme: OAuthClientSettings = OAuthClientSettings()


class MailSettings(BaseModel):
    """Outbound SMTP configuration for verification emails."""

    host: str = "localhost"
    port: int = 587
    username: str | None = None
    password: str | None = None
    from_address: str = "no-reply@localhost"
    use_starttls: bool = True
    timeout_seconds: float = 10.0


class APISettings(BaseModel):
    """API configuration."""

    host: str
    port: int
    protocol: Literal["http", "https"]

    @computed_field
    @property
    def base_url(self) -> str:
        """Construct base URL from host.

        In development: http://localhost:8000
        In production: https://<host>
        """
        if self.host == "localhost":
            return f"{self.protocol}://{self.host}:{self.port}"
        else:
            # Production uses standard ports (80/443)
            return f"{self.protocol}://{self.host}"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, nested with ``__``:

    Development (default):
        HOST=localhost
        PORT=8000
        ENVIRONMENT=development
        -> API: http://localhost:8000
        -> OAuth callbacks: http://localhost:8000/api/auth/<provider>/callback

    Production:
        HOST=auth.example.com
        ENVIRONMENT=production
        DATABASE__URL=postgresql+asyncpg://credo:credo@db:5432/credo
        OAUTH__GOOGLE__CLIENT_ID=...
        OAUTH__GOOGLE__CLIENT_SECRET=...
        MAIL__HOST=smtp.example.com
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows DATABASE__URL syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    host: str = "localhost"
    port: int = 8000

    # Browser origins allowed to call the API with credentials (CORS)
    cors_origins: list[str] = []

    # Nested settings
    database: DatabaseSettings = DatabaseSettings()
    auth: AuthSettings = AuthSettings()
    oauth: OAuthSettings = OAuthSettings()
    mail: MailSettings = MailSettings()
    api: APISettings = APISettings(
        host="localhost", port=8000, protocol="http"
    )  # Overwritten in validator
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def initialize_api_settings(self) -> "Settings":
        """Initialize API settings and OAuth callback URLs from host."""
        protocol: Literal["http", "https"] = (
            "http" if self.environment in ("test", "development") else "https"
        )

        self.api = APISettings(host=self.host, port=self.port, protocol=protocol)

        for name in ("google", "microsoft", "amazon", "idme"):
            client: OAuthClientSettings = getattr(self.oauth, name)
            if not client.callback_url:
                client.callback_url = f"{self.api.base_url}/api/auth/{name}/callback"

        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def database_url(self) -> str:
        """Shortcut for database.url."""
        return self.database.url
