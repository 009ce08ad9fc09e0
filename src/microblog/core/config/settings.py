"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (development, test, production)
- Environment variable loading for secrets
- Caching for performance
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Microblog Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"
    cors_origins: list[str] = []


class JwtSettings(BaseModel):
    """JWT access token settings."""

    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60


class RememberCookieSettings(BaseModel):
    """Remember-me cookie settings.

    The cookie carries the plaintext remember token; only its digest is
    stored on the user row.
    """

    name: str = "remember_token"
    max_age_days: int = 7300  # 20 years, a "permanent" cookie
    secure: bool = False
    samesite: str = "lax"


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    jwt: JwtSettings = JwtSettings()
    remember_cookie: RememberCookieSettings = RememberCookieSettings()
    bcrypt_rounds: int = 12


class DatabaseSettings(BaseModel):
    """PostgreSQL database configuration settings."""

    host: str = "localhost"
    port: int = 5432
    name: str = "microblog"
    user: str | None = None  # PostgreSQL username
    min_pool_size: int = 2  # Minimum connections in pool
    max_pool_size: int = 10  # Maximum connections in pool
    command_timeout: float = 30.0  # Query timeout in seconds
    ssl: bool = False  # Enable SSL connection
    apply_schema: bool = True  # Run CREATE ... IF NOT EXISTS on startup


class PaginationSettings(BaseModel):
    """Pagination defaults for list endpoints."""

    per_page: int = 30
    max_per_page: int = 100


class RateLimitingSettings(BaseModel):
    """Rate limiting configuration."""

    storage_uri: str = "memory://"
    auth: str = "5/minute"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Environment variables
    2. .env file (secrets only)
    3. Environment-specific YAML files (config/environments/{APP_ENV}/)
    4. Base YAML files (config/base/)
    5. Default values in code

    Environment variables can override any setting using the nested delimiter '__'.
    For example: DATABASE__HOST=prod-db overrides database.host.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    # =========================================================================
    # Environment Selection (from .env)
    # =========================================================================
    APP_ENV: str = "development"

    # =========================================================================
    # Nested Configuration Sections (from YAML)
    # =========================================================================
    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    database: DatabaseSettings = DatabaseSettings()
    pagination: PaginationSettings = PaginationSettings()
    rate_limiting: RateLimitingSettings = RateLimitingSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    # =========================================================================
    # Secrets (from .env only - never in YAML)
    # =========================================================================
    JWT_SECRET_KEY: str = ""
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings loading order.

        Priority (highest to lowest):
        1. init_settings - Values passed to Settings()
        2. env_settings - Environment variables
        3. dotenv_settings - .env file (secrets)
        4. yaml_settings - YAML files (base + environment)
        5. file_secret_settings - Docker secrets
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def database_url(self) -> str:
        """Build PostgreSQL connection URL.

        URL format: postgresql://[user:password@]host:port/database
        """
        auth_part = ""
        if self.database.user and self.DATABASE_PASSWORD:
            auth_part = f"{self.database.user}:{self.DATABASE_PASSWORD}@"
        elif self.database.user:
            auth_part = f"{self.database.user}@"

        return (
            f"postgresql://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    @property
    def remember_cookie_max_age(self) -> int:
        """Remember cookie lifetime in seconds."""
        return self.auth.remember_cookie.max_age_days * 24 * 60 * 60

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_non_production(self) -> bool:
        """Check if running in a non-production environment.

        Returns True for local, test, and development environments where
        API documentation and detailed logging are enabled.
        """
        return self.APP_ENV in ("local", "test", "development")

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Using lru_cache ensures settings are only loaded once.
    """
    return Settings()
