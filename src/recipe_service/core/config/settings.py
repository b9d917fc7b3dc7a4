"""Application configuration using Pydantic Settings with YAML support.

Configuration is split by domain into YAML files under ``config/base`` and
overridden per environment from ``config/environments/{APP_ENV}``. Secrets
(signing key, database password, LLM API key) only ever come from the
process environment or a ``.env`` file.
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

    name: str = "Recipe Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8080


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api"
    cors_origins: list[str] = []


class JwtSettings(BaseModel):
    """JWT signing settings.

    Access and refresh tokens share one lifetime.
    """

    algorithm: str = "HS256"
    token_expire_seconds: int = 86400


class PasswordSettings(BaseModel):
    """Password hashing settings."""

    bcrypt_rounds: int = 12


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    jwt: JwtSettings = JwtSettings()
    password: PasswordSettings = PasswordSettings()


class DatabaseSettings(BaseModel):
    """Relational database configuration settings."""

    url: str | None = None  # Full SQLAlchemy URL, overrides the parts below
    host: str = "localhost"
    port: int = 5432
    name: str = "recipes"
    user: str | None = None
    pool_size: int = 10
    max_overflow: int = 20
    echo: bool = False


class PaginationSettings(BaseModel):
    """Paging defaults for list endpoints."""

    default_size: int = 20
    max_size: int = 100


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class LLMSettings(BaseModel):
    """Chat-completions provider configuration."""

    enabled: bool = True
    url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    timeout: float = 60.0
    max_retries: int = 2
    requests_per_minute: float = 60.0
    temperature: float = 0.7
    max_tokens: int | None = 2000


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Priority (highest to lowest):
    1. Values passed to ``Settings()``
    2. Environment variables
    3. .env file
    4. Environment-specific YAML files (config/environments/{APP_ENV}/)
    5. Base YAML files (config/base/)
    6. Default values in code

    Nested values can be overridden with the '__' delimiter, for example
    ``AUTH__JWT__TOKEN_EXPIRE_SECONDS=3600``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    database: DatabaseSettings = DatabaseSettings()
    pagination: PaginationSettings = PaginationSettings()
    logging: LoggingSettings = LoggingSettings()
    llm: LLMSettings = LLMSettings()

    # Secrets (environment only, never in YAML)
    JWT_SECRET_KEY: str = ""
    DATABASE_PASSWORD: str = ""
    LLM_API_KEY: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source between the .env file and Docker secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def database_url(self) -> str:
        """Build the async SQLAlchemy connection URL.

        Returns:
            ``database.url`` when configured, otherwise an asyncpg URL
            assembled from the individual parts.
        """
        if self.database.url:
            return self.database.url

        auth_part = ""
        if self.database.user and self.DATABASE_PASSWORD:
            auth_part = f"{self.database.user}:{self.DATABASE_PASSWORD}@"
        elif self.database.user:
            auth_part = f"{self.database.user}@"

        return (
            f"postgresql+asyncpg://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"

    @property
    def is_non_production(self) -> bool:
        """Docs and verbose errors are only exposed outside production."""
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
