"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from messenger_webhook.constants import (
    DEFAULT_APP_SECRET,
    DEFAULT_PORT,
    DEFAULT_VERIFY_TOKEN,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Built once per process and never mutated afterwards; handlers receive it
    through ``Depends(get_settings)`` so tests can substitute their own.
    """

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Webhook secrets
    verify_token: SecretStr = Field(
        default=SecretStr(DEFAULT_VERIFY_TOKEN),
        description="Token echoed by the platform during the subscription handshake",
    )
    app_secret: SecretStr = Field(
        default=SecretStr(DEFAULT_APP_SECRET),
        description="App secret used to sign event payloads (HMAC-SHA1)",
    )

    # Environment
    env: Literal["local", "test", "railway", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")
    port: int = Field(default=DEFAULT_PORT, description="HTTP port for uvicorn")

    # Sentry Configuration
    sentry_dsn: str | None = Field(
        default=None, description="Sentry DSN for error tracking (optional)"
    )
    sentry_traces_sample_rate: float = Field(
        default=1.0, description="Sentry traces sample rate (0.0 to 1.0)"
    )

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )

    @model_validator(mode="after")
    def _reject_fallback_secrets_in_prod(self) -> "Settings":
        if self.env != "prod":
            return self
        if self.verify_token.get_secret_value() == DEFAULT_VERIFY_TOKEN:
            raise ValueError("VERIFY_TOKEN must be set explicitly in prod")
        if self.app_secret.get_secret_value() == DEFAULT_APP_SECRET:
            raise ValueError("APP_SECRET must be set explicitly in prod")
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
