"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from jobfit_core.models.provider import ProviderConfig


class Settings(BaseSettings):
    """Central configuration for jobfit."""

    model_config = SettingsConfigDict(env_prefix="JOBFIT_", env_file=".env", extra="ignore")

    # --- Provider calls ---
    request_timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="Timeout per provider search call in milliseconds",
    )
    provider_retry_attempts: int = Field(
        default=1,
        ge=1,
        description="Attempts per provider call for transient transport/5xx errors",
    )
    min_request_interval_ms: int = Field(
        default=1000,
        ge=0,
        description="Minimum delay between two requests to the same provider",
    )
    user_agent: str = Field(
        default="jobfit/1.0",
        description="User-Agent header sent to job boards",
    )

    # --- Circuit breaker ---
    failure_threshold: int = Field(
        default=3,
        ge=1,
        description="Consecutive failures before a provider circuit opens",
    )
    circuit_cooldown_ms: int = Field(
        default=60_000,
        ge=0,
        description="How long an open circuit short-circuits calls",
    )

    # --- Credentials ---
    jsearch_api_key: SecretStr | None = Field(
        default=None,
        description="RapidAPI key for JSearch (linkedin, indeed, glassdoor boards)",
    )
    usajobs_api_key: SecretStr | None = Field(
        default=None,
        description="USAJOBS Authorization-Key",
    )
    usajobs_user_agent: str = Field(
        default="",
        description="Contact email USAJOBS requires in the User-Agent header",
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: human console output or JSON lines",
    )

    @property
    def request_timeout_seconds(self) -> float:
        """Request timeout converted to seconds."""
        return self.request_timeout_ms / 1000

    def credential_for(self, config: ProviderConfig) -> str | None:
        """Return the plain secret configured for a provider, if any."""
        if config.credential is None:
            return None
        secret = getattr(self, config.credential, None)
        if not isinstance(secret, SecretStr):
            return None
        value = secret.get_secret_value().strip()
        return value or None

    def min_interval_for(self, config: ProviderConfig) -> float:
        """Minimum seconds between requests to one provider.

        The configured interval is raised when the provider's published
        rate limit is stricter.
        """
        interval = self.min_request_interval_ms / 1000
        if config.rate_limit_per_minute > 0:
            interval = max(interval, 60.0 / config.rate_limit_per_minute)
        return interval
