"""Provider registry, circuit state and adapter response models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from jobfit_core.models.job import NormalizedJob

ProviderStatus = Literal["healthy", "degraded", "unhealthy"]


class ProviderConfig(BaseModel):
    """Static description of one external job board."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Provider key, e.g. 'remoteok'")
    display_name: str = Field(description="Human-readable board name")
    api_url: str = Field(description="Base API URL")
    rate_limit_per_minute: int = Field(ge=0, description="Published requests-per-minute limit")
    requires_auth: bool = Field(default=False, description="Whether a credential is needed")
    priority: int = Field(description="Higher is preferred in ordering and tie-breaks")
    credential: str | None = Field(
        default=None, description="Settings field holding this provider's secret"
    )


class CircuitState(BaseModel):
    """Snapshot of one provider's circuit breaker."""

    failure_count: int = Field(ge=0, description="Consecutive recorded failures")
    opened_at: float | None = Field(
        default=None, description="Monotonic time the circuit opened, None when closed"
    )

    @property
    def is_open(self) -> bool:
        """Whether the circuit was open when the snapshot was taken."""
        return self.opened_at is not None


class ProviderResponse(BaseModel):
    """Result of a single adapter search call."""

    success: bool = Field(description="Whether the call produced usable jobs")
    jobs: list[NormalizedJob] = Field(default_factory=list, description="Normalized jobs")
    total_found: int | None = Field(default=None, description="Upstream total, if reported")
    error: str | None = Field(default=None, description="Redacted error description")
    source: str = Field(description="Provider key")
    fetched_at: datetime | None = Field(default=None, description="When the call completed")


class ProviderHealth(BaseModel):
    """Operational view of one provider for health reporting."""

    name: str = Field(description="Provider key")
    display_name: str = Field(description="Human-readable board name")
    priority: int = Field(description="Registry priority")
    enabled: bool = Field(description="Whether the provider has what it needs to be called")
    circuit: CircuitState = Field(description="Current circuit breaker state")

    @property
    def status(self) -> ProviderStatus:
        """Unhealthy while the circuit is open, degraded after recent failures."""
        if self.circuit.is_open:
            return "unhealthy"
        if self.circuit.failure_count > 0:
            return "degraded"
        return "healthy"
