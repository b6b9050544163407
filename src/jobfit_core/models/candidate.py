"""Candidate profile models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

RemotePreference = Literal["remote", "office", "flexible"]
WorkLifePreference = Literal["flexible", "balanced", "intensive"]

_REMOTE_ALIASES: dict[str, str] = {
    "remote": "remote",
    "office": "office",
    "onsite": "office",
    "on_site": "office",
    "on-site": "office",
    "flexible": "flexible",
    "hybrid": "flexible",
    "any": "flexible",
}


class SalaryRange(BaseModel):
    """Expected salary band."""

    min: int | None = Field(default=None, ge=0, description="Lower bound")
    max: int | None = Field(default=None, ge=0, description="Upper bound")

    @field_validator("min", "max", mode="before")
    @classmethod
    def drop_negative(cls, value: Any) -> Any:
        """Treat a negative bound as unknown."""
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
            return None
        return value

    @property
    def upper(self) -> int | None:
        """Upper bound, falling back to the lower bound."""
        return self.max if self.max is not None else self.min

    @property
    def is_set(self) -> bool:
        """Whether either bound is known."""
        return self.min is not None or self.max is not None


class CandidateProfile(BaseModel):
    """The candidate side of a fit computation. Read-only to the scorer."""

    skills: list[str] = Field(default_factory=list, description="Candidate skills")
    experience_years: float = Field(default=0.0, ge=0, description="Years of experience")
    location: str | None = Field(default=None, description="Current location")
    preferred_locations: list[str] = Field(
        default_factory=list, description="Additional acceptable locations"
    )
    salary_expectation: SalaryRange | None = Field(
        default=None, description="Expected salary band"
    )
    preferred_industries: list[str] = Field(
        default_factory=list, description="Preferred industries"
    )
    remote_preference: RemotePreference = Field(
        default="flexible", description="Preferred working mode"
    )
    work_life_preference: WorkLifePreference | None = Field(
        default=None, description="Preferred work intensity"
    )
    education: list[str] = Field(default_factory=list, description="Credentials held")

    @field_validator("experience_years", mode="before")
    @classmethod
    def clamp_experience(cls, value: Any) -> Any:
        """Negative experience is treated as none."""
        if value is None:
            return 0.0
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return max(0.0, float(value))
        return value

    @field_validator("remote_preference", mode="before")
    @classmethod
    def coerce_remote_preference(cls, value: Any) -> Any:
        """Accept a boolean flag or common aliases for the working mode."""
        if isinstance(value, bool):
            return "remote" if value else "office"
        if value is None:
            return "flexible"
        if isinstance(value, str):
            return _REMOTE_ALIASES.get(value.strip().lower(), value)
        return value

    @property
    def all_locations(self) -> list[str]:
        """Current location followed by preferred locations, blanks removed."""
        locations = [self.location, *self.preferred_locations]
        return [loc for loc in locations if loc and loc.strip()]
