"""Job models: scoring input, normalized board listings, search parameters."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class JobPosting(BaseModel):
    """A job posting as consumed by the fit scorer."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique job identifier")
    title: str = Field(description="Job title")
    company: str = Field(default="", description="Hiring organization name")
    location: str = Field(default="", description="Free-text job location")
    remote: bool = Field(default=False, description="Whether the role is remote")
    salary_min: int | None = Field(default=None, ge=0, description="Minimum salary")
    salary_max: int | None = Field(default=None, ge=0, description="Maximum salary")
    currency: str = Field(default="USD", description="Salary currency")
    required_skills: list[str] = Field(
        default_factory=list, description="Required skills or tags"
    )
    experience_required: int = Field(
        default=0, ge=0, description="Required years of experience"
    )
    education_required: list[str] = Field(
        default_factory=list, description="Required education credentials"
    )
    industry: str = Field(default="", description="Industry tag")
    description: str = Field(default="", description="Free-text job description")
    posted_at: datetime | None = Field(default=None, description="When the job was posted")

    @field_validator("experience_required", mode="before")
    @classmethod
    def clamp_experience(cls, value: Any) -> Any:
        """Treat negative or fractional requirements as whole non-negative years."""
        if value is None:
            return 0
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return max(0, int(value))
        return value

    @field_validator("salary_min", "salary_max", mode="before")
    @classmethod
    def drop_negative_salary(cls, value: Any) -> Any:
        """Treat a negative salary as unknown."""
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
            return None
        return value

    @model_validator(mode="before")
    @classmethod
    def order_salary_range(cls, data: Any) -> Any:
        """Swap a reversed salary band instead of rejecting the listing."""
        if not isinstance(data, dict):
            return data
        low, high = data.get("salary_min"), data.get("salary_max")
        if isinstance(low, (int, float)) and isinstance(high, (int, float)) and low > high >= 0:
            return {**data, "salary_min": high, "salary_max": low}
        return data


class NormalizedJob(JobPosting):
    """A job listing normalized from one provider's payload."""

    source: str = Field(description="Provider key the listing came from")
    url: str = Field(default="", description="Listing URL on the provider")
    apply_url: str = Field(default="", description="Original application URL")
    salary_text: str | None = Field(default=None, description="Human-readable salary")
    employment_type: str = Field(default="full-time", description="Employment type")
    experience_level: str | None = Field(default=None, description="Seniority level")
    benefits: list[str] = Field(default_factory=list, description="Listed benefits")
    company_size: str | None = Field(default=None, description="Company size bucket")

    @property
    def dedup_key(self) -> str:
        """Case-insensitive (title, company, location) identity."""
        return f"{self.title.lower()}-{self.company.lower()}-{self.location.lower()}"


class JobSearchParams(BaseModel):
    """Parameters for a multi-provider job search."""

    query: str = Field(default="", description="Free-text search query")
    location: str = Field(default="", description="Location filter")
    remote: bool = Field(default=False, description="Remote jobs only")
    limit: int = Field(default=20, ge=0, description="Maximum number of results")
    experience_level: Literal["entry", "mid", "senior", "executive"] | None = Field(
        default=None, description="Experience level filter"
    )
    salary_min: int | None = Field(default=None, ge=0, description="Minimum salary filter")
    salary_max: int | None = Field(default=None, ge=0, description="Maximum salary filter")
    job_type: Literal["full-time", "part-time", "contract", "internship"] | None = Field(
        default=None, description="Employment type filter"
    )
    date_posted: Literal["today", "week", "month"] | None = Field(
        default=None, description="Posting age filter"
    )

    @field_validator("query", "location", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        """Trim surrounding whitespace from free-text inputs."""
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def check_salary_range(self) -> JobSearchParams:
        """Reject a salary filter whose minimum exceeds its maximum."""
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            msg = f"salary_min ({self.salary_min}) exceeds salary_max ({self.salary_max})"
            raise ValueError(msg)
        return self
