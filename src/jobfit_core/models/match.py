"""Fit scoring output models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SalaryTrend = Literal["rising", "stable", "declining"]


class MatchFeatures(BaseModel):
    """Ten normalized compatibility sub-scores for one (job, candidate) pair."""

    skill_similarity: float = Field(ge=0.0, le=1.0)
    experience_match: float = Field(ge=0.0, le=1.0)
    location_preference: float = Field(ge=0.0, le=1.0)
    salary_alignment: float = Field(ge=0.0, le=1.0)
    industry_fit: float = Field(ge=0.0, le=1.0)
    education_match: float = Field(ge=0.0, le=1.0)
    culture_fit: float = Field(ge=0.0, le=1.0)
    growth_potential: float = Field(ge=0.0, le=1.0)
    work_life_balance: float = Field(ge=0.0, le=1.0)
    remote_compatibility: float = Field(ge=0.0, le=1.0)

    def as_list(self) -> list[float]:
        """Feature values in declaration order."""
        return [float(v) for v in self.model_dump().values()]


class MarketInsights(BaseModel):
    """Static-table market view of a job."""

    demand: float = Field(description="Industry demand score")
    competition: float = Field(description="Location competition multiplier")
    salary_trend: SalaryTrend = Field(description="Trend derived from demand")


class Recommendations(BaseModel):
    """Personalized next steps for the candidate."""

    skill_development: list[str] = Field(default_factory=list)
    networking: list[str] = Field(default_factory=list)
    application_strategy: list[str] = Field(default_factory=list)


class AdvancedMatchResult(BaseModel):
    """Full fit analysis between a job and a candidate."""

    job_id: str = Field(description="Scored job identifier")
    fit_score: float = Field(ge=0.0, le=1.0, description="Weighted fit score")
    confidence: float = Field(ge=0.0, le=0.95, description="Confidence in the score")
    features: MatchFeatures = Field(description="Sub-scores the fit score was built from")
    reasoning: list[str] = Field(default_factory=list, description="Why this is a match")
    improvements: list[str] = Field(default_factory=list, description="How to improve fit")
    skill_gaps: list[str] = Field(default_factory=list, description="Missing required skills")
    strengths: list[str] = Field(default_factory=list, description="Held required skills")
    market_insights: MarketInsights
    recommendations: Recommendations
