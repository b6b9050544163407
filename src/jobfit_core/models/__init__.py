"""Domain models for jobfit."""

from jobfit_core.models.candidate import CandidateProfile, SalaryRange
from jobfit_core.models.job import JobPosting, JobSearchParams, NormalizedJob
from jobfit_core.models.match import (
    AdvancedMatchResult,
    MarketInsights,
    MatchFeatures,
    Recommendations,
)
from jobfit_core.models.provider import (
    CircuitState,
    ProviderConfig,
    ProviderHealth,
    ProviderResponse,
)

__all__ = [
    "AdvancedMatchResult",
    "CandidateProfile",
    "CircuitState",
    "JobPosting",
    "JobSearchParams",
    "MarketInsights",
    "MatchFeatures",
    "NormalizedJob",
    "ProviderConfig",
    "ProviderHealth",
    "ProviderResponse",
    "Recommendations",
    "SalaryRange",
]
