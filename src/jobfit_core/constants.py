"""Shared constants: provider registry and static scoring tables."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from jobfit_core.models.provider import ProviderConfig

# --- Provider registry ---

PROVIDER_CONFIGS: tuple[ProviderConfig, ...] = (
    ProviderConfig(
        name="remoteok",
        display_name="RemoteOK",
        api_url="https://remoteok.com/api",
        rate_limit_per_minute=60,
        requires_auth=False,
        priority=10,
    ),
    ProviderConfig(
        name="usajobs",
        display_name="USAJOBS",
        api_url="https://data.usajobs.gov/api/search",
        rate_limit_per_minute=30,
        requires_auth=True,
        priority=8,
        credential="usajobs_api_key",
    ),
    ProviderConfig(
        name="linkedin",
        display_name="LinkedIn",
        api_url="https://jsearch.p.rapidapi.com/search",
        rate_limit_per_minute=500,
        requires_auth=True,
        priority=7,
        credential="jsearch_api_key",
    ),
    ProviderConfig(
        name="indeed",
        display_name="Indeed",
        api_url="https://jsearch.p.rapidapi.com/search",
        rate_limit_per_minute=1000,
        requires_auth=True,
        priority=6,
        credential="jsearch_api_key",
    ),
    ProviderConfig(
        name="glassdoor",
        display_name="Glassdoor",
        api_url="https://jsearch.p.rapidapi.com/search",
        rate_limit_per_minute=1000,
        requires_auth=True,
        priority=5,
        credential="jsearch_api_key",
    ),
)

PROVIDER_PRIORITIES: Mapping[str, int] = MappingProxyType(
    {config.name: config.priority for config in PROVIDER_CONFIGS}
)

# --- Relevance ranking ---

TITLE_MATCH_BONUS = 10.0
COMPANY_MATCH_BONUS = 5.0
SKILL_MATCH_BONUS = 3.0
PRIORITY_DIVISOR = 10.0

# --- Fit scoring ---

# Importance of well-known skills (lowercase keys); unlisted skills weigh 0.5
SKILL_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "javascript": 0.9,
        "typescript": 0.95,
        "react": 0.9,
        "node.js": 0.85,
        "python": 0.8,
        "machine learning": 0.9,
        "ai": 0.95,
        "data science": 0.85,
        "cloud": 0.8,
        "devops": 0.75,
    }
)
DEFAULT_SKILL_WEIGHT = 0.5
NON_REQUIRED_SKILL_FACTOR = 0.3

INDUSTRY_DEMAND: Mapping[str, float] = MappingProxyType(
    {
        "technology": 0.95,
        "finance": 0.85,
        "healthcare": 0.8,
        "education": 0.7,
        "manufacturing": 0.6,
        "retail": 0.5,
    }
)

LOCATION_MULTIPLIERS: Mapping[str, float] = MappingProxyType(
    {
        "san francisco": 1.2,
        "new york": 1.15,
        "seattle": 1.1,
        "austin": 1.05,
        "remote": 1.0,
        "other": 0.9,
    }
)

FEATURE_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "skill_similarity": 0.25,
        "experience_match": 0.20,
        "location_preference": 0.15,
        "salary_alignment": 0.15,
        "industry_fit": 0.10,
        "education_match": 0.05,
        "culture_fit": 0.05,
        "growth_potential": 0.03,
        "work_life_balance": 0.01,
        "remote_compatibility": 0.01,
    }
)

GROWTH_KEYWORDS: tuple[str, ...] = (
    "growth",
    "advancement",
    "leadership",
    "mentor",
    "senior",
    "principal",
)
CULTURE_KEYWORDS: tuple[str, ...] = (
    "collaborative",
    "inclusive",
    "diverse",
    "transparent",
    "mission",
    "values",
)
BALANCE_KEYWORDS: tuple[str, ...] = ("flexible", "remote", "work-life", "balance")
WORK_LIFE_PREFERENCE_SCORES: Mapping[str, float] = MappingProxyType(
    {"flexible": 0.9, "balanced": 0.8, "intensive": 0.7}
)

# Neutral or fallback feature values
NO_SKILLS_REQUIRED_SCORE = 0.5
NO_LOCATION_PREFERENCE_SCORE = 0.8
UNKNOWN_LOCATION_SCORE = 0.7
NO_SALARY_DATA_SCORE = 0.7
NO_INDUSTRY_PREFERENCE_SCORE = 0.8
UNKNOWN_INDUSTRY_SCORE = 0.6
CULTURE_BASE_SCORE = 0.7

# Market insight fallbacks
DEFAULT_MARKET_INDUSTRY = "technology"
DEFAULT_MARKET_DEMAND = 0.7
DEFAULT_MARKET_COMPETITION = 0.8

# Confidence estimate
CONFIDENCE_BASE = 0.5
CONFIDENCE_CEILING = 0.95
CONFIDENCE_CONSISTENCY_WEIGHT = 0.1
