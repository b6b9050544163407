"""Pure feature functions comparing one job to one candidate.

Every function returns a float in [0, 1]. Missing data yields a neutral
value rather than zero so that an incomplete listing is not penalized as a
mismatch.
"""

from __future__ import annotations

from collections.abc import Iterable

from jobfit_core.constants import (
    BALANCE_KEYWORDS,
    CULTURE_BASE_SCORE,
    CULTURE_KEYWORDS,
    DEFAULT_SKILL_WEIGHT,
    GROWTH_KEYWORDS,
    INDUSTRY_DEMAND,
    LOCATION_MULTIPLIERS,
    NO_INDUSTRY_PREFERENCE_SCORE,
    NO_LOCATION_PREFERENCE_SCORE,
    NO_SALARY_DATA_SCORE,
    NO_SKILLS_REQUIRED_SCORE,
    NON_REQUIRED_SKILL_FACTOR,
    SKILL_WEIGHTS,
    UNKNOWN_INDUSTRY_SCORE,
    UNKNOWN_LOCATION_SCORE,
    WORK_LIFE_PREFERENCE_SCORES,
)
from jobfit_core.models.candidate import CandidateProfile
from jobfit_core.models.job import JobPosting
from jobfit_core.models.match import MatchFeatures

_KEYWORD_STEP = 0.1
_MAX_LOCATION_MULTIPLIER = max(LOCATION_MULTIPLIERS.values())

# (minimum ratio, score), checked in order
_EXPERIENCE_BANDS: tuple[tuple[float, float], ...] = (
    (1.0, 1.0),
    (0.8, 0.9),
    (0.6, 0.7),
    (0.4, 0.5),
)
_EXPERIENCE_FLOOR = 0.3

# (max relative distance from the band midpoint, score)
_SALARY_BANDS: tuple[tuple[float, float], ...] = (
    (0.1, 1.0),
    (0.2, 0.9),
    (0.3, 0.8),
)
_SALARY_FLOOR = 0.6


def normalize_skills(skills: Iterable[str]) -> set[str]:
    """Lowercased, stripped, non-empty skill names."""
    return {s.strip().lower() for s in skills if s and s.strip()}


def skill_weight(skill: str) -> float:
    """Importance of a (lowercase) skill."""
    return SKILL_WEIGHTS.get(skill, DEFAULT_SKILL_WEIGHT)


def skill_similarity(required_skills: Iterable[str], candidate_skills: Iterable[str]) -> float:
    """Weighted Jaccard overlap; candidate-only skills count at a reduced weight."""
    required = normalize_skills(required_skills)
    if not required:
        return NO_SKILLS_REQUIRED_SCORE
    held = normalize_skills(candidate_skills)

    intersection = sum(skill_weight(s) for s in required & held)
    union = sum(skill_weight(s) for s in required)
    union += sum(skill_weight(s) * NON_REQUIRED_SKILL_FACTOR for s in held - required)
    return intersection / union if union > 0 else 0.0


def experience_match(required_years: float, candidate_years: float) -> float:
    """Discretized ratio of candidate to required years."""
    if required_years <= 0:
        return 1.0
    ratio = max(candidate_years, 0.0) / required_years
    for threshold, score in _EXPERIENCE_BANDS:
        if ratio >= threshold:
            return score
    return _EXPERIENCE_FLOOR


def location_preference(job_location: str, preferred_locations: Iterable[str]) -> float:
    """1.0 on a preferred-location match, else the hub multiplier scaled into [0, 1]."""
    preferences = [p.strip().lower() for p in preferred_locations if p and p.strip()]
    if not preferences:
        return NO_LOCATION_PREFERENCE_SCORE

    location = job_location.strip().lower()
    if location and any(p in location or location in p for p in preferences):
        return 1.0

    multiplier = _hub_multiplier(location)
    if multiplier is None:
        return UNKNOWN_LOCATION_SCORE
    return multiplier / _MAX_LOCATION_MULTIPLIER


def _hub_multiplier(location: str) -> float | None:
    if not location:
        return None
    for hub, multiplier in LOCATION_MULTIPLIERS.items():
        if hub != "other" and hub in location:
            return multiplier
    return None


def salary_alignment(
    salary_min: int | None, salary_max: int | None, expectation: int | None
) -> float:
    """Compare the candidate's expectation to the midpoint of the job's band."""
    if not salary_min or not salary_max or not expectation:
        return NO_SALARY_DATA_SCORE
    midpoint = (salary_min + salary_max) / 2
    distance = abs(expectation / midpoint - 1.0)
    for tolerance, score in _SALARY_BANDS:
        # Rounding keeps exact band edges such as 110% inside the band
        if round(distance, 9) <= tolerance:
            return score
    return _SALARY_FLOOR


def industry_fit(job_industry: str, preferred_industries: Iterable[str]) -> float:
    """1.0 on a preferred-industry match, else the industry's demand score."""
    preferences = [p.strip().lower() for p in preferred_industries if p and p.strip()]
    if not preferences:
        return NO_INDUSTRY_PREFERENCE_SCORE
    industry = job_industry.strip().lower()
    if industry and any(p in industry or industry in p for p in preferences):
        return 1.0
    return INDUSTRY_DEMAND.get(industry, UNKNOWN_INDUSTRY_SCORE)


def education_match(required: Iterable[str], education: Iterable[str]) -> float:
    """Fraction of required credentials the candidate holds."""
    needed = {r.strip().lower() for r in required if r and r.strip()}
    if not needed:
        return 1.0
    held = {e.strip().lower() for e in education if e and e.strip()}
    return len(needed & held) / len(needed)


def _job_text(job: JobPosting) -> str:
    return f"{job.title} {job.description}".lower()


def _keyword_hits(text: str, keywords: Iterable[str]) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def culture_fit(job: JobPosting) -> float:
    """Base score raised by culture keywords in the title and description."""
    hits = _keyword_hits(_job_text(job), CULTURE_KEYWORDS)
    return min(CULTURE_BASE_SCORE + hits * _KEYWORD_STEP, 1.0)


def growth_potential(job: JobPosting) -> float:
    """Bounded count of growth keywords in the title and description."""
    return min(_keyword_hits(_job_text(job), GROWTH_KEYWORDS) * _KEYWORD_STEP, 1.0)


def work_life_balance(job: JobPosting, preference: str | None = None) -> float:
    """Candidate's stated intensity preference, else balance keywords in the job."""
    if preference in WORK_LIFE_PREFERENCE_SCORES:
        return WORK_LIFE_PREFERENCE_SCORES[preference]
    return 0.9 if _keyword_hits(_job_text(job), BALANCE_KEYWORDS) else 0.7


def remote_compatibility(job_remote: bool, preference: str) -> float:
    """Exact working-mode match 1.0, flexible candidate 0.9, mismatch 0.6."""
    if preference == "remote" and job_remote:
        return 1.0
    if preference == "office" and not job_remote:
        return 1.0
    if preference == "flexible":
        return 0.9
    return 0.6


def extract_features(job: JobPosting, profile: CandidateProfile) -> MatchFeatures:
    """Compute all ten features for a (job, candidate) pair."""
    expectation = profile.salary_expectation.upper if profile.salary_expectation else None
    return MatchFeatures(
        skill_similarity=skill_similarity(job.required_skills, profile.skills),
        experience_match=experience_match(job.experience_required, profile.experience_years),
        location_preference=location_preference(job.location, profile.all_locations),
        salary_alignment=salary_alignment(job.salary_min, job.salary_max, expectation),
        industry_fit=industry_fit(job.industry, profile.preferred_industries),
        education_match=education_match(job.education_required, profile.education),
        culture_fit=culture_fit(job),
        growth_potential=growth_potential(job),
        work_life_balance=work_life_balance(job, profile.work_life_preference),
        remote_compatibility=remote_compatibility(job.remote, profile.remote_preference),
    )
