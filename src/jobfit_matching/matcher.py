"""Weighted fit scoring with confidence, explanations and recommendations."""

from __future__ import annotations

import numpy as np
import structlog

from jobfit_core.constants import (
    CONFIDENCE_BASE,
    CONFIDENCE_CEILING,
    CONFIDENCE_CONSISTENCY_WEIGHT,
    DEFAULT_MARKET_COMPETITION,
    DEFAULT_MARKET_DEMAND,
    DEFAULT_MARKET_INDUSTRY,
    FEATURE_WEIGHTS,
    INDUSTRY_DEMAND,
    LOCATION_MULTIPLIERS,
)
from jobfit_core.models.candidate import CandidateProfile
from jobfit_core.models.job import JobPosting
from jobfit_core.models.match import (
    AdvancedMatchResult,
    MarketInsights,
    MatchFeatures,
    Recommendations,
    SalaryTrend,
)
from jobfit_matching.features import extract_features

logger = structlog.get_logger()

MAX_LISTED_GAPS = 3
MAX_FOCUS_GAPS = 2
STRONG_MATCH_THRESHOLD = 0.8


class AdvancedJobMatcher:
    """Score how well a job fits a candidate.

    Stateless and deterministic: the same inputs always produce the same
    result, and no I/O is performed.
    """

    def generate_advanced_match(
        self, job: JobPosting, profile: CandidateProfile
    ) -> AdvancedMatchResult:
        """Compute features, fit score, confidence and guidance for one pair."""
        features = extract_features(job, profile)
        skill_gaps = find_skill_gaps(job.required_skills, profile.skills)

        result = AdvancedMatchResult(
            job_id=job.id,
            fit_score=self.fit_score(features),
            confidence=self.confidence(features, job, profile),
            features=features,
            reasoning=build_reasoning(features),
            improvements=build_improvements(features, skill_gaps),
            skill_gaps=skill_gaps,
            strengths=find_strengths(job.required_skills, profile.skills),
            market_insights=market_insights(job),
            recommendations=build_recommendations(job, features, skill_gaps),
        )
        logger.debug(
            "match_scored",
            job_id=job.id,
            fit_score=result.fit_score,
            confidence=result.confidence,
            skill_gaps=len(skill_gaps),
        )
        return result

    @staticmethod
    def fit_score(features: MatchFeatures) -> float:
        """Weighted sum of the features, rounded to two decimals."""
        values = features.model_dump()
        score = sum(values[name] * weight for name, weight in FEATURE_WEIGHTS.items())
        return round(min(max(score, 0.0), 1.0), 2)

    @staticmethod
    def confidence(features: MatchFeatures, job: JobPosting, profile: CandidateProfile) -> float:
        """How much the fit score can be trusted, from data completeness and consistency."""
        confidence = CONFIDENCE_BASE
        if job.required_skills:
            confidence += 0.1
        if profile.skills:
            confidence += 0.1
        if job.salary_min and job.salary_max:
            confidence += 0.1
        if profile.salary_expectation and profile.salary_expectation.is_set:
            confidence += 0.1
        if job.experience_required > 0:
            confidence += 0.05
        if profile.experience_years > 0:
            confidence += 0.05

        spread = float(np.std(np.array(features.as_list(), dtype=np.float64)))
        confidence += (1 - spread) * CONFIDENCE_CONSISTENCY_WEIGHT
        return round(min(confidence, CONFIDENCE_CEILING), 2)


def find_skill_gaps(required_skills: list[str], candidate_skills: list[str]) -> list[str]:
    """Required skills the candidate lacks, in the job's order."""
    held = {s.strip().lower() for s in candidate_skills}
    gaps: list[str] = []
    seen: set[str] = set()
    for skill in required_skills:
        key = skill.strip().lower()
        if key and key not in held and key not in seen:
            seen.add(key)
            gaps.append(skill)
    return gaps


def find_strengths(required_skills: list[str], candidate_skills: list[str]) -> list[str]:
    """Candidate skills the job asks for, in the candidate's order."""
    required = {s.strip().lower() for s in required_skills}
    return [s for s in candidate_skills if s.strip() and s.strip().lower() in required]


def build_reasoning(features: MatchFeatures) -> list[str]:
    """Positive explanations for the strongest features."""
    reasoning: list[str] = []
    if features.skill_similarity > 0.8:
        reasoning.append("Excellent skill alignment with job requirements")
    elif features.skill_similarity > 0.6:
        reasoning.append("Good skill match with some areas for development")
    if features.experience_match > 0.8:
        reasoning.append("Experience level matches job requirements well")
    if features.location_preference > 0.9:
        reasoning.append("Location aligns with your preferences")
    if features.salary_alignment > 0.9:
        reasoning.append("Salary expectations align well with job offer")
    if features.industry_fit > 0.8:
        reasoning.append("Strong fit with your preferred industry")
    return reasoning


def build_improvements(features: MatchFeatures, skill_gaps: list[str]) -> list[str]:
    """Suggestions for the weakest features."""
    improvements: list[str] = []
    if features.skill_similarity < 0.7 and skill_gaps:
        listed = ", ".join(skill_gaps[:MAX_LISTED_GAPS])
        improvements.append(f"Consider developing skills in: {listed}")
    if features.experience_match < 0.7:
        improvements.append(
            "Gain more experience in relevant technologies or take on leadership roles"
        )
    if features.salary_alignment < 0.8:
        improvements.append(
            "Consider negotiating salary or looking for roles with higher compensation"
        )
    return improvements


def _salary_trend(demand: float) -> SalaryTrend:
    if demand > 0.8:
        return "rising"
    if demand > 0.6:
        return "stable"
    return "declining"


def market_insights(job: JobPosting) -> MarketInsights:
    """Demand, competition and salary trend from the static market tables."""
    industry = job.industry.strip().lower() or DEFAULT_MARKET_INDUSTRY
    demand = INDUSTRY_DEMAND.get(industry, DEFAULT_MARKET_DEMAND)

    location = job.location.strip().lower()
    competition = DEFAULT_MARKET_COMPETITION
    for hub, multiplier in LOCATION_MULTIPLIERS.items():
        if location and hub != "other" and hub in location:
            competition = multiplier
            break

    return MarketInsights(
        demand=demand,
        competition=competition,
        salary_trend=_salary_trend(demand),
    )


def build_recommendations(
    job: JobPosting, features: MatchFeatures, skill_gaps: list[str]
) -> Recommendations:
    """Skill, networking and application guidance for this job."""
    skill_development: list[str] = []
    if skill_gaps:
        skill_development.append(
            f"Focus on developing: {', '.join(skill_gaps[:MAX_FOCUS_GAPS])}"
        )
    if features.experience_match < 0.8:
        skill_development.append(
            "Consider taking on side projects or freelance work to gain experience"
        )

    networking = [
        f"Connect with professionals at {job.company.strip() or 'target companies'}",
        "Join industry-specific groups and communities",
    ]
    if job.industry.strip():
        networking.append(f"Attend {job.industry.strip()} conferences and meetups")

    average = float(np.mean(features.as_list()))
    if average > STRONG_MATCH_THRESHOLD:
        application_strategy = [
            "This is a strong match - apply with confidence",
            "Highlight your relevant experience and achievements",
        ]
    else:
        application_strategy = [
            "Consider this a growth opportunity",
            "Emphasize your learning ability and transferable skills",
        ]

    return Recommendations(
        skill_development=skill_development,
        networking=networking,
        application_strategy=application_strategy,
    )
