"""Deduplication and relevance ranking of aggregated job listings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from jobfit_core.constants import (
    COMPANY_MATCH_BONUS,
    PRIORITY_DIVISOR,
    PROVIDER_PRIORITIES,
    SKILL_MATCH_BONUS,
    TITLE_MATCH_BONUS,
)
from jobfit_core.models.job import NormalizedJob


def deduplicate_jobs(jobs: Iterable[NormalizedJob]) -> list[NormalizedJob]:
    """Drop listings whose (title, company, location) was already seen.

    The first occurrence wins and input order is preserved.
    """
    seen: set[str] = set()
    unique: list[NormalizedJob] = []
    for job in jobs:
        key = job.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(job)
    return unique


def relevance_score(
    job: NormalizedJob,
    query: str,
    priorities: Mapping[str, int] = PROVIDER_PRIORITIES,
) -> float:
    """Score a job against the query, plus a small bonus for its provider."""
    score = priorities.get(job.source, 0) / PRIORITY_DIVISOR
    term = query.strip().lower()
    if not term:
        return score
    if term in job.title.lower():
        score += TITLE_MATCH_BONUS
    if term in job.company.lower():
        score += COMPANY_MATCH_BONUS
    if any(term in skill.lower() for skill in job.required_skills):
        score += SKILL_MATCH_BONUS
    return score


def sort_jobs_by_relevance(
    jobs: Iterable[NormalizedJob],
    query: str,
    priorities: Mapping[str, int] = PROVIDER_PRIORITIES,
) -> list[NormalizedJob]:
    """Order jobs by descending relevance; ties keep their input order."""
    return sorted(jobs, key=lambda job: -relevance_score(job, query, priorities))
