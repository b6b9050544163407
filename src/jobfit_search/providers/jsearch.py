"""JSearch (RapidAPI) adapter backing the LinkedIn, Indeed and Glassdoor boards."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

import httpx
import structlog

from jobfit_core.exceptions import MalformedPayloadError
from jobfit_core.models.job import JobSearchParams, NormalizedJob
from jobfit_search.providers.base import (
    BaseProviderAdapter,
    format_salary,
    infer_remote,
    parse_posted_at,
    to_salary,
)

if TYPE_CHECKING:
    from jobfit_core.config.settings import Settings
    from jobfit_core.models.provider import ProviderConfig

logger = structlog.get_logger()

SHARED_RESPONSE_SECONDS = 30.0

_QueryKey = tuple[tuple[str, str], ...]

_DATE_POSTED = {"today": "today", "week": "week", "month": "month"}
_EMPLOYMENT_TYPES = {
    "full-time": "FULLTIME",
    "part-time": "PARTTIME",
    "contract": "CONTRACTOR",
    "internship": "INTERN",
}
_EXPERIENCE_REQUIREMENTS = {
    "entry": "no_experience,under_3_years_experience",
    "mid": "more_than_3_years_experience",
    "senior": "more_than_3_years_experience",
    "executive": "more_than_3_years_experience",
}
_EDUCATION_FLAGS = {
    "high_school": "High School",
    "associates_degree": "Associate's Degree",
    "bachelors_degree": "Bachelor's Degree",
    "postgraduate_degree": "Postgraduate Degree",
    "professional_certification": "Professional Certification",
}


class JSearchFeed:
    """One JSearch response shared by every board that filters it.

    The LinkedIn, Indeed and Glassdoor adapters send identical queries, so
    the first caller fetches and the others reuse its outcome, success or
    failure, for ``ttl_seconds``. A cancelled fetch is not remembered.
    """

    def __init__(
        self,
        ttl_seconds: float = SHARED_RESPONSE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._locks: dict[_QueryKey, asyncio.Lock] = {}
        self._entries: dict[_QueryKey, tuple[float, Any, Exception | None]] = {}

    async def get(self, query: dict[str, str], fetch: Callable[[], Awaitable[Any]]) -> Any:
        """Return the payload for ``query``, calling ``fetch`` at most once per TTL."""
        key = tuple(sorted(query.items()))
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            entry = self._entries.get(key)
            if entry is not None and self._clock() - entry[0] <= self.ttl_seconds:
                logger.debug("jsearch_response_reused", query=query.get("query"))
                _, payload, error = entry
                if error is not None:
                    raise error
                return payload

            try:
                payload = await fetch()
            except Exception as e:
                self._remember(key, None, e)
                raise
            self._remember(key, payload, None)
            return payload

    def _remember(self, key: _QueryKey, payload: Any, error: Exception | None) -> None:
        now = self._clock()
        expired = [k for k, (at, _, _) in self._entries.items() if now - at > self.ttl_seconds]
        for stale in expired:
            del self._entries[stale]
        self._entries[key] = (now, payload, error)


class JSearchAdapter(BaseProviderAdapter):
    """Query JSearch and keep only listings published on this adapter's board."""

    def __init__(
        self,
        config: ProviderConfig,
        settings: Settings,
        api_key: str | None = None,
        feed: JSearchFeed | None = None,
    ) -> None:
        """Initialize, sharing ``feed`` with the other JSearch-backed boards."""
        super().__init__(config, settings, api_key=api_key)
        self.feed = feed or JSearchFeed()

    def _build_params(self, params: JobSearchParams) -> dict[str, str]:
        query = params.query or "jobs"
        if params.location:
            query = f"{query} in {params.location}"
        search: dict[str, str] = {"query": query, "page": "1", "num_pages": "1"}
        if params.remote:
            search["remote_jobs_only"] = "true"
        if params.date_posted:
            search["date_posted"] = _DATE_POSTED[params.date_posted]
        if params.job_type:
            search["employment_types"] = _EMPLOYMENT_TYPES[params.job_type]
        if params.experience_level:
            search["job_requirements"] = _EXPERIENCE_REQUIREMENTS[params.experience_level]
        return search

    async def _fetch(
        self, client: httpx.AsyncClient, params: JobSearchParams
    ) -> tuple[list[NormalizedJob], int | None]:
        """Query JSearch and filter the results down to this board."""
        headers = {
            "X-RapidAPI-Key": self._require_api_key(),
            "X-RapidAPI-Host": urlparse(self.config.api_url).netloc,
        }
        query = self._build_params(params)
        payload = await self.feed.get(
            query,
            lambda: self._get_json(client, self.config.api_url, params=query, headers=headers),
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            msg = "missing data array"
            raise MalformedPayloadError(msg)

        board = self.config.display_name.lower()
        jobs = self._normalize_items(
            (
                item
                for item in payload["data"]
                if isinstance(item, dict)
                and board in str(item.get("job_publisher") or "").lower()
            ),
            self._normalize,
        )
        logger.debug(
            "jsearch_results_filtered",
            provider=self.name,
            received=len(payload["data"]),
            kept=len(jobs),
        )
        jobs = [job for job in jobs if self._within_salary(job, params)]
        return jobs[: params.limit], len(jobs)

    @staticmethod
    def _within_salary(job: NormalizedJob, params: JobSearchParams) -> bool:
        top = job.salary_max or job.salary_min
        if params.salary_min is not None and top is not None and top < params.salary_min:
            return False
        bottom = job.salary_min or job.salary_max
        return not (
            params.salary_max is not None and bottom is not None and bottom > params.salary_max
        )

    def _normalize(self, item: dict[str, Any]) -> NormalizedJob:
        """Map one JSearch result to the common job shape."""
        location = ", ".join(
            part for part in (item.get("job_city"), item.get("job_state"), item.get("job_country"))
            if part
        )
        salary_min = to_salary(item.get("job_min_salary"))
        salary_max = to_salary(item.get("job_max_salary"))
        requirements = item.get("job_required_experience") or {}
        months = requirements.get("required_experience_in_months")
        education = item.get("job_required_education") or {}
        url = item.get("job_google_link") or item.get("job_apply_link") or ""

        return NormalizedJob(
            id=f"{self.name}-{item['job_id']}",
            title=item["job_title"],
            company=item.get("employer_name") or "",
            location=location or ("Remote" if item.get("job_is_remote") else ""),
            remote=infer_remote(item.get("job_is_remote"), location),
            salary_min=salary_min,
            salary_max=salary_max,
            currency=item.get("job_salary_currency") or "USD",
            salary_text=format_salary(salary_min, salary_max),
            required_skills=list(item.get("job_required_skills") or []),
            experience_required=int(months) // 12 if months else 0,
            education_required=[
                label for flag, label in _EDUCATION_FLAGS.items() if education.get(flag)
            ],
            description=item.get("job_description") or "",
            posted_at=parse_posted_at(
                item.get("job_posted_at_timestamp") or item.get("job_posted_at_datetime_utc")
            ),
            source=self.name,
            url=url,
            apply_url=item.get("job_apply_link") or url,
            employment_type=_employment_type(item.get("job_employment_type")),
            benefits=list(item.get("job_benefits") or []),
        )


def _employment_type(value: Any) -> str:
    reverse = {code: name for name, code in _EMPLOYMENT_TYPES.items()}
    return reverse.get(str(value or "").upper(), "full-time")
