"""RemoteOK adapter (public API, no auth, no upstream filtering)."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from jobfit_core.exceptions import MalformedPayloadError
from jobfit_core.models.job import JobSearchParams, NormalizedJob
from jobfit_search.providers.base import (
    BaseProviderAdapter,
    apply_client_filters,
    format_salary,
    parse_posted_at,
    parse_salary,
    to_salary,
)

logger = structlog.get_logger()

REMOTEOK_JOB_URL = "https://remoteok.com/remote-jobs/{job_id}"


class RemoteOKAdapter(BaseProviderAdapter):
    """Fetch the full RemoteOK feed and filter it client-side."""

    async def _fetch(
        self, client: httpx.AsyncClient, params: JobSearchParams
    ) -> tuple[list[NormalizedJob], int | None]:
        """Download the feed, normalize, then apply the search filters locally."""
        payload = await self._get_json(client, self.config.api_url)
        if not isinstance(payload, list):
            msg = f"expected a JSON array, got {type(payload).__name__}"
            raise MalformedPayloadError(msg)

        # The first element of the feed is a legal notice, not a job
        listings = [
            item
            for item in payload
            if isinstance(item, dict) and item.get("position") and item.get("company")
        ]
        jobs = self._normalize_items(listings, self._normalize)

        matched = apply_client_filters(jobs, params)
        logger.debug(
            "remoteok_feed_filtered",
            feed_size=len(jobs),
            matched=len(matched),
            query=params.query,
        )
        return matched[: params.limit], len(matched)

    def _normalize(self, item: dict[str, Any]) -> NormalizedJob:
        """Map one RemoteOK listing to the common job shape."""
        job_id = str(item.get("id") or item.get("slug") or "")
        salary_min = to_salary(item.get("salary_min"))
        salary_max = to_salary(item.get("salary_max"))
        if salary_min is None and salary_max is None and isinstance(item.get("salary"), str):
            salary_min, salary_max = parse_salary(item["salary"])

        url = item.get("url") or REMOTEOK_JOB_URL.format(job_id=job_id)
        tags = item.get("tags") or []
        return NormalizedJob(
            id=f"remoteok-{job_id}",
            title=str(item["position"]).strip(),
            company=str(item["company"]).strip(),
            location=(item.get("location") or "Remote").strip(),
            remote=True,
            salary_min=salary_min,
            salary_max=salary_max,
            salary_text=format_salary(salary_min, salary_max),
            required_skills=[str(tag) for tag in tags if tag],
            industry="Technology",
            description=item.get("description") or "No description available",
            posted_at=parse_posted_at(item.get("epoch") or item.get("date")),
            source=self.name,
            url=url,
            apply_url=item.get("apply_url") or url,
            employment_type="full-time",
            company_size=item.get("company_size"),
        )
