"""USAJOBS adapter (federal job board, API key required)."""

from __future__ import annotations

from typing import Any

import httpx

from jobfit_core.exceptions import MalformedPayloadError
from jobfit_core.models.job import JobSearchParams, NormalizedJob
from jobfit_search.providers.base import (
    BaseProviderAdapter,
    format_salary,
    infer_remote,
    parse_posted_at,
    to_salary,
)

USAJOBS_HOST = "data.usajobs.gov"
USAJOBS_VIEW_URL = "https://www.usajobs.gov/GetJob/ViewDetails/{job_id}"
MAX_RESULTS_PER_PAGE = 500

_DATE_POSTED_DAYS = {"today": "1", "week": "7", "month": "30"}
_SCHEDULE_CODES = {"full-time": "1", "part-time": "2", "internship": "6"}


class USAJobsAdapter(BaseProviderAdapter):
    """Search the USAJOBS API, which filters natively."""

    def _build_params(self, params: JobSearchParams) -> dict[str, str]:
        query: dict[str, str] = {
            "ResultsPerPage": str(max(1, min(params.limit, MAX_RESULTS_PER_PAGE))),
            "Page": "1",
        }
        if params.query:
            query["Keyword"] = params.query
        if params.location:
            query["LocationName"] = params.location
        if params.remote:
            query["RemoteIndicator"] = "True"
        if params.salary_min is not None:
            query["RemunerationMinimumAmount"] = str(params.salary_min)
        if params.salary_max is not None:
            query["RemunerationMaximumAmount"] = str(params.salary_max)
        if params.date_posted:
            query["DatePosted"] = _DATE_POSTED_DAYS[params.date_posted]
        if params.job_type in _SCHEDULE_CODES:
            query["PositionScheduleTypeCode"] = _SCHEDULE_CODES[params.job_type]
        return query

    async def _fetch(
        self, client: httpx.AsyncClient, params: JobSearchParams
    ) -> tuple[list[NormalizedJob], int | None]:
        """Query USAJOBS and normalize the matched descriptors."""
        headers = {
            "Host": USAJOBS_HOST,
            "User-Agent": self.settings.usajobs_user_agent or self.settings.user_agent,
            "Authorization-Key": self._require_api_key(),
        }
        payload = await self._get_json(
            client, self.config.api_url, params=self._build_params(params), headers=headers
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("SearchResult"), dict):
            msg = "missing SearchResult object"
            raise MalformedPayloadError(msg)

        result = payload["SearchResult"]
        items = result.get("SearchResultItems") or []
        jobs = self._normalize_items(
            items,
            lambda item: self._normalize(item["MatchedObjectId"], item["MatchedObjectDescriptor"]),
        )
        total = result.get("SearchResultCountAll")
        return jobs[: params.limit], int(total) if total is not None else len(jobs)

    def _normalize(self, job_id: Any, data: dict[str, Any]) -> NormalizedJob:
        """Map one USAJOBS descriptor to the common job shape."""
        pay = (data.get("PositionRemuneration") or [{}])[0]
        salary_min = to_salary(pay.get("MinimumRange"))
        salary_max = to_salary(pay.get("MaximumRange"))
        details = (data.get("UserArea") or {}).get("Details") or {}
        location = data.get("PositionLocationDisplay") or ""
        schedule = (data.get("PositionSchedule") or [{}])[0].get("Name") or "Full-time"
        apply_uris = data.get("ApplyURI") or []
        url = data.get("PositionURI") or USAJOBS_VIEW_URL.format(job_id=job_id)

        return NormalizedJob(
            id=f"usajobs-{job_id}",
            title=data["PositionTitle"],
            company=data.get("OrganizationName") or data.get("DepartmentName") or "",
            location=location,
            remote=infer_remote(details.get("RemoteIndicator"), location),
            salary_min=salary_min,
            salary_max=salary_max,
            salary_text=format_salary(salary_min, salary_max),
            industry="Government",
            description=data.get("QualificationSummary") or details.get("JobSummary") or "",
            posted_at=parse_posted_at(data.get("PublicationStartDate")),
            source=self.name,
            url=url,
            apply_url=apply_uris[0] if apply_uris else url,
            employment_type=schedule.strip().lower(),
            benefits=["Government benefits", "Retirement plan", "Health insurance"],
        )
