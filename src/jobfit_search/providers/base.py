"""Base provider adapter and shared normalization helpers."""

from __future__ import annotations

import asyncio
import re
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from jobfit_core.exceptions import MissingCredentialError, ProviderError
from jobfit_core.models.job import JobSearchParams, NormalizedJob
from jobfit_core.models.provider import ProviderConfig, ProviderResponse

if TYPE_CHECKING:
    from jobfit_core.config.settings import Settings

logger = structlog.get_logger()

_SALARY_NUMBER = re.compile(r"(\d+(?:\.\d+)?)\s*([kK])?")

_DATE_POSTED_WINDOWS: dict[str, timedelta] = {
    "today": timedelta(days=1),
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}


def parse_salary(text: str | None) -> tuple[int | None, int | None]:
    """Parse a salary range out of free text like ``"$120k - $150k"``."""
    if not text:
        return None, None
    clean = text.replace(",", "")
    numbers: list[int] = []
    for value, thousands in _SALARY_NUMBER.findall(clean):
        amount = float(value) * (1000 if thousands else 1)
        numbers.append(int(amount))
    if len(numbers) >= 2:
        low, high = numbers[0], numbers[1]
        return min(low, high), max(low, high)
    if len(numbers) == 1:
        return numbers[0], numbers[0]
    return None, None


def format_salary(salary_min: int | None, salary_max: int | None) -> str | None:
    """Format a salary band for display."""
    if salary_min and salary_max:
        return f"${salary_min:,} - ${salary_max:,}"
    if salary_min:
        return f"${salary_min:,}+"
    if salary_max:
        return f"Up to ${salary_max:,}"
    return None


def to_salary(value: Any) -> int | None:
    """Coerce a numeric or numeric-string salary; zero means unknown."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = int(float(value))
    except (TypeError, ValueError):
        return None
    return amount if amount > 0 else None


def infer_remote(flag: Any, location: str | None) -> bool:
    """Combine an explicit remote flag with a ``"Remote"`` location string."""
    if isinstance(flag, bool) and flag:
        return True
    if isinstance(flag, str) and flag.strip().lower() in {"true", "yes", "1"}:
        return True
    return bool(location) and "remote" in location.lower()


def parse_posted_at(value: Any) -> datetime | None:
    """Parse epoch seconds, epoch milliseconds or an ISO-8601 string."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > 1e12 else value
        return datetime.fromtimestamp(seconds, tz=UTC)
    if isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return None


def matches_query(job: NormalizedJob, query: str) -> bool:
    """Case-insensitive match of ``query`` against title, company and skills."""
    term = query.strip().lower()
    if not term:
        return True
    return (
        term in job.title.lower()
        or term in job.company.lower()
        or any(term in skill.lower() for skill in job.required_skills)
    )


def apply_client_filters(
    jobs: list[NormalizedJob],
    params: JobSearchParams,
    now: datetime | None = None,
) -> list[NormalizedJob]:
    """Filter jobs locally for providers that cannot filter upstream."""
    now = now or datetime.now(UTC)
    location = params.location.lower()
    window = _DATE_POSTED_WINDOWS.get(params.date_posted or "")
    filtered: list[NormalizedJob] = []

    for job in jobs:
        if not matches_query(job, params.query):
            continue
        if params.remote and not job.remote:
            continue
        if location and location not in job.location.lower() and not job.remote:
            continue
        top = job.salary_max or job.salary_min
        if params.salary_min is not None and top is not None and top < params.salary_min:
            continue
        bottom = job.salary_min or job.salary_max
        if params.salary_max is not None and bottom is not None and bottom > params.salary_max:
            continue
        if params.job_type and job.employment_type != params.job_type:
            continue
        if window and job.posted_at is not None and now - job.posted_at > window:
            continue
        filtered.append(job)

    return filtered


def _is_transient(exc: BaseException) -> bool:
    """Retry connection-level failures and 5xx responses, never timeouts."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError) and not isinstance(
        exc, httpx.TimeoutException
    )


class BaseProviderAdapter(ABC):
    """Translate a generic search into one job board's API and back.

    ``search`` never raises: timeouts, HTTP failures and malformed payloads
    all come back as ``ProviderResponse(success=False)``.
    """

    def __init__(
        self,
        config: ProviderConfig,
        settings: Settings,
        api_key: str | None = None,
    ) -> None:
        """Initialize with the provider's registry entry and settings."""
        self.config = config
        self.settings = settings
        self._api_key = api_key

    @property
    def name(self) -> str:
        """Provider key."""
        return self.config.name

    @property
    def has_credentials(self) -> bool:
        """Whether the adapter can be called."""
        return not self.config.requires_auth or bool(self._api_key)

    @abstractmethod
    async def _fetch(
        self, client: httpx.AsyncClient, params: JobSearchParams
    ) -> tuple[list[NormalizedJob], int | None]:
        """Call the upstream API and return (normalized jobs, total found)."""
        ...

    def _default_headers(self) -> dict[str, str]:
        return {"User-Agent": self.settings.user_agent, "Accept": "application/json"}

    def _require_api_key(self) -> str:
        if not self._api_key:
            msg = f"{self.config.display_name} requires an API key"
            raise MissingCredentialError(msg)
        return self._api_key

    async def search(self, params: JobSearchParams) -> ProviderResponse:
        """Search this provider, containing every failure at this boundary."""
        timeout = self.settings.request_timeout_seconds
        start = time.monotonic()
        try:
            async with asyncio.timeout(timeout):
                async with httpx.AsyncClient(
                    timeout=timeout, headers=self._default_headers()
                ) as client:
                    jobs, total = await self._fetch(client, params)
        except (TimeoutError, httpx.TimeoutException):
            error = (
                f"{self.config.display_name} request timed out after "
                f"{self.settings.request_timeout_ms} ms"
            )
        except httpx.HTTPStatusError as e:
            error = f"{self.config.display_name} returned HTTP {e.response.status_code}"
        except httpx.HTTPError as e:
            error = f"{self.config.display_name} transport error: {type(e).__name__}"
        except ProviderError as e:
            error = f"{self.config.display_name}: {e}"
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            error = f"{self.config.display_name} returned a malformed payload: {e}"
        except Exception as e:
            error = f"{self.config.display_name} unexpected error: {type(e).__name__}"
        else:
            logger.info(
                "provider_search_succeeded",
                provider=self.name,
                jobs_count=len(jobs),
                duration_seconds=round(time.monotonic() - start, 3),
            )
            return ProviderResponse(
                success=True,
                jobs=jobs,
                total_found=total,
                source=self.name,
                fetched_at=datetime.now(UTC),
            )

        error = self._redact(error)
        logger.warning(
            "provider_search_failed",
            provider=self.name,
            error=error,
            duration_seconds=round(time.monotonic() - start, 3),
        )
        return ProviderResponse(
            success=False,
            error=error,
            source=self.name,
            fetched_at=datetime.now(UTC),
        )

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET ``url`` and decode JSON, retrying transient failures."""

        @retry(
            stop=stop_after_attempt(self.settings.provider_retry_attempts),
            wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        )
        async def _do_get() -> Any:
            response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()

        return await _do_get()

    def _normalize_items(
        self, items: Iterable[Any], normalize: Callable[[Any], NormalizedJob]
    ) -> list[NormalizedJob]:
        """Normalize each listing, skipping the ones that cannot be mapped."""
        jobs: list[NormalizedJob] = []
        for item in items:
            try:
                jobs.append(normalize(item))
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                logger.warning(
                    "provider_item_skipped",
                    provider=self.name,
                    error=self._redact(f"{type(e).__name__}: {e}"),
                )
        return jobs

    def _redact(self, text: str) -> str:
        """Strip the provider secret from any outgoing text."""
        if self._api_key:
            return text.replace(self._api_key, "***")
        return text
