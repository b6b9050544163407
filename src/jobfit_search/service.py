"""Multi-provider job search: fan out, merge, deduplicate and rank."""

from __future__ import annotations

import asyncio
import time
import uuid
from collections.abc import Callable, Sequence

import structlog

from jobfit_core.config.settings import Settings
from jobfit_core.models.job import JobSearchParams, NormalizedJob
from jobfit_core.models.provider import ProviderHealth, ProviderResponse
from jobfit_search.observability.logging import search_context
from jobfit_search.providers.base import BaseProviderAdapter
from jobfit_search.providers.factories import build_adapters
from jobfit_search.ranking import deduplicate_jobs, sort_jobs_by_relevance
from jobfit_search.resilience.circuit_breaker import CircuitBreaker
from jobfit_search.resilience.throttle import RequestThrottle

logger = structlog.get_logger()


class JobSearchService:
    """Search every enabled job board concurrently and merge the results.

    Each provider is guarded by its own circuit breaker and request
    throttle. A failing provider never fails the search: its error is
    logged and the remaining providers' jobs are returned.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        adapters: Sequence[BaseProviderAdapter] | None = None,
        throttle: RequestThrottle | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize with settings and adapters (built from the registry by default)."""
        self.settings = settings or Settings()
        if adapters is None:
            adapters = build_adapters(self.settings)
        self._adapters: dict[str, BaseProviderAdapter] = {a.name: a for a in adapters}
        self._breakers: dict[str, CircuitBreaker] = {
            name: CircuitBreaker(
                name,
                failure_threshold=self.settings.failure_threshold,
                cooldown_seconds=self.settings.circuit_cooldown_ms / 1000,
                clock=clock,
            )
            for name in self._adapters
        }
        self._throttle = throttle or RequestThrottle(clock=clock)
        self._priorities = {name: a.config.priority for name, a in self._adapters.items()}

    def enabled_providers(self) -> list[BaseProviderAdapter]:
        """Providers that can be called, highest priority first."""
        enabled = [a for a in self._adapters.values() if a.has_credentials]
        return sorted(enabled, key=lambda a: -a.config.priority)

    def breaker(self, provider: str) -> CircuitBreaker:
        """Circuit breaker guarding ``provider``."""
        return self._breakers[provider]

    def get_provider_health(self) -> dict[str, ProviderHealth]:
        """Per-provider enabled flag and circuit state."""
        return {
            name: ProviderHealth(
                name=name,
                display_name=adapter.config.display_name,
                priority=adapter.config.priority,
                enabled=adapter.has_credentials,
                circuit=self._breakers[name].snapshot(),
            )
            for name, adapter in self._adapters.items()
        }

    async def search_jobs(self, params: JobSearchParams) -> list[NormalizedJob]:
        """Search all enabled, non-tripped providers and return ranked jobs."""
        with search_context(uuid.uuid4().hex[:12], params.query):
            start = time.monotonic()
            callable_providers: list[BaseProviderAdapter] = []
            for adapter in self.enabled_providers():
                if self._breakers[adapter.name].is_open():
                    logger.info("provider_circuit_open", provider=adapter.name)
                    continue
                callable_providers.append(adapter)

            if not callable_providers:
                logger.warning("job_search_no_providers")
                return []

            results = await asyncio.gather(
                *(self._search_provider(adapter, params) for adapter in callable_providers),
                return_exceptions=True,
            )

            all_jobs: list[NormalizedJob] = []
            errors: dict[str, str] = {}
            for adapter, result in zip(callable_providers, results, strict=True):
                if isinstance(result, BaseException):
                    # Adapters contain their own failures; this is a bug in one.
                    self._breakers[adapter.name].record_failure()
                    errors[adapter.name] = f"{type(result).__name__}: {result}"
                elif result.success:
                    all_jobs.extend(result.jobs)
                else:
                    errors[adapter.name] = result.error or "unknown error"

            if errors:
                logger.warning("job_search_errors", errors=errors)

            unique = deduplicate_jobs(all_jobs)
            ranked = sort_jobs_by_relevance(unique, params.query, self._priorities)
            jobs = ranked[: params.limit]

            logger.info(
                "job_search_complete",
                providers=[a.name for a in callable_providers],
                failed=sorted(errors),
                fetched=len(all_jobs),
                unique=len(unique),
                returned=len(jobs),
                duration_seconds=round(time.monotonic() - start, 3),
            )
            return jobs

    async def _search_provider(
        self, adapter: BaseProviderAdapter, params: JobSearchParams
    ) -> ProviderResponse:
        """Throttle, call one provider and update its circuit breaker."""
        await self._throttle.wait(adapter.name, self.settings.min_interval_for(adapter.config))
        response = await adapter.search(params)
        breaker = self._breakers[adapter.name]
        if response.success:
            breaker.record_success()
        else:
            breaker.record_failure()
        return response
