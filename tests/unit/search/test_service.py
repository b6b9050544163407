"""Tests for JobSearchService aggregation."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from jobfit_core.models.job import JobSearchParams
from jobfit_search.providers import JSearchAdapter, RemoteOKAdapter
from jobfit_search.resilience.throttle import RequestThrottle
from jobfit_search.service import JobSearchService
from tests.mocks.mock_clock import FakeClock
from tests.mocks.mock_factories import make_normalized_job, make_provider_config
from tests.mocks.mock_providers import ExplodingAdapter, ScriptedAdapter
from tests.mocks.mock_settings import make_settings


def _adapter(name: str, priority: int = 5, **kwargs: object) -> ScriptedAdapter:
    settings = kwargs.pop("settings", None) or make_settings()
    requires_auth = bool(kwargs.pop("requires_auth", False))
    config = make_provider_config(
        name=name, display_name=name.title(), priority=priority, requires_auth=requires_auth
    )
    return ScriptedAdapter(config, settings, **kwargs)  # type: ignore[arg-type]


@pytest.mark.unit
class TestEnabledProviders:
    """Test provider selection."""

    def test_sorted_by_priority(self) -> None:
        """Enabled providers come highest priority first."""
        service = JobSearchService(
            make_settings(),
            adapters=[_adapter("low", 1), _adapter("high", 9), _adapter("mid", 5)],
        )
        assert [a.name for a in service.enabled_providers()] == ["high", "mid", "low"]

    def test_auth_required_without_key_excluded(self) -> None:
        """A provider needing a credential is skipped when none is set."""
        locked = _adapter("locked", 9, requires_auth=True)
        unlocked = _adapter("unlocked", 9, requires_auth=True, api_key="k")
        service = JobSearchService(make_settings(), adapters=[locked, unlocked])
        assert [a.name for a in service.enabled_providers()] == ["unlocked"]

    def test_default_adapters_from_registry(self) -> None:
        """Without keys only RemoteOK is enabled; a JSearch key adds three boards."""
        assert [a.name for a in JobSearchService(make_settings()).enabled_providers()] == [
            "remoteok"
        ]
        service = JobSearchService(make_settings(jsearch_api_key="rapid-key"))
        enabled = service.enabled_providers()
        assert [a.name for a in enabled] == ["remoteok", "linkedin", "indeed", "glassdoor"]
        assert isinstance(enabled[0], RemoteOKAdapter)
        assert all(isinstance(a, JSearchAdapter) for a in enabled[1:])


@pytest.mark.unit
class TestSearchJobs:
    """Test the fan-out, merge and ranking flow."""

    @pytest.mark.asyncio
    async def test_timeout_isolated_from_other_provider(self) -> None:
        """One provider's timeout does not affect another's results."""
        settings = make_settings(request_timeout_ms=50)
        acme = make_normalized_job(
            id="x-1", title="Senior React Engineer", company="Acme", source="x"
        )
        x = _adapter("x", 5, settings=settings, jobs=[acme])
        y = _adapter("y", 5, settings=settings, delay=1.0)
        service = JobSearchService(settings, adapters=[x, y])

        jobs = await service.search_jobs(JobSearchParams(query="React", limit=10))

        assert jobs == [acme]
        assert service.breaker("y").failure_count == 1
        assert service.breaker("x").failure_count == 0

    @pytest.mark.asyncio
    async def test_partial_failure_returns_successful_results(self) -> None:
        """A failing provider leaves the others' jobs intact."""
        good_job = make_normalized_job(id="b-1", title="Python Dev", source="b")
        failing = _adapter("a", 9, error=httpx.ConnectError("down"))
        working = _adapter("b", 5, jobs=[good_job])
        service = JobSearchService(make_settings(), adapters=[failing, working])

        jobs = await service.search_jobs(JobSearchParams(query="python"))

        assert jobs == [good_job]
        assert service.breaker("a").failure_count == 1

    @pytest.mark.asyncio
    async def test_all_providers_fail_returns_empty(self) -> None:
        """Total outage yields an empty list, not an exception."""
        service = JobSearchService(
            make_settings(),
            adapters=[
                _adapter("a", error=httpx.ConnectError("down")),
                _adapter("b", error=ValueError("bad json")),
            ],
        )
        assert await service.search_jobs(JobSearchParams(query="python")) == []

    @pytest.mark.asyncio
    async def test_adapter_exception_contained(self) -> None:
        """An adapter that raises out of search() is recorded as a failure."""
        ok_job = make_normalized_job(id="b-1", source="b")
        broken = ExplodingAdapter(make_provider_config(name="a"), make_settings())
        service = JobSearchService(make_settings(), adapters=[broken, _adapter("b", jobs=[ok_job])])

        jobs = await service.search_jobs(JobSearchParams())

        assert jobs == [ok_job]
        assert service.breaker("a").failure_count == 1

    @pytest.mark.asyncio
    async def test_no_enabled_providers(self) -> None:
        """With nothing callable the search returns no jobs."""
        locked = _adapter("locked", requires_auth=True)
        service = JobSearchService(make_settings(), adapters=[locked])
        assert await service.search_jobs(JobSearchParams()) == []
        assert locked.calls == 0

    @pytest.mark.asyncio
    async def test_duplicates_keep_higher_priority_copy(self) -> None:
        """The same job from two boards appears once, from the preferred board."""
        low_copy = make_normalized_job(id="low-1", title="SRE", company="Acme", source="low")
        high_copy = make_normalized_job(id="high-1", title="sre", company="ACME", source="high")
        service = JobSearchService(
            make_settings(),
            adapters=[_adapter("low", 1, jobs=[low_copy]), _adapter("high", 9, jobs=[high_copy])],
        )
        jobs = await service.search_jobs(JobSearchParams(query="sre"))
        assert jobs == [high_copy]

    @pytest.mark.asyncio
    async def test_ranked_and_truncated(self) -> None:
        """Results are ordered by relevance and cut to the limit."""
        skill_hit = make_normalized_job(
            id="1", title="Engineer", company="Initech", required_skills=["rust"], source="a"
        )
        title_hit = make_normalized_job(
            id="2", title="Rust Engineer", company="Initech", required_skills=[], source="a"
        )
        company_hit = make_normalized_job(
            id="3", title="Engineer", company="Rust Co", required_skills=[], source="a"
        )
        service = JobSearchService(
            make_settings(), adapters=[_adapter("a", jobs=[skill_hit, title_hit, company_hit])]
        )
        jobs = await service.search_jobs(JobSearchParams(query="rust", limit=2))
        assert [j.id for j in jobs] == ["2", "3"]

    @pytest.mark.asyncio
    async def test_zero_limit(self) -> None:
        """A zero limit returns nothing even when jobs were found."""
        service = JobSearchService(
            make_settings(), adapters=[_adapter("a", jobs=[make_normalized_job()])]
        )
        assert await service.search_jobs(JobSearchParams(limit=0)) == []

    @pytest.mark.asyncio
    async def test_params_forwarded(self) -> None:
        """Each adapter receives the caller's parameters."""
        adapter = _adapter("a")
        service = JobSearchService(make_settings(), adapters=[adapter])
        params = JobSearchParams(query="data", remote=True, salary_min=100_000)
        await service.search_jobs(params)
        assert adapter.last_params == params


@pytest.mark.unit
class TestCircuitIntegration:
    """Test circuit breaker and throttle wiring."""

    @pytest.mark.asyncio
    async def test_open_circuit_skips_provider(self, clock: FakeClock) -> None:
        """After tripping, the provider is not called until the cooldown passes."""
        settings = make_settings(failure_threshold=1, circuit_cooldown_ms=30_000)
        failing = _adapter("a", settings=settings, error=httpx.ConnectError("down"))
        service = JobSearchService(settings, adapters=[failing], clock=clock)

        await service.search_jobs(JobSearchParams())
        assert service.breaker("a").is_open() is True

        await service.search_jobs(JobSearchParams())
        assert failing.calls == 1

        clock.advance(31)
        await service.search_jobs(JobSearchParams())
        assert failing.calls == 2

    @pytest.mark.asyncio
    async def test_success_resets_failures(self) -> None:
        """A successful call clears earlier failures."""
        adapter = _adapter("a", error=httpx.ConnectError("down"))
        service = JobSearchService(make_settings(), adapters=[adapter])
        await service.search_jobs(JobSearchParams())
        assert service.breaker("a").failure_count == 1

        adapter.error = None
        await service.search_jobs(JobSearchParams())
        assert service.breaker("a").failure_count == 0

    @pytest.mark.asyncio
    async def test_throttle_receives_provider_interval(self) -> None:
        """The stricter of configured interval and rate limit is enforced."""
        throttle = AsyncMock(spec=RequestThrottle)
        throttle.wait.return_value = 0.0
        config = make_provider_config(name="slow", rate_limit_per_minute=30)
        adapter = ScriptedAdapter(config, make_settings())
        service = JobSearchService(
            make_settings(min_request_interval_ms=1000), adapters=[adapter], throttle=throttle
        )

        await service.search_jobs(JobSearchParams())

        throttle.wait.assert_awaited_once_with("slow", 2.0)

    def test_provider_health(self) -> None:
        """Health lists every provider with its enabled flag and circuit."""
        service = JobSearchService(
            make_settings(),
            adapters=[_adapter("open", 7), _adapter("locked", 3, requires_auth=True)],
        )
        service.breaker("open").record_failure()

        health = service.get_provider_health()

        assert set(health) == {"open", "locked"}
        assert health["open"].enabled is True
        assert health["open"].circuit.failure_count == 1
        assert health["open"].circuit.is_open is False
        assert health["open"].status == "degraded"
        assert health["locked"].enabled is False
        assert health["locked"].priority == 3
        assert health["locked"].status == "healthy"
