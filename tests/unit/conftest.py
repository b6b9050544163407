"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import pytest

from jobfit_core.config.settings import Settings
from jobfit_core.models.candidate import CandidateProfile
from jobfit_core.models.job import JobPosting
from tests.mocks.mock_clock import FakeClock
from tests.mocks.mock_factories import make_candidate_profile, make_job_posting
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def settings() -> Settings:
    """Return a real Settings with throttling disabled."""
    return make_settings()


@pytest.fixture
def sample_job() -> JobPosting:
    """Return a fully populated JobPosting."""
    return make_job_posting()


@pytest.fixture
def sample_profile() -> CandidateProfile:
    """Return a CandidateProfile that fits ``sample_job`` well."""
    return make_candidate_profile()


@pytest.fixture
def clock() -> FakeClock:
    """Return a controllable clock."""
    return FakeClock()
