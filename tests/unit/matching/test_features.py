"""Tests for the pure feature functions."""

from __future__ import annotations

import pytest

from jobfit_core.models.candidate import CandidateProfile
from jobfit_core.models.job import JobPosting
from jobfit_matching.features import (
    culture_fit,
    education_match,
    experience_match,
    extract_features,
    growth_potential,
    industry_fit,
    location_preference,
    remote_compatibility,
    salary_alignment,
    skill_similarity,
    work_life_balance,
)
from tests.mocks.mock_factories import make_job_posting


@pytest.mark.unit
class TestSkillSimilarity:
    """Test weighted skill overlap."""

    def test_no_required_skills_is_neutral(self) -> None:
        """Absence of requirements scores 0.5 whatever the candidate holds."""
        assert skill_similarity([], ["Python", "Go"]) == 0.5
        assert skill_similarity([], []) == 0.5

    def test_exact_match_is_full(self) -> None:
        """Holding exactly the required skills scores 1.0."""
        assert skill_similarity(["Python", "SQL"], ["python", "sql"]) == pytest.approx(1.0)

    def test_no_overlap_is_zero(self) -> None:
        """Holding none of the required skills scores 0."""
        assert skill_similarity(["Rust"], ["Python"]) == 0.0

    def test_weighted_partial_overlap(self) -> None:
        """Known skill weights and the extra-skill discount shape the score."""
        # react 0.9 held, typescript 0.95 missing, go 0.5 extra at 0.3x
        expected = 0.9 / (0.9 + 0.95 + 0.5 * 0.3)
        assert skill_similarity(["React", "TypeScript"], ["React", "Go"]) == pytest.approx(expected)

    def test_duplicates_and_blanks_ignored(self) -> None:
        """Case duplicates and blank entries do not skew the score."""
        assert skill_similarity(["Python", "python", " "], ["PYTHON"]) == pytest.approx(1.0)


@pytest.mark.unit
class TestExperienceMatch:
    """Test experience ratio bands."""

    @pytest.mark.parametrize(
        ("required", "held", "expected"),
        [
            (0, 0, 1.0),
            (5, 5, 1.0),
            (5, 10, 1.0),
            (5, 4, 0.9),
            (5, 3, 0.7),
            (5, 2, 0.5),
            (5, 1, 0.3),
            (5, 0, 0.3),
        ],
    )
    def test_bands(self, required: int, held: float, expected: float) -> None:
        """Ratios map onto the discrete bands."""
        assert experience_match(required, held) == expected


@pytest.mark.unit
class TestLocationPreference:
    """Test location preference scoring."""

    def test_no_preference(self) -> None:
        """No known location scores 0.8."""
        assert location_preference("Seattle", []) == 0.8

    def test_preferred_match(self) -> None:
        """A preferred location contained in the job location scores 1.0."""
        assert location_preference("Seattle, WA", ["seattle"]) == 1.0

    def test_job_location_contained_in_preference(self) -> None:
        """A short job location inside a longer preference also matches."""
        assert location_preference("Austin", ["Austin, TX"]) == 1.0

    def test_hub_multiplier_scaled(self) -> None:
        """Unpreferred hubs score their multiplier relative to the top hub."""
        assert location_preference("San Francisco, CA", ["Denver"]) == pytest.approx(1.0)
        assert location_preference("Austin, TX", ["Denver"]) == pytest.approx(1.05 / 1.2)

    def test_unknown_location(self) -> None:
        """Unlisted or empty job locations score 0.7."""
        assert location_preference("Denver", ["Boston"]) == 0.7
        assert location_preference("", ["Boston"]) == 0.7


@pytest.mark.unit
class TestSalaryAlignment:
    """Test salary band comparison."""

    @pytest.mark.parametrize(
        ("expectation", "expected"),
        [
            (100_000, 1.0),
            (110_000, 1.0),
            (89_000, 0.9),
            (120_000, 0.9),
            (75_000, 0.8),
            (140_000, 0.6),
            (50_000, 0.6),
        ],
    )
    def test_bands(self, expectation: int, expected: float) -> None:
        """Distance from the band midpoint selects the score."""
        assert salary_alignment(90_000, 110_000, expectation) == expected

    def test_missing_data_is_neutral(self) -> None:
        """Any missing side scores 0.7."""
        assert salary_alignment(None, 110_000, 100_000) == 0.7
        assert salary_alignment(90_000, None, 100_000) == 0.7
        assert salary_alignment(90_000, 110_000, None) == 0.7


@pytest.mark.unit
class TestIndustryAndEducation:
    """Test industry fit and education match."""

    def test_industry_no_preference(self) -> None:
        """No preference scores 0.8."""
        assert industry_fit("Finance", []) == 0.8

    def test_industry_match(self) -> None:
        """Case-insensitive substring match scores 1.0."""
        assert industry_fit("Financial Technology", ["technology"]) == 1.0

    def test_industry_falls_back_to_demand(self) -> None:
        """Unpreferred industries score their demand, unknown ones 0.6."""
        assert industry_fit("Healthcare", ["Finance"]) == 0.8
        assert industry_fit("Mining", ["Finance"]) == 0.6
        assert industry_fit("", ["Finance"]) == 0.6

    def test_education_fraction(self) -> None:
        """Score is the fraction of credentials held."""
        assert education_match([], ["PhD"]) == 1.0
        assert education_match(["BSc", "AWS Certified"], ["bsc"]) == 0.5
        assert education_match(["BSc"], []) == 0.0


@pytest.mark.unit
class TestKeywordFeatures:
    """Test culture, growth, work-life and remote features."""

    def test_culture_base_and_bonus(self) -> None:
        """Culture starts at 0.7 and rises per keyword up to 1.0."""
        plain = JobPosting(id="1", title="Engineer", description="Write code")
        rich = JobPosting(
            id="2",
            title="Engineer",
            description="Collaborative, inclusive, diverse and transparent team",
        )
        assert culture_fit(plain) == pytest.approx(0.7)
        assert culture_fit(rich) == pytest.approx(1.0)

    def test_growth_keywords(self) -> None:
        """Each growth keyword adds 0.1."""
        job = JobPosting(
            id="1", title="Senior Engineer", description="Mentor others, clear advancement"
        )
        assert growth_potential(job) == pytest.approx(0.3)
        assert growth_potential(JobPosting(id="2", title="Clerk")) == 0.0

    def test_work_life_preference_wins(self) -> None:
        """An explicit candidate preference sets the score."""
        job = JobPosting(id="1", title="Engineer", description="flexible hours")
        assert work_life_balance(job, "intensive") == 0.7
        assert work_life_balance(job, "balanced") == 0.8

    def test_work_life_keywords(self) -> None:
        """Without a preference, balance keywords decide."""
        assert work_life_balance(JobPosting(id="1", title="Remote Engineer")) == 0.9
        assert work_life_balance(JobPosting(id="2", title="Engineer")) == 0.7

    @pytest.mark.parametrize(
        ("job_remote", "preference", "expected"),
        [
            (True, "remote", 1.0),
            (False, "office", 1.0),
            (True, "flexible", 0.9),
            (False, "flexible", 0.9),
            (False, "remote", 0.6),
            (True, "office", 0.6),
        ],
    )
    def test_remote_compatibility(self, job_remote: bool, preference: str, expected: float) -> None:
        """Exact match, flexible and mismatch scores."""
        assert remote_compatibility(job_remote, preference) == expected


@pytest.mark.unit
class TestExtractFeatures:
    """Test the combined feature vector."""

    def test_all_features_in_unit_interval(
        self, sample_job: JobPosting, sample_profile: CandidateProfile
    ) -> None:
        """Every feature lies in [0, 1]."""
        features = extract_features(sample_job, sample_profile)
        assert all(0.0 <= v <= 1.0 for v in features.as_list())

    def test_uses_salary_upper_bound(self) -> None:
        """The expectation's upper bound is compared to the job midpoint."""
        job = make_job_posting(salary_min=140_000, salary_max=160_000)
        profile = CandidateProfile(salary_expectation={"min": 60_000, "max": 150_000})
        assert extract_features(job, profile).salary_alignment == 1.0

    def test_empty_profile_is_neutral(self) -> None:
        """A blank profile gets neutral values instead of zeros."""
        job = make_job_posting(required_skills=[], experience_required=0, education_required=[])
        features = extract_features(job, CandidateProfile())
        assert features.skill_similarity == 0.5
        assert features.experience_match == 1.0
        assert features.location_preference == 0.8
        assert features.salary_alignment == 0.7
        assert features.industry_fit == 0.8
        assert features.education_match == 1.0
        assert features.remote_compatibility == 0.9
