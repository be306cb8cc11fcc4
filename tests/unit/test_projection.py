"""
Unit tests for projection.py module.

Tests the year-wise projection builder:
- ProjectionInput validation
- record count, year/age indexing and cumulative counters
- deterministic median path
- best/worst bands against an independent closed-form computation
- degenerate inputs (zero horizon, zero contributions, zero volatility)
- memoization and tabular views
"""

import math
from dataclasses import FrozenInstanceError
from statistics import NormalDist

import pandas as pd
import pytest

from growthcast.exceptions import ValidationError
from growthcast.lognormal import LognormalParams
from growthcast.moments import annuity_moments
from growthcast.projection import (
    ProjectionInput,
    ProjectionResult,
    YearRecord,
    project,
    project_portfolio,
)


def reference_quantile(c, lump, year, mu, sigma, p):
    """
    Combined band value for `year`, built from the moment recursion and the
    stdlib normal quantile.
    """
    m = 1.0 + mu
    A = m ** 2 + sigma ** 2
    z = NormalDist().inv_cdf(p)

    total = 0.0
    if c > 0:
        m1 = m2 = 0.0
        for _ in range(year):
            m1, m2 = m * m1 + c, A * m2 + 2.0 * c * m * m1 + c ** 2
        total += _lognormal_quantile(m1, m2 - m1 ** 2, z)
    if lump > 0:
        n = year - 1
        mean = lump * m ** n
        total += _lognormal_quantile(mean, lump ** 2 * A ** n - mean ** 2, z)
    return total


def _lognormal_quantile(mean, variance, z):
    s2 = math.log(1.0 + max(variance, 0.0) / mean ** 2)
    return math.exp(math.log(mean) - s2 / 2 + z * math.sqrt(s2))


# ============================================================================
# INPUT VALIDATION
# ============================================================================

class TestProjectionInput:
    """Tests for ProjectionInput construction."""

    def test_defaults(self):
        params = ProjectionInput(annual_investment=1_000)
        assert params.lump_sum_investment == 0.0
        assert params.age == 35
        assert params.horizon_years == 25
        assert params.tail_percentile == 10

    @pytest.mark.parametrize("field", [
        "annual_investment", "lump_sum_investment", "horizon_years", "volatility",
    ])
    def test_negative_values_rejected(self, field):
        kwargs = {"annual_investment": 1_000, field: -1}
        with pytest.raises(ValidationError, match=field):
            ProjectionInput(**kwargs)

    @pytest.mark.parametrize("tail", [-1, 50, 75])
    def test_tail_percentile_range(self, tail):
        with pytest.raises(ValidationError, match="tail_percentile"):
            ProjectionInput(annual_investment=1_000, tail_percentile=tail)

    @pytest.mark.parametrize("expected_return", [-1.0, -1.5])
    def test_total_loss_return_rejected(self, expected_return):
        with pytest.raises(ValidationError, match="expected_return"):
            ProjectionInput(annual_investment=1_000, expected_return=expected_return)

    def test_negative_return_allowed(self):
        params = ProjectionInput(annual_investment=1_000, expected_return=-0.02)
        assert params.expected_return == -0.02

    def test_frozen_and_hashable(self):
        params = ProjectionInput(annual_investment=1_000)
        with pytest.raises(FrozenInstanceError):
            params.age = 40
        assert hash(params) == hash(ProjectionInput(annual_investment=1_000))


# ============================================================================
# STRUCTURE
# ============================================================================

class TestProjectionStructure:
    """Record count, indexing and cumulative counters."""

    def test_record_count(self, annuity_input):
        result = project(annuity_input)
        assert len(result.yearly_data) == 25
        assert len(result) == 25

    def test_year_and_age_indexing(self, mixed_input):
        result = project(mixed_input)
        for i, record in enumerate(result.yearly_data):
            assert record.year == i + 1
            assert record.age == mixed_input.age + i

    def test_lump_sum_only_in_year_one(self, mixed_input):
        result = project(mixed_input)
        assert result.yearly_data[0].lump_sum == 1_000_000
        assert all(r.lump_sum == 0.0 for r in result.yearly_data[1:])

    def test_cumulative_counters(self, mixed_input):
        result = project(mixed_input)
        previous = None
        for k, r in enumerate(result.yearly_data, start=1):
            assert r.cumulative_annual_contributions == pytest.approx(200_000 * k)
            assert r.cumulative_lump_sum == 1_000_000
            assert r.cumulative_total_contributions == pytest.approx(
                r.cumulative_annual_contributions + r.cumulative_lump_sum
            )
            if previous is not None:
                assert r.cumulative_total_contributions >= previous.cumulative_total_contributions
            previous = r

    def test_total_return(self, mixed_input):
        for r in project(mixed_input).yearly_data:
            assert r.total_return == pytest.approx(
                r.median_projection - r.cumulative_total_contributions
            )

    def test_band_ordering(self, mixed_input):
        for r in project(mixed_input).yearly_data:
            assert 0.0 <= r.worst_case <= r.lower_quartile <= r.median_case
            assert r.median_case <= r.upper_quartile <= r.best_case


# ============================================================================
# REFERENCE VALUES
# ============================================================================

class TestAnnuityReference:
    """300,000/year, 25 years, 6% return, 10% volatility, 10th/90th."""

    def test_year_one(self, annuity_input):
        first = project(annuity_input).yearly_data[0]
        assert first.median_projection == 300_000
        assert first.worst_case == first.median_case == first.best_case == 300_000

    def test_final_median_projection(self, annuity_input):
        final = project(annuity_input).final
        assert final.median_projection == pytest.approx(300_000 * (1.06 ** 25 - 1) / 0.06)

    @pytest.mark.parametrize("year", [2, 5, 10, 25])
    def test_bands_match_reference(self, annuity_input, year):
        record = project(annuity_input).yearly_data[year - 1]
        ref = lambda p: reference_quantile(300_000, 0, year, 0.06, 0.10, p)

        assert record.worst_case == pytest.approx(ref(0.1), rel=1e-9)
        assert record.lower_quartile == pytest.approx(ref(0.25), rel=1e-9)
        assert record.median_case == pytest.approx(ref(0.5), rel=1e-9)
        assert record.upper_quartile == pytest.approx(ref(0.75), rel=1e-9)
        assert record.best_case == pytest.approx(ref(0.9), rel=1e-9)

    def test_projection_inside_band(self, annuity_input):
        for r in project(annuity_input).yearly_data[1:]:
            assert r.worst_case < r.median_projection < r.best_case

    def test_summary(self, annuity_input):
        result = project(annuity_input)
        s = result.summary
        assert s.committed_annual_investment == 300_000
        assert s.lump_sum_investment == 0
        assert s.base_cagr == 0.06
        assert s.volatility == 0.10
        assert s.last_year_investment_value == result.final.median_projection
        assert s.last_year_worst_case == result.final.worst_case
        assert s.last_year_best_case == result.final.best_case
        assert s.total_contributions == pytest.approx(7_500_000)


class TestMixedReference:
    """Annuity plus lump sum, combined under a shared draw."""

    @pytest.mark.parametrize("year", [2, 7, 20])
    def test_bands_match_reference(self, mixed_input, year):
        record = project(mixed_input).yearly_data[year - 1]
        for p, value in ((0.1, record.worst_case), (0.5, record.median_case),
                         (0.9, record.best_case)):
            expected = reference_quantile(200_000, 1_000_000, year, 0.06, 0.15, p)
            assert value == pytest.approx(expected, rel=1e-9)

    def test_deterministic_path(self, mixed_input):
        result = project(mixed_input)
        value = 0.0
        for k, r in enumerate(result.yearly_data, start=1):
            value = 1_200_000 if k == 1 else value * 1.06 + 200_000
            assert r.median_projection == pytest.approx(value)

    def test_lump_only(self, lump_only_input):
        result = project(lump_only_input)
        for k, r in enumerate(result.yearly_data, start=1):
            assert r.median_projection == pytest.approx(500_000 * 1.05 ** (k - 1))
            if k > 1:
                expected = reference_quantile(0, 500_000, k, 0.05, 0.12, 0.05)
                assert r.worst_case == pytest.approx(expected, rel=1e-9)


# ============================================================================
# DEGENERATE INPUTS
# ============================================================================

class TestDegenerateInputs:
    """Zero horizon, zero contributions, zero volatility, A == 1."""

    def test_zero_horizon(self):
        result = project(ProjectionInput(annual_investment=1_000, horizon_years=0))
        assert result.yearly_data == ()
        assert result.final is None
        assert result.summary.last_year_investment_value == 0.0
        assert result.summary.last_year_worst_case == 0.0
        assert result.summary.last_year_best_case == 0.0

    def test_zero_contributions_are_all_zero(self):
        result = project(ProjectionInput(
            annual_investment=0, lump_sum_investment=0, horizon_years=10,
            expected_return=0.06, volatility=0.1,
        ))
        assert len(result) == 10
        for r in result.yearly_data:
            assert r.median_projection == 0.0
            assert r.worst_case == 0.0
            assert r.median_case == 0.0
            assert r.best_case == 0.0
            assert r.cumulative_total_contributions == 0.0

    def test_zero_volatility_collapses_bands(self):
        result = project(ProjectionInput(
            annual_investment=10_000, lump_sum_investment=50_000, horizon_years=15,
            expected_return=0.07, volatility=0.0,
        ))
        for r in result.yearly_data:
            assert r.worst_case == r.median_case == r.best_case
            assert r.median_case == pytest.approx(r.median_projection)

    def test_zero_return_zero_volatility(self):
        """A == 1: value is simply what was contributed."""
        result = project(ProjectionInput(
            annual_investment=1_000, lump_sum_investment=5_000, horizon_years=10,
            expected_return=0.0, volatility=0.0,
        ))
        for r in result.yearly_data:
            assert r.median_projection == pytest.approx(r.cumulative_total_contributions)
            assert r.worst_case == pytest.approx(r.cumulative_total_contributions)
            assert r.best_case == pytest.approx(r.cumulative_total_contributions)

    def test_zero_tail_percentile(self, annuity_input):
        """tail 0 is clamped to the 0.01% / 99.99% quantiles."""
        params = ProjectionInput(**{**annuity_input.__dict__, "tail_percentile": 0})
        record = project(params).yearly_data[9]
        assert record.worst_case == pytest.approx(
            reference_quantile(300_000, 0, 10, 0.06, 0.10, 0.0001), rel=1e-9
        )
        assert record.best_case == pytest.approx(
            reference_quantile(300_000, 0, 10, 0.06, 0.10, 0.9999), rel=1e-9
        )

    def test_near_total_loss_return(self):
        """A lump sum shrinking below float range yields zero bands, not an error."""
        result = project(ProjectionInput(
            annual_investment=0, lump_sum_investment=500, horizon_years=100,
            expected_return=-0.999999, volatility=0.0,
        ))
        assert len(result) == 100
        for r in result.yearly_data:
            assert 0.0 <= r.worst_case <= r.best_case
        assert result.final.median_projection == pytest.approx(0.0, abs=1e-12)
        assert result.final.best_case == 0.0

    def test_no_lump_sum_bands_match_annuity_alone(self, annuity_input):
        """A zero lump sum adds nothing to the bands, not even the placeholder mean."""
        record = project(annuity_input).yearly_data[24]
        annuity_only = LognormalParams.from_pair(annuity_moments(300_000, 25, 0.06, 0.10))
        assert record.worst_case == pytest.approx(float(annuity_only.quantile(0.1)), rel=1e-12)
        assert record.best_case == pytest.approx(float(annuity_only.quantile(0.9)), rel=1e-12)

    def test_high_volatility_worst_case_non_negative(self):
        result = project(ProjectionInput(
            annual_investment=1_000, horizon_years=40,
            expected_return=-0.05, volatility=1.5, tail_percentile=1,
        ))
        assert all(r.worst_case >= 0.0 for r in result.yearly_data)


# ============================================================================
# PURITY AND VIEWS
# ============================================================================

class TestProjectionResult:
    """Memoization, immutability and tabular views."""

    def test_idempotent(self, mixed_input):
        first = project(mixed_input)
        second = project(ProjectionInput(**mixed_input.__dict__))
        assert first == second

    def test_memoized(self, mixed_input):
        project(mixed_input)
        project(mixed_input)
        assert project.cache_info().hits == 1

    def test_uncached_equal_to_cached(self, mixed_input):
        assert project.__wrapped__(mixed_input) == project(mixed_input)

    def test_records_immutable(self, annuity_input):
        record = project(annuity_input).yearly_data[0]
        with pytest.raises(FrozenInstanceError):
            record.worst_case = 0.0

    def test_to_frame(self, annuity_input):
        df = project(annuity_input).to_frame()
        assert isinstance(df, pd.DataFrame)
        assert df.index.name == "year"
        assert list(df.index) == list(range(1, 26))
        assert set(YearRecord.__dataclass_fields__) - {"year"} == set(df.columns)

    def test_to_frame_empty(self):
        df = project(ProjectionInput(annual_investment=1, horizon_years=0)).to_frame()
        assert df.empty

    def test_to_dict(self, annuity_input):
        data = project(annuity_input).to_dict()
        assert len(data["yearly_data"]) == 25
        assert data["yearly_data"][0]["year"] == 1
        assert data["summary"]["base_cagr"] == 0.06

    def test_result_type(self, annuity_input):
        assert isinstance(project(annuity_input), ProjectionResult)


class TestProjectPortfolio:
    """Tests for project_portfolio()."""

    def test_uses_aggregated_metrics(self, two_fund_positions):
        result = project_portfolio(
            two_fund_positions, horizon_years=10, lump_sum_investment=0,
        )
        s = result.summary
        assert s.committed_annual_investment == 200_000
        assert s.base_cagr == pytest.approx(0.06)
        assert s.volatility == 0.15
        assert result.final.median_projection == pytest.approx(
            200_000 * (1.06 ** 10 - 1) / 0.06
        )

    def test_default_lump_sum(self, default_portfolio):
        result = project_portfolio(default_portfolio, horizon_years=3)
        assert result.yearly_data[0].lump_sum == 1_000_000
        assert result.yearly_data[0].median_projection == 1_200_000
