"""
Integration test for full GrowthCast workflow.

Tests the complete pipeline from scenario files through portfolio
aggregation and projection to exports, to verify all components work
together correctly.
"""

import json

import pytest

from growthcast import Portfolio, Position, ProjectionInput, project, project_portfolio
from growthcast.config import PositionConfig, ProjectionConfig, ScenarioConfig
from growthcast.scenario import run_scenario
from growthcast.serialization import (
    load_projection,
    load_scenario,
    save_projection,
    save_scenario,
)


@pytest.mark.integration
class TestFullWorkflow:
    """Integration tests for complete projection workflow."""

    def test_scenario_file_to_export(self, tmp_path):
        """
        Build scenario → save → load → project → export → reload.

        This is a smoke test to ensure all components integrate properly.
        """
        # 1. Setup scenario
        scenario = ScenarioConfig(
            name="Retirement",
            positions=[
                PositionConfig(symbol="KKP GB", asset_class="Fixed Income",
                               expected_return=4, investment_amount=100_000),
                PositionConfig(symbol="KKP GNP-H-SSF", asset_class="Global Equity",
                               expected_return=8, investment_amount=100_000),
            ],
            projection=ProjectionConfig(age=35, horizon_years=25, tail_percentile=10,
                                        lump_sum_investment=1_000_000),
        )

        # 2. Round trip through a scenario file
        scenario_path = tmp_path / "retirement.json"
        save_scenario(scenario, scenario_path)
        loaded = load_scenario(scenario_path)
        assert loaded == scenario

        # 3. Project
        outcome = run_scenario(loaded)
        result = outcome.result
        assert outcome.metrics.investment == 200_000
        assert outcome.metrics.expected_return == pytest.approx(0.06)
        assert len(result.yearly_data) == 25
        assert result.final.age == 59

        # 4. Invariants across the whole horizon
        for r in result.yearly_data:
            assert 0.0 <= r.worst_case <= r.median_case <= r.best_case
        assert result.summary.total_contributions == pytest.approx(1_000_000 + 25 * 200_000)

        # 5. Export and reload
        export_path = tmp_path / "out" / "retirement_projection.json"
        save_projection(result, export_path, params=outcome.params)
        exported = load_projection(export_path)
        assert exported["inputs"]["lump_sum_investment"] == 1_000_000
        assert exported["summary"]["last_year_investment_value"] == pytest.approx(
            result.summary.last_year_investment_value
        )

    def test_portfolio_edits_change_projection(self):
        """Adding a higher-return position raises the projected value."""
        base = Portfolio.default()
        extended = base.add(Position("SET50", "Local Equity", 7, 100_000))

        before = project_portfolio(base, horizon_years=20, lump_sum_investment=0)
        after = project_portfolio(extended, horizon_years=20, lump_sum_investment=0)

        assert after.summary.committed_annual_investment == 300_000
        assert after.summary.last_year_investment_value > before.summary.last_year_investment_value
        # Removing it again restores the original projection exactly
        restored = project_portfolio(extended.remove(-1), horizon_years=20, lump_sum_investment=0)
        assert restored == before

    def test_wider_tails_bracket_narrower(self, mixed_input):
        """5th/95th bands contain 10th/90th bands, which contain the quartiles."""
        params = mixed_input.__dict__
        wide = project(ProjectionInput(**{**params, "tail_percentile": 5}))
        narrow = project(ProjectionInput(**{**params, "tail_percentile": 10}))

        for w, n in zip(wide.yearly_data[1:], narrow.yearly_data[1:]):
            assert w.worst_case < n.worst_case < n.lower_quartile
            assert n.upper_quartile < n.best_case < w.best_case
            assert w.median_case == pytest.approx(n.median_case)

    def test_volatility_widens_bands(self, annuity_input):
        params = annuity_input.__dict__
        calm = project(ProjectionInput(**{**params, "volatility": 0.05}))
        wild = project(ProjectionInput(**{**params, "volatility": 0.25}))

        assert wild.final.worst_case < calm.final.worst_case
        assert wild.final.best_case > calm.final.best_case
        # Deterministic path only depends on the expected return
        assert wild.final.median_projection == calm.final.median_projection

    def test_json_export_is_plain_json(self, tmp_path, lump_only_input):
        path = tmp_path / "lump.json"
        save_projection(project(lump_only_input), path, params=lump_only_input)
        with open(path) as f:
            data = json.load(f)
        assert set(data) == {"schema_version", "inputs", "yearly_data", "summary"}
        assert all(isinstance(v, float) for v in data["summary"].values())
