"""
Pytest configuration and fixtures for GrowthCast test suite.

This module provides reusable fixtures for testing all GrowthCast components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.
"""

import json
from pathlib import Path

import pytest

from growthcast.config import PositionConfig, ProjectionConfig, ScenarioConfig
from growthcast.portfolio import Portfolio, Position
from growthcast.projection import ProjectionInput, project


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clear_projection_cache():
    """Start every test with an empty projection cache."""
    project.cache_clear()
    yield
    project.cache_clear()


# ---------------------------------------------------------------------------
# Projection Inputs
# ---------------------------------------------------------------------------

@pytest.fixture
def annuity_input() -> ProjectionInput:
    """
    Reference annuity-only projection.

    Annual: 300,000
    Lump sum: none
    Horizon: 25 years from age 35
    Return: 6%, volatility 10%, 10th/90th bands
    """
    return ProjectionInput(
        annual_investment=300_000,
        lump_sum_investment=0,
        age=35,
        horizon_years=25,
        expected_return=0.06,
        volatility=0.10,
        tail_percentile=10,
    )


@pytest.fixture
def mixed_input() -> ProjectionInput:
    """Annual contributions plus a lump sum."""
    return ProjectionInput(
        annual_investment=200_000,
        lump_sum_investment=1_000_000,
        age=30,
        horizon_years=20,
        expected_return=0.06,
        volatility=0.15,
        tail_percentile=10,
    )


@pytest.fixture
def lump_only_input() -> ProjectionInput:
    """Lump sum without annual contributions."""
    return ProjectionInput(
        annual_investment=0,
        lump_sum_investment=500_000,
        age=40,
        horizon_years=15,
        expected_return=0.05,
        volatility=0.12,
        tail_percentile=5,
    )


# ---------------------------------------------------------------------------
# Portfolio Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def two_fund_positions():
    """100,000 at 4% and 100,000 at 8%."""
    return [
        Position("KKP GB", "Fixed Income", expected_return=4, investment_amount=100_000),
        Position("KKP GNP-H-SSF", "Global Equity", expected_return=8, investment_amount=100_000),
    ]


@pytest.fixture
def default_portfolio() -> Portfolio:
    """Starter portfolio (same two funds as two_fund_positions)."""
    return Portfolio.default()


# ---------------------------------------------------------------------------
# Scenario Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def scenario_config() -> ScenarioConfig:
    """Small scenario with two positions and a 10-year horizon."""
    return ScenarioConfig(
        name="Test scenario",
        description="Two funds, ten years",
        positions=[
            PositionConfig(symbol="KKP GB", asset_class="Fixed Income",
                           expected_return=4, investment_amount=100_000),
            PositionConfig(symbol="KKP GNP-H-SSF", asset_class="Global Equity",
                           expected_return=8, investment_amount=100_000),
        ],
        projection=ProjectionConfig(
            age=35,
            horizon_years=10,
            tail_percentile=10,
            lump_sum_investment=0,
        ),
    )


@pytest.fixture
def scenario_file(tmp_path, scenario_config) -> Path:
    """scenario_config written to a JSON file."""
    path = tmp_path / "scenario.json"
    data = {"schema_version": "0.1.0", **scenario_config.model_dump(mode="json")}
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    return path
