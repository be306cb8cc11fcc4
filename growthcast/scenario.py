"""
Scenario runner for GrowthCast

Purpose
-------
Connects a validated ScenarioConfig to the projection engine:
- positions → Portfolio → aggregated (investment, expected_return, volatility)
- projection overrides (annual_investment, expected_return, volatility)
  replace the aggregated figures when given
- the resulting ProjectionInput is projected year by year

Typical usage
-------------
>>> from growthcast.config import ScenarioConfig
>>> from growthcast.scenario import run_scenario
>>> outcome = run_scenario(ScenarioConfig.model_validate(data))
>>> outcome.result.summary.last_year_investment_value
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import ScenarioConfig
from .portfolio import Portfolio, PortfolioMetrics, Position
from .projection import ProjectionInput, ProjectionResult, project

__all__ = [
    "ScenarioResult",
    "scenario_portfolio",
    "scenario_input",
    "run_scenario",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioResult:
    name: str
    portfolio: Portfolio
    metrics: PortfolioMetrics
    params: ProjectionInput
    result: ProjectionResult


def scenario_portfolio(config: ScenarioConfig) -> Portfolio:
    """Build the Portfolio described by a scenario's positions."""
    return Portfolio(
        Position(
            symbol=p.symbol,
            asset_class=p.asset_class,
            expected_return=p.expected_return,
            investment_amount=p.investment_amount,
        )
        for p in config.positions
    )


def scenario_input(config: ScenarioConfig, metrics: PortfolioMetrics) -> ProjectionInput:
    """Projection inputs: aggregated metrics, overridden where configured."""
    proj = config.projection

    def pick(override, default):
        return default if override is None else override

    return ProjectionInput(
        annual_investment=pick(proj.annual_investment, metrics.investment),
        lump_sum_investment=proj.lump_sum_investment,
        age=proj.age,
        horizon_years=proj.horizon_years,
        expected_return=pick(proj.expected_return, metrics.expected_return),
        volatility=pick(proj.volatility, metrics.volatility),
        tail_percentile=proj.tail_percentile,
    )


def run_scenario(config: ScenarioConfig, *, use_cache: bool = True) -> ScenarioResult:
    """
    Project a scenario.

    Parameters
    ----------
    config : ScenarioConfig
        Validated scenario.
    use_cache : bool, default True
        When False, bypass the memoized `project` and recompute.
    """
    portfolio = scenario_portfolio(config)
    metrics = portfolio.metrics()
    params = scenario_input(config, metrics)
    logger.info(
        "Running scenario %r: %d positions, %d years",
        config.name, len(portfolio), params.horizon_years,
    )
    result = project(params) if use_cache else project.__wrapped__(params)
    return ScenarioResult(
        name=config.name,
        portfolio=portfolio,
        metrics=metrics,
        params=params,
        result=result,
    )
