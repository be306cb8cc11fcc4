"""
GrowthCast: Analytic Investment Projection

Projects the future value of a portfolio fed by a recurring annual
contribution and a one-time lump sum, with best/worst-case bands derived in
closed form (moment-matched lognormals), without Monte Carlo simulation.

Modules
-------
- moments       : Closed-form mean/variance of compounded contributions
- lognormal     : Moment matching and lognormal quantiles
- combiner      : Shared-shock (comonotonic) combination of quantile curves
- projection    : Year-wise projection builder (`project`)
- portfolio     : Positions, aggregation, immutable Portfolio
- scenario      : Scenario configs → projections
- config        : Pydantic configuration models and settings
- serialization : Scenario files and projection exports
- plotting      : Fan chart
- utils         : Validation and formatting helpers
"""

from .portfolio import Position, Portfolio, PortfolioMetrics, aggregate_positions
from .projection import (
    ProjectionInput,
    ProjectionResult,
    ProjectionSummary,
    YearRecord,
    project,
    project_portfolio,
)
from . import utils

__version__ = "0.1.0"
