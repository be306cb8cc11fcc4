"""
Year-wise investment projection for GrowthCast.

Purpose
-------
Builds the year-by-year projection of a portfolio fed by a fixed annual
contribution plus a one-time lump sum, producing a deterministic median
path and analytic best/worst-case bands without simulation.

Key Mathematical Framework
--------------------------
Deterministic path (expected-value compounding):
    P_1 = L + C
    P_k = P_{k-1} * (1 + μ) + C                  k > 1

Bands for year k (see moments.py, lognormal.py, combiner.py):
    annuity  ~ LogNormal matched to moments of k contributions of C
    lump sum ~ LogNormal matched to moments of L held k - 1 years
    Q_k(p)   = Q_annuity(p) + Q_lump(p)          shared z(p)

The deterministic path and the lognormal median Q_k(0.5) generally differ;
both are reported (`median_projection` and `median_case`).

Contract
--------
Inputs are validated when ProjectionInput is constructed:
horizon_years >= 0, annual_investment >= 0, lump_sum_investment >= 0,
expected_return > -1, volatility >= 0 and 0 <= tail_percentile < 50.
A zero horizon yields no records and a summary with
last_year_investment_value == 0.

Example
-------
>>> from growthcast.projection import ProjectionInput, project
>>> params = ProjectionInput(
...     annual_investment=300_000, lump_sum_investment=0, age=35,
...     horizon_years=25, expected_return=0.06, volatility=0.10,
...     tail_percentile=10,
... )
>>> result = project(params)
>>> len(result.yearly_data)
25
>>> result.yearly_data[0].median_projection
300000.0
"""

from __future__ import annotations
import logging
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from .combiner import fan_bands
from .constants import (
    DEFAULT_AGE,
    DEFAULT_HORIZON_YEARS,
    DEFAULT_LUMP_SUM,
    DEFAULT_TAIL_PERCENTILE,
)
from .exceptions import ValidationError
from .lognormal import LognormalParams
from .moments import annuity_moments, lump_sum_moments
from .portfolio import Position, aggregate_positions
from .utils import check_non_negative

__all__ = [
    "ProjectionInput",
    "YearRecord",
    "ProjectionSummary",
    "ProjectionResult",
    "project",
    "project_portfolio",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Inputs and outputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectionInput:
    """
    Parameters of a projection.

    Parameters
    ----------
    annual_investment : float
        Contribution made every year, starting in year 1.
    lump_sum_investment : float
        One-time amount invested at the start of year 1.
    age : int
        Investor age in year 1.
    horizon_years : int
        Number of projected years (0 yields an empty projection).
    expected_return : float
        Mean yearly return as a fraction (0.06 for 6%).
    volatility : float
        Standard deviation of the yearly return as a fraction.
    tail_percentile : float
        Symmetric tail used for worst/best bands (10 -> 10th/90th).

    Raises
    ------
    ValidationError
        If any value is outside the contract listed in the module docstring.
    """
    annual_investment: float
    lump_sum_investment: float = 0.0
    age: int = DEFAULT_AGE
    horizon_years: int = DEFAULT_HORIZON_YEARS
    expected_return: float = 0.0
    volatility: float = 0.0
    tail_percentile: float = DEFAULT_TAIL_PERCENTILE

    def __post_init__(self):
        check_non_negative("annual_investment", self.annual_investment)
        check_non_negative("lump_sum_investment", self.lump_sum_investment)
        check_non_negative("horizon_years", self.horizon_years)
        check_non_negative("volatility", self.volatility)
        if self.expected_return <= -1:
            raise ValidationError(
                f"expected_return must be greater than -1 (got {self.expected_return}). "
                f"A return of -100% or worse wipes out every contribution."
            )
        if not 0 <= self.tail_percentile < 50:
            raise ValidationError(
                f"tail_percentile must be in [0, 50), got {self.tail_percentile}. "
                f"Use e.g. 10 for 10th/90th percentile bands."
            )


@dataclass(frozen=True)
class YearRecord:
    """
    One projected year.

    `median_projection` is the deterministic compounding path; `median_case`
    is the lognormal median of the combined bands. `lower_quartile` and
    `upper_quartile` are the 25th/75th combined quantiles.
    """
    year: int
    age: int
    annual_contribution: float
    lump_sum: float
    cumulative_annual_contributions: float
    cumulative_lump_sum: float
    cumulative_total_contributions: float
    median_projection: float
    worst_case: float
    lower_quartile: float
    median_case: float
    upper_quartile: float
    best_case: float
    total_return: float


@dataclass(frozen=True)
class ProjectionSummary:
    """Headline figures: nominal inputs plus the final projected year."""
    committed_annual_investment: float
    lump_sum_investment: float
    base_cagr: float
    volatility: float
    last_year_investment_value: float
    last_year_worst_case: float
    last_year_best_case: float
    total_contributions: float


@dataclass(frozen=True)
class ProjectionResult:
    """Ordered yearly records (year ascending) and their summary."""
    yearly_data: Tuple[YearRecord, ...]
    summary: ProjectionSummary

    def __len__(self) -> int:
        return len(self.yearly_data)

    @property
    def final(self) -> Optional[YearRecord]:
        return self.yearly_data[-1] if self.yearly_data else None

    def to_frame(self) -> pd.DataFrame:
        """Yearly records as a DataFrame indexed by year."""
        columns = [f for f in YearRecord.__dataclass_fields__]
        df = pd.DataFrame([asdict(r) for r in self.yearly_data], columns=columns)
        return df.set_index("year")

    def to_dict(self) -> dict:
        return {
            "yearly_data": [asdict(r) for r in self.yearly_data],
            "summary": asdict(self.summary),
        }


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def _band_components(params: ProjectionInput, year: int) -> List[LognormalParams]:
    """
    Lognormal curves contributing to year `year`.

    A component whose amount is zero is left out entirely, so a portfolio
    without a lump sum (or without annual contributions) gets no phantom
    value from the moment engine's placeholder mean. Summing that
    placeholder would add exp(log 1) = 1 to every band: for 300,000 a year
    with no lump sum, every band of every year would read exactly 1.0
    higher than reported here, and a projection with no contributions
    would never be all zeros.

    A mean too small to square (returns close to -100%) adds nothing.
    """
    moments = []
    if params.annual_investment > 0:
        moments.append(annuity_moments(
            params.annual_investment, year, params.expected_return, params.volatility
        ))
    if params.lump_sum_investment > 0:
        moments.append(lump_sum_moments(
            params.lump_sum_investment, max(0, year - 1),
            params.expected_return, params.volatility,
        ))
    return [LognormalParams.from_pair(m) for m in moments if m.mean ** 2 > 0]


def _build(params: ProjectionInput) -> ProjectionResult:
    annual = float(params.annual_investment)
    lump_sum = float(params.lump_sum_investment)
    growth = 1.0 + params.expected_return

    records: List[YearRecord] = []
    cumulative_annual = 0.0
    cumulative_lump = 0.0
    projection = 0.0

    for year in range(1, params.horizon_years + 1):
        lump_this_year = lump_sum if year == 1 else 0.0

        if year == 1:
            projection = lump_this_year + annual
        else:
            projection = projection * growth + annual

        cumulative_annual += annual
        cumulative_lump += lump_this_year
        total_contributed = cumulative_annual + cumulative_lump

        if year == 1:
            worst = lower = median = upper = best = projection
        else:
            bands = fan_bands(_band_components(params, year), params.tail_percentile)
            worst, lower, median = bands.worst, bands.lower_quartile, bands.median
            upper, best = bands.upper_quartile, bands.best

        records.append(YearRecord(
            year=year,
            age=params.age + year - 1,
            annual_contribution=annual,
            lump_sum=lump_this_year,
            cumulative_annual_contributions=cumulative_annual,
            cumulative_lump_sum=cumulative_lump,
            cumulative_total_contributions=total_contributed,
            median_projection=projection,
            worst_case=max(worst, 0.0),
            lower_quartile=lower,
            median_case=median,
            upper_quartile=upper,
            best_case=best,
            total_return=projection - total_contributed,
        ))

    last = records[-1] if records else None
    summary = ProjectionSummary(
        committed_annual_investment=annual,
        lump_sum_investment=lump_sum,
        base_cagr=params.expected_return if last else 0.0,
        volatility=params.volatility,
        last_year_investment_value=last.median_projection if last else 0.0,
        last_year_worst_case=last.worst_case if last else 0.0,
        last_year_best_case=last.best_case if last else 0.0,
        total_contributions=last.cumulative_total_contributions if last else 0.0,
    )

    logger.debug(
        "Projected %d years: final median=%.2f worst=%.2f best=%.2f",
        params.horizon_years,
        summary.last_year_investment_value,
        summary.last_year_worst_case,
        summary.last_year_best_case,
    )
    return ProjectionResult(yearly_data=tuple(records), summary=summary)


@lru_cache(maxsize=256)
def project(params: ProjectionInput) -> ProjectionResult:
    """
    Project a portfolio year by year.

    Pure function of `params`; results are immutable and memoized on the
    input, so repeated calls with equal inputs return equal results.

    Parameters
    ----------
    params : ProjectionInput

    Returns
    -------
    ProjectionResult
        `yearly_data` has exactly `params.horizon_years` records with
        `yearly_data[i].year == i + 1`.
    """
    return _build(params)


def project_portfolio(
    positions: Iterable[Position],
    *,
    age: int = DEFAULT_AGE,
    horizon_years: int = DEFAULT_HORIZON_YEARS,
    tail_percentile: float = DEFAULT_TAIL_PERCENTILE,
    lump_sum_investment: float = DEFAULT_LUMP_SUM,
) -> ProjectionResult:
    """
    Aggregate positions and project the resulting portfolio.

    The blended investment amount becomes the annual contribution, and the
    weighted return and fixed volatility drive the bands.

    Examples
    --------
    >>> from growthcast.portfolio import Portfolio
    >>> result = project_portfolio(Portfolio.default(), horizon_years=10)
    >>> result.summary.committed_annual_investment
    200000.0
    """
    metrics = aggregate_positions(positions)
    params = ProjectionInput(
        annual_investment=metrics.investment,
        lump_sum_investment=lump_sum_investment,
        age=age,
        horizon_years=horizon_years,
        expected_return=metrics.expected_return,
        volatility=metrics.volatility,
        tail_percentile=tail_percentile,
    )
    return project(params)
