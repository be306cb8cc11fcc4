"""
Type definitions for GrowthCast.

Purpose
-------
Provides TypedDict definitions for the dictionary shapes written to and read
from JSON files. Using TypedDicts documents the on-disk structure and gives
IDE autocompletion for code that handles loaded data.

Type Definitions
----------------
PositionDict
    One portfolio position: {"symbol", "asset_class", "expected_return",
    "investment_amount"}

YearRecordDict
    One projected year as exported by ProjectionResult.to_dict()

ProjectionSummaryDict
    Headline figures of a projection

ProjectionResultDict
    Exported projection file: {"schema_version", "inputs", "yearly_data",
    "summary"}
"""

from typing import List

from typing_extensions import NotRequired, TypedDict

__all__ = [
    "PositionDict",
    "YearRecordDict",
    "ProjectionSummaryDict",
    "ProjectionInputDict",
    "ProjectionResultDict",
]


class PositionDict(TypedDict):
    """
    Serialized portfolio position.

    Examples
    --------
    >>> pos: PositionDict = {
    ...     "symbol": "KKP GB",
    ...     "asset_class": "Fixed Income",
    ...     "expected_return": 4.0,
    ...     "investment_amount": 100000.0,
    ... }
    """

    symbol: str
    asset_class: str
    expected_return: float
    investment_amount: float


class YearRecordDict(TypedDict):
    """Serialized YearRecord (field names match the dataclass)."""

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


class ProjectionSummaryDict(TypedDict):
    """Serialized ProjectionSummary."""

    committed_annual_investment: float
    lump_sum_investment: float
    base_cagr: float
    volatility: float
    last_year_investment_value: float
    last_year_worst_case: float
    last_year_best_case: float
    total_contributions: float


class ProjectionInputDict(TypedDict):
    """Serialized ProjectionInput."""

    annual_investment: float
    lump_sum_investment: float
    age: int
    horizon_years: int
    expected_return: float
    volatility: float
    tail_percentile: float


class ProjectionResultDict(TypedDict):
    """
    Exported projection file.

    `inputs` is present when the result was saved together with the
    parameters that produced it.
    """

    schema_version: str
    inputs: NotRequired[ProjectionInputDict]
    yearly_data: List[YearRecordDict]
    summary: ProjectionSummaryDict
