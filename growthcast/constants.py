"""
Global constants for GrowthCast.

Purpose
-------
Centralizes default values and magic numbers used throughout the GrowthCast
codebase. Using constants instead of hardcoded values keeps the engine, the
configuration layer and the CLI in agreement about defaults.

Usage
-----
>>> from growthcast.constants import DEFAULT_TAIL_PERCENTILE, DEFAULT_FIGSIZE
>>>
>>> params = ProjectionInput(..., tail_percentile=DEFAULT_TAIL_PERCENTILE)
>>> fig, ax = plt.subplots(figsize=DEFAULT_FIGSIZE)

Categories
----------
- Portfolio: fixed volatility assumption, asset classes, starter positions
- Projection: horizon, age and tail-percentile defaults
- Quantiles: probability clamps and inner band levels
- Plotting: figure sizes, colors, transparency values
- Formatting: currency defaults
"""

from typing import Tuple

__all__ = [
    # Portfolio
    "DEFAULT_PORTFOLIO_VOLATILITY",
    "ASSET_CLASSES",
    "DEFAULT_POSITIONS",
    # Projection
    "DEFAULT_AGE",
    "DEFAULT_HORIZON_YEARS",
    "DEFAULT_TAIL_PERCENTILE",
    "DEFAULT_LUMP_SUM",
    "MAX_HORIZON_YEARS",
    # Quantiles
    "MIN_TAIL_PROBABILITY",
    "MAX_TAIL_PROBABILITY",
    "QUARTILE_LEVELS",
    # Plotting
    "DEFAULT_FIGSIZE",
    "DEFAULT_ALPHA_AREAS",
    "DEFAULT_LINEWIDTH",
    "PLOT_COLORS",
    # Formatting
    "DEFAULT_CURRENCY",
]


# =============================================================================
# Portfolio Defaults
# =============================================================================

DEFAULT_PORTFOLIO_VOLATILITY: float = 0.15
"""Annual volatility assumed for every portfolio (15%).

Not derived from position covariances; a known simplification.
"""

ASSET_CLASSES: Tuple[str, ...] = (
    "Cash",
    "Fixed Income",
    "Local Equity",
    "Global Equity",
    "Alternative",
)
"""Asset classes accepted for a position."""

DEFAULT_POSITIONS: Tuple[dict, ...] = (
    {
        "symbol": "KKP GB",
        "asset_class": "Fixed Income",
        "expected_return": 4.0,
        "investment_amount": 100_000.0,
    },
    {
        "symbol": "KKP GNP-H-SSF",
        "asset_class": "Global Equity",
        "expected_return": 8.0,
        "investment_amount": 100_000.0,
    },
)
"""Starter portfolio used by templates and `Portfolio.default()`."""


# =============================================================================
# Projection Defaults
# =============================================================================

DEFAULT_AGE: int = 35
"""Default current age of the investor."""

DEFAULT_HORIZON_YEARS: int = 25
"""Default projection horizon in years."""

DEFAULT_TAIL_PERCENTILE: int = 10
"""Default tail percentile: 10 means 10th/90th best/worst bands."""

DEFAULT_LUMP_SUM: float = 1_000_000.0
"""Default one-time lump sum invested at the start of year 1."""

MAX_HORIZON_YEARS: int = 100
"""Largest horizon accepted by the configuration layer."""


# =============================================================================
# Quantile Levels
# =============================================================================

MIN_TAIL_PROBABILITY: float = 0.0001
"""Lower clamp for the low tail probability (keeps z(p) finite)."""

MAX_TAIL_PROBABILITY: float = 0.9999
"""Upper clamp for the high tail probability (keeps z(p) finite)."""

QUARTILE_LEVELS: Tuple[float, float, float] = (0.25, 0.50, 0.75)
"""Inner probabilities evaluated every year alongside the tails."""


# =============================================================================
# Plotting Defaults
# =============================================================================

DEFAULT_FIGSIZE: Tuple[int, int] = (12, 7)
"""Default figure size (width, height) in inches for the fan chart."""

DEFAULT_ALPHA_AREAS: float = 0.8
"""Default alpha for the projection and contribution areas."""

DEFAULT_LINEWIDTH: float = 2.0
"""Line width for best/worst case lines."""

PLOT_COLORS: dict = {
    "projection": "#db2777",
    "contributions": "#6366f1",
    "best": "#34d399",
    "worst": "#f87171",
    "bars": "#34d399",
    "quartiles": "#f9a8d4",
}
"""Series colors of the fan chart."""


# =============================================================================
# Formatting
# =============================================================================

DEFAULT_CURRENCY: str = "THB"
"""Currency code used for display formatting."""
