"""
Configuration management module for GrowthCast.

Purpose
-------
Centralized configuration using Pydantic models for type-safe parameter
management, validation, and serialization of projection scenarios.
Supports environment variables, JSON scenario files, and programmatic
defaults.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON for scenario files
- Environment-aware: Supports .env files for application settings
- Defaults: Sensible defaults for all parameters

Example
-------
>>> from growthcast.config import ProjectionConfig, ScenarioConfig, PositionConfig
>>> scenario = ScenarioConfig(
...     name="Retirement",
...     positions=[PositionConfig(symbol="VOO", asset_class="Global Equity",
...                               expected_return=8, investment_amount=120_000)],
...     projection=ProjectionConfig(horizon_years=30, lump_sum_investment=0),
... )
>>>
>>> # Serialize to dict/JSON
>>> data = scenario.model_dump()
>>> json_str = scenario.model_dump_json()
>>>
>>> # Load from dict/JSON
>>> loaded = ScenarioConfig.model_validate_json(json_str)
"""

from __future__ import annotations
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    ASSET_CLASSES,
    DEFAULT_AGE,
    DEFAULT_CURRENCY,
    DEFAULT_HORIZON_YEARS,
    DEFAULT_LUMP_SUM,
    DEFAULT_TAIL_PERCENTILE,
    MAX_HORIZON_YEARS,
)

__all__ = [
    "PositionConfig",
    "ProjectionConfig",
    "ScenarioConfig",
    "AppSettings",
]


# ---------------------------------------------------------------------------
# Position Configuration
# ---------------------------------------------------------------------------

class PositionConfig(BaseModel):
    """
    Configuration for one portfolio position.

    Attributes
    ----------
    symbol : str
        Fund or security identifier.
    asset_class : str
        One of "Cash", "Fixed Income", "Local Equity", "Global Equity",
        "Alternative".
    expected_return : float
        Expected annual return in percent (8 for 8%).
    investment_amount : float
        Amount invested (non-negative).

    Examples
    --------
    >>> position = PositionConfig(
    ...     symbol="KKP GB",
    ...     asset_class="Fixed Income",
    ...     expected_return=4,
    ...     investment_amount=100_000,
    ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    symbol: str = Field(
        min_length=1,
        max_length=50,
        description="Position symbol"
    )
    asset_class: str = Field(
        default="Global Equity",
        description="Asset class label"
    )
    expected_return: float = Field(
        gt=-100,
        le=100,
        description="Expected annual return (percent)"
    )
    investment_amount: float = Field(
        ge=0,
        description="Invested amount"
    )

    @field_validator("asset_class")
    @classmethod
    def validate_asset_class(cls, v):
        """Restrict asset classes to the supported list."""
        if v not in ASSET_CLASSES:
            raise ValueError(
                f"asset_class must be one of {list(ASSET_CLASSES)}, got {v!r}"
            )
        return v


# ---------------------------------------------------------------------------
# Projection Configuration
# ---------------------------------------------------------------------------

class ProjectionConfig(BaseModel):
    """
    Configuration for projection parameters.

    The optional `annual_investment`, `expected_return` and `volatility`
    override the values aggregated from the scenario's positions; when left
    as None the portfolio figures are used.

    Attributes
    ----------
    age : int
        Current age of the investor (0-120).
    horizon_years : int
        Number of projected years (0-100).
    tail_percentile : int
        Best/worst band percentile (0-49), e.g. 10 for 10th/90th.
    lump_sum_investment : float
        One-time amount invested at the start of year 1.
    annual_investment : float, optional
        Annual contribution override.
    expected_return : float, optional
        Yearly expected return override (fraction).
    volatility : float, optional
        Yearly volatility override (fraction).

    Examples
    --------
    >>> config = ProjectionConfig(age=40, horizon_years=20, tail_percentile=5)
    >>> config.lump_sum_investment
    1000000.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    age: int = Field(
        default=DEFAULT_AGE,
        ge=0,
        le=120,
        description="Current age"
    )
    horizon_years: int = Field(
        default=DEFAULT_HORIZON_YEARS,
        ge=0,
        le=MAX_HORIZON_YEARS,
        description="Projection horizon (years)"
    )
    tail_percentile: int = Field(
        default=DEFAULT_TAIL_PERCENTILE,
        ge=0,
        lt=50,
        description="Best/worst case percentile"
    )
    lump_sum_investment: float = Field(
        default=DEFAULT_LUMP_SUM,
        ge=0,
        description="One-time lump sum invested in year 1"
    )
    annual_investment: Optional[float] = Field(
        default=None,
        ge=0,
        description="Annual contribution override"
    )
    expected_return: Optional[float] = Field(
        default=None,
        gt=-1.0,
        le=1.0,
        description="Expected yearly return override (fraction)"
    )
    volatility: Optional[float] = Field(
        default=None,
        ge=0,
        le=2.0,
        description="Yearly volatility override (fraction)"
    )


# ---------------------------------------------------------------------------
# Scenario Configuration
# ---------------------------------------------------------------------------

class ScenarioConfig(BaseModel):
    """
    Configuration for a complete projection scenario.

    A scenario combines a portfolio (list of positions) with projection
    parameters. This enables saving and loading "what-if" scenarios for
    comparison and reproducibility.

    Attributes
    ----------
    name : str
        Human-readable scenario name.
    description : str
        Optional description of the scenario purpose.
    positions : List[PositionConfig]
        Portfolio holdings (may be empty when overrides are given).
    projection : ProjectionConfig
        Projection parameters.

    Examples
    --------
    >>> scenario = ScenarioConfig(
    ...     name="Baseline",
    ...     positions=[
    ...         PositionConfig(symbol="KKP GB", asset_class="Fixed Income",
    ...                        expected_return=4, investment_amount=100_000),
    ...     ],
    ... )
    >>> scenario.projection.horizon_years
    25
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        default="Untitled",
        min_length=1,
        max_length=100,
        description="Scenario name"
    )
    description: str = Field(
        default="",
        max_length=500,
        description="Scenario description"
    )
    positions: List[PositionConfig] = Field(
        default_factory=list,
        description="Portfolio positions"
    )
    projection: ProjectionConfig = Field(
        default_factory=ProjectionConfig,
        description="Projection parameters"
    )


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    should be prefixed with GROWTHCAST_ (e.g., GROWTHCAST_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    currency : str
        Currency code used when formatting amounts
    cache_enabled : bool
        Reuse memoized projections for identical inputs

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.currency
    'THB'

    # With .env file:
    # GROWTHCAST_CURRENCY=USD
    >>> settings = AppSettings(_env_file=".env")
    >>> settings.currency
    'USD'
    """

    model_config = SettingsConfigDict(
        env_prefix="GROWTHCAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    currency: str = Field(
        default=DEFAULT_CURRENCY,
        min_length=1,
        max_length=5,
        description="Display currency code"
    )
    cache_enabled: bool = Field(
        default=True,
        description="Reuse memoized projections"
    )
