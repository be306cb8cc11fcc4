"""
Custom exceptions for GrowthCast.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across GrowthCast modules. All exceptions inherit from GrowthCastError,
enabling catch-all handling when needed.

Exception Hierarchy
-------------------
GrowthCastError (base)
├── ConfigurationError - Invalid or unreadable scenario/configuration files
└── ValidationError - Input values outside the engine's contract

The projection engine itself never raises for degenerate inputs (zero
contributions, zero horizon); those take explicit branches. Exceptions are
raised only at the boundary where inputs are constructed or loaded.

Usage
-----
>>> from growthcast.exceptions import ValidationError
>>>
>>> raise ValidationError("horizon_years must be non-negative, got -1")
>>>
>>> try:
...     scenario = load_scenario(path)
... except GrowthCastError as e:
...     print(f"GrowthCast error: {e}")
"""


class GrowthCastError(Exception):
    """
    Base exception for all GrowthCast errors.

    Examples
    --------
    >>> try:
    ...     result = run_scenario(load_scenario(path))
    ... except GrowthCastError as e:
    ...     logger.error("Projection failed: %s", e)
    """
    pass


class ConfigurationError(GrowthCastError):
    """
    Invalid configuration or scenario file.

    Raised when a scenario file cannot be read or decoded, such as:
    - Malformed JSON
    - Missing required sections
    - Unsupported output formats

    Examples
    --------
    >>> raise ConfigurationError(
    ...     f"Scenario file {path} is not valid JSON: {exc}"
    ... )
    """
    pass


class ValidationError(GrowthCastError):
    """
    Input values outside the engine's contract.

    Raised when constructing projection inputs or portfolio positions:
    - Negative contribution amounts or volatility
    - Negative horizon
    - Tail percentile outside [0, 50)
    - Empty symbol or non-positive amount when adding a position

    Examples
    --------
    >>> raise ValidationError(
    ...     f"tail_percentile must be in [0, 50), got {tail}. "
    ...     f"Use e.g. 10 for 10th/90th percentile bands."
    ... )
    """
    pass
