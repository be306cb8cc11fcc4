"""General utilities for GrowthCast

Contents
--------
- Validation helpers
- Display formatters (currency, percent, compact axis ticks)
"""

from __future__ import annotations

from .constants import DEFAULT_CURRENCY
from .exceptions import ValidationError

__all__ = [
    # Validation
    "check_non_negative",
    # Formatting
    "format_currency",
    "format_percent",
    "compact_number",
    "compact_formatter",
]

# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def check_non_negative(name: str, value: float) -> None:
    """Raise if *value* is negative (strict)."""
    if value < 0:
        raise ValidationError(f"{name} must be non-negative (got {value}).")


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_currency(value: float, currency: str = DEFAULT_CURRENCY, decimals: int = 0) -> str:
    """
    Format a monetary amount with thousands separators and a currency code.

    Parameters
    ----------
    value : float
        Amount in currency units.
    currency : str, default "THB"
        Currency code prefix.
    decimals : int, default 0
        Number of decimal places.

    Returns
    -------
    str
        Formatted string, negative amounts keep their sign after the code.

    Examples
    --------
    >>> format_currency(1_234_567.8)
    'THB 1,234,568'
    >>> format_currency(-2500, currency="USD", decimals=2)
    'USD -2,500.00'
    """
    return f"{currency} {value:,.{decimals}f}"


def format_percent(value: float, decimals: int = 1) -> str:
    """Format a fraction as a percentage: 0.06 -> '6.0%'."""
    return f"{value * 100:.{decimals}f}%"


def compact_number(value: float) -> str:
    """
    Compact notation for large amounts.

    - values >= 1e6 -> one decimal millions ("1.2M")
    - values >= 1e3 -> whole thousands ("300K")
    - anything smaller is printed as-is

    Examples
    --------
    >>> compact_number(25_400_000)
    '25.4M'
    >>> compact_number(300_000)
    '300K'
    >>> compact_number(950)
    '950'
    """
    if value >= 1e6:
        return f"{value / 1e6:.1f}M"
    if value >= 1e3:
        return f"{value / 1e3:.0f}K"
    return f"{value:g}"


def compact_formatter(x, pos):
    """
    Axis tick formatter for matplotlib FuncFormatter.

    Examples
    --------
    >>> from matplotlib.ticker import FuncFormatter
    >>> ax.yaxis.set_major_formatter(FuncFormatter(compact_formatter))
    """
    return compact_number(x)
