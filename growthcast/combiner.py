"""
Shared-shock combination of component quantile curves.

A portfolio holding an annuity stream and a lump sum is driven by one
realized path of yearly returns, so both components are evaluated at the
same standard normal draw z(p) and summed:

    Q_total(p) = sum_i exp(log_mu_i + z(p) * log_sigma_i)

This is a comonotonic approximation, not the quantile of a true sum of
lognormals (which has no closed form). It keeps best/worst bands of the
two contribution types moving together, so the fan chart stays coherent.

Probabilities evaluated every year are

    {p_low, 0.25, 0.5, 0.75, p_high}
    p_low  = max(0.0001, tail_percentile / 100)
    p_high = min(0.9999, 1 - p_low)

with worst = Q_total(min), best = Q_total(max), median = Q_total(0.5).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from .constants import MAX_TAIL_PROBABILITY, MIN_TAIL_PROBABILITY, QUARTILE_LEVELS
from .lognormal import LognormalParams, standard_normal_quantile

__all__ = [
    "FanBands",
    "band_probabilities",
    "combined_quantiles",
    "fan_bands",
]


@dataclass(frozen=True)
class FanBands:
    """Combined portfolio quantiles for one year."""
    worst: float
    lower_quartile: float
    median: float
    upper_quartile: float
    best: float


def band_probabilities(tail_percentile: float) -> Tuple[float, ...]:
    """
    Cumulative probabilities evaluated for a given tail percentile.

    Examples
    --------
    >>> band_probabilities(10)
    (0.1, 0.25, 0.5, 0.75, 0.9)
    >>> band_probabilities(0)
    (0.0001, 0.25, 0.5, 0.75, 0.9999)
    """
    p_low = max(MIN_TAIL_PROBABILITY, tail_percentile / 100.0)
    p_high = min(MAX_TAIL_PROBABILITY, 1.0 - p_low)
    return (p_low, *QUARTILE_LEVELS, p_high)


def combined_quantiles(
    components: Sequence[LognormalParams],
    probabilities: Sequence[float],
) -> Dict[float, float]:
    """
    Sum of component quantiles under a shared standard normal draw.

    Parameters
    ----------
    components : Sequence[LognormalParams]
        Lognormal curves to combine (e.g. annuity and lump sum). An empty
        sequence yields zero at every probability.
    probabilities : Sequence[float]
        Cumulative probabilities in (0, 1).

    Returns
    -------
    Dict[float, float]
        Mapping probability -> combined quantile.
    """
    z = standard_normal_quantile(probabilities)
    total = np.zeros_like(z)
    for params in components:
        total = total + params.quantile_at(z)
    return {float(p): float(q) for p, q in zip(probabilities, total)}


def fan_bands(components: Sequence[LognormalParams], tail_percentile: float) -> FanBands:
    """
    Worst/quartile/median/best combined quantiles for one year.

    Worst and best are taken at the smallest and largest evaluated
    probabilities, so a tail percentile above 25 falls back to the
    quartiles.
    """
    probabilities = band_probabilities(tail_percentile)
    q = combined_quantiles(components, probabilities)
    return FanBands(
        worst=q[min(probabilities)],
        lower_quartile=q[0.25],
        median=q[0.5],
        upper_quartile=q[0.75],
        best=q[max(probabilities)],
    )
