"""
Lognormal approximation by moment matching.

Given the mean E and variance V of a positive quantity W, choose the
lognormal W ~ LogNormal(log_mu, log_sigma^2) with the same two moments:

    sigma_w^2 = log(1 + V / E^2)
    log_sigma = sqrt(sigma_w^2)
    log_mu    = log(E) - sigma_w^2 / 2

Quantiles then follow from the standard normal inverse CDF:

    Q(p) = exp(log_mu + z(p) * log_sigma),   z = Phi^{-1}

This module is the only place the inverse normal CDF is evaluated.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from scipy import stats

from .moments import Moments

__all__ = ["LognormalParams", "standard_normal_quantile"]


def standard_normal_quantile(p: Union[float, Sequence[float], np.ndarray]) -> np.ndarray:
    """Inverse standard normal CDF z(p), vectorized over `p`."""
    return stats.norm.ppf(np.asarray(p, dtype=float))


@dataclass(frozen=True)
class LognormalParams:
    """
    Parameters (log_mu, log_sigma) of a lognormal distribution.

    Examples
    --------
    >>> params = LognormalParams.from_moments(mean=100.0, variance=0.0)
    >>> round(float(params.quantile(0.9)), 6)
    100.0
    """
    log_mu: float
    log_sigma: float

    @classmethod
    def from_moments(cls, mean: float, variance: float) -> "LognormalParams":
        """
        Moment-matched parameters for a given mean and variance.

        Raises
        ------
        ValueError
            If `mean` is not strictly positive (log-space mapping undefined).
        """
        if mean <= 0:
            raise ValueError(
                f"mean must be positive for lognormal moment matching, got {mean}. "
                f"Zero contributions must be handled before mapping."
            )
        sigma_w2 = float(np.log(1.0 + variance / mean ** 2))
        return cls(
            log_mu=float(np.log(mean)) - 0.5 * sigma_w2,
            log_sigma=float(np.sqrt(sigma_w2)),
        )

    @classmethod
    def from_pair(cls, moments: Moments) -> "LognormalParams":
        """Moment-matched parameters for a `Moments` pair."""
        return cls.from_moments(moments.mean, moments.variance)

    def quantile_at(self, z: Union[float, np.ndarray]) -> np.ndarray:
        """Quantile for a given standard normal draw (or array of draws)."""
        return np.exp(self.log_mu + np.asarray(z, dtype=float) * self.log_sigma)

    def quantile(self, p: Union[float, Sequence[float], np.ndarray]) -> np.ndarray:
        """Quantile Q(p) for a cumulative probability `p` in (0, 1)."""
        return self.quantile_at(standard_normal_quantile(p))

    @property
    def median(self) -> float:
        return float(np.exp(self.log_mu))

    @property
    def mean(self) -> float:
        return float(np.exp(self.log_mu + 0.5 * self.log_sigma ** 2))
