"""
Closed-form moments of compounded contributions.

Mathematical Model
------------------
Yearly gross returns G_t = 1 + R_t are i.i.d. with

    E[G]   = m = 1 + mu
    E[G^2] = A = m^2 + sigma^2

Lump sum L held for N years:

    W = L * G_1 * ... * G_N
    E[W]   = L * m^N
    E[W^2] = L^2 * A^N

Ordinary annuity of N end-of-year contributions C (the contribution made in
year k compounds for N - k years):

    E[W]   = C * N                        if mu == 0
           = C * (m^N - 1) / mu           otherwise
    E[W^2] = C^2 * (S + 2T)
    S      = sum_{k=0}^{N-1} A^k          = (A^N - 1) / (A - 1)
    T      = sum_{p=1}^{N-1} m^p * (A^{N-p} - 1) / (A - 1)

In both cases Var[W] = E[W^2] - E[W]^2, clamped at zero to absorb
floating-point cancellation.

Degenerate inputs
-----------------
- Zero amount or zero horizon returns a placeholder mean (the amount, or 1
  when the amount is 0) with zero variance, keeping log(mean) finite for
  the lognormal mapper.
- A == 1 (mu == 0 and sigma == 0) uses the limit of the geometric ratio.
"""

from __future__ import annotations
from dataclasses import dataclass

__all__ = ["Moments", "annuity_moments", "lump_sum_moments"]


@dataclass(frozen=True)
class Moments:
    """First two moments of a future value: mean and variance."""
    mean: float
    variance: float


def _growth_ratio(a: float, k: int) -> float:
    """(a^k - 1) / (a - 1), with its limit k at a == 1."""
    if a == 1.0:
        return float(k)
    return (a ** k - 1.0) / (a - 1.0)


def annuity_moments(contribution: float, years: int, mu: float, sigma: float) -> Moments:
    """
    Mean and variance of the future value of an ordinary annuity.

    Parameters
    ----------
    contribution : float
        Amount contributed at the end of each year (C).
    years : int
        Number of contributions (N).
    mu : float
        Mean yearly return (e.g. 0.06).
    sigma : float
        Standard deviation of the yearly return (e.g. 0.10).

    Returns
    -------
    Moments

    Examples
    --------
    >>> annuity_moments(0.0, 10, 0.06, 0.10)
    Moments(mean=1.0, variance=0.0)
    >>> round(annuity_moments(100.0, 2, 0.06, 0.0).mean, 6)
    206.0
    """
    if years == 0 or contribution == 0:
        return Moments(mean=contribution or 1.0, variance=0.0)

    m = 1.0 + mu
    A = m ** 2 + sigma ** 2

    if mu == 0:
        E = contribution * years
    else:
        E = contribution * (m ** years - 1.0) / mu

    if sigma == 0:
        return Moments(mean=E, variance=0.0)

    S = _growth_ratio(A, years)
    T = 0.0
    for p in range(1, years):
        T += m ** p * _growth_ratio(A, years - p)
    second_moment = contribution ** 2 * (S + 2.0 * T)

    V = second_moment - E ** 2
    if V < 0:
        V = 0.0
    return Moments(mean=E, variance=V)


def lump_sum_moments(amount: float, years: int, mu: float, sigma: float) -> Moments:
    """
    Mean and variance of a single amount compounded for `years` years.

    Examples
    --------
    >>> lump_sum_moments(1000.0, 0, 0.06, 0.10)
    Moments(mean=1000.0, variance=0.0)
    >>> m = lump_sum_moments(1000.0, 1, 0.06, 0.10)
    >>> round(m.mean, 6), round(m.variance, 6)
    (1060.0, 10000.0)
    """
    if amount == 0:
        return Moments(mean=1.0, variance=0.0)
    if years <= 0:
        return Moments(mean=amount, variance=0.0)

    m = 1.0 + mu
    A = m ** 2 + sigma ** 2

    E = amount * m ** years
    if sigma == 0:
        return Moments(mean=E, variance=0.0)

    second_moment = amount ** 2 * A ** years
    V = second_moment - E ** 2
    if V < 0:
        V = 0.0
    return Moments(mean=E, variance=V)
