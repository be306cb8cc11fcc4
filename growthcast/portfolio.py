"""
Portfolio positions and aggregation for GrowthCast.

Purpose
-------
Reduces a set of heterogeneous positions into the scalar inputs consumed
by the projection engine: a blended investment amount, an amount-weighted
expected return and a volatility.

Key Mathematical Framework
--------------------------
- Investment:       I = Σ_i a_i
- Expected return:  μ = Σ_i a_i * (r_i / 100) / I     (0 when I == 0)
- Volatility:       σ = 0.15                          (fixed assumption)

Volatility is NOT derived from position covariances; every portfolio is
assigned the same 15% annual figure regardless of composition.

Key components
--------------
- Position:
    Frozen record for one holding (symbol, asset class, expected return in
    percent, invested amount).

- PortfolioMetrics:
    Frozen triple (investment, expected_return, volatility).

- aggregate_positions():
    Pure reduction from positions to PortfolioMetrics.

- Portfolio:
    Immutable ordered collection of positions with add/remove helpers that
    return new instances, plus tabular views.

Example
-------
>>> from growthcast.portfolio import Position, Portfolio
>>> portfolio = Portfolio([
...     Position("KKP GB", "Fixed Income", expected_return=4, investment_amount=100_000),
...     Position("KKP GNP-H-SSF", "Global Equity", expected_return=8, investment_amount=100_000),
... ])
>>> metrics = portfolio.metrics()
>>> metrics.investment, round(metrics.expected_return, 4), metrics.volatility
(200000.0, 0.06, 0.15)
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

import pandas as pd

from .constants import DEFAULT_PORTFOLIO_VOLATILITY, DEFAULT_POSITIONS
from .exceptions import ValidationError
from .utils import check_non_negative

__all__ = [
    "Position",
    "PortfolioMetrics",
    "aggregate_positions",
    "Portfolio",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Position:
    """
    A single portfolio holding.

    Parameters
    ----------
    symbol : str
        Fund or security identifier (e.g. "VOO").
    asset_class : str
        Asset class label (e.g. "Global Equity"). See constants.ASSET_CLASSES.
    expected_return : float
        Expected annual return in percent (8 means 8%/year).
    investment_amount : float
        Amount invested in this position (non-negative).

    Examples
    --------
    >>> pos = Position("VOO", "Global Equity", expected_return=8, investment_amount=50_000)
    >>> pos.return_fraction
    0.08
    """
    symbol: str
    asset_class: str
    expected_return: float
    investment_amount: float

    def __post_init__(self):
        check_non_negative("investment_amount", self.investment_amount)

    @property
    def return_fraction(self) -> float:
        """Expected return as a fraction (percent / 100)."""
        return self.expected_return / 100.0

    @classmethod
    def from_dict(cls, data: dict) -> "Position":
        return cls(
            symbol=data["symbol"],
            asset_class=data["asset_class"],
            expected_return=float(data["expected_return"]),
            investment_amount=float(data["investment_amount"]),
        )


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PortfolioMetrics:
    """Scalar portfolio inputs for the projection engine."""
    investment: float
    expected_return: float
    volatility: float


def aggregate_positions(positions: Iterable[Position]) -> PortfolioMetrics:
    """
    Blend positions into (investment, expected_return, volatility).

    Parameters
    ----------
    positions : Iterable[Position]
        Holdings to aggregate; may be empty. Only read, never mutated.

    Returns
    -------
    PortfolioMetrics
        - investment: sum of invested amounts
        - expected_return: amount-weighted return as a fraction, 0.0 when
          nothing is invested
        - volatility: DEFAULT_PORTFOLIO_VOLATILITY (fixed)

    Examples
    --------
    >>> aggregate_positions([])
    PortfolioMetrics(investment=0.0, expected_return=0.0, volatility=0.15)
    """
    investment = 0.0
    weighted_return = 0.0
    for pos in positions:
        investment += pos.investment_amount
        weighted_return += pos.investment_amount * pos.return_fraction

    expected_return = 0.0 if investment == 0 else weighted_return / investment

    logger.debug(
        "Aggregated portfolio: investment=%.2f expected_return=%.6f",
        investment, expected_return,
    )
    return PortfolioMetrics(
        investment=investment,
        expected_return=expected_return,
        volatility=DEFAULT_PORTFOLIO_VOLATILITY,
    )


# ---------------------------------------------------------------------------
# Portfolio (immutable collection)
# ---------------------------------------------------------------------------

class Portfolio:
    """
    Immutable, ordered collection of positions.

    `add()` and `remove()` return new Portfolio instances; the original is
    left untouched, so a Portfolio can be shared freely between callers.

    Parameters
    ----------
    positions : Iterable[Position], optional
        Initial holdings (default: empty).

    Examples
    --------
    >>> p = Portfolio.default()
    >>> len(p)
    2
    >>> p2 = p.add(Position("SET50", "Local Equity", 7, 50_000))
    >>> len(p), len(p2)
    (2, 3)
    >>> p2.remove(0).symbols
    ['KKP GNP-H-SSF', 'SET50']
    """

    def __init__(self, positions: Iterable[Position] = ()):
        self._positions: Tuple[Position, ...] = tuple(positions)

    @classmethod
    def default(cls) -> "Portfolio":
        """Starter portfolio: one fixed income and one global equity fund."""
        return cls(Position.from_dict(d) for d in DEFAULT_POSITIONS)

    # -------------------- Collection protocol --------------------
    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __getitem__(self, index: int) -> Position:
        return self._positions[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Portfolio):
            return NotImplemented
        return self._positions == other._positions

    def __repr__(self) -> str:
        return f"Portfolio({list(self._positions)!r})"

    @property
    def positions(self) -> Tuple[Position, ...]:
        return self._positions

    @property
    def symbols(self) -> List[str]:
        return [p.symbol for p in self._positions]

    # -------------------- Editing --------------------
    def add(self, position: Position) -> "Portfolio":
        """
        Return a new portfolio with `position` appended.

        Raises
        ------
        ValidationError
            If the symbol is blank or the amount is not strictly positive.
        """
        if not position.symbol.strip():
            raise ValidationError("Position symbol must not be empty.")
        if position.investment_amount <= 0:
            raise ValidationError(
                f"Position investment_amount must be positive, got {position.investment_amount}."
            )
        return Portfolio(self._positions + (position,))

    def remove(self, index: int) -> "Portfolio":
        """Return a new portfolio without the position at `index`."""
        if not -len(self) <= index < len(self):
            raise IndexError(f"position index {index} out of range for {len(self)} positions")
        index %= len(self)
        return Portfolio(self._positions[:index] + self._positions[index + 1:])

    # -------------------- Views --------------------
    def metrics(self) -> PortfolioMetrics:
        """Aggregated (investment, expected_return, volatility)."""
        return aggregate_positions(self._positions)

    def to_frame(self) -> pd.DataFrame:
        """
        Positions as a DataFrame with a `weight` column (share of investment).
        """
        from .serialization import position_to_dict

        columns = ["symbol", "asset_class", "investment_amount", "expected_return"]
        df = pd.DataFrame([position_to_dict(p) for p in self._positions], columns=columns)
        total = df["investment_amount"].sum()
        df["weight"] = df["investment_amount"] / total if total > 0 else 0.0
        return df
