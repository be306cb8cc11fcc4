"""
Plotting utilities for GrowthCast projections.

Purpose
-------
Renders a ProjectionResult as a fan chart:
- projected value (deterministic median path) as a filled area
- cumulative contributions as a filled area
- best/worst case bands as dashed lines
- optional inner quartile band (25th-75th)
- yearly contributions as bars

The x-axis shows either the projection year or the investor's age.
Plotting is presentation only; every value comes from the ProjectionResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import FuncFormatter

from .constants import (
    DEFAULT_ALPHA_AREAS,
    DEFAULT_CURRENCY,
    DEFAULT_FIGSIZE,
    DEFAULT_LINEWIDTH,
    PLOT_COLORS,
)
from .utils import compact_formatter, format_currency

if TYPE_CHECKING:
    from .projection import ProjectionResult

__all__ = ["plot_projection"]


def plot_projection(
    result: ProjectionResult,
    *,
    x_axis: Literal["year", "age"] = "year",
    show_quartiles: bool = False,
    show_contributions: bool = True,
    currency: str = DEFAULT_CURRENCY,
    figsize: Optional[tuple] = None,
    title: Optional[str] = "Portfolio Projection",
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Fan chart of a projection.

    Parameters
    ----------
    result : ProjectionResult
        Output of `project()`; must contain at least one year.
    x_axis : {"year", "age"}, default "year"
        Horizontal axis labelling.
    show_quartiles : bool, default False
        Shade the 25th-75th percentile band.
    show_contributions : bool, default True
        Draw yearly contribution bars.
    currency : str, default "THB"
        Currency code for the y-axis label and final-value annotation.
    figsize : tuple, optional
        Figure size; defaults to DEFAULT_FIGSIZE.
    title : str, optional
        Figure title (None for no title).
    save_path : str, optional
        If given, the figure is saved there (dpi=150).
    return_fig_ax : bool, default False
        Return (fig, ax) instead of None.

    Raises
    ------
    ValueError
        If `result` has no yearly data or `x_axis` is unknown.

    Examples
    --------
    >>> result = project(ProjectionInput(annual_investment=300_000,
    ...                                  horizon_years=25,
    ...                                  expected_return=0.06, volatility=0.10))
    >>> plot_projection(result, x_axis="age", save_path="projection.png")
    """
    if not result.yearly_data:
        raise ValueError("cannot plot an empty projection (horizon_years == 0)")
    if x_axis not in ("year", "age"):
        raise ValueError(f"x_axis must be 'year' or 'age', got {x_axis!r}")

    df = result.to_frame().reset_index()
    x = df[x_axis].to_numpy()

    fig, ax = plt.subplots(figsize=figsize or DEFAULT_FIGSIZE)

    ax.fill_between(
        x, df["median_projection"], color=PLOT_COLORS["projection"],
        alpha=DEFAULT_ALPHA_AREAS, label="Projected Value",
    )
    ax.fill_between(
        x, df["cumulative_total_contributions"], color=PLOT_COLORS["contributions"],
        alpha=DEFAULT_ALPHA_AREAS, label="Total Investment",
    )
    if show_quartiles:
        ax.fill_between(
            x, df["lower_quartile"], df["upper_quartile"],
            color=PLOT_COLORS["quartiles"], alpha=0.4, label="25th-75th Percentile",
        )
    ax.plot(
        x, df["best_case"], linestyle="--", linewidth=DEFAULT_LINEWIDTH,
        color=PLOT_COLORS["best"], label="Best Case",
    )
    ax.plot(
        x, df["worst_case"], linestyle="--", linewidth=DEFAULT_LINEWIDTH,
        color=PLOT_COLORS["worst"], label="Worst Case",
    )
    if show_contributions:
        contributions = df["annual_contribution"] + df["lump_sum"]
        ax.bar(x, contributions, width=0.6, color=PLOT_COLORS["bars"], label="Investment")

    final_value = float(df["median_projection"].iloc[-1])
    ax.annotate(
        format_currency(final_value, currency),
        xy=(x[-1], final_value), xytext=(-10, 10), textcoords="offset points",
        ha="right", fontsize=9,
        bbox=dict(boxstyle="round", facecolor="white", alpha=0.8),
    )

    ax.set_xlabel("Age" if x_axis == "age" else "Year", fontsize=12)
    ax.set_ylabel(currency, fontsize=12)
    ax.yaxis.set_major_formatter(FuncFormatter(compact_formatter))
    ax.set_xlim(float(np.min(x)) - 0.5, float(np.max(x)) + 0.5)
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3, linestyle="--")
    ax.legend(loc="upper left", fontsize=10)

    if title:
        ax.set_title(title, fontsize=14, fontweight="bold")

    s = result.summary
    param_text = (
        f"μ={s.base_cagr * 100:.1f}% | σ={s.volatility * 100:.1f}% | "
        f"annual={format_currency(s.committed_annual_investment, currency)}"
    )
    fig.text(0.99, 0.01, param_text, ha="right", va="bottom", fontsize=8, alpha=0.7)
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, bbox_inches="tight", dpi=150)

    return (fig, ax) if return_fig_ax else None
