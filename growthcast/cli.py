"""
Command-Line Interface for GrowthCast.

Purpose
-------
Provides a CLI for running projections, editing scenario portfolios and
managing scenario files without writing Python code.

Commands
--------
- project: Project a scenario (or command-line parameters) year by year
- portfolio: Show, add or remove positions of a scenario file
- config: Validate, display and create scenario files
- info: Show package and dependency versions

Example Usage
-------------
    # Project the starter portfolio for 30 years
    $ growthcast project --years 30 --lump-sum 500000

    # Project a scenario file and export the yearly table
    $ growthcast project -c scenario.json -o projection.csv --plot fan.png

    # Add a position to a scenario
    $ growthcast portfolio add scenario.json --symbol VOO --amount 50000 --return 8

    # Validate a scenario file
    $ growthcast config validate scenario.json
"""

from __future__ import annotations

import json
import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import Optional

import click
import pydantic
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import AppSettings, PositionConfig, ProjectionConfig, ScenarioConfig
from .constants import ASSET_CLASSES, DEFAULT_POSITIONS
from .exceptions import GrowthCastError
from .utils import format_currency, format_percent
from . import __version__

logger = logging.getLogger(__name__)

_USER_ERRORS = (GrowthCastError, pydantic.ValidationError)


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


def _default_scenario() -> ScenarioConfig:
    """Starter scenario used when no scenario file is given."""
    return ScenarioConfig(
        name="Starter portfolio",
        positions=[PositionConfig(**d) for d in DEFAULT_POSITIONS],
    )


@click.group()
@click.version_option(version=__version__, prog_name="growthcast")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, quiet: bool, verbose: bool) -> None:
    """
    GrowthCast - Analytic investment projections.

    Projects a portfolio fed by annual contributions and a lump sum, with
    best/worst-case bands derived in closed form.

    Use 'growthcast COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Settings: %s", settings.model_dump())

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()
    ctx.obj["settings"] = settings


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------

@main.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Scenario file (JSON). Defaults to the starter portfolio."
)
@click.option("--annual", type=float, default=None, help="Annual contribution override")
@click.option("--lump-sum", type=float, default=None, help="Lump sum invested in year 1")
@click.option("--return", "expected_return", type=float, default=None,
              help="Expected yearly return override (fraction, e.g. 0.06)")
@click.option("--volatility", type=float, default=None,
              help="Yearly volatility override (fraction, e.g. 0.10)")
@click.option("--age", type=int, default=None, help="Current age")
@click.option("--years", "-T", type=int, default=None, help="Projection horizon in years")
@click.option("--percentile", "-p", type=int, default=None,
              help="Best/worst case percentile (e.g. 10 for 10th/90th)")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Export projection (.json or .csv)"
)
@click.option(
    "--plot",
    type=click.Path(path_type=Path),
    default=None,
    help="Save a fan chart image (e.g. fan.png)"
)
@click.option("--x-axis", type=click.Choice(["year", "age"]), default="year",
              help="Fan chart x-axis (default: year)")
@click.option("--table/--no-table", default=True, help="Print the yearly table")
@click.pass_context
def project(
    ctx: click.Context,
    config: Optional[Path],
    annual: Optional[float],
    lump_sum: Optional[float],
    expected_return: Optional[float],
    volatility: Optional[float],
    age: Optional[int],
    years: Optional[int],
    percentile: Optional[int],
    output: Optional[Path],
    plot: Optional[Path],
    x_axis: str,
    table: bool,
) -> None:
    """
    Project portfolio value year by year.

    Command-line options override the scenario's projection parameters.

    Example:
        growthcast project -c scenario.json -T 30 -p 5 -o out.csv
    """
    console: Console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings: AppSettings = ctx.obj["settings"]

    from .scenario import run_scenario
    from .serialization import load_scenario, save_projection

    overrides = {
        key: value
        for key, value in {
            "annual_investment": annual,
            "lump_sum_investment": lump_sum,
            "expected_return": expected_return,
            "volatility": volatility,
            "age": age,
            "horizon_years": years,
            "tail_percentile": percentile,
        }.items()
        if value is not None
    }

    try:
        base = load_scenario(config) if config else _default_scenario()
        projection_config = ProjectionConfig.model_validate(
            {**base.projection.model_dump(), **overrides}
        )
        scenario = base.model_copy(update={"projection": projection_config})
        outcome = run_scenario(scenario, use_cache=settings.cache_enabled)
    except _USER_ERRORS as e:
        _fail(f"Error: {e}")

    result = outcome.result
    summary = result.summary
    currency = settings.currency

    if not quiet:
        summary_table = Table(title=f"Projection Summary: {outcome.name}", show_header=True)
        summary_table.add_column("Metric", style="cyan")
        summary_table.add_column("Value", style="green", justify="right")
        summary_table.add_row("Annual Investment", format_currency(summary.committed_annual_investment, currency))
        summary_table.add_row("Lump Sum", format_currency(summary.lump_sum_investment, currency))
        summary_table.add_row("Median CAGR", format_percent(summary.base_cagr))
        summary_table.add_row("Volatility", format_percent(summary.volatility))
        summary_table.add_row("Horizon", f"{outcome.params.horizon_years} years")
        summary_table.add_row("", "")
        summary_table.add_row("Total Invested", format_currency(summary.total_contributions, currency))
        summary_table.add_row("Final Value (Median)", format_currency(summary.last_year_investment_value, currency))
        summary_table.add_row("Final Worst Case", format_currency(summary.last_year_worst_case, currency))
        summary_table.add_row("Final Best Case", format_currency(summary.last_year_best_case, currency))
        console.print(summary_table)

        if table and result.yearly_data:
            tail = int(outcome.params.tail_percentile)
            yearly = Table(title="Projection Details")
            for header in ("Year", "Age", "Total Investment", f"Worst {tail}%",
                           "Projection", f"Top {tail}%", "Total Return"):
                yearly.add_column(header, justify="right")
            for r in result.yearly_data:
                yearly.add_row(
                    str(r.year),
                    str(r.age),
                    format_currency(r.cumulative_total_contributions, currency),
                    f"[red]{format_currency(r.worst_case, currency)}[/red]",
                    f"[bold]{format_currency(r.median_projection, currency)}[/bold]",
                    f"[green]{format_currency(r.best_case, currency)}[/green]",
                    format_currency(r.total_return, currency),
                )
            console.print(yearly)
    else:
        click.echo(
            f"Final Value (Median): {format_currency(summary.last_year_investment_value, currency)}"
        )

    if output:
        try:
            save_projection(result, output, params=outcome.params)
        except GrowthCastError as e:
            _fail(f"Error: {e}")
        if not quiet:
            click.echo(f"Projection saved to {output}")

    if plot:
        if not result.yearly_data:
            _fail("Error: nothing to plot for a zero-year horizon")

        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from .plotting import plot_projection

        fig, _ = plot_projection(
            result, x_axis=x_axis, currency=currency,
            save_path=str(plot), return_fig_ax=True,
        )
        plt.close(fig)
        if not quiet:
            click.echo(f"Fan chart saved to {plot}")


# ---------------------------------------------------------------------------
# portfolio
# ---------------------------------------------------------------------------

@main.group()
def portfolio() -> None:
    """
    Portfolio commands.

    Inspect and edit the positions stored in a scenario file.
    """
    pass


def _print_portfolio(console: Console, scenario: ScenarioConfig, currency: str) -> None:
    from .scenario import scenario_portfolio

    port = scenario_portfolio(scenario)
    positions_table = Table(title=f"Portfolio Positions: {scenario.name}")
    positions_table.add_column("#", justify="right")
    positions_table.add_column("Symbol", style="cyan")
    positions_table.add_column("Asset Class")
    positions_table.add_column("Amount", justify="right")
    positions_table.add_column("Exp. Return", justify="right")
    positions_table.add_column("Weight", justify="right")

    df = port.to_frame()
    for i, row in df.iterrows():
        positions_table.add_row(
            str(i),
            row["symbol"],
            row["asset_class"],
            format_currency(row["investment_amount"], currency),
            f"{row['expected_return']:g}%",
            format_percent(row["weight"]),
        )
    console.print(positions_table)

    metrics = port.metrics()
    console.print(Panel(
        f"Investment: {format_currency(metrics.investment, currency)}\n"
        f"Expected Return: {format_percent(metrics.expected_return, 2)}\n"
        f"Volatility: {format_percent(metrics.volatility)} (fixed assumption)",
        title="Portfolio Metrics",
        border_style="green",
    ))


@portfolio.command("show")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def portfolio_show(ctx: click.Context, config_file: Path) -> None:
    """
    Display positions and aggregated metrics of a scenario.

    Example:
        growthcast portfolio show scenario.json
    """
    from .serialization import load_scenario

    try:
        scenario = load_scenario(config_file)
    except _USER_ERRORS as e:
        _fail(f"Error: {e}")
    _print_portfolio(ctx.obj["console"], scenario, ctx.obj["settings"].currency)


@portfolio.command("add")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option("--symbol", "-s", required=True, help="Position symbol")
@click.option("--asset-class", "-a", type=click.Choice(ASSET_CLASSES), default="Global Equity")
@click.option("--amount", type=float, required=True, help="Investment amount")
@click.option("--return", "expected_return", type=float, default=8.0,
              help="Expected return in percent (default: 8)")
@click.pass_context
def portfolio_add(
    ctx: click.Context,
    config_file: Path,
    symbol: str,
    asset_class: str,
    amount: float,
    expected_return: float,
) -> None:
    """
    Add a position to a scenario file.

    Example:
        growthcast portfolio add scenario.json -s VOO --amount 50000 --return 8
    """
    from .portfolio import Position
    from .scenario import scenario_portfolio
    from .serialization import load_scenario, position_to_dict, save_scenario

    try:
        scenario = load_scenario(config_file)
        updated = scenario_portfolio(scenario).add(
            Position(symbol, asset_class, expected_return, amount)
        )
        new_scenario = ScenarioConfig.model_validate({
            **scenario.model_dump(),
            "positions": [position_to_dict(p) for p in updated],
        })
        save_scenario(new_scenario, config_file)
    except _USER_ERRORS as e:
        _fail(f"Error: {e}")

    if not ctx.obj["quiet"]:
        _print_portfolio(ctx.obj["console"], new_scenario, ctx.obj["settings"].currency)


@portfolio.command("remove")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.argument("index", type=int)
@click.pass_context
def portfolio_remove(ctx: click.Context, config_file: Path, index: int) -> None:
    """
    Remove the position at INDEX (as listed by 'portfolio show').

    Example:
        growthcast portfolio remove scenario.json 1
    """
    from .scenario import scenario_portfolio
    from .serialization import load_scenario, position_to_dict, save_scenario

    try:
        scenario = load_scenario(config_file)
        updated = scenario_portfolio(scenario).remove(index)
    except _USER_ERRORS as e:
        _fail(f"Error: {e}")
    except IndexError as e:
        _fail(f"Error: {e}")

    new_scenario = scenario.model_copy(
        update={"positions": [PositionConfig(**position_to_dict(p)) for p in updated]}
    )
    save_scenario(new_scenario, config_file)

    if not ctx.obj["quiet"]:
        _print_portfolio(ctx.obj["console"], new_scenario, ctx.obj["settings"].currency)


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """
    Configuration management commands.

    Validate, display, and create scenario files.
    """
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def config_validate(ctx: click.Context, config_file: Path) -> None:
    """
    Validate a scenario file.

    Checks that the file is valid JSON and conforms to the scenario schema.

    Example:
        growthcast config validate scenario.json
    """
    console: Console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    from .serialization import load_scenario

    try:
        scenario = load_scenario(config_file)
    except _USER_ERRORS as e:
        _fail(f"Scenario validation failed: {e}")

    if quiet:
        click.echo("Scenario is valid")
        return

    proj = scenario.projection
    info = (
        f"[bold]Scenario Valid: {scenario.name}[/bold]\n\n"
        f"[cyan]Positions ({len(scenario.positions)}):[/cyan]\n"
    )
    for pos in scenario.positions:
        info += f"  - {pos.symbol} ({pos.asset_class}): {pos.expected_return:g}% return\n"
    info += (
        f"\n[cyan]Projection:[/cyan]\n"
        f"  Age {proj.age}, {proj.horizon_years} years, "
        f"{proj.tail_percentile}th/{100 - proj.tail_percentile}th percentile bands\n"
    )
    console.print(Panel(info, title="Scenario Summary", border_style="green"))


@config.command("show")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option("--format", "-f", type=click.Choice(["json", "table"]), default="table")
@click.pass_context
def config_show(ctx: click.Context, config_file: Path, format: str) -> None:
    """
    Display a scenario file.

    Example:
        growthcast config show scenario.json --format json
    """
    console: Console = ctx.obj["console"]

    with open(config_file, "r") as f:
        config_data = json.load(f)

    if format == "json":
        click.echo(json.dumps(config_data, indent=2))
        return

    positions_table = Table(title="Positions")
    positions_table.add_column("Symbol", style="cyan")
    positions_table.add_column("Asset Class")
    positions_table.add_column("Expected Return", justify="right")
    positions_table.add_column("Amount", justify="right")
    for pos in config_data.get("positions", []):
        positions_table.add_row(
            pos.get("symbol", "Unknown"),
            pos.get("asset_class", ""),
            f"{pos.get('expected_return', 0):g}%",
            f"{pos.get('investment_amount', 0):,.0f}",
        )
    console.print(positions_table)

    projection_table = Table(title="Projection")
    projection_table.add_column("Parameter", style="cyan")
    projection_table.add_column("Value", justify="right")
    for key, value in config_data.get("projection", {}).items():
        projection_table.add_row(key, str(value))
    console.print(projection_table)


@config.command("create")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.option("--template", "-t", type=click.Choice(["basic", "advanced"]), default="basic")
@click.pass_context
def config_create(ctx: click.Context, output_file: Path, template: str) -> None:
    """
    Create a new scenario file from a template.

    Example:
        growthcast config create my_scenario.json --template basic
    """
    from .serialization import save_scenario

    if template == "basic":
        scenario = _default_scenario().model_copy(update={"name": "Basic"})
    else:
        scenario = ScenarioConfig(
            name="Advanced",
            description="Diversified portfolio with explicit projection overrides",
            positions=[
                PositionConfig(symbol="CASH", asset_class="Cash",
                               expected_return=1.5, investment_amount=20_000),
                PositionConfig(symbol="KKP GB", asset_class="Fixed Income",
                               expected_return=4, investment_amount=80_000),
                PositionConfig(symbol="SET50", asset_class="Local Equity",
                               expected_return=7, investment_amount=60_000),
                PositionConfig(symbol="KKP GNP-H-SSF", asset_class="Global Equity",
                               expected_return=8, investment_amount=100_000),
                PositionConfig(symbol="GOLD", asset_class="Alternative",
                               expected_return=5, investment_amount=40_000),
            ],
            projection=ProjectionConfig(
                age=30,
                horizon_years=35,
                tail_percentile=5,
                lump_sum_investment=500_000,
                volatility=0.12,
            ),
        )

    save_scenario(scenario, output_file)

    if not ctx.obj["quiet"]:
        ctx.obj["console"].print(f"[green]Created scenario file: {output_file}[/green]")


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display package and dependency information.
    """
    console: Console = ctx.obj["console"]

    info_lines = [
        f"GrowthCast Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
    ]

    dependencies = [
        "numpy", "scipy", "pandas", "matplotlib",
        "pydantic", "pydantic-settings", "rich", "click",
    ]
    for name in dependencies:
        try:
            installed = metadata.version(name)
        except metadata.PackageNotFoundError:
            installed = "not installed"
        info_lines.append(f"{name}: {installed}")

    console.print(Panel("\n".join(info_lines), title="System Information"))


if __name__ == "__main__":
    main()
