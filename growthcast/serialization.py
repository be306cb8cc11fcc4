"""
Serialization module for GrowthCast scenarios and projection exports.

Purpose
-------
Provides JSON serialization and deserialization for projection scenarios,
and JSON/CSV export of computed projections, enabling scenario sharing and
version control. Exports are written only on request; the engine keeps no
persisted state.

Supports serialization of:
- Portfolio positions
- Complete scenarios (positions + projection parameters)
- Projection results (yearly records + summary), as JSON or CSV

Design Principles
-----------------
- Type-safe: Uses Pydantic configs for validation
- Human-readable: JSON for easy editing, CSV for spreadsheets
- Backward compatible: Validates schema versions

Example
-------
>>> from pathlib import Path
>>> from growthcast.serialization import load_scenario, save_projection
>>> from growthcast.scenario import run_scenario
>>>
>>> scenario = load_scenario(Path("scenario.json"))
>>> outcome = run_scenario(scenario)
>>> save_projection(outcome.result, Path("projection.csv"))
"""

from __future__ import annotations
from typing import Any, Dict, Optional, TYPE_CHECKING, cast
from dataclasses import asdict
from pathlib import Path
import json
import logging
import warnings

from .config import PositionConfig, ScenarioConfig
from .exceptions import ConfigurationError
from .types import PositionDict, ProjectionResultDict

if TYPE_CHECKING:
    from .portfolio import Position
    from .projection import ProjectionInput, ProjectionResult

__all__ = [
    "SCHEMA_VERSION",
    "position_to_dict",
    "position_from_dict",
    "save_scenario",
    "load_scenario",
    "save_projection",
    "load_projection",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _check_schema_version(data: Dict[str, Any], path: Path) -> None:
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"{path} schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object at the top level")
    return data


# ---------------------------------------------------------------------------
# Position Serialization
# ---------------------------------------------------------------------------

def position_to_dict(position: Position) -> PositionDict:
    """
    Convert Position to dictionary representation.

    Parameters
    ----------
    position : Position
        Position instance to serialize

    Returns
    -------
    dict
        Dictionary with position fields
    """
    return {
        "symbol": position.symbol,
        "asset_class": position.asset_class,
        "expected_return": position.expected_return,
        "investment_amount": position.investment_amount,
    }


def position_from_dict(data: Dict[str, Any]) -> Position:
    """
    Create Position from dictionary representation.

    The dictionary is validated with PositionConfig first, so unknown asset
    classes or negative amounts raise pydantic.ValidationError.
    """
    from .portfolio import Position

    config = PositionConfig.model_validate(data)
    return Position(
        symbol=config.symbol,
        asset_class=config.asset_class,
        expected_return=config.expected_return,
        investment_amount=config.investment_amount,
    )


# ---------------------------------------------------------------------------
# Scenario Serialization
# ---------------------------------------------------------------------------

def save_scenario(scenario: ScenarioConfig, path: Path) -> None:
    """
    Save a ScenarioConfig to a JSON file.

    Examples
    --------
    >>> save_scenario(ScenarioConfig(name="Baseline"), Path("baseline.json"))
    """
    data = {"schema_version": SCHEMA_VERSION, **scenario.model_dump(mode="json")}

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.debug("Saved scenario %r to %s", scenario.name, path)


def load_scenario(path: Path) -> ScenarioConfig:
    """
    Load a ScenarioConfig from a JSON file.

    Raises
    ------
    ConfigurationError
        If the file is not a JSON object.
    pydantic.ValidationError
        If the content does not match the scenario schema.
    """
    data = _read_json(path)
    _check_schema_version(data, path)
    data.pop("schema_version", None)

    scenario = ScenarioConfig.model_validate(data)
    logger.debug("Loaded scenario %r from %s", scenario.name, path)
    return scenario


# ---------------------------------------------------------------------------
# Projection Export
# ---------------------------------------------------------------------------

def save_projection(
    result: ProjectionResult,
    path: Path,
    params: Optional[ProjectionInput] = None,
) -> None:
    """
    Export a projection to JSON or CSV, chosen by file suffix.

    Parameters
    ----------
    result : ProjectionResult
        Projection to export.
    path : Path
        Output path ending in ".json" or ".csv".
    params : ProjectionInput, optional
        Inputs to embed in JSON exports (ignored for CSV).

    Raises
    ------
    ConfigurationError
        For any other suffix.
    """
    suffix = path.suffix.lower()
    if suffix not in (".json", ".csv"):
        raise ConfigurationError(
            f"Unsupported export format {path.suffix!r}; use .json or .csv"
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        result.to_frame().to_csv(path)
    else:
        data: Dict[str, Any] = {"schema_version": SCHEMA_VERSION}
        if params is not None:
            data["inputs"] = asdict(params)
        data.update(result.to_dict())
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    logger.debug("Exported %d projected years to %s", len(result.yearly_data), path)


def load_projection(path: Path) -> ProjectionResultDict:
    """
    Load an exported JSON projection.

    Note: Returns a dictionary instead of ProjectionResult because exported
    files are a reporting format, not engine state.
    """
    data = _read_json(path)
    _check_schema_version(data, path)
    for key in ("yearly_data", "summary"):
        if key not in data:
            raise ConfigurationError(f"{path} is missing the {key!r} section")
    return cast(ProjectionResultDict, data)
