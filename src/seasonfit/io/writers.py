"""Result writers for SeasonFit fits.

JSON holds the complete record of one fit and can be read back; CSV holds
one row per fitted series for loading into pandas, R or a spreadsheet.
"""

from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np

from seasonfit.core.constants import PARAMETER_NAMES
from seasonfit.core.fitting.results import FitResult
from seasonfit.core.shared.exceptions import DataIOError

if TYPE_CHECKING:
    from collections.abc import Sequence

SCHEMA_VERSION = "1.0.0"


class NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types and Path objects."""

    def default(self, o: Any) -> Any:
        """Convert numpy types and Path objects to Python types."""
        if isinstance(o, np.integer):
            return int(o)
        if isinstance(o, np.floating):
            return float(o)
        if isinstance(o, np.ndarray):
            return o.tolist()
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, Path):
            return str(o)
        return super().default(o)


def format_float(value: float, precision: int = 6) -> str:
    """Format a float for CSV output; non-finite values become 'nan'/'inf'."""
    if not np.isfinite(value):
        return str(value).lower()
    return f"{value:.{precision}g}"


def write_result_json(result: FitResult, path: Path, name: str | None = None) -> Path:
    """Write one fit result to JSON.

    Args:
        result: Fit result to serialize
        path: Output file path
        name: Optional series label stored alongside the result

    Returns
    -------
        The written path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    output: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "created": datetime.now(),
        "series": name,
        "result": result.to_dict(),
    }
    with path.open("w") as f:
        json.dump(output, f, cls=NumpyEncoder, indent=2)
    return path


def read_result_json(path: Path) -> FitResult:
    """Read a fit result written by ``write_result_json``.

    Raises
    ------
        DataIOError: If the file is missing or is not a result file.
        UnknownSolverStatusError: If the stored status code is unknown.
    """
    if not path.exists():
        msg = f"Result file not found: {path}"
        raise DataIOError(msg)
    try:
        with path.open() as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise DataIOError(msg) from exc

    payload = data.get("result") if isinstance(data, dict) else None
    if not isinstance(payload, dict):
        msg = f"{path} is not a SeasonFit result file"
        raise DataIOError(msg)
    try:
        return FitResult.from_dict(payload)
    except (KeyError, TypeError, ValueError) as exc:
        msg = f"Incomplete result record in {path}: {exc}"
        raise DataIOError(msg) from exc


def write_result_csv(results: Sequence[tuple[str, FitResult]], path: Path) -> Path:
    """Write a summary table with one row per named result.

    Columns are the series name, model, status, iteration count, chi-square,
    standard error, then each parameter followed by its error.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    header = ["series", "model", "status", "iterations", "chisq", "stderr"]
    for param in PARAMETER_NAMES:
        header.extend([param, f"{param}_error"])

    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for name, result in results:
            row = [
                name,
                result.model.value,
                result.status.name.lower(),
                str(result.iterations),
                format_float(result.chisq),
                format_float(result.stderr),
            ]
            for value, error in zip(result.params, result.param_errors, strict=True):
                row.extend([format_float(float(value)), format_float(float(error))])
            writer.writerow(row)
    return path


__all__ = [
    "NumpyEncoder",
    "format_float",
    "read_result_json",
    "write_result_csv",
    "write_result_json",
]
