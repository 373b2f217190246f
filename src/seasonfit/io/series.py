"""Observation series readers.

Readers are registered per file extension and return a ``pandas.DataFrame``;
``load_series`` then picks the configured columns and validates them into
an ``ObservationSeries``.
"""

from collections.abc import Callable, Iterable
from pathlib import Path

import numpy as np
import pandas as pd

from seasonfit.core.domain.series import ObservationSeries
from seasonfit.core.shared.exceptions import DataIOError, InputValidationError

Reader = Callable[[Path], pd.DataFrame]

READERS: dict[str, Reader] = {}


def register_reader(file_types: str | Iterable[str]) -> Callable[[Reader], Reader]:
    """Decorator to register a table reader for specific file extensions."""
    if isinstance(file_types, str):
        file_types = [file_types]

    def decorator(fn: Reader) -> Reader:
        for ft in file_types:
            READERS[ft] = fn
        return fn

    return decorator


@register_reader("csv")
def read_csv_table(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, comment="#")


@register_reader(["tsv", "tab"])
def read_tsv_table(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, sep="\t", comment="#")


@register_reader(["txt", "dat"])
def read_whitespace_table(path: Path) -> pd.DataFrame:
    return pd.read_csv(path, sep=r"\s+", comment="#")


def read_table(path: Path) -> pd.DataFrame:
    """Read a table based on the file extension.

    Raises
    ------
        DataIOError: If the file is missing, the extension has no reader,
            or the file cannot be parsed.
    """
    if not path.exists():
        msg = f"Series file not found: {path}"
        raise DataIOError(msg)
    extension = path.suffix.lstrip(".").lower()
    reader = READERS.get(extension)
    if reader is None:
        available = ", ".join(sorted(READERS))
        msg = f"No reader registered for extension '{extension}'. Available: {available}"
        raise DataIOError(msg)
    try:
        return reader(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        msg = f"Cannot parse {path}: {exc}"
        raise DataIOError(msg) from exc


def _require_columns(df: pd.DataFrame, columns: list[str], path: Path) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        msg = (
            f"Missing column(s) {', '.join(repr(c) for c in missing)} in {path}. "
            f"Found: {', '.join(map(str, df.columns))}"
        )
        raise DataIOError(msg)


def _to_series(
    df: pd.DataFrame, x_column: str, y_column: str, weight_column: str | None
) -> ObservationSeries:
    df = df.sort_values(x_column, kind="stable")
    x = df[x_column].to_numpy(dtype=np.float64)
    y = df[y_column].to_numpy(dtype=np.float64)
    weights = None if weight_column is None else df[weight_column].to_numpy(dtype=np.float64)
    if weights is None and np.isnan(y).any():
        # Missing observations become excluded samples
        weights = np.where(np.isnan(y), 0.0, 1.0)
    return ObservationSeries.from_arrays(x, y, weights)


def load_series(
    path: Path,
    x_column: str = "x",
    y_column: str = "y",
    weight_column: str | None = None,
) -> ObservationSeries:
    """Load one observation series from a delimited text file.

    Rows are sorted by abscissa. Without a weight column, rows with a
    missing observation get a zero weight.

    Raises
    ------
        DataIOError: Unreadable file or missing column
        InputValidationError: The selected columns do not form a valid series
    """
    df = read_table(path)
    columns = [x_column, y_column] + ([weight_column] if weight_column else [])
    _require_columns(df, columns, path)
    try:
        return _to_series(df, x_column, y_column, weight_column)
    except ValueError as exc:
        if isinstance(exc, InputValidationError):
            raise
        msg = f"Non-numeric values in {path}: {exc}"
        raise DataIOError(msg) from exc


def load_series_groups(
    path: Path,
    group_column: str,
    x_column: str = "x",
    y_column: str = "y",
    weight_column: str | None = None,
) -> dict[str, ObservationSeries]:
    """Load one series per distinct value of ``group_column``.

    Groups keep their order of first appearance in the file.
    """
    df = read_table(path)
    columns = [group_column, x_column, y_column] + ([weight_column] if weight_column else [])
    _require_columns(df, columns, path)
    groups: dict[str, ObservationSeries] = {}
    for key, frame in df.groupby(group_column, sort=False):
        try:
            groups[str(key)] = _to_series(frame, x_column, y_column, weight_column)
        except InputValidationError as exc:
            msg = f"Group '{key}' in {path}: {exc}"
            raise InputValidationError(msg) from exc
        except ValueError as exc:
            msg = f"Non-numeric values in group '{key}' of {path}: {exc}"
            raise DataIOError(msg) from exc
    return groups


__all__ = [
    "READERS",
    "load_series",
    "load_series_groups",
    "read_table",
    "register_reader",
]
