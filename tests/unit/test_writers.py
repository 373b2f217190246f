"""Tests for result writers."""

import json

import numpy as np
import pandas as pd
import pytest

from seasonfit.core.constants import PARAMETER_NAMES
from seasonfit.core.fitting.optimizer import fit_series
from seasonfit.core.fitting.results import FitStatus
from seasonfit.core.shared.exceptions import DataIOError, UnknownSolverStatusError
from seasonfit.io.writers import (
    NumpyEncoder,
    format_float,
    read_result_json,
    write_result_csv,
    write_result_json,
)

PRIOR = np.array([0.0, 4.5, 5.5, 0.9, -4.5, 13.5, 0.9])


@pytest.fixture
def result(noisy_logistic):
    x, y, _ = noisy_logistic
    return fit_series(x, y, PRIOR, "logistic")


class TestJSONWriter:
    """Tests for JSON result files."""

    def test_round_trip(self, result, tmp_path):
        """A written result reads back unchanged."""
        path = write_result_json(result, tmp_path / "out" / "fit.json", name="pixel")
        restored = read_result_json(path)
        assert restored.status is result.status
        assert restored.model is result.model
        assert restored.iterations == result.iterations
        np.testing.assert_allclose(restored.params, result.params)
        assert json.loads(path.read_text())["series"] == "pixel"

    def test_unknown_status(self, result, tmp_path):
        """An unknown stored status raises instead of being coerced."""
        path = write_result_json(result, tmp_path / "fit.json")
        data = json.loads(path.read_text())
        data["result"]["status"] = 42
        path.write_text(json.dumps(data))
        with pytest.raises(UnknownSolverStatusError):
            read_result_json(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataIOError, match="not found"):
            read_result_json(tmp_path / "missing.json")

    def test_not_a_result(self, tmp_path):
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"hello": "world"}))
        with pytest.raises(DataIOError, match="not a SeasonFit result"):
            read_result_json(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(DataIOError, match="Invalid JSON"):
            read_result_json(path)

    def test_numpy_encoder(self):
        """numpy scalars and arrays serialize as plain JSON."""
        text = json.dumps({"a": np.float32(1.5), "b": np.arange(3), "c": np.int64(2)}, cls=NumpyEncoder)
        assert json.loads(text) == {"a": 1.5, "b": [0, 1, 2], "c": 2}


class TestCSVWriter:
    """Tests for the CSV summary."""

    def test_one_row_per_result(self, result, tmp_path):
        path = write_result_csv([("a", result), ("b", result)], tmp_path / "fits.csv")
        table = pd.read_csv(path)
        assert list(table["series"]) == ["a", "b"]
        assert set(PARAMETER_NAMES) <= set(table.columns)
        assert {f"{name}_error" for name in PARAMETER_NAMES} <= set(table.columns)
        assert table.loc[0, "status"] == FitStatus.CONVERGED.name.lower()
        assert table.loc[0, "rise_start"] == pytest.approx(result.params[2], rel=1e-5)

    def test_format_float(self):
        assert format_float(1.23456789) == "1.23457"
        assert format_float(float("nan")) == "nan"
        assert format_float(float("inf")) == "inf"


def test_missing_parameter_is_incomplete(result, tmp_path):
    """A result record lacking a named parameter is rejected."""
    path = write_result_json(result, tmp_path / "fit.json")
    data = json.loads(path.read_text())
    del data["result"]["params"]["fall_shape"]
    path.write_text(json.dumps(data))
    with pytest.raises(DataIOError, match="Incomplete result record"):
        read_result_json(path)
