"""Tests for fit status codes and result records."""

import numpy as np
import pytest

from seasonfit.core.fitting.results import FitResult, FitStatus
from seasonfit.core.models import ModelName
from seasonfit.core.shared.exceptions import UnknownSolverStatusError


def make_result(status=FitStatus.CONVERGED):
    return FitResult(
        model=ModelName.TANH,
        params=np.array([0.1, 2.0, 5.0, 0.8, -2.0, 14.0, 0.6]),
        prior=np.array([0.0, 2.0, 5.5, 1.0, -2.0, 13.5, 1.0]),
        iterations=4,
        chisq=0.05,
        stderr=0.062,
        status=status,
        initial_chisq=3.2,
        param_errors=np.array([0.01, 0.02, 0.1, 0.05, 0.02, 0.1, np.nan]),
        chisq_history=[3.2, 0.4, 0.051, 0.05],
        lam=1e-7,
        n_active=20,
    )


class TestFitStatus:
    """Tests for status codes."""

    @pytest.mark.parametrize(
        ("code", "status"),
        [(0, FitStatus.CONVERGED), (1, FitStatus.DIVERGED), (2, FitStatus.MAX_ITERATIONS)],
    )
    def test_known_codes(self, code, status):
        """Stable integer codes map to statuses."""
        assert FitStatus.from_code(code) is status
        assert status.value == code

    @pytest.mark.parametrize("code", [3, -1, 7, "converged", None])
    def test_unknown_codes(self, code):
        """Unknown codes are never coerced to a known status."""
        with pytest.raises(UnknownSolverStatusError):
            FitStatus.from_code(code)

    def test_labels(self):
        """Every status has a human-readable label."""
        assert FitStatus.CONVERGED.label == "Converged"
        assert FitStatus.MAX_ITERATIONS.label == "Maximum iterations reached"


class TestFitResult:
    """Tests for the result record."""

    def test_named_params(self):
        """Parameters are exposed by name."""
        named = make_result().named_params()
        assert named["rise_start"] == 5.0
        assert named["amplitude_fall"] == -2.0

    def test_dict_round_trip(self):
        """from_dict restores what to_dict wrote."""
        original = make_result(FitStatus.MAX_ITERATIONS)
        restored = FitResult.from_dict(original.to_dict())
        assert restored.status is FitStatus.MAX_ITERATIONS
        assert restored.model is ModelName.TANH
        np.testing.assert_array_equal(restored.params, original.params)
        np.testing.assert_array_equal(restored.prior, original.prior)
        assert np.isnan(restored.param_errors[-1])
        assert restored.chisq_history == original.chisq_history
        assert restored.n_active == 20

    def test_from_dict_unknown_status(self):
        """A stored unknown status code raises."""
        data = make_result().to_dict()
        data["status"] = 9
        with pytest.raises(UnknownSolverStatusError):
            FitResult.from_dict(data)

    def test_message(self):
        assert make_result(FitStatus.DIVERGED).message == "Diverged"
