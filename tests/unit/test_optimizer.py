"""Tests for the Marquardt optimizer."""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from seasonfit.core.domain.series import ObservationSeries
from seasonfit.core.fitting.linear_algebra import LinearAlgebraHelper, SolveStatus
from seasonfit.core.fitting.optimizer import MarquardtOptimizer, fit_series
from seasonfit.core.fitting.results import FitStatus
from seasonfit.core.models import ModelName, get_model
from seasonfit.core.shared.exceptions import (
    DivergedError,
    InputValidationError,
    MaxIterationsError,
    UnknownSolverStatusError,
)

LOGISTIC_TRUE = np.array([0.0, 5.0, 5.0, 1.0, -5.0, 14.0, 1.0])
LOGISTIC_POOR = np.array([0.0, 3.0, 7.0, 0.5, -3.0, 12.0, 0.5])


def perturbed(params):
    """Parameters shifted by a few percent, keeping the phase order."""
    return params * np.array([1.0, 1.04, 1.02, 0.96, 1.04, 0.99, 1.03]) + np.r_[0.05, np.zeros(6)]


class TestRecovery:
    """Noiseless data should be recovered for every model."""

    def test_true_prior(self, model_name, true_params, noiseless):
        """Starting at the truth converges at once on the truth."""
        x, y = noiseless
        result = fit_series(x, y, true_params.copy(), model_name)
        assert result.status is FitStatus.CONVERGED
        assert result.iterations == 0
        assert_allclose(result.params, true_params, rtol=1e-3)
        assert result.chisq == pytest.approx(0.0, abs=1e-12)

    def test_perturbed_prior(self, model_name, true_params, noiseless):
        """A nearby prior is refined onto the truth."""
        x, y = noiseless
        result = fit_series(
            x, y, perturbed(true_params), model_name, max_iterations=100, tolerance=1e-12
        )
        assert result.status is FitStatus.CONVERGED
        assert result.iterations > 0
        assert_allclose(result.params, true_params, rtol=1e-3, atol=1e-4)

    def test_numeric_derivatives(self, model_name, true_params, noiseless):
        """Numeric derivatives reach the same optimum."""
        x, y = noiseless
        result = fit_series(
            x,
            y,
            perturbed(true_params),
            model_name,
            max_iterations=100,
            tolerance=1e-12,
            derivative="numeric",
        )
        assert result.status is FitStatus.CONVERGED
        assert_allclose(result.params, true_params, rtol=1e-3, atol=1e-4)


class TestInvariants:
    """Properties every run must satisfy."""

    def test_monotone_chisq(self, noisy_logistic):
        """Chi-square never increases across accepted iterations."""
        x, y, _ = noisy_logistic
        result = fit_series(x, y, LOGISTIC_POOR, "logistic", max_iterations=50, tolerance=1e-9)
        history = np.array(result.chisq_history)
        assert history.size == result.iterations + 1
        assert np.all(np.diff(history) <= 0.0)
        assert result.chisq <= result.initial_chisq
        assert history[0] == result.initial_chisq
        assert history[-1] == result.chisq

    @pytest.mark.parametrize("replacement", [1e6, -3.0, np.nan])
    def test_weight_exclusion(self, noisy_logistic, replacement):
        """A zero-weight sample does not influence the fit, whatever its value."""
        x, y, _ = noisy_logistic
        weights = np.ones_like(x)
        weights[7] = 0.0
        y_other = y.copy()
        y_other[7] = replacement

        first = fit_series(x, y, LOGISTIC_POOR, "logistic", weights)
        second = fit_series(x, y_other, LOGISTIC_POOR, "logistic", weights)

        assert_array_equal(first.params, second.params)
        assert first.chisq == second.chisq
        assert first.status is second.status
        assert first.iterations == second.iterations
        assert first.n_active == 19

    def test_weights_scale_chisq(self, noisy_logistic):
        """Chi-square is the weighted sum of squared residuals."""
        x, y, params = noisy_logistic
        series = ObservationSeries.from_arrays(x, y, np.full(20, 4.0))
        optimizer = MarquardtOptimizer(get_model("logistic"), series)
        residuals, chisq = optimizer.evaluate(params)
        assert chisq == pytest.approx(4.0 * np.sum(residuals**2))

    def test_standard_error(self, noisy_logistic):
        """stderr is sqrt(chisq / (n - 7))."""
        x, y, _ = noisy_logistic
        result = fit_series(x, y, LOGISTIC_POOR, "logistic")
        assert result.stderr == pytest.approx(np.sqrt(result.chisq / 13))

    def test_parameter_errors(self, noisy_logistic):
        """A converged noisy fit reports finite positive parameter errors."""
        x, y, _ = noisy_logistic
        result = fit_series(x, y, perturbed(LOGISTIC_TRUE), "logistic")
        assert result.param_errors.shape == (7,)
        assert np.all(np.isfinite(result.param_errors))
        assert np.all(result.param_errors > 0)


class TestStatus:
    """Every terminal status is reachable."""

    def test_converged(self, noisy_logistic):
        """A well-posed problem converges."""
        x, y, _ = noisy_logistic
        result = fit_series(x, y, LOGISTIC_POOR, "logistic", max_iterations=50)
        assert result.status is FitStatus.CONVERGED
        assert result.success
        assert result.raise_for_status() is result

    def test_diverged(self, noisy_logistic):
        """An extreme wrong-sign slope makes every damped solve non-finite.

        The start partial at x == start is of order 1e300, so its curvature
        overflows whatever the damping.
        """
        x, y, _ = noisy_logistic
        prior = LOGISTIC_TRUE.copy()
        prior[3] = -1e300
        result = fit_series(x, y, prior, "logistic")
        assert result.status is FitStatus.DIVERGED
        assert result.iterations == 0
        assert result.lam > 1e10
        assert not result.success
        with pytest.raises(DivergedError) as excinfo:
            result.raise_for_status()
        assert excinfo.value.result is result

    def test_max_iterations(self, noisy_logistic):
        """One iteration is not enough from a poor prior."""
        x, y, _ = noisy_logistic
        result = fit_series(x, y, LOGISTIC_POOR, "logistic", max_iterations=1)
        assert result.status is FitStatus.MAX_ITERATIONS
        assert result.iterations == 1
        with pytest.raises(MaxIterationsError):
            result.raise_for_status()

    def test_unknown_solve_status(self, noisy_logistic, monkeypatch):
        """An unrecognized solve status is fatal."""
        x, y, _ = noisy_logistic

        def bogus_solve(alpha, beta, lam):
            return np.zeros_like(beta), "bogus"

        monkeypatch.setattr(LinearAlgebraHelper, "solve_damped", staticmethod(bogus_solve))
        with pytest.raises(UnknownSolverStatusError, match="bogus"):
            fit_series(x, y, LOGISTIC_POOR, "logistic")

    def test_steep_logistic_converges(self):
        """Slopes whose exponentials overflow still fit from a close prior."""
        x = np.linspace(0.0, 365.0, 3651)
        truth = np.array([0.2, 0.6, 120.0, 4.0, -0.6, 280.0, 4.0])
        rng = np.random.default_rng(7)
        y = get_model("logistic")(x, truth) + rng.normal(0.0, 0.01, x.size)
        prior = np.array([0.21, 0.58, 120.05, 3.8, -0.62, 279.95, 4.2])

        result = fit_series(x, y, prior, "logistic", max_iterations=50)

        assert result.status is FitStatus.CONVERGED
        assert np.all(np.isfinite(result.params))
        assert_allclose(result.params[[1, 4]], truth[[1, 4]], rtol=0.05)
        assert_allclose(result.params[[2, 5]], truth[[2, 5]], atol=0.05)
        assert_allclose(result.params[[3, 6]], truth[[3, 6]], rtol=0.2)


class TestPrecision:
    """Single and double precision runs."""

    def test_single_precision(self, noisy_logistic):
        """Single precision fits return float32 parameters."""
        x, y, params = noisy_logistic
        result = fit_series(
            x, y, perturbed(LOGISTIC_TRUE), "logistic", precision="single", max_iterations=50
        )
        assert result.params.dtype == np.float32
        assert result.status is FitStatus.CONVERGED
        assert_allclose(result.params[1:], params[1:], rtol=0.1)

    def test_caller_arrays_untouched(self, noisy_logistic):
        """Casting to single precision never modifies the caller's data."""
        x, y, _ = noisy_logistic
        x_before, y_before = x.copy(), y.copy()
        fit_series(x, y, LOGISTIC_POOR, "logistic", precision="single")
        assert x.dtype == np.float64
        assert_array_equal(x, x_before)
        assert_array_equal(y, y_before)


class TestParameterWriteBack:
    """The posterior is written into writable float parameter arrays."""

    def test_ndarray_updated(self, noisy_logistic):
        """A float64 ndarray receives the posterior."""
        x, y, _ = noisy_logistic
        params = LOGISTIC_POOR.copy()
        result = fit_series(x, y, params, "logistic")
        assert_array_equal(params, result.params)
        assert result.params is not params
        assert_array_equal(result.prior, LOGISTIC_POOR)

    def test_list_not_updated(self, noisy_logistic):
        """Sequences are left alone."""
        x, y, _ = noisy_logistic
        params = LOGISTIC_POOR.tolist()
        fit_series(x, y, params, "logistic")
        assert params == LOGISTIC_POOR.tolist()


class TestValidation:
    """Malformed inputs fail before any numeric work."""

    def test_wrong_parameter_count(self, noisy_logistic):
        x, y, _ = noisy_logistic
        with pytest.raises(InputValidationError, match="exactly 7"):
            fit_series(x, y, np.ones(6), "logistic")

    def test_unknown_model(self, noisy_logistic):
        x, y, _ = noisy_logistic
        with pytest.raises(InputValidationError, match="Unknown model"):
            fit_series(x, y, LOGISTIC_POOR, "weibull")

    def test_short_series(self):
        with pytest.raises(InputValidationError, match="At least 10"):
            fit_series(np.arange(8.0), np.arange(8.0), LOGISTIC_POOR, ModelName.TANH)

    @pytest.mark.parametrize(
        ("kwargs", "match"),
        [({"max_iterations": 0}, "max_iterations"), ({"tolerance": 0.0}, "tolerance")],
    )
    def test_bad_settings(self, noisy_logistic, kwargs, match):
        x, y, _ = noisy_logistic
        with pytest.raises(InputValidationError, match=match):
            fit_series(x, y, LOGISTIC_POOR, "logistic", **kwargs)


class TestLinearAlgebra:
    """Tests for the damped normal-equation solve."""

    def test_inactive_parameter_frozen(self):
        """A zero Jacobian column gets a zero update."""
        rng = np.random.default_rng(0)
        jac = rng.normal(size=(20, 3))
        jac[:, 1] = 0.0
        alpha, beta = LinearAlgebraHelper.normal_equations(jac, np.ones(20), rng.normal(size=20))
        delta, status = LinearAlgebraHelper.solve_damped(alpha, beta, 1e-3)
        assert status is SolveStatus.OK
        assert delta[1] == 0.0
        assert np.all(delta[[0, 2]] != 0.0)

    def test_nonfinite(self):
        """NaN in the normal equations is reported, not solved."""
        alpha = np.array([[1.0, np.nan], [np.nan, 1.0]])
        delta, status = LinearAlgebraHelper.solve_damped(alpha, np.ones(2), 1e-3)
        assert status is SolveStatus.NONFINITE
        assert_array_equal(delta, 0.0)

    def test_all_inactive(self):
        """No informative parameter at all is singular."""
        delta, status = LinearAlgebraHelper.solve_damped(np.zeros((3, 3)), np.zeros(3), 1e-3)
        assert status is SolveStatus.SINGULAR

    def test_covariance_inactive_is_nan(self):
        """Inactive parameters have NaN covariance."""
        alpha = np.diag([2.0, 0.0, 4.0])
        cov = LinearAlgebraHelper.covariance(alpha)
        assert cov[0, 0] == pytest.approx(0.5)
        assert cov[2, 2] == pytest.approx(0.25)
        assert np.isnan(cov[1, 1])
