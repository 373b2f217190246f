"""Weighted nonlinear least-squares optimization for double-sigmoid fits.

This module implements the damped Gauss-Newton (Marquardt) iteration used
to refine a prior parameter vector into a posterior fit.

Each iteration solves ``(J^T W J + lam * diag(J^T W J)) dp = J^T W r``.
A step that lowers chi-square is accepted and the damping ``lam`` shrinks;
a step that raises it is rejected and ``lam`` grows until the step is
short enough to improve the fit, or ``lam`` passes its ceiling and the run
is declared diverged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.constants import (
    LAMBDA_DECREASE,
    LAMBDA_INCREASE,
    LAMBDA_MAX,
    LAMBDA_START,
    MAX_ITERATIONS,
    NEGLIGIBLE_CHI2,
    TOLERANCE,
)
from seasonfit.core.domain.parameters import as_parameter_vector
from seasonfit.core.domain.series import ObservationSeries
from seasonfit.core.fitting.jacobian import select_jacobian
from seasonfit.core.fitting.linear_algebra import LinearAlgebraHelper, SolveStatus
from seasonfit.core.fitting.results import FitResult, FitStatus, OptimizerState
from seasonfit.core.models.registry import Model, get_model
from seasonfit.core.results.statistics import (
    compute_chi_squared,
    compute_parameter_errors,
    compute_standard_error,
    weighted_residuals,
)
from seasonfit.core.shared.exceptions import InputValidationError, UnknownSolverStatusError

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import ArrayLike

    from seasonfit.core.models.registry import ModelName
    from seasonfit.core.shared.typing import DerivativeMode, FloatArray, Precision

logger = logging.getLogger(__name__)


class StepOutcome(Enum):
    """Outcome of one damped step search."""

    ACCEPTED = "accepted"
    EXHAUSTED = "exhausted"


@dataclass
class MarquardtOptimizer:
    """Marquardt optimizer bound to one model and one observation series.

    The series is never modified. ``run`` owns an ``OptimizerState`` for
    the duration of the call only, so one optimizer can run several priors.
    """

    model: Model
    series: ObservationSeries
    derivative: DerivativeMode = "analytic"
    max_iterations: int = MAX_ITERATIONS
    tolerance: float = TOLERANCE

    _jacobian: Callable[[FloatArray, FloatArray], FloatArray] = field(init=False, repr=False)
    _negligible_chisq: float = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            msg = f"max_iterations must be at least 1, got {self.max_iterations}"
            raise InputValidationError(msg)
        if not self.tolerance > 0:
            msg = f"tolerance must be positive, got {self.tolerance}"
            raise InputValidationError(msg)
        self._jacobian = select_jacobian(self.model, self.derivative)

        y_active = np.where(self.series.weights > 0, self.series.y, 0.0)
        scale = compute_chi_squared(y_active, self.series.weights)
        self._negligible_chisq = NEGLIGIBLE_CHI2 * scale

    def evaluate(self, params: FloatArray) -> tuple[FloatArray, float]:
        """Return residuals and chi-square at ``params``."""
        series = self.series
        with np.errstate(over="ignore", invalid="ignore"):
            values = self.model.evaluate(series.x, params)[0]
        residuals = weighted_residuals(series.y, values, series.weights)
        return residuals, compute_chi_squared(residuals, series.weights)

    def run(self, prior: ArrayLike) -> FitResult:
        """Refine ``prior`` into a posterior fit.

        Returns
        -------
            FitResult whose status tells whether the run converged, diverged
            or exhausted its iteration budget.
        """
        dtype = self.series.dtype
        start = as_parameter_vector(prior, dtype=dtype)
        residuals, chisq = self.evaluate(start)
        state = OptimizerState(
            params=start.copy(), residuals=residuals, chisq=chisq, lam=LAMBDA_START
        )
        initial_chisq = chisq
        history = [chisq]

        code = self._iterate(state, history)
        status = FitStatus.from_code(code)

        n_active = self.series.n_active
        result = FitResult(
            model=self.model.name,
            params=state.params.copy(),
            prior=start,
            iterations=state.iteration,
            chisq=state.chisq,
            stderr=compute_standard_error(state.chisq, n_active),
            status=status,
            initial_chisq=initial_chisq,
            param_errors=self._parameter_errors(state),
            chisq_history=history,
            lam=state.lam,
            n_active=n_active,
        )
        logger.info(
            "%s fit: %s after %d iterations, chi2 %.6g -> %.6g",
            self.model.name,
            status.label,
            result.iterations,
            initial_chisq,
            result.chisq,
        )
        return result

    def _iterate(self, state: OptimizerState, history: list[float]) -> int:
        """Run the iteration loop and return the terminal status code."""
        if not np.isfinite(state.chisq):
            logger.debug("Initial chi-square is not finite")
            return FitStatus.DIVERGED.value

        while True:
            if state.chisq <= self._negligible_chisq:
                return FitStatus.CONVERGED.value
            if state.iteration >= self.max_iterations:
                return FitStatus.MAX_ITERATIONS.value

            old_chisq = state.chisq
            outcome = self._step(state)
            if outcome is StepOutcome.EXHAUSTED:
                return FitStatus.DIVERGED.value

            state.iteration += 1
            history.append(state.chisq)
            logger.debug(
                "iteration %d: chi2=%.8g lambda=%.3g", state.iteration, state.chisq, state.lam
            )
            if old_chisq - state.chisq < self.tolerance:
                return FitStatus.CONVERGED.value

    def _step(self, state: OptimizerState) -> StepOutcome:
        """Find an improving step, escalating the damping as needed."""
        series = self.series
        jac = self._jacobian(series.x, state.params)
        alpha, beta = LinearAlgebraHelper.normal_equations(jac, series.weights, state.residuals)

        while True:
            delta, solve_status = LinearAlgebraHelper.solve_damped(alpha, beta, state.lam)
            match solve_status:
                case SolveStatus.OK:
                    trial = (state.params + delta).astype(state.params.dtype, copy=False)
                    residuals, chisq = self.evaluate(trial)
                    if np.isfinite(chisq) and chisq <= state.chisq:
                        state.params = trial
                        state.residuals = residuals
                        state.chisq = chisq
                        state.lam /= LAMBDA_DECREASE
                        return StepOutcome.ACCEPTED
                case SolveStatus.SINGULAR | SolveStatus.NONFINITE:
                    logger.debug(
                        "Damped solve failed (%s) at lambda=%.3g", solve_status.value, state.lam
                    )
                case _:
                    msg = f"Unknown linear solve status: {solve_status!r}"
                    raise UnknownSolverStatusError(msg)

            state.lam *= LAMBDA_INCREASE
            if state.lam > LAMBDA_MAX:
                return StepOutcome.EXHAUSTED

    def _parameter_errors(self, state: OptimizerState) -> FloatArray:
        jac = self._jacobian(self.series.x, state.params)
        alpha, _ = LinearAlgebraHelper.normal_equations(jac, self.series.weights, state.residuals)
        covariance = LinearAlgebraHelper.covariance(alpha)
        return compute_parameter_errors(covariance, state.chisq, self.series.n_active)


def fit_series(
    x: ArrayLike,
    y: ArrayLike,
    params: ArrayLike,
    model: ModelName | str,
    weights: ArrayLike | None = None,
    *,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
    precision: Precision = "double",
    derivative: DerivativeMode = "analytic",
) -> FitResult:
    """Fit a double-sigmoid model to one series.

    Args:
        x: Abscissas (at least 10 samples)
        y: Observations
        params: Seven-element prior. When it is a float ndarray, the
            posterior is also written back into it.
        model: Model identifier
        weights: Optional sample weights (default 1, 0 excludes a sample)
        max_iterations: Iteration budget
        tolerance: Convergence threshold on the chi-square decrease
        precision: "single" or "double" arithmetic
        derivative: "analytic" or "numeric" Jacobian

    Returns
    -------
        FitResult with posterior, iterations, chi-square, standard error
        and status

    Raises
    ------
        InputValidationError: On malformed inputs, before any numeric work
    """
    resolved = get_model(model)
    series = ObservationSeries.from_arrays(x, y, weights).astype(precision)
    prior = as_parameter_vector(params, dtype=series.dtype)

    optimizer = MarquardtOptimizer(
        model=resolved,
        series=series,
        derivative=derivative,
        max_iterations=max_iterations,
        tolerance=tolerance,
    )
    result = optimizer.run(prior)

    if isinstance(params, np.ndarray) and params.dtype.kind == "f" and params.flags.writeable:
        params[...] = result.params
    return result


__all__ = ["MarquardtOptimizer", "StepOutcome", "fit_series"]
