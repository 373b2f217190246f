"""Fit statistics.

Single source of truth for chi-square, degrees of freedom and the error
estimates reported with every fit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.constants import N_PARAMS

if TYPE_CHECKING:
    from seasonfit.core.shared.typing import FloatArray


def weighted_residuals(y: FloatArray, model: FloatArray, weights: FloatArray) -> FloatArray:
    """Residuals ``y - model``, forced to zero where the weight is zero.

    Excluded samples may hold arbitrary (even non-finite) observations.
    """
    with np.errstate(invalid="ignore"):
        residuals = y - model
    return np.where(weights > 0, residuals, 0.0).astype(y.dtype, copy=False)


def compute_chi_squared(residuals: FloatArray, weights: FloatArray) -> float:
    """Compute chi-squared ``sum(w * r**2)``.

    Args:
        residuals: Residuals (data - model), zero where excluded
        weights: Sample weights

    Returns
    -------
        Chi-squared value; ``inf`` or ``nan`` when the model is not finite
    """
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.sum(weights * residuals * residuals, dtype=np.float64))


def compute_degrees_of_freedom(n_data: int, n_params: int = N_PARAMS) -> int:
    """Degrees of freedom, minimum of 1 to avoid division by zero."""
    return max(1, n_data - n_params)


def compute_standard_error(chi_squared: float, n_data: int, n_params: int = N_PARAMS) -> float:
    """Weighted RMS residual ``sqrt(chi2 / dof)``."""
    dof = compute_degrees_of_freedom(n_data, n_params)
    return float(np.sqrt(chi_squared / dof))


def compute_parameter_errors(
    covariance: FloatArray, chi_squared: float, n_data: int, n_params: int = N_PARAMS
) -> FloatArray:
    """One-sigma parameter errors from the unscaled covariance.

    The covariance is scaled by the reduced chi-square, as for fits whose
    weights are relative rather than absolute.
    """
    dof = compute_degrees_of_freedom(n_data, n_params)
    with np.errstate(invalid="ignore"):
        variances = np.diag(covariance) * (chi_squared / dof)
        return np.sqrt(np.where(variances >= 0, variances, np.nan))


@dataclass(slots=True)
class ResidualStatistics:
    """Summary of the residuals of a fit over the active samples.

    Attributes
    ----------
        residuals: Residuals (data - model), zero where excluded
        weights: Sample weights
    """

    residuals: FloatArray
    weights: FloatArray

    @property
    def active(self) -> FloatArray:
        return self.residuals[self.weights > 0]

    @property
    def n_points(self) -> int:
        return int(np.count_nonzero(self.weights))

    @property
    def chi_squared(self) -> float:
        return compute_chi_squared(self.residuals, self.weights)

    @property
    def rms(self) -> float:
        """Unweighted root mean square of the active residuals."""
        active = self.active
        if active.size == 0:
            return 0.0
        return float(np.sqrt(np.mean(active.astype(np.float64) ** 2)))

    @property
    def max_abs(self) -> float:
        active = self.active
        if active.size == 0:
            return 0.0
        return float(np.max(np.abs(active)))


__all__ = [
    "ResidualStatistics",
    "compute_chi_squared",
    "compute_degrees_of_freedom",
    "compute_parameter_errors",
    "compute_standard_error",
    "weighted_residuals",
]
