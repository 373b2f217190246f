"""Fit statistics shared by the optimizer and the result writers."""

from seasonfit.core.results.statistics import (
    ResidualStatistics,
    compute_chi_squared,
    compute_degrees_of_freedom,
    compute_parameter_errors,
    compute_standard_error,
    weighted_residuals,
)

__all__ = [
    "ResidualStatistics",
    "compute_chi_squared",
    "compute_degrees_of_freedom",
    "compute_parameter_errors",
    "compute_standard_error",
    "weighted_residuals",
]
