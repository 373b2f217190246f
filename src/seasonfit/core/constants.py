"""Core constants for SeasonFit optimization and fitting.

These constants define default parameters for the Marquardt optimizer and
the data model. They can be overridden via configuration files or CLI
arguments.
"""

# =============================================================================
# Data Model
# =============================================================================

N_PARAMS = 7
"""Number of parameters of every double-sigmoid model."""

MIN_SAMPLES = 10
"""Minimum number of samples in an observation series."""

PARAMETER_NAMES = (
    "base",
    "amplitude_rise",
    "rise_start",
    "rise_shape",
    "amplitude_fall",
    "fall_start",
    "fall_shape",
)
"""Display names of the seven parameters, in vector order."""

# =============================================================================
# Marquardt Optimization Defaults
# =============================================================================

MAX_ITERATIONS = 20  # Accepted iterations before giving up
"""Default iteration budget of the optimizer."""

TOLERANCE = 1e-3  # Chi-squared change threshold
"""Default convergence tolerance.

The fit is converged when an accepted step lowers chi-square by less than
this amount.
"""

LAMBDA_START = 1e-3
"""Initial Marquardt damping factor."""

LAMBDA_INCREASE = 10.0
"""Damping multiplier applied after a rejected step."""

LAMBDA_DECREASE = 10.0
"""Damping divisor applied after an accepted step."""

LAMBDA_MAX = 1e10
"""Damping ceiling; exceeding it means chi-square cannot be improved."""

NEGLIGIBLE_CHI2 = 1e-14
"""Relative chi-square below which the prior is already an exact fit.

Compared against the weighted sum of squared observations.
"""

# =============================================================================
# Numeric Derivatives
# =============================================================================

FINITE_DIFF_STEP = 1e-6
"""Relative step for central finite differences (double precision)."""

FINITE_DIFF_STEP_SINGLE = 1e-3
"""Relative step for central finite differences (single precision)."""
