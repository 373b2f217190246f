"""Shared foundational utilities for SeasonFit."""

from seasonfit.core.shared import reporter, typing
from seasonfit.core.shared.exceptions import (
    ConfigError,
    ConvergenceFailure,
    DataIOError,
    DivergedError,
    InputValidationError,
    MaxIterationsError,
    SeasonFitError,
    UnknownSolverStatusError,
)
from seasonfit.core.shared.reporter import NullReporter, Reporter

__all__ = [
    "ConfigError",
    "ConvergenceFailure",
    "DataIOError",
    "DivergedError",
    "InputValidationError",
    "MaxIterationsError",
    "NullReporter",
    "Reporter",
    "SeasonFitError",
    "UnknownSolverStatusError",
    "reporter",
    "typing",
]
