"""Exception taxonomy for SeasonFit.

This module defines a small, coherent hierarchy of exceptions to improve
error handling across the codebase. Use these instead of generic Exception
to communicate intent and allow callers to handle errors precisely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seasonfit.core.fitting.results import FitResult


class SeasonFitError(Exception):
    """Base class for all SeasonFit-specific exceptions."""


class InputValidationError(SeasonFitError, ValueError):
    """Invalid inputs (array sizes, model identifiers, parameter vectors).

    Raised before any numeric work is done; no partial output is produced.
    """


class ConfigError(SeasonFitError):
    """Configuration-related errors (invalid/missing options, schema issues)."""


class DataIOError(SeasonFitError):
    """Data loading/saving errors (files, formats, missing columns)."""


class ConvergenceFailure(SeasonFitError):
    """The optimizer terminated without meeting the convergence tolerance.

    The best-effort result is attached so callers can inspect it or retry
    with different priors, a laxer tolerance or more iterations.
    """

    def __init__(self, message: str, result: FitResult) -> None:
        super().__init__(message)
        self.result = result


class DivergedError(ConvergenceFailure):
    """Chi-square could not be improved across damping escalations."""


class MaxIterationsError(ConvergenceFailure):
    """Tolerance was not met within the iteration budget."""


class UnknownSolverStatusError(SeasonFitError):
    """Unexpected status code from the solver machinery. Always fatal."""


__all__ = [
    "ConfigError",
    "ConvergenceFailure",
    "DataIOError",
    "DivergedError",
    "InputValidationError",
    "MaxIterationsError",
    "SeasonFitError",
    "UnknownSolverStatusError",
]
