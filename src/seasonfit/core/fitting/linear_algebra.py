"""Linear algebra utilities for the Marquardt optimizer.

This module encapsulates the normal-equation assembly and the damped solve
of each iteration. Parameters whose Jacobian column is identically zero
(for example a raised-sine window that contains no sample) carry no
information; they are left out of the solve and receive a zero update.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
import scipy.linalg


class SolveStatus(Enum):
    """Outcome of one damped normal-equation solve."""

    OK = "ok"
    SINGULAR = "singular"
    NONFINITE = "nonfinite"


class LinearAlgebraHelper:
    """Helper class for linear algebra operations of the Marquardt scheme."""

    @staticmethod
    def normal_equations(
        jac: np.ndarray, weights: np.ndarray, residuals: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        """Assemble ``alpha = J^T W J`` and ``beta = J^T W r``.

        Args:
            jac: Jacobian of shape (n_points, n_params)
            weights: Sample weights of shape (n_points,)
            residuals: ``y - f(x)`` of shape (n_points,)

        Returns
        -------
            Tuple of (alpha, beta) with shapes (n_params, n_params), (n_params,)
        """
        weighted = jac * weights[:, np.newaxis]
        alpha = jac.T @ weighted
        beta = weighted.T @ residuals
        return alpha, beta

    @staticmethod
    def active_parameters(alpha: np.ndarray) -> np.ndarray:
        """Mask of parameters with a non-vanishing curvature diagonal."""
        diag = np.diag(alpha)
        return np.isfinite(diag) & (diag > 0)

    @staticmethod
    def solve_damped(
        alpha: np.ndarray, beta: np.ndarray, lam: float
    ) -> tuple[np.ndarray, SolveStatus]:
        """Solve ``(alpha + lam * diag(alpha)) delta = beta``.

        Returns
        -------
            Tuple of (delta, status). ``delta`` is zero unless status is OK.
        """
        delta = np.zeros_like(beta)
        if not (np.all(np.isfinite(alpha)) and np.all(np.isfinite(beta))):
            return delta, SolveStatus.NONFINITE

        active = LinearAlgebraHelper.active_parameters(alpha)
        if not active.any():
            return delta, SolveStatus.SINGULAR

        sub = alpha[np.ix_(active, active)]
        damped = sub + lam * np.diag(np.diag(sub))
        try:
            solution = scipy.linalg.solve(damped, beta[active], assume_a="sym")
        except np.linalg.LinAlgError:
            return delta, SolveStatus.SINGULAR

        if not np.all(np.isfinite(solution)):
            return delta, SolveStatus.NONFINITE
        delta[active] = solution
        return delta, SolveStatus.OK

    @staticmethod
    def covariance(alpha: np.ndarray) -> np.ndarray:
        """Unscaled parameter covariance ``alpha^-1``.

        Rows and columns of inactive parameters, and everything when the
        matrix is singular, are NaN.
        """
        n = alpha.shape[0]
        cov = np.full((n, n), np.nan)
        if not np.all(np.isfinite(alpha)):
            return cov
        active = LinearAlgebraHelper.active_parameters(alpha)
        if not active.any():
            return cov
        sub = alpha[np.ix_(active, active)].astype(np.float64)
        try:
            inv = scipy.linalg.inv(sub)
        except np.linalg.LinAlgError:
            return cov
        cov[np.ix_(active, active)] = inv
        return cov


__all__ = ["LinearAlgebraHelper", "SolveStatus"]
