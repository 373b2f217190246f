"""Jacobian providers for the Marquardt optimizer.

The analytic Jacobian comes straight from the model. The numeric Jacobian
approximates each column with a central finite difference of the model
value, which is slower and less precise but needs no derivative code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.constants import FINITE_DIFF_STEP, FINITE_DIFF_STEP_SINGLE, N_PARAMS
from seasonfit.core.shared.exceptions import InputValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from seasonfit.core.models.registry import Model
    from seasonfit.core.shared.typing import DerivativeMode, FloatArray


def numeric_jacobian(model: Model, x: FloatArray, params: FloatArray) -> FloatArray:
    """Approximate the ``(n, 7)`` Jacobian with central differences.

    Steps are relative to the parameter magnitude (absolute below 1), and
    coarser in single precision where round-off dominates.
    """
    x = np.asarray(x)
    rel_step = FINITE_DIFF_STEP_SINGLE if x.dtype == np.float32 else FINITE_DIFF_STEP
    # Differencing is done in double precision, then cast back
    p = np.asarray(params, dtype=np.float64)
    x64 = x.astype(np.float64)
    jac = np.empty((x.size, N_PARAMS), dtype=np.float64)
    for j in range(N_PARAMS):
        h = rel_step * max(abs(p[j]), 1.0)
        p_hi = p.copy()
        p_lo = p.copy()
        p_hi[j] += h
        p_lo[j] -= h
        f_hi = model.evaluate(x64, p_hi)[0].ravel()
        f_lo = model.evaluate(x64, p_lo)[0].ravel()
        jac[:, j] = (f_hi - f_lo) / (2.0 * h)
    return jac.astype(x.dtype, copy=False)


def select_jacobian(
    model: Model, mode: DerivativeMode
) -> Callable[[FloatArray, FloatArray], FloatArray]:
    """Return the Jacobian callable for a derivative mode."""
    if mode == "analytic":
        return model.jacobian
    if mode == "numeric":
        return lambda x, params: numeric_jacobian(model, x, params)
    msg = f"Unknown derivative mode '{mode}'. Available: analytic, numeric"
    raise InputValidationError(msg)


__all__ = ["numeric_jacobian", "select_jacobian"]
