"""Base class for double-sigmoid models.

Every model has the form ``p0 + S(x; p1, p2, p3) + S(x; p4, p5, p6)`` where
``S`` is a sigmoid-like ramp from 0 to its amplitude. Subclasses only
provide the single-ramp function and its three partial derivatives; the
base class assembles the value, the two components and the ``(n, 7)``
Jacobian.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.constants import N_PARAMS
from seasonfit.core.domain.parameters import as_parameter_vector

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from seasonfit.core.models.registry import ModelName
    from seasonfit.core.shared.typing import FloatArray


class DoubleSigmoid:
    """Base class for the seven-parameter double-S models."""

    name: ModelName

    def _ramp(self, x: FloatArray, amp: float, start: float, shape: float) -> FloatArray:
        """Evaluate one S-component."""
        raise NotImplementedError

    def _ramp_derivatives(
        self, x: FloatArray, amp: float, start: float, shape: float
    ) -> tuple[FloatArray, FloatArray, FloatArray]:
        """Return the partials of one S-component w.r.t. (amp, start, shape)."""
        raise NotImplementedError

    @staticmethod
    def _prepare(x: ArrayLike, params: ArrayLike) -> tuple[FloatArray, FloatArray]:
        x_arr = np.asarray(x)
        if x_arr.dtype not in (np.float32, np.float64):
            x_arr = x_arr.astype(np.float64)
        return x_arr, as_parameter_vector(params, dtype=x_arr.dtype)

    def components(
        self, x: ArrayLike, params: ArrayLike
    ) -> tuple[FloatArray, FloatArray]:
        """Return the rising and falling components without the base level."""
        x_arr, p = self._prepare(x, params)
        with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
            comp1 = self._ramp(x_arr, p[1], p[2], p[3])
            comp2 = self._ramp(x_arr, p[4], p[5], p[6])
        return comp1.astype(x_arr.dtype, copy=False), comp2.astype(x_arr.dtype, copy=False)

    def evaluate(
        self, x: ArrayLike, params: ArrayLike
    ) -> tuple[FloatArray, FloatArray, FloatArray]:
        """Evaluate the model.

        Args:
            x: Abscissas (any shape; float32 input stays float32)
            params: Seven-element parameter vector

        Returns
        -------
            ``(value, component1, component2)``, each shaped like ``x``
        """
        x_arr, p = self._prepare(x, params)
        comp1, comp2 = self.components(x_arr, p)
        value = p[0] + comp1 + comp2
        return value, comp1, comp2

    def __call__(self, x: ArrayLike, params: ArrayLike) -> FloatArray:
        return self.evaluate(x, params)[0]

    def jacobian(self, x: ArrayLike, params: ArrayLike) -> FloatArray:
        """Analytic Jacobian of the model value.

        Returns
        -------
            Array of shape ``(x.size, 7)``; column ``j`` is ``d value / d p_j``
        """
        x_arr, p = self._prepare(x, params)
        x_flat = x_arr.ravel()
        jac = np.empty((x_flat.size, N_PARAMS), dtype=x_arr.dtype)
        jac[:, 0] = 1.0
        with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
            jac[:, 1], jac[:, 2], jac[:, 3] = self._ramp_derivatives(x_flat, p[1], p[2], p[3])
            jac[:, 4], jac[:, 5], jac[:, 6] = self._ramp_derivatives(x_flat, p[4], p[5], p[6])
        return jac

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def piecewise_window(
    x: FloatArray,
    start: float,
    end: float,
    below: float,
    inside: FloatArray,
    above: float,
) -> FloatArray:
    """Select values over three disjoint intervals of a phase window.

    ``below`` applies for ``x <= start``, ``above`` for ``x >= end`` and
    ``inside`` (already evaluated at every ``x``) strictly in between.
    ``above`` wins when the window is empty or inverted.
    """
    out = np.where(x <= start, below, inside)
    return np.where(x >= end, above, out)


__all__ = ["DoubleSigmoid", "piecewise_window"]
