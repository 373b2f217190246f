"""Cumulative-Gaussian double-sigmoid model."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy.special import erf

from seasonfit.core.models.base import DoubleSigmoid
from seasonfit.core.models.registry import ModelName, register_model

if TYPE_CHECKING:
    from seasonfit.core.shared.typing import FloatArray

_SQRT2 = np.sqrt(2.0)
_INV_SQRT_2PI = 1.0 / np.sqrt(2.0 * np.pi)


@register_model(ModelName.GAUSSIAN)
class Gaussian(DoubleSigmoid):
    """Ramp S(x) = amp * Phi((x - centre) / spread).

    Phi is the standard normal CDF, so ``centre`` is the half-rise point and
    ``spread`` the standard deviation of the transition.
    """

    def _ramp(self, x: FloatArray, amp: float, centre: float, spread: float) -> FloatArray:
        z = (x - centre) / spread
        return amp * 0.5 * (1.0 + erf(z / _SQRT2))

    def _ramp_derivatives(
        self, x: FloatArray, amp: float, centre: float, spread: float
    ) -> tuple[FloatArray, FloatArray, FloatArray]:
        z = (x - centre) / spread
        pdf = _INV_SQRT_2PI * np.exp(-0.5 * z * z)
        d_amp = 0.5 * (1.0 + erf(z / _SQRT2))
        d_centre = -amp * pdf / spread
        d_spread = -amp * pdf * z / spread
        return d_amp, d_centre, d_spread
