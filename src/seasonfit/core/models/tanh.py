"""Hyperbolic-tangent double-sigmoid model."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.models.base import DoubleSigmoid
from seasonfit.core.models.registry import ModelName, register_model

if TYPE_CHECKING:
    from seasonfit.core.shared.typing import FloatArray


@register_model(ModelName.TANH)
class HyperbolicTangent(DoubleSigmoid):
    """Ramp S(x) = amp * (tanh((x - start) * shape) + 1) / 2."""

    def _ramp(self, x: FloatArray, amp: float, start: float, shape: float) -> FloatArray:
        return amp * (np.tanh((x - start) * shape) + 1.0) / 2.0

    def _ramp_derivatives(
        self, x: FloatArray, amp: float, start: float, shape: float
    ) -> tuple[FloatArray, FloatArray, FloatArray]:
        arg = (x - start) * shape
        cosh2 = np.cosh(arg) ** 2
        d_amp = (np.tanh(arg) + 1.0) / 2.0
        d_start = -(amp * shape) / (2.0 * cosh2)
        d_shape = (amp * (x - start)) / (2.0 * cosh2)
        return d_amp, d_start, d_shape
