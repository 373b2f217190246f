"""Logistic double-sigmoid model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from scipy.special import expit

from seasonfit.core.models.base import DoubleSigmoid
from seasonfit.core.models.registry import ModelName, register_model

if TYPE_CHECKING:
    from seasonfit.core.shared.typing import FloatArray


@register_model(ModelName.LOGISTIC)
class Logistic(DoubleSigmoid):
    """Ramp S(x) = amp / (1 + exp(-(x - start) * shape)).

    Evaluated through ``expit`` so that steep slopes saturate to 0 and
    ``amp`` instead of overflowing.
    """

    def _ramp(self, x: FloatArray, amp: float, start: float, shape: float) -> FloatArray:
        return amp * expit((x - start) * shape)

    def _ramp_derivatives(
        self, x: FloatArray, amp: float, start: float, shape: float
    ) -> tuple[FloatArray, FloatArray, FloatArray]:
        # e / (1 + e)**2 == s * (1 - s), finite for any argument
        s = expit((x - start) * shape)
        slope = s * (1.0 - s)
        d_amp = s
        d_start = -amp * shape * slope
        d_shape = amp * (x - start) * slope
        return d_amp, d_start, d_shape
