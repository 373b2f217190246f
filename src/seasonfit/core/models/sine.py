"""Raised-sine double-sigmoid model.

Each component is exactly flat outside its phase window: zero for
``x <= start`` and equal to the amplitude for ``x >= end``. Between the two
bounds it follows half a period of a raised sine. Here the two phase
parameters of a component are window bounds, not a centre and a slope.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.models.base import DoubleSigmoid, piecewise_window
from seasonfit.core.models.registry import ModelName, register_model

if TYPE_CHECKING:
    from seasonfit.core.shared.typing import FloatArray


@register_model(ModelName.SINE)
class Sine(DoubleSigmoid):
    """Ramp S(x) = amp * (sin(-pi/2 + pi * (x - start) / (end - start)) + 1) / 2."""

    def _ramp(self, x: FloatArray, amp: float, start: float, end: float) -> FloatArray:
        phase = np.pi * (x - start) / (end - start)
        inside = amp * (np.sin(-np.pi / 2.0 + phase) + 1.0) / 2.0
        return piecewise_window(x, start, end, 0.0, inside, amp)

    def _ramp_derivatives(
        self, x: FloatArray, amp: float, start: float, end: float
    ) -> tuple[FloatArray, FloatArray, FloatArray]:
        phase = np.pi * (x - start) / (end - start)
        sin_phase = np.sin(phase)
        d_amp_in = (1.0 - np.cos(phase)) / 2.0
        d_start_in = (np.pi * amp * (x - end) * sin_phase) / (2.0 * (start - end) ** 2)
        d_end_in = -(np.pi * amp * (x - start) * sin_phase) / (2.0 * (end - start) ** 2)

        d_amp = piecewise_window(x, start, end, 0.0, d_amp_in, 1.0)
        d_start = piecewise_window(x, start, end, 0.0, d_start_in, 0.0)
        d_end = piecewise_window(x, start, end, 0.0, d_end_in, 0.0)
        return d_amp, d_start, d_end
