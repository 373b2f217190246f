"""Shared typing aliases used across SeasonFit."""

from typing import Literal

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64 | np.float32]
IntArray = npt.NDArray[np.int_]

Precision = Literal["single", "double"]
DerivativeMode = Literal["analytic", "numeric"]
