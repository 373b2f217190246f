"""Parameter vector helpers for the seven-parameter double-sigmoid models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.constants import N_PARAMS, PARAMETER_NAMES
from seasonfit.core.shared.exceptions import InputValidationError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, DTypeLike

    from seasonfit.core.shared.typing import FloatArray


def as_parameter_vector(params: ArrayLike, dtype: DTypeLike = np.float64) -> FloatArray:
    """Validate a parameter vector and return it as a fresh float array.

    Raises
    ------
        InputValidationError: If the vector does not hold exactly seven
            finite numbers.
    """
    try:
        arr = np.array(params, dtype=dtype, copy=True)
    except (TypeError, ValueError) as exc:
        msg = f"Parameter vector must be numeric: {exc}"
        raise InputValidationError(msg) from exc
    if arr.shape != (N_PARAMS,):
        msg = f"Parameter vector must have exactly {N_PARAMS} elements, got shape {arr.shape}"
        raise InputValidationError(msg)
    if not np.all(np.isfinite(arr)):
        msg = "Parameter vector must contain only finite values"
        raise InputValidationError(msg)
    return arr


def parameters_to_dict(params: ArrayLike) -> dict[str, float]:
    """Map a parameter vector to ``{name: value}`` using ``PARAMETER_NAMES``."""
    values = as_parameter_vector(params)
    return {name: float(value) for name, value in zip(PARAMETER_NAMES, values, strict=True)}


def parameters_from_dict(values: dict[str, float]) -> FloatArray:
    """Inverse of ``parameters_to_dict``; missing names are an error."""
    missing = [name for name in PARAMETER_NAMES if name not in values]
    if missing:
        msg = f"Missing parameters: {', '.join(missing)}"
        raise InputValidationError(msg)
    return as_parameter_vector([values[name] for name in PARAMETER_NAMES])


__all__ = ["as_parameter_vector", "parameters_from_dict", "parameters_to_dict"]
