"""Observation series domain model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.constants import MIN_SAMPLES
from seasonfit.core.shared.exceptions import InputValidationError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from seasonfit.core.shared.typing import FloatArray, Precision

_DTYPES = {"single": np.float32, "double": np.float64}


def precision_dtype(precision: Precision) -> type[np.floating]:
    """Return the numpy dtype for a precision mode."""
    try:
        return _DTYPES[precision]
    except KeyError as exc:
        msg = f"Unknown precision '{precision}'. Available: single, double"
        raise InputValidationError(msg) from exc


def _as_vector(values: ArrayLike, name: str) -> FloatArray:
    arr = np.asarray(values)
    if arr.ndim != 1:
        msg = f"'{name}' must be a 1-D array, got shape {arr.shape}"
        raise InputValidationError(msg)
    if not (np.issubdtype(arr.dtype, np.number) or arr.dtype == np.bool_):
        msg = f"'{name}' must be numeric, got dtype {arr.dtype}"
        raise InputValidationError(msg)
    if np.issubdtype(arr.dtype, np.complexfloating):
        msg = f"'{name}' must be real-valued"
        raise InputValidationError(msg)
    if arr.dtype not in (np.float32, np.float64):
        arr = arr.astype(np.float64)
    return arr


@dataclass(frozen=True, slots=True)
class ObservationSeries:
    """Ordered samples ``(x_i, y_i, w_i)`` to fit.

    A weight of zero excludes the sample from the fit objective. Arrays are
    private read-only copies, so the series cannot change during a fit.
    """

    x: FloatArray
    y: FloatArray
    weights: FloatArray

    @classmethod
    def from_arrays(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        weights: ArrayLike | None = None,
    ) -> ObservationSeries:
        """Validate and copy caller arrays into a new series.

        The common dtype of ``x`` and ``y`` is kept (float32 stays float32);
        integer input is promoted to float64.
        """
        x_arr = _as_vector(x, "x")
        y_arr = _as_vector(y, "y")
        if x_arr.size != y_arr.size:
            msg = f"x and y must have the same length, got {x_arr.size} and {y_arr.size}"
            raise InputValidationError(msg)
        if x_arr.size < MIN_SAMPLES:
            msg = f"At least {MIN_SAMPLES} samples are required, got {x_arr.size}"
            raise InputValidationError(msg)

        dtype = np.result_type(x_arr, y_arr)
        if weights is None:
            w_arr = np.ones(x_arr.size, dtype=dtype)
        else:
            w_arr = _as_vector(weights, "weights")
            if w_arr.size != x_arr.size:
                msg = (
                    f"weights must have the same length as x, got {w_arr.size} "
                    f"and {x_arr.size}"
                )
                raise InputValidationError(msg)
            if not np.all(np.isfinite(w_arr)) or np.any(w_arr < 0):
                msg = "weights must be finite and non-negative"
                raise InputValidationError(msg)

        if not np.all(np.isfinite(x_arr)):
            msg = "x must contain only finite values"
            raise InputValidationError(msg)
        # Excluded samples may carry missing values
        if not np.all(np.isfinite(y_arr[w_arr > 0])):
            msg = "y must be finite wherever the weight is non-zero"
            raise InputValidationError(msg)

        return cls._frozen(x_arr, y_arr, w_arr, dtype)

    @classmethod
    def _frozen(
        cls, x: FloatArray, y: FloatArray, weights: FloatArray, dtype: np.dtype
    ) -> ObservationSeries:
        arrays = []
        for arr in (x, y, weights):
            copy = np.array(arr, dtype=dtype, copy=True)
            copy.flags.writeable = False
            arrays.append(copy)
        return cls(*arrays)

    def astype(self, precision: Precision) -> ObservationSeries:
        """Return a copy of the series cast to single or double precision."""
        dtype = np.dtype(precision_dtype(precision))
        return self._frozen(self.x, self.y, self.weights, dtype)

    @property
    def dtype(self) -> np.dtype:
        return self.x.dtype

    @property
    def size(self) -> int:
        return int(self.x.size)

    @property
    def n_active(self) -> int:
        """Number of samples contributing to the objective (non-zero weight)."""
        return int(np.count_nonzero(self.weights))

    def __len__(self) -> int:
        return self.size


__all__ = ["ObservationSeries", "precision_dtype"]
