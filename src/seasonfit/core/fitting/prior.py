"""Heuristic prior-parameter estimation for double-sigmoid fits.

The optimizer only converges from a reasonable starting point, so the
prior is derived from the data itself. The series is split at half of its
value range into three phases:

    before   low samples preceding the first high sample
    during   samples at or above the threshold (the growing season)
    after    low samples following the last high sample

The base level and both amplitudes come from the phase means. The four
phase parameters come from the samples bounding the transitions, mapped
differently for each model.

The threshold is ``(max(y) - min(y)) / 2``: half the range, not the
mid-value between min and max. Series with a large offset can therefore
put every sample in the "during" phase.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from seasonfit.core.domain.series import ObservationSeries
from seasonfit.core.models.registry import ModelName, get_model, resolve_model_name
from seasonfit.core.shared.exceptions import InputValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import ArrayLike

    from seasonfit.core.shared.typing import FloatArray

    Phases = tuple[float, float, float, float]
    PhaseMapper = Callable[[FloatArray, FloatArray, "SeasonSegments"], Phases]

logger = logging.getLogger(__name__)

PHASE_MAPPERS: dict[ModelName, PhaseMapper] = {}


@dataclass(frozen=True, slots=True)
class SeasonSegments:
    """Indices bounding the before / during / after phases of a series."""

    midpoint: float
    first_before: int
    last_before: int
    first_during: int
    last_during: int
    first_max: int
    last_max: int
    first_after: int
    last_after: int

    def mean_before(self, y: FloatArray) -> float:
        return _range_mean(y, self.first_before, self.last_before)

    def mean_during(self, y: FloatArray) -> float:
        return _range_mean(y, self.first_during, self.last_during)

    def mean_after(self, y: FloatArray) -> float:
        return _range_mean(y, self.first_after, self.last_after)


@dataclass(frozen=True, slots=True)
class PriorEstimate:
    """Prior parameter vector together with the segmentation it came from."""

    model: ModelName
    params: FloatArray
    segments: SeasonSegments
    mean_before: float
    mean_during: float
    mean_after: float


def _range_mean(y: FloatArray, first: int, last: int) -> float:
    # Contiguous range: samples failing the phase predicate in between count too
    return float(np.mean(y[first : last + 1]))


def _bounds(mask: np.ndarray, phase: str) -> tuple[int, int]:
    indices = np.flatnonzero(mask)
    if indices.size == 0:
        msg = f"Cannot estimate prior: no samples in the '{phase}' phase"
        raise InputValidationError(msg)
    return int(indices[0]), int(indices[-1])


def segment_season(x: FloatArray, y: FloatArray) -> SeasonSegments:
    """Split a series into before / during / after phases.

    Raises
    ------
        InputValidationError: If any of the three phases is empty.
    """
    min_y = float(np.min(y))
    max_y = float(np.max(y))
    midpoint = (max_y - min_y) / 2.0

    first_during, last_during = _bounds(y >= midpoint, "during")
    first_before, last_before = _bounds((x < x[first_during]) & (y <= midpoint), "before")
    first_after, last_after = _bounds((x > x[last_during]) & (y <= midpoint), "after")

    during = np.flatnonzero(y >= midpoint)
    peak = np.max(y[during])
    at_peak = during[y[during] == peak]

    return SeasonSegments(
        midpoint=midpoint,
        first_before=first_before,
        last_before=last_before,
        first_during=first_during,
        last_during=last_during,
        first_max=int(at_peak[0]),
        last_max=int(at_peak[-1]),
        first_after=first_after,
        last_after=last_after,
    )


def register_phases(name: ModelName) -> Callable[[PhaseMapper], PhaseMapper]:
    """Register the phase-parameter mapping of one model."""

    def decorator(fn: PhaseMapper) -> PhaseMapper:
        PHASE_MAPPERS[name] = fn
        return fn

    return decorator


def _slope(x: FloatArray, y: FloatArray, i: int, j: int) -> float:
    gap = x[j] - x[i]
    if gap == 0:
        msg = f"Cannot estimate prior: duplicate abscissa {x[i]} at a phase boundary"
        raise InputValidationError(msg)
    return float((y[j] - y[i]) / gap)


def _transition_points(x: FloatArray, y: FloatArray, seg: SeasonSegments) -> Phases:
    """Centres and slope magnitudes of the rising and falling transitions.

    Slopes are taken as magnitudes so that both ramps run left to right;
    the sign of the falling transition is carried by its amplitude.
    """
    rise_centre = float((x[seg.last_before] + x[seg.first_during]) / 2.0)
    rise_slope = abs(_slope(x, y, seg.last_before, seg.first_during))
    fall_centre = float((x[seg.last_during] + x[seg.first_after]) / 2.0)
    fall_slope = abs(_slope(x, y, seg.last_during, seg.first_after))
    return rise_centre, rise_slope, fall_centre, fall_slope


@register_phases(ModelName.GAUSSIAN)
def _gaussian_phases(x: FloatArray, y: FloatArray, seg: SeasonSegments) -> Phases:
    rise_spread = (x[seg.first_max] - x[seg.last_before]) / 3.0
    fall_spread = (x[seg.first_after] - x[seg.last_max]) / 3.0
    return (
        float(x[seg.first_during]),
        float(rise_spread),
        float(x[seg.last_during]),
        float(fall_spread),
    )


@register_phases(ModelName.TANH)
def _tanh_phases(x: FloatArray, y: FloatArray, seg: SeasonSegments) -> Phases:
    return _transition_points(x, y, seg)


@register_phases(ModelName.LOGISTIC)
def _logistic_phases(x: FloatArray, y: FloatArray, seg: SeasonSegments) -> Phases:
    rise_centre, rise_slope, fall_centre, fall_slope = _transition_points(x, y, seg)
    return rise_centre, 2.0 * rise_slope, fall_centre, 2.0 * fall_slope


@register_phases(ModelName.SINE)
def _sine_phases(x: FloatArray, y: FloatArray, seg: SeasonSegments) -> Phases:
    return (
        float(x[seg.last_before]),
        float(x[seg.first_max]),
        float(x[seg.last_max]),
        float(x[seg.first_after]),
    )


def estimate_prior(x: ArrayLike, y: ArrayLike, model: ModelName | str) -> PriorEstimate:
    """Derive a prior parameter vector from raw data.

    Args:
        x: Abscissas (at least 10 samples, increasing)
        y: Observations
        model: Model identifier; validated before any computation

    Returns
    -------
        PriorEstimate with the seven-element prior and the segmentation

    Raises
    ------
        InputValidationError: Unknown model, malformed arrays, or a series
            missing one of the three phases
    """
    name = resolve_model_name(model)
    get_model(name)
    try:
        mapper = PHASE_MAPPERS[name]
    except KeyError as exc:
        msg = f"No prior estimator registered for model '{name}'"
        raise InputValidationError(msg) from exc

    series = ObservationSeries.from_arrays(x, y).astype("double")
    x_arr, y_arr = series.x, series.y

    seg = segment_season(x_arr, y_arr)
    mean_before = seg.mean_before(y_arr)
    mean_during = seg.mean_during(y_arr)
    mean_after = seg.mean_after(y_arr)

    p2, p3, p5, p6 = mapper(x_arr, y_arr, seg)
    params = np.array(
        [
            mean_before,
            mean_during - mean_before,
            p2,
            p3,
            mean_after - mean_during,
            p5,
            p6,
        ],
        dtype=np.float64,
    )
    logger.debug("%s prior: %s", name, np.array2string(params, precision=4))
    return PriorEstimate(
        model=name,
        params=params,
        segments=seg,
        mean_before=mean_before,
        mean_during=mean_during,
        mean_after=mean_after,
    )


__all__ = [
    "PHASE_MAPPERS",
    "PriorEstimate",
    "SeasonSegments",
    "estimate_prior",
    "register_phases",
    "segment_season",
]
