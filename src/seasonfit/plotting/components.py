"""Numeric payload handed to figure renderers.

The core never draws anything. ``build_components`` evaluates a fitted
model on a plotting grid and packs everything a renderer needs into a
``CurveComponents``; any object implementing ``Renderer`` can turn it into
a file.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

from seasonfit.core.models.registry import ModelName, get_model

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from seasonfit.core.domain.series import ObservationSeries
    from seasonfit.core.fitting.results import FitResult
    from seasonfit.core.shared.typing import FloatArray

DEFAULT_GRID_POINTS = 400


@dataclass(frozen=True)
class CurveComponents:
    """Everything needed to draw one fitted double-S curve.

    Attributes
    ----------
        model: Model the curve was evaluated with
        x: Plotting abscissas
        value: Combined curve ``p0 + component1 + component2``
        component1: Rising S-component (without base level)
        component2: Falling S-component (without base level)
        base: Base level ``p0``
        points_x: Observed abscissas, if raw points are shown
        points_y: Observed values, if raw points are shown
        excluded: Mask of observed points carrying a zero weight
        iterations: Optimizer iterations, when drawn from a fit
        chisq: Final chi-square, when drawn from a fit
        title: Figure title
    """

    model: ModelName
    x: FloatArray
    value: FloatArray
    component1: FloatArray
    component2: FloatArray
    base: float
    points_x: FloatArray | None = None
    points_y: FloatArray | None = None
    excluded: np.ndarray | None = None
    iterations: int | None = None
    chisq: float | None = None
    title: str = ""

    @property
    def has_points(self) -> bool:
        return self.points_x is not None and self.points_y is not None


@runtime_checkable
class Renderer(Protocol):
    """Protocol for figure renderers."""

    def render(self, components: CurveComponents, path: Path) -> Path:
        """Draw ``components`` to ``path`` and return the written path."""
        ...


def plotting_grid(x: ArrayLike, n_points: int = DEFAULT_GRID_POINTS) -> FloatArray:
    """Evenly spaced abscissas spanning the range of ``x``."""
    x_arr = np.asarray(x, dtype=np.float64)
    return np.linspace(float(np.min(x_arr)), float(np.max(x_arr)), n_points)


def build_components(
    model: ModelName | str,
    params: ArrayLike,
    x: ArrayLike,
    *,
    series: ObservationSeries | None = None,
    result: FitResult | None = None,
    title: str = "",
) -> CurveComponents:
    """Evaluate ``model`` at ``x`` and collect the renderer payload.

    Args:
        model: Model identifier
        params: Seven-element parameter vector
        x: Abscissas at which the curve is drawn
        series: Observations to overlay as raw points
        result: Fit result providing iterations and chi-square
        title: Figure title
    """
    resolved = get_model(model)
    grid = np.asarray(x, dtype=np.float64)
    value, comp1, comp2 = resolved.evaluate(grid, params)

    points_x = points_y = excluded = None
    if series is not None:
        points_x = np.asarray(series.x, dtype=np.float64)
        points_y = np.asarray(series.y, dtype=np.float64)
        excluded = np.asarray(series.weights) == 0

    return CurveComponents(
        model=resolved.name,
        x=grid,
        value=value,
        component1=comp1,
        component2=comp2,
        base=float(np.asarray(params, dtype=np.float64)[0]),
        points_x=points_x,
        points_y=points_y,
        excluded=excluded,
        iterations=None if result is None else result.iterations,
        chisq=None if result is None else result.chisq,
        title=title,
    )


__all__ = [
    "DEFAULT_GRID_POINTS",
    "CurveComponents",
    "Renderer",
    "build_components",
    "plotting_grid",
]
