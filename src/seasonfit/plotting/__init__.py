"""Plotting module for SeasonFit.

``components`` builds the numeric payload of a fitted curve; ``figures``
renders it with matplotlib.
"""

from seasonfit.plotting.components import (
    CurveComponents,
    Renderer,
    build_components,
    plotting_grid,
)
from seasonfit.plotting.figures import MatplotlibRenderer, make_curve_figure

__all__ = [
    "CurveComponents",
    "MatplotlibRenderer",
    "Renderer",
    "build_components",
    "make_curve_figure",
    "plotting_grid",
]
