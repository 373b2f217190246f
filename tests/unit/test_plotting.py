"""Headless tests for curve figures."""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from seasonfit.core.domain.series import ObservationSeries
from seasonfit.core.fitting.optimizer import fit_series
from seasonfit.plotting import (
    CurveComponents,
    MatplotlibRenderer,
    Renderer,
    build_components,
    make_curve_figure,
    plotting_grid,
)


def test_plotting_grid_spans_data():
    grid = plotting_grid([3.0, 1.0, 7.0], n_points=5)
    np.testing.assert_allclose(grid, [1.0, 2.5, 4.0, 5.5, 7.0])


class TestBuildComponents:
    """Tests for renderer payloads."""

    def test_curve_only(self, model_name, true_params, x20):
        components = build_components(model_name, true_params, x20)
        assert components.model is model_name
        assert not components.has_points
        np.testing.assert_allclose(
            components.value, components.base + components.component1 + components.component2
        )

    def test_with_series_and_result(self, noisy_logistic):
        x, y, truth = noisy_logistic
        weights = np.ones_like(y)
        weights[0] = 0.0
        series = ObservationSeries.from_arrays(x, y, weights)
        result = fit_series(x, y, truth, "logistic", weights)
        components = build_components(
            "logistic", result.params, plotting_grid(x), series=series, result=result, title="pixel"
        )
        assert components.has_points
        assert components.excluded is not None
        assert components.excluded.sum() == 1
        assert components.iterations == result.iterations
        assert components.chisq == pytest.approx(result.chisq)


class TestMatplotlibRenderer:
    """Tests for PNG output."""

    def test_satisfies_protocol(self):
        assert isinstance(MatplotlibRenderer(), Renderer)

    def test_writes_png(self, tmp_path, noisy_logistic):
        x, y, truth = noisy_logistic
        series = ObservationSeries.from_arrays(x, y)
        components = build_components("logistic", truth, plotting_grid(x), series=series)
        path = MatplotlibRenderer(dpi=50).render(components, tmp_path / "figs" / "fit.png")
        assert path.exists()
        assert path.read_bytes()[:4] == b"\x89PNG"

    def test_figure_has_axes(self, model_name, true_params, x20):
        components = build_components(model_name, true_params, x20)
        assert isinstance(components, CurveComponents)
        figure = make_curve_figure(components)
        assert len(figure.axes) == 1
        plt.close(figure)
