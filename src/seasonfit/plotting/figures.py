"""Matplotlib renderer for fitted double-S curves."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib as mpl

mpl.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

if TYPE_CHECKING:
    from pathlib import Path

    from matplotlib.figure import Figure

    from seasonfit.plotting.components import CurveComponents


def make_curve_figure(components: CurveComponents) -> Figure:
    """Create a figure of the fitted curve, its components and the data.

    Args:
        components: Payload produced by ``build_components``

    Returns:
        Matplotlib Figure object
    """
    c = components
    fig, ax = plt.subplots(figsize=(8, 6))

    if c.has_points:
        if c.excluded is not None and c.excluded.any():
            kept = ~c.excluded
            ax.plot(c.points_x[kept], c.points_y[kept], "o", color="0.3", markersize=5, label="data")
            ax.plot(
                c.points_x[c.excluded],
                c.points_y[c.excluded],
                "x",
                color="0.6",
                markersize=5,
                label="excluded",
            )
        else:
            ax.plot(c.points_x, c.points_y, "o", color="0.3", markersize=5, label="data")

    ax.plot(c.x, c.value, "-", color="tab:blue", linewidth=2, label=f"{c.model.value} fit")
    ax.plot(c.x, c.base + c.component1, "--", color="tab:green", alpha=0.8, label="rise")
    ax.plot(c.x, c.base + c.component2, "--", color="tab:red", alpha=0.8, label="fall")
    ax.axhline(y=c.base, color="gray", linestyle=":", alpha=0.5)

    subtitle = []
    if c.iterations is not None:
        subtitle.append(f"{c.iterations} iterations")
    if c.chisq is not None:
        subtitle.append(f"$\\chi^2$ = {c.chisq:.4g}")
    title = c.title or c.model.value
    if subtitle:
        title = f"{title}\n{', '.join(subtitle)}"

    ax.set_title(title, fontsize=12, fontweight="bold")
    ax.set_xlabel("x", fontsize=11)
    ax.set_ylabel("y", fontsize=11)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best", fontsize=9)
    plt.tight_layout()
    return fig


class MatplotlibRenderer:
    """Renderer writing PNG (or any matplotlib-supported format) files."""

    def __init__(self, dpi: int = 150) -> None:
        self.dpi = dpi

    def render(self, components: CurveComponents, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        fig = make_curve_figure(components)
        try:
            fig.savefig(path, dpi=self.dpi)
        finally:
            plt.close(fig)
        return path


__all__ = ["MatplotlibRenderer", "make_curve_figure"]
