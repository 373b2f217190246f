"""UI tables for displaying fitted and prior parameters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
from rich import box
from rich.table import Table

from seasonfit.core.constants import PARAMETER_NAMES
from seasonfit.ui.console import console

if TYPE_CHECKING:
    from seasonfit.core.fitting.prior import PriorEstimate
    from seasonfit.core.fitting.results import FitResult
    from seasonfit.core.results.statistics import ResidualStatistics

__all__ = [
    "create_table",
    "print_fit_table",
    "print_prior_table",
    "print_summary",
]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a standard table with consistent styling."""
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value table."""
    table = create_table(title, show_header=False)
    table.add_column("Item", style="metric")
    table.add_column("Value", style="value")

    for key, value in items.items():
        table.add_row(key, str(value))

    console.print(table)


def _format_value(value: float) -> str:
    return "n/a" if not np.isfinite(value) else f"{value:.6g}"


def print_fit_table(
    result: FitResult,
    title: str | None = None,
    residuals: ResidualStatistics | None = None,
) -> None:
    """Print prior, posterior and error of every parameter of a fit.

    When ``residuals`` is given, the statistics summary also lists the RMS
    and largest absolute residual over the active samples.
    """
    table = create_table(title or f"{result.model.value} fit ({result.message})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Parameter", style="param")
    table.add_column("Prior", justify="right")
    table.add_column("Posterior", style="value", justify="right")
    table.add_column("Error", justify="right")

    for index, name in enumerate(PARAMETER_NAMES):
        table.add_row(
            f"p{index}",
            name,
            _format_value(float(result.prior[index])),
            _format_value(float(result.params[index])),
            _format_value(float(result.param_errors[index])),
        )

    console.print(table)
    summary: dict[str, Any] = {
        "Status": result.message,
        "Iterations": result.iterations,
        "Chi-square": f"{result.initial_chisq:.6g} → {result.chisq:.6g}",
        "Standard error": f"{result.stderr:.6g}",
        "Active samples": result.n_active,
    }
    if residuals is not None:
        summary["RMS residual"] = _format_value(residuals.rms)
        summary["Max |residual|"] = _format_value(residuals.max_abs)
    print_summary(summary, title="Fit statistics")


def print_prior_table(prior: PriorEstimate) -> None:
    """Print an estimated prior together with the phase boundaries it used."""
    table = create_table(f"{prior.model.value} prior")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Parameter", style="param")
    table.add_column("Value", style="value", justify="right")
    for index, name in enumerate(PARAMETER_NAMES):
        table.add_row(f"p{index}", name, _format_value(float(prior.params[index])))
    console.print(table)

    seg = prior.segments
    print_summary(
        {
            "Threshold": f"{seg.midpoint:.6g}",
            "Before": f"samples {seg.first_before}..{seg.last_before} (mean {prior.mean_before:.6g})",
            "During": f"samples {seg.first_during}..{seg.last_during} (mean {prior.mean_during:.6g})",
            "Peak": f"samples {seg.first_max}..{seg.last_max}",
            "After": f"samples {seg.first_after}..{seg.last_after} (mean {prior.mean_after:.6g})",
        },
        title="Season phases",
    )
