"""Fit command implementation."""

from __future__ import annotations

import pathlib  # noqa: TC003
import re
from typing import TYPE_CHECKING, Annotated, Any

import typer
from pydantic import ValidationError

from seasonfit.core.domain.config import FitConfig, SeasonFitConfig
from seasonfit.core.models.registry import ModelName  # Required at runtime by Typer
from seasonfit.core.shared.exceptions import ConfigError, SeasonFitError
from seasonfit.io.config import load_config
from seasonfit.io.series import load_series, load_series_groups

if TYPE_CHECKING:
    from seasonfit.core.domain.series import ObservationSeries
    from seasonfit.services.fit.service import SeriesFit


def resolve_config(config: pathlib.Path | None, **overrides: Any) -> SeasonFitConfig:
    """Load the configuration file (or defaults) and apply CLI overrides.

    Overrides set to ``None`` are ignored; the others replace the matching
    ``[fitting]`` option and are validated like file values.
    """
    cfg = load_config(config) if config is not None else SeasonFitConfig()
    updates = {key: value for key, value in overrides.items() if value is not None}
    if updates:
        try:
            cfg.fitting = FitConfig.model_validate({**cfg.fitting.model_dump(), **updates})
        except ValidationError as exc:
            msg = f"Invalid option:\n{exc}"
            raise ConfigError(msg) from exc
    return cfg


def load_input(path: pathlib.Path, cfg: SeasonFitConfig) -> dict[str, ObservationSeries]:
    """Load the series of ``path`` keyed by name, honouring the column mapping."""
    cols = cfg.columns
    if cols.group is not None:
        return load_series_groups(path, cols.group, cols.x, cols.y, cols.weight)
    return {path.stem: load_series(path, cols.x, cols.y, cols.weight)}


def safe_name(name: str) -> str:
    """File-system friendly version of a series name."""
    return re.sub(r"[^\w.-]+", "_", name).strip("_") or "series"


def fit_command(
    series: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Path to the series file (.csv, .tsv, .txt)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    model: Annotated[
        ModelName | None,
        typer.Option(
            "--model",
            "-m",
            help="Double-sigmoid model (default: from config, else logistic)",
            case_sensitive=False,
        ),
    ] = None,
    config: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to TOML configuration file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory for results",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    max_iterations: Annotated[
        int | None,
        typer.Option("--max-iterations", "-n", help="Maximum number of iterations", min=1),
    ] = None,
    tolerance: Annotated[
        float | None,
        typer.Option("--tolerance", "-t", help="Convergence threshold on the chi-square change"),
    ] = None,
    numeric_derivatives: Annotated[
        bool,
        typer.Option(
            "--numeric-derivatives",
            help="Use central finite differences instead of the analytic Jacobian",
        ),
    ] = False,
    single_precision: Annotated[
        bool,
        typer.Option("--single-precision", help="Fit in single (float32) precision"),
    ] = False,
    plot: Annotated[
        bool,
        typer.Option("--plot", "-p", help="Save a figure of every fit"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show per-iteration log output"),
    ] = False,
) -> None:
    """Fit a double-sigmoid model to a seasonal series.

    The starting parameters are estimated from the data, then refined with
    the Marquardt algorithm. Results go to the output directory as JSON and
    CSV.

    Examples
    --------
    Basic usage:
        $ seasonfit fit ndvi.csv --model sine

    Using a configuration file:
        $ seasonfit fit ndvi.csv --config seasonfit.toml --plot
    """
    from seasonfit.services.fit.service import FitService
    from seasonfit.ui import (
        ConsoleReporter,
        Verbosity,
        close_logging,
        error,
        log_dict,
        log_section,
        print_fit_table,
        set_verbosity,
        setup_logging,
        show_error_with_details,
        show_header,
    )

    set_verbosity(Verbosity.VERBOSE if verbose else Verbosity.NORMAL)

    try:
        cfg = resolve_config(
            config,
            model=model,
            max_iterations=max_iterations,
            tolerance=tolerance,
            derivative="numeric" if numeric_derivatives else None,
            precision="single" if single_precision else None,
        )
        if output is not None:
            cfg.output.directory = output
        out_dir = cfg.output.directory

        log_suffix = ".json" if cfg.output.log_format == "json" else ".log"
        setup_logging(
            out_dir / f"seasonfit{log_suffix}",
            verbose=verbose,
            log_format=cfg.output.log_format,
        )
        log_section("Configuration")
        log_dict(cfg.fitting.model_dump(mode="json"))

        show_header(f"Fitting {series.name}")
        batch = load_input(series, cfg)
        service = FitService(cfg.fitting, reporter=ConsoleReporter())
        fits = service.fit_many(
            (name, s.x, s.y, s.weights) for name, s in batch.items()
        )
        if not fits:
            error("No series could be fitted")
            raise typer.Exit(code=1)

        for fit in fits:
            print_fit_table(
                fit.result,
                title=f"{fit.name}: {fit.result.model.value}",
                residuals=fit.residual_statistics(),
            )
        _write_outputs(fits, cfg, save_figures=plot or cfg.output.save_figures)
    except SeasonFitError as exc:
        show_error_with_details("Fitting", exc)
        raise typer.Exit(code=1) from exc
    finally:
        close_logging()


def _write_outputs(fits: list[SeriesFit], cfg: SeasonFitConfig, *, save_figures: bool) -> None:
    from seasonfit.io.writers import write_result_csv, write_result_json
    from seasonfit.ui import success

    out_dir = cfg.output.directory
    out_dir.mkdir(parents=True, exist_ok=True)

    if "json" in cfg.output.formats:
        for fit in fits:
            path = write_result_json(fit.result, out_dir / f"{safe_name(fit.name)}.json", fit.name)
            success(f"Wrote [path]{path}[/path]")
    if "csv" in cfg.output.formats:
        path = write_result_csv([(fit.name, fit.result) for fit in fits], out_dir / "fits.csv")
        success(f"Wrote [path]{path}[/path]")

    if save_figures:
        from seasonfit.plotting import MatplotlibRenderer, build_components, plotting_grid

        renderer = MatplotlibRenderer()
        for fit in fits:
            components = build_components(
                fit.result.model,
                fit.result.params,
                plotting_grid(fit.series.x),
                series=fit.series,
                result=fit.result,
                title=fit.name,
            )
            path = renderer.render(components, out_dir / f"{safe_name(fit.name)}.png")
            success(f"Saved figure [path]{path}[/path]")
