"""Plot command implementation."""

from __future__ import annotations

import pathlib  # noqa: TC003
from typing import Annotated

import typer
from rich.markup import escape

from seasonfit.core.shared.exceptions import SeasonFitError


def plot_command(
    result: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Result file written by 'seasonfit fit' (.json)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    series: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Series file the result was fitted to",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Figure path (default: result path with .png suffix)",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    config: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration providing the column mapping",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--series-name", help="Group to draw when the file holds several series"),
    ] = None,
) -> None:
    """Draw a fitted curve over the series it was fitted to.

    Examples
    --------
        $ seasonfit plot Fits/ndvi.json ndvi.csv
    """
    from seasonfit.cli.commands.fit import load_input, resolve_config
    from seasonfit.io.writers import read_result_json
    from seasonfit.plotting import MatplotlibRenderer, build_components, plotting_grid
    from seasonfit.ui import error, success

    try:
        cfg = resolve_config(config)
        fit = read_result_json(result)
        batch = load_input(series, cfg)
        key = name if name is not None else next(iter(batch))
        if key not in batch:
            error(f"Series '{key}' not found in {series.name}", do_log=False)
            raise typer.Exit(code=1)
        observations = batch[key]

        components = build_components(
            fit.model,
            fit.params,
            plotting_grid(observations.x),
            series=observations,
            result=fit,
            title=key,
        )
        path = MatplotlibRenderer().render(components, output or result.with_suffix(".png"))
    except SeasonFitError as exc:
        error(escape(str(exc)), do_log=False)
        raise typer.Exit(code=1) from exc

    success(f"Saved figure [path]{path}[/path]", do_log=False)
