"""Prior command implementation."""

from __future__ import annotations

import pathlib  # noqa: TC003
from typing import Annotated

import typer
from rich.markup import escape

from seasonfit.cli.commands.fit import load_input, resolve_config
from seasonfit.core.models.registry import ModelName  # Required at runtime by Typer
from seasonfit.core.shared.exceptions import SeasonFitError


def prior_command(
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
        typer.Option("--model", "-m", help="Double-sigmoid model", case_sensitive=False),
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
) -> None:
    """Show the starting parameters estimated from a series.

    The series is split at half of its value range into before, during and
    after phases; the table lists the resulting prior and phase boundaries.
    """
    from seasonfit.services.fit.service import FitService
    from seasonfit.ui import error, print_prior_table, show_header

    try:
        cfg = resolve_config(config, model=model)
        service = FitService(cfg.fitting)
        for name, observations in load_input(series, cfg).items():
            show_header(f"Prior for {name}", do_log=False)
            print_prior_table(service.estimate(observations))
    except SeasonFitError as exc:
        error(escape(str(exc)), do_log=False)
        raise typer.Exit(code=1) from exc
