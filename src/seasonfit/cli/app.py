"""Main Typer application for SeasonFit.

Creates the application and registers the commands implemented in the
``commands`` subpackage.
"""

from typing import Annotated

import typer

from seasonfit.cli.callbacks import version_callback
from seasonfit.cli.commands import (
    fit_command,
    info_command,
    init_command,
    plot_command,
    prior_command,
)

app = typer.Typer(
    name="seasonfit",
    help="SeasonFit - Double-sigmoid curve fitting for seasonal time series",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """SeasonFit - Double-sigmoid curve fitting for seasonal time series.

    Fit Gaussian, hyperbolic-tangent, logistic or raised-sine double-S curves
    to rise / plateau / fall signals such as vegetation indices.
    """


app.command(name="fit")(fit_command)
app.command(name="prior")(prior_command)
app.command(name="plot")(plot_command)
app.command(name="init")(init_command)
app.command(name="info")(info_command)
