"""CLI command modules for SeasonFit.

Each module exports one command function carrying its Typer annotations;
``app.py`` registers them with the main application.
"""

from seasonfit.cli.commands.fit import fit_command
from seasonfit.cli.commands.info import info_command
from seasonfit.cli.commands.init import init_command
from seasonfit.cli.commands.plot import plot_command
from seasonfit.cli.commands.prior import prior_command

__all__ = [
    "fit_command",
    "info_command",
    "init_command",
    "plot_command",
    "prior_command",
]
