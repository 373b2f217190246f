"""Init command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from seasonfit.io.config import generate_default_config
from seasonfit.ui import error, info, print_next_steps, success


def init_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path for new configuration file",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = Path("seasonfit.toml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing file"),
    ] = False,
) -> None:
    """Generate a default configuration file.

    Examples
    --------
      Create default config:
        $ seasonfit init

      Overwrite existing config:
        $ seasonfit init --force
    """
    if path.exists() and not force:
        error(f"File already exists: [path]{path}[/path]", do_log=False)
        info("Use [code]--force[/code] to overwrite", do_log=False)
        raise typer.Exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_default_config())
    success(f"Created configuration file: [path]{path}[/path]", do_log=False)

    print_next_steps([
        f"Review and customize: [cyan]{path}[/]",
        f"Run fitting: [cyan]seasonfit fit series.csv --config {path}[/]",
    ])
