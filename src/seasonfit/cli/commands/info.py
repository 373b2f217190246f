"""Info command implementation."""

from __future__ import annotations


def info_command() -> None:
    """Show installation details and the available models."""
    import sys

    import numpy as np
    import scipy

    from seasonfit import __version__
    from seasonfit.core.models import list_models
    from seasonfit.ui import bullet, console

    console.print("[bold]SeasonFit System Information[/bold]\n")
    console.print(f"[green]SeasonFit version:[/green] {__version__}")
    console.print(f"[green]Python version:[/green] {sys.version.split()[0]}")
    console.print(f"[green]NumPy version:[/green] {np.__version__}")
    console.print(f"[green]SciPy version:[/green] {scipy.__version__}")
    console.print("\n[green]Models:[/green]")
    for name in list_models():
        bullet(name)
