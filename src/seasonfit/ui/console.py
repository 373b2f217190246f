"""Console configuration and theme for SeasonFit UI.

This module provides the central console instance and theme used throughout
the application for consistent styling.
"""

import os
import sys

from rich.console import Console
from rich.theme import Theme

from seasonfit import __version__

SEASONFIT_THEME = Theme(
    {
        # --- Semantic Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        "neutral": "dim white",
        # --- UI Structure ---
        "header": "bold cyan",
        "subheader": "bold white",
        "panel.border": "blue",
        # --- Data & Values ---
        "key": "cyan",
        "value": "green",
        "metric": "bold green",
        "number": "green",
        "path": "blue underline",
        "code": "bold magenta",
        "param": "cyan",
        # --- Modifiers ---
        "dim": "dim",
        "emphasis": "bold",
    }
)

# Single console instance for entire application
console = Console(theme=SEASONFIT_THEME)

VERSION = __version__


class Verbosity:
    """Verbosity levels for UI output."""

    QUIET = 0  # Errors only
    NORMAL = 1
    VERBOSE = 2


def set_verbosity(level: int) -> None:
    """Set the global verbosity level.

    Args:
        level: Verbosity level (0=QUIET, 1=NORMAL, 2=VERBOSE)
    """
    console.quiet = level == Verbosity.QUIET


_EMOJI_DISABLED = os.getenv("SEASONFIT_NO_EMOJI", "").lower() in {"1", "true", "yes"}


def _supports_unicode() -> bool:
    if _EMOJI_DISABLED:
        return False
    enc = getattr(console, "encoding", None) or sys.getdefaultencoding()
    return "utf" in enc.lower()


def icon(name: str) -> str:
    """Return a UI icon string based on terminal capabilities.

    Names: check, warn, error, info, bullet, separator
    """
    unicode = _supports_unicode()
    mapping = {
        "check": "✓" if unicode else "+",
        "warn": "⚠" if unicode else "!",
        "error": "✗" if unicode else "x",
        "info": "▸" if unicode else ">",
        "bullet": "‣" if unicode else "-",
        "separator": "━" if unicode else "-",
    }
    return mapping.get(name, mapping["bullet"])


__all__ = [
    "SEASONFIT_THEME",
    "VERSION",
    "Verbosity",
    "console",
    "icon",
    "set_verbosity",
]
