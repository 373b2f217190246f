"""UI messages and status indicators."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel

from seasonfit.ui.console import VERSION, console, icon
from seasonfit.ui.logging import log, log_section

__all__ = [
    "action",
    "bullet",
    "error",
    "info",
    "print_next_steps",
    "show_error_with_details",
    "show_header",
    "show_version",
    "success",
    "warning",
]


def show_header(text: str, do_log: bool = True) -> None:
    """Display a prominent section header."""
    rule = icon("separator") * 60
    console.print(f"[header]{rule}[/header]")
    console.print(f"[header]  {text}[/header]")
    console.print(f"[header]{rule}[/header]")
    if do_log:
        log_section(text)


def show_version() -> None:
    """Print the installed SeasonFit version."""
    console.print(f"[header]SeasonFit[/header] version [value]{VERSION}[/value]")


def success(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display a success message."""
    spaces = "  " * indent
    console.print(f"{spaces}[success]{icon('check')}[/success] {message}")
    if do_log:
        log(message)


def warning(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display a warning message."""
    spaces = "  " * indent
    console.print(f"{spaces}[warning]{icon('warn')}[/warning]  {message}")
    if do_log:
        log(message, level="warning")


def error(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display an error message."""
    spaces = "  " * indent
    console.print(f"{spaces}[error]{icon('error')}[/error] {message}")
    if do_log:
        log(message, level="error")


def info(message: str, indent: int = 0, do_log: bool = True) -> None:
    """Display an info message."""
    spaces = "  " * indent
    console.print(f"{spaces}[dim]{icon('info')}[/dim] {message}")
    if do_log:
        log(message)


def action(message: str) -> None:
    """Display an action/process message with visual separation."""
    console.print(f"\n[bold yellow]{icon('info')}[/bold yellow] {message}")
    log(message)


def bullet(message: str, indent: int = 1, style: str = "info") -> None:
    """Display a bullet point item."""
    spaces = "  " * indent
    console.print(f"{spaces}[{style}]{icon('bullet')}[/{style}] {message}")


def show_error_with_details(context: str, err: Exception, suggestion: str | None = None) -> None:
    """Display an error with details in a panel."""
    error(f"{context} failed")
    console.print(
        Panel(
            f"[error]{type(err).__name__}[/error]: {escape(str(err))}",
            title="Error Details",
            border_style="error",
            expand=False,
        )
    )
    if suggestion:
        info(f"Suggestion: {suggestion}")


def print_next_steps(steps: list[str]) -> None:
    """Print suggested next steps for the user."""
    console.print("\n[header]Next steps:[/header]")
    for i, step in enumerate(steps, 1):
        console.print(f"  {i}. {step}")
    console.print()
