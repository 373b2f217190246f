"""UI and terminal output styling for SeasonFit.

Submodules:
- console: Theme, console instance and verbosity
- logging: File and console logging setup
- messages: Status messages (success, error, warning, etc.)
- tables: Parameter and summary tables
- reporter: Reporter protocol implementation for the services
"""

from seasonfit.ui.console import (
    SEASONFIT_THEME,
    VERSION,
    Verbosity,
    console,
    icon,
    set_verbosity,
)
from seasonfit.ui.logging import close_logging, log, log_dict, log_section, setup_logging
from seasonfit.ui.messages import (
    action,
    bullet,
    error,
    info,
    print_next_steps,
    show_error_with_details,
    show_header,
    show_version,
    success,
    warning,
)
from seasonfit.ui.reporter import ConsoleReporter
from seasonfit.ui.tables import create_table, print_fit_table, print_prior_table, print_summary

__all__ = [
    "SEASONFIT_THEME",
    "VERSION",
    "ConsoleReporter",
    "Verbosity",
    "action",
    "bullet",
    "close_logging",
    "console",
    "create_table",
    "error",
    "icon",
    "info",
    "log",
    "log_dict",
    "log_section",
    "print_fit_table",
    "print_next_steps",
    "print_prior_table",
    "print_summary",
    "set_verbosity",
    "setup_logging",
    "show_error_with_details",
    "show_header",
    "show_version",
    "success",
    "warning",
]
