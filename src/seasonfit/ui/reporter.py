"""Console-based reporter implementation using Rich.

Adapts the ``Reporter`` protocol to the styled message helpers.
"""

from __future__ import annotations

from seasonfit.core.shared.reporter import Reporter
from seasonfit.ui.messages import action, error, info, success, warning


class ConsoleReporter:
    """Reporter implementation using Rich console output.

    Example:
        >>> from seasonfit.ui.reporter import ConsoleReporter
        >>> reporter = ConsoleReporter()
        >>> reporter.action("Fitting series...")
        >>> reporter.success("Converged after 6 iterations")
    """

    def action(self, message: str) -> None:
        action(message)

    def info(self, message: str) -> None:
        info(message)

    def warning(self, message: str) -> None:
        warning(message)

    def error(self, message: str) -> None:
        error(message)

    def success(self, message: str) -> None:
        success(message)


if not isinstance(ConsoleReporter(), Reporter):
    raise TypeError("ConsoleReporter must satisfy Reporter protocol")
