"""Progress and status reporting abstraction.

Core and service layers report progress through the ``Reporter`` protocol
so they never depend on a specific UI implementation.

    - NullReporter discards everything (tests, batch runs)
    - ConsoleReporter (in ui/) prints through the Rich console
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Reporter(Protocol):
    """Protocol for progress and status reporting.

    All methods take plain strings to avoid coupling to any output format.
    """

    def action(self, message: str) -> None:
        """Report an action being performed, e.g. 'Fitting series...'."""
        ...

    def info(self, message: str) -> None:
        """Report an informational message."""
        ...

    def warning(self, message: str) -> None:
        """Report a non-fatal issue the user should be aware of."""
        ...

    def error(self, message: str) -> None:
        """Report an error that does not stop execution."""
        ...

    def success(self, message: str) -> None:
        """Report successful completion of an operation."""
        ...


class NullReporter:
    """Silent reporter that discards all messages."""

    def action(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass


__all__ = ["NullReporter", "Reporter"]
