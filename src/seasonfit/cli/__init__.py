"""Command-line interface for SeasonFit."""

from seasonfit.cli.app import app

__all__ = ["app"]
