"""Fit service composing prior estimation and optimization."""

from seasonfit.services.fit.service import FitService, SeriesFit

__all__ = ["FitService", "SeriesFit"]
