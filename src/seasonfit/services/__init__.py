"""Application service layer for orchestrating SeasonFit workflows."""

from seasonfit.services.fit import FitService, SeriesFit

__all__ = ["FitService", "SeriesFit"]
