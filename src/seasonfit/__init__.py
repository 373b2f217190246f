"""SeasonFit - Double-sigmoid curve fitting for seasonal time series.

Public API:
    - FitService: Prior estimation and Marquardt fitting of one or many series
    - fit_series: Fit one series from raw arrays
    - estimate_prior: Data-driven starting parameters

Configuration:
    - SeasonFitConfig: Main configuration object
    - FitConfig, OutputConfig, ColumnConfig: Sub-configurations
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from seasonfit.core.domain.config import (  # noqa: E402
    ColumnConfig,
    FitConfig,
    OutputConfig,
    SeasonFitConfig,
)
from seasonfit.core.fitting import (  # noqa: E402
    FitResult,
    FitStatus,
    estimate_prior,
    fit_series,
)
from seasonfit.core.models import ModelName, get_model, list_models  # noqa: E402
from seasonfit.services import FitService, SeriesFit  # noqa: E402

__all__ = [
    "ColumnConfig",
    "FitConfig",
    "FitResult",
    "FitService",
    "FitStatus",
    "ModelName",
    "OutputConfig",
    "SeasonFitConfig",
    "SeriesFit",
    "__version__",
    "estimate_prior",
    "fit_series",
    "get_model",
    "list_models",
]
