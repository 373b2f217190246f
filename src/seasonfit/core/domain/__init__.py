"""Domain models: observation series, parameter vectors and configuration."""

from seasonfit.core.domain.config import (
    ColumnConfig,
    FitConfig,
    OutputConfig,
    SeasonFitConfig,
)
from seasonfit.core.domain.parameters import (
    as_parameter_vector,
    parameters_from_dict,
    parameters_to_dict,
)
from seasonfit.core.domain.series import ObservationSeries, precision_dtype

__all__ = [
    "ColumnConfig",
    "FitConfig",
    "ObservationSeries",
    "OutputConfig",
    "SeasonFitConfig",
    "as_parameter_vector",
    "parameters_from_dict",
    "parameters_to_dict",
    "precision_dtype",
]
