"""Domain configuration models for SeasonFit."""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from seasonfit.core.constants import MAX_ITERATIONS, TOLERANCE
from seasonfit.core.models.registry import ModelName
from seasonfit.core.shared.typing import DerivativeMode, Precision

OutputFormat = Literal["csv", "json"]
LogFormat = Literal["text", "json"]


class FitConfig(BaseModel):
    """Configuration for the fitting process.

    Example:
        [fitting]
        model = "logistic"
        max_iterations = 20
        tolerance = 1e-3
        precision = "double"
        derivative = "analytic"
    """

    model_config = ConfigDict(extra="forbid")

    model: ModelName = Field(
        default=ModelName.LOGISTIC,
        description="Double-sigmoid model: gaussian, tanh, logistic, sine.",
    )
    max_iterations: Annotated[int, Field(ge=1)] = Field(
        default=MAX_ITERATIONS,
        description="Maximum number of accepted Marquardt iterations.",
    )
    tolerance: Annotated[float, Field(gt=0)] = Field(
        default=TOLERANCE,
        description="Convergence threshold on the chi-square decrease of one iteration.",
    )
    precision: Precision = Field(
        default="double",
        description="Arithmetic precision of the fit: single or double.",
    )
    derivative: DerivativeMode = Field(
        default="analytic",
        description="Jacobian source: analytic partials or numeric central differences.",
    )
    estimate_prior: bool = Field(
        default=True,
        description="Derive the starting parameters from the data when none are given.",
    )


class OutputConfig(BaseModel):
    """Configuration for output file generation."""

    model_config = ConfigDict(extra="forbid")

    directory: Path = Field(default=Path("Fits"), description="Output directory for results.")
    formats: list[OutputFormat] = Field(
        default=["json", "csv"],
        description="Output formats for results.",
    )
    save_figures: bool = Field(default=False, description="Render the fitted curve to a PNG file.")
    log_format: LogFormat = Field(
        default="text",
        description="Format for log file: text (human-readable) or json (structured).",
    )

    @field_validator("formats")
    @classmethod
    def deduplicate_formats(cls, v: list[OutputFormat]) -> list[OutputFormat]:
        """Drop repeated formats while keeping their order."""
        return list(dict.fromkeys(v))


class ColumnConfig(BaseModel):
    """Column names used when reading an observation series from CSV."""

    model_config = ConfigDict(extra="forbid")

    x: str = Field(default="x", description="Abscissa column (time, day of year).")
    y: str = Field(default="y", description="Observation column.")
    weight: str | None = Field(
        default=None,
        description="Optional weight column; all samples weigh 1 when unset.",
    )
    group: str | None = Field(
        default=None,
        description="Optional column splitting the file into independent series.",
    )


class SeasonFitConfig(BaseModel):
    """Top-level SeasonFit configuration.

    Example TOML configuration:
        [fitting]
        model = "sine"
        max_iterations = 50

        [output]
        directory = "Fits"
        formats = ["json", "csv"]

        [columns]
        x = "doy"
        y = "ndvi"
        weight = "quality"
        group = "pixel"
    """

    model_config = ConfigDict(extra="forbid")

    fitting: FitConfig = Field(default_factory=FitConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    columns: ColumnConfig = Field(default_factory=ColumnConfig)


__all__ = [
    "ColumnConfig",
    "FitConfig",
    "LogFormat",
    "OutputConfig",
    "OutputFormat",
    "SeasonFitConfig",
]
