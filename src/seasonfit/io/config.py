"""Configuration file loading and saving."""

import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from seasonfit.core.domain.config import SeasonFitConfig
from seasonfit.core.shared.exceptions import ConfigError


def load_config(path: Path) -> SeasonFitConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        SeasonFitConfig: Validated configuration object.

    Raises:
        ConfigError: If the file is missing, is not valid TOML, or does not
            match the configuration schema.
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise ConfigError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        return SeasonFitConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid configuration in {path}:\n{exc}"
        raise ConfigError(msg) from exc


def save_config(config: SeasonFitConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: Configuration object to save.
        path: Path where to save the TOML file.
    """
    # mode="json" turns Path and enum members into strings; TOML has no null
    data = config.model_dump(mode="json", exclude_none=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Generate a default configuration file as a string.

    Returns:
        str: TOML-formatted default configuration.
    """
    return """# SeasonFit Configuration File
# Generated automatically - edit as needed

[fitting]
model = "logistic"        # gaussian, tanh, logistic, sine
max_iterations = 20       # accepted Marquardt iterations
tolerance = 1e-3          # converged when chi-square drops by less than this
precision = "double"      # single, double
derivative = "analytic"   # analytic, numeric
estimate_prior = true

[output]
directory = "Fits"
formats = ["json", "csv"]
save_figures = false
log_format = "text"       # text, json

[columns]
x = "x"
y = "y"
# weight = "w"            # Uncomment to read sample weights
# group = "series"        # Uncomment to fit one series per group
"""


__all__ = ["generate_default_config", "load_config", "save_config"]
