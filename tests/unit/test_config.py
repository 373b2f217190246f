"""Tests for configuration models and TOML persistence."""

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from seasonfit.core.domain.config import FitConfig, OutputConfig, SeasonFitConfig
from seasonfit.core.models.registry import ModelName
from seasonfit.core.shared.exceptions import ConfigError
from seasonfit.io.config import generate_default_config, load_config, save_config


class TestFitConfig:
    """Tests for FitConfig validation."""

    def test_defaults(self):
        config = FitConfig()
        assert config.model is ModelName.LOGISTIC
        assert config.max_iterations == 20
        assert config.tolerance == pytest.approx(1e-3)
        assert config.precision == "double"
        assert config.derivative == "analytic"
        assert config.estimate_prior

    def test_model_from_string(self):
        assert FitConfig(model="sine").model is ModelName.SINE

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"model": "lorentzian"},
            {"max_iterations": 0},
            {"tolerance": 0.0},
            {"precision": "half"},
            {"derivative": "symbolic"},
        ],
    )
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            FitConfig(**kwargs)

    def test_forbids_unknown_keys(self):
        with pytest.raises(ValidationError):
            FitConfig(lambda_start=1.0)


class TestOutputConfig:
    def test_formats_deduplicated(self):
        config = OutputConfig(formats=["csv", "json", "csv"])
        assert config.formats == ["csv", "json"]

    def test_default_directory(self):
        assert OutputConfig().directory == Path("Fits")


class TestConfigFiles:
    """Tests for load_config / save_config."""

    def test_round_trip(self, tmp_path):
        config = SeasonFitConfig.model_validate(
            {
                "fitting": {"model": "tanh", "max_iterations": 50},
                "columns": {"x": "doy", "y": "ndvi", "group": "pixel"},
            }
        )
        path = tmp_path / "nested" / "seasonfit.toml"
        save_config(config, path)
        assert load_config(path) == config

    def test_none_values_omitted(self, tmp_path):
        path = tmp_path / "seasonfit.toml"
        save_config(SeasonFitConfig(), path)
        data = tomllib.loads(path.read_text())
        assert "weight" not in data["columns"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[fitting\nmodel = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_schema_violation(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text('[fitting]\nmodel = "voigt"\n')
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)

    def test_unknown_section(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[clustering]\ncontour = 1.0\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_default_config_is_valid(self, tmp_path):
        """The generated template loads into the default configuration."""
        path = tmp_path / "seasonfit.toml"
        path.write_text(generate_default_config())
        assert load_config(path) == SeasonFitConfig()
