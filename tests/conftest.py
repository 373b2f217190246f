"""Pytest fixtures for SeasonFit tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from seasonfit.core.models import ModelName, get_model

# Parameter vectors with clear before / during / after phases on x = 0..19
TRUE_PARAMS = {
    ModelName.GAUSSIAN: np.array([0.2, 4.0, 5.0, 1.2, -4.0, 14.0, 1.5]),
    ModelName.TANH: np.array([0.2, 4.0, 5.0, 0.8, -4.0, 14.0, 0.6]),
    ModelName.LOGISTIC: np.array([0.0, 5.0, 5.0, 1.0, -5.0, 14.0, 1.0]),
    ModelName.SINE: np.array([0.5, 4.0, 2.5, 8.5, -3.0, 12.5, 17.5]),
}


@pytest.fixture
def x20():
    """Twenty integer abscissas, 0 to 19."""
    return np.arange(20, dtype=np.float64)


@pytest.fixture(params=list(ModelName), ids=lambda m: m.value)
def model_name(request):
    """Every registered model identifier."""
    return request.param


@pytest.fixture
def true_params(model_name):
    """Ground-truth parameters for ``model_name``."""
    return TRUE_PARAMS[model_name].copy()


@pytest.fixture
def noiseless(model_name, true_params, x20):
    """Noiseless observations of ``model_name`` on ``x20``."""
    return x20, get_model(model_name)(x20, true_params)


@pytest.fixture
def plateau_series():
    """Low plateau (0.3), high plateau (2.4) on 10 <= x <= 15, low again."""
    x = np.arange(20, dtype=np.float64)
    y = np.where((x >= 10) & (x <= 15), 2.4, 0.3)
    return x, y


@pytest.fixture
def noisy_logistic(x20):
    """Logistic season with Gaussian noise (sigma 0.05, fixed seed)."""
    params = TRUE_PARAMS[ModelName.LOGISTIC]
    rng = np.random.default_rng(42)
    y = get_model(ModelName.LOGISTIC)(x20, params) + rng.normal(0.0, 0.05, x20.size)
    return x20, y, params.copy()


@pytest.fixture
def series_csv(tmp_path, noisy_logistic):
    """CSV file holding the noisy logistic season."""
    x, y, _ = noisy_logistic
    path = tmp_path / "season.csv"
    lines = ["x,y"] + [f"{xi:g},{yi:.6f}" for xi, yi in zip(x, y, strict=True)]
    path.write_text("\n".join(lines) + "\n")
    return path


class MockReporter:
    """Test double capturing reporter calls as (kind, message) pairs."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def action(self, message: str) -> None:
        self.messages.append(("action", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))


@pytest.fixture
def reporter():
    """Fresh MockReporter."""
    return MockReporter()
