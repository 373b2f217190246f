"""Fitting result classes and utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from seasonfit.core.constants import PARAMETER_NAMES
from seasonfit.core.domain.parameters import parameters_from_dict, parameters_to_dict
from seasonfit.core.models.registry import ModelName
from seasonfit.core.shared.exceptions import (
    DivergedError,
    MaxIterationsError,
    UnknownSolverStatusError,
)
from seasonfit.core.shared.typing import FloatArray


class FitStatus(Enum):
    """Terminal status of an optimizer run.

    Values are stable integer codes: they are written to result files and
    reported by the solver loop.
    """

    CONVERGED = 0
    DIVERGED = 1
    MAX_ITERATIONS = 2

    @classmethod
    def from_code(cls, code: int) -> FitStatus:
        """Map a status code to a ``FitStatus``.

        Raises
        ------
            UnknownSolverStatusError: If the code is not a known status.
        """
        try:
            return cls(int(code))
        except (TypeError, ValueError) as exc:
            msg = f"Unknown solver status code: {code!r}"
            raise UnknownSolverStatusError(msg) from exc

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    FitStatus.CONVERGED: "Converged",
    FitStatus.DIVERGED: "Diverged",
    FitStatus.MAX_ITERATIONS: "Maximum iterations reached",
}


@dataclass
class OptimizerState:
    """Mutable state owned by the optimizer for the duration of one run."""

    params: FloatArray
    residuals: FloatArray
    chisq: float
    lam: float
    iteration: int = 0


@dataclass
class FitResult:
    """Result of one optimizer run.

    ``params`` holds the posterior (best-effort when the run did not
    converge). Diverged and max-iteration runs are reported through
    ``status``; call ``raise_for_status`` to turn them into exceptions.
    """

    model: ModelName
    params: FloatArray
    prior: FloatArray
    iterations: int
    chisq: float
    stderr: float
    status: FitStatus
    initial_chisq: float = float("nan")
    param_errors: FloatArray = field(default_factory=lambda: np.full(7, np.nan))
    chisq_history: list[float] = field(default_factory=list)
    lam: float = float("nan")
    n_active: int = 0

    @property
    def success(self) -> bool:
        return self.status is FitStatus.CONVERGED

    @property
    def message(self) -> str:
        return self.status.label

    def raise_for_status(self) -> FitResult:
        """Raise a ``ConvergenceFailure`` unless the fit converged."""
        if self.status is FitStatus.DIVERGED:
            msg = f"Fit diverged after {self.iterations} iterations (chi2={self.chisq:.6g})"
            raise DivergedError(msg, self)
        if self.status is FitStatus.MAX_ITERATIONS:
            msg = (
                f"Tolerance not met within {self.iterations} iterations "
                f"(chi2={self.chisq:.6g})"
            )
            raise MaxIterationsError(msg, self)
        return self

    def named_params(self) -> dict[str, float]:
        return parameters_to_dict(self.params)

    def to_dict(self) -> dict[str, Any]:
        """Serializable representation used by the result writers."""
        return {
            "model": self.model.value,
            "status": self.status.value,
            "status_label": self.status.label,
            "iterations": self.iterations,
            "chisq": float(self.chisq),
            "initial_chisq": float(self.initial_chisq),
            "stderr": float(self.stderr),
            "n_active": self.n_active,
            "damping": float(self.lam),
            "params": self.named_params(),
            "param_errors": {
                name: float(v) for name, v in zip(PARAMETER_NAMES, self.param_errors, strict=True)
            },
            "prior": parameters_to_dict(self.prior),
            "chisq_history": [float(c) for c in self.chisq_history],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FitResult:
        """Rebuild a result from ``to_dict`` output."""
        return cls(
            model=ModelName(data["model"]),
            params=parameters_from_dict(data["params"]),
            prior=parameters_from_dict(data["prior"]),
            iterations=int(data["iterations"]),
            chisq=float(data["chisq"]),
            stderr=float(data["stderr"]),
            status=FitStatus.from_code(data["status"]),
            initial_chisq=float(data.get("initial_chisq", np.nan)),
            param_errors=np.array(
                [data.get("param_errors", {}).get(n, np.nan) for n in PARAMETER_NAMES],
                dtype=float,
            ),
            chisq_history=[float(c) for c in data.get("chisq_history", [])],
            lam=float(data.get("damping", np.nan)),
            n_active=int(data.get("n_active", 0)),
        )


__all__ = ["FitResult", "FitStatus", "OptimizerState"]
