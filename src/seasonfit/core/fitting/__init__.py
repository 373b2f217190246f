"""Prior estimation and Marquardt optimization of double-sigmoid models."""

from seasonfit.core.fitting.jacobian import numeric_jacobian, select_jacobian
from seasonfit.core.fitting.optimizer import MarquardtOptimizer, fit_series
from seasonfit.core.fitting.prior import PriorEstimate, SeasonSegments, estimate_prior
from seasonfit.core.fitting.results import FitResult, FitStatus, OptimizerState

__all__ = [
    "FitResult",
    "FitStatus",
    "MarquardtOptimizer",
    "OptimizerState",
    "PriorEstimate",
    "SeasonSegments",
    "estimate_prior",
    "fit_series",
    "numeric_jacobian",
    "select_jacobian",
]
