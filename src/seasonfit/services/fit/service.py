"""High-level fitting service facade.

This service composes prior estimation and Marquardt optimization for one
series or a batch of independent series. CLI and other adapters should
import only from this module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from seasonfit.core.domain.config import FitConfig
from seasonfit.core.domain.series import ObservationSeries
from seasonfit.core.fitting.optimizer import MarquardtOptimizer
from seasonfit.core.fitting.prior import PriorEstimate, estimate_prior
from seasonfit.core.fitting.results import FitStatus
from seasonfit.core.models.registry import get_model
from seasonfit.core.results.statistics import ResidualStatistics, weighted_residuals
from seasonfit.core.shared.exceptions import InputValidationError
from seasonfit.core.shared.reporter import NullReporter, Reporter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from numpy.typing import ArrayLike

    from seasonfit.core.fitting.results import FitResult


@dataclass(frozen=True)
class SeriesFit:
    """Fit of one named series.

    Attributes
    ----------
        name: Series label used in reports and output files
        series: Validated observations the fit was run on
        result: Optimizer outcome
        prior: Prior estimate, when the start was derived from the data
    """

    name: str
    series: ObservationSeries
    result: FitResult
    prior: PriorEstimate | None = None

    @property
    def success(self) -> bool:
        return self.result.success

    def residual_statistics(self) -> ResidualStatistics:
        """Residuals of the posterior curve over the fitted series."""
        series = self.series
        values = get_model(self.result.model)(series.x, self.result.params)
        residuals = weighted_residuals(series.y, values, series.weights)
        return ResidualStatistics(residuals=residuals, weights=series.weights)


class FitService:
    """Service for double-sigmoid fitting.

    Example:
        service = FitService(FitConfig(model="sine"))
        fit = service.fit(doy, ndvi, name="pixel-17")
        print(fit.result.named_params())
    """

    def __init__(self, config: FitConfig | None = None, reporter: Reporter | None = None) -> None:
        """Initialize the fit service.

        Args:
            config: Fitting configuration (uses defaults if not provided)
            reporter: Reporter for status messages (default: silent)
        """
        self.config = config or FitConfig()
        self._reporter = reporter or NullReporter()

    def estimate(self, series: ObservationSeries) -> PriorEstimate:
        """Estimate the prior from the active samples of ``series``."""
        active = series.weights > 0
        return estimate_prior(series.x[active], series.y[active], self.config.model)

    def fit(
        self,
        x: ArrayLike,
        y: ArrayLike,
        weights: ArrayLike | None = None,
        *,
        params: ArrayLike | None = None,
        name: str = "series",
    ) -> SeriesFit:
        """Fit one series.

        Args:
            x: Abscissas
            y: Observations
            weights: Optional sample weights
            params: Starting parameters; estimated from the data when omitted
            name: Label for reporting

        Returns
        -------
            SeriesFit with the optimizer result and the prior used

        Raises
        ------
            InputValidationError: On malformed inputs, or when no starting
                parameters are given and prior estimation is disabled
        """
        cfg = self.config
        model = get_model(cfg.model)
        series = ObservationSeries.from_arrays(x, y, weights)

        prior: PriorEstimate | None = None
        if params is None:
            if not cfg.estimate_prior:
                msg = "No starting parameters given and prior estimation is disabled"
                raise InputValidationError(msg)
            prior = self.estimate(series)
            params = prior.params

        self._reporter.action(f"Fitting '{name}' with the {cfg.model.value} model")
        optimizer = MarquardtOptimizer(
            model=model,
            series=series.astype(cfg.precision),
            derivative=cfg.derivative,
            max_iterations=cfg.max_iterations,
            tolerance=cfg.tolerance,
        )
        result = optimizer.run(params)
        self._report(name, result)
        return SeriesFit(name=name, series=series, result=result, prior=prior)

    def fit_many(
        self, batch: Iterable[tuple[str, ArrayLike, ArrayLike, ArrayLike | None]]
    ) -> list[SeriesFit]:
        """Fit independent series one after the other.

        A series with invalid input is reported and skipped; the others are
        still fitted.
        """
        fits: list[SeriesFit] = []
        for name, x, y, weights in batch:
            try:
                fits.append(self.fit(x, y, weights, name=name))
            except InputValidationError as exc:
                self._reporter.error(f"Skipping '{name}': {exc}")
        n_ok = sum(fit.success for fit in fits)
        self._reporter.info(f"{n_ok} of {len(fits)} fitted series converged")
        return fits

    def _report(self, name: str, result: FitResult) -> None:
        summary = (
            f"'{name}': {result.message} after {result.iterations} iterations "
            f"(chi2={result.chisq:.6g}, stderr={result.stderr:.4g})"
        )
        match result.status:
            case FitStatus.CONVERGED:
                self._reporter.success(summary)
            case FitStatus.MAX_ITERATIONS | FitStatus.DIVERGED:
                self._reporter.warning(summary)


__all__ = ["FitService", "SeriesFit"]
