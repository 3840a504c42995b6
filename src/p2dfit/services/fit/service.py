"""High-level P2D fitting session.

This service provides the primary API for fitting distance measurements.
Embedding applications should import only from this module (or the package
root).

Example:
    fitter = P2DFitter(distances, FixedSigma(sigma=2.0), upper_bound=100.0)
    mu, = fitter.solve()
    interval = fitter.confidence_interval(mu, 2.0)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

import numpy as np

from p2dfit.core.constants import DEFAULT_MU_GUESS, DEFAULT_SIGMA_GUESS
from p2dfit.core.domain.config import IntervalConfig, OptimizerConfig, P2DFitConfig
from p2dfit.core.fitting.interval import ConfidenceInterval, ConfidenceIntervalSolver
from p2dfit.core.fitting.likelihood import LikelihoodObjective
from p2dfit.core.fitting.optimizer import BoundedSimplexOptimizer, Goal
from p2dfit.core.fitting.parameters import Bounds, FixedSigma, FreeSigma
from p2dfit.core.fitting.results import FitResult
from p2dfit.core.shared.exceptions import ConfigError, NonConvergenceError
from p2dfit.core.shared.reporter import NullReporter, Reporter
from p2dfit.ui.logging import log, log_dict

if TYPE_CHECKING:
    from p2dfit.core.shared.typing import ArrayLike, FloatArray


def _validate_measurements(measurements: ArrayLike) -> FloatArray:
    """Return a read-only float copy of the measurements or raise ConfigError."""
    try:
        data = np.array(measurements, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        msg = f"Measurements must be numeric: {exc}"
        raise ConfigError(msg) from exc

    if data.ndim != 1:
        msg = f"Measurements must be a 1-D sequence, got shape {data.shape}"
        raise ConfigError(msg)
    if data.size == 0:
        msg = "Measurement set is empty"
        raise ConfigError(msg)
    if not np.all(np.isfinite(data)):
        msg = "Measurements contain non-finite values"
        raise ConfigError(msg)
    if np.any(data < 0):
        msg = f"Distances must be non-negative (minimum: {data.min()})"
        raise ConfigError(msg)

    data.flags.writeable = False
    return data


class P2DFitter:
    """Maximum-likelihood fit of the P2D distribution to a set of distances.

    All settings are fixed at construction; the session holds no mutable
    state, so one instance can be shared between threads. Use
    :meth:`with_guesses` to derive a session with other start values.

    Args:
        measurements: Observed distances (non-negative, at least one)
        mode: ``FixedSigma(sigma)`` to fit mu only, ``FreeSigma()`` to fit both
        upper_bound: Upper bound shared by mu and sigma
        mu_guess: Initial mu (default 0.0)
        sigma_guess: Initial sigma, used with FreeSigma (default 10.0)
        lower_bound: Lower bound shared by mu and sigma (default 0.0)
        optimizer: Optimizer settings
        interval: Confidence interval settings
        reporter: Status reporter (default: silent)

    Raises
    ------
        ConfigError: If any input is invalid
    """

    def __init__(
        self,
        measurements: ArrayLike,
        mode: FixedSigma | FreeSigma,
        upper_bound: float,
        *,
        mu_guess: float = DEFAULT_MU_GUESS,
        sigma_guess: float = DEFAULT_SIGMA_GUESS,
        lower_bound: float = 0.0,
        optimizer: OptimizerConfig | None = None,
        interval: IntervalConfig | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        try:
            config = P2DFitConfig(
                mode=mode,
                bounds=Bounds(lower=lower_bound, upper=upper_bound),
                mu_guess=mu_guess,
                sigma_guess=sigma_guess,
                optimizer=optimizer or OptimizerConfig(),
                interval=interval or IntervalConfig(),
            )
        except ValidationError as exc:
            msg = f"Invalid fitting session: {exc}"
            raise ConfigError(msg) from exc

        self._config = config
        self._measurements = _validate_measurements(measurements)
        self._reporter = reporter or NullReporter()
        self._objective = LikelihoodObjective(self._measurements, config.mode)
        self._optimizer = BoundedSimplexOptimizer.from_config(config.optimizer)

    @classmethod
    def from_config(
        cls,
        measurements: ArrayLike,
        config: P2DFitConfig,
        reporter: Reporter | None = None,
    ) -> P2DFitter:
        """Create a session from a validated configuration."""
        return cls(
            measurements,
            config.mode,
            config.bounds.upper,
            mu_guess=config.mu_guess,
            sigma_guess=config.sigma_guess,
            lower_bound=config.bounds.lower,
            optimizer=config.optimizer,
            interval=config.interval,
            reporter=reporter,
        )

    def with_guesses(self, mu: float, sigma: float | None = None) -> P2DFitter:
        """Return a new session with other initial guesses."""
        config = self._config
        return P2DFitter(
            self._measurements,
            config.mode,
            config.bounds.upper,
            mu_guess=mu,
            sigma_guess=config.sigma_guess if sigma is None else sigma,
            lower_bound=config.bounds.lower,
            optimizer=config.optimizer,
            interval=config.interval,
            reporter=self._reporter,
        )

    @property
    def config(self) -> P2DFitConfig:
        return self._config

    @property
    def measurements(self) -> FloatArray:
        return self._measurements

    @property
    def mode(self) -> FixedSigma | FreeSigma:
        return self._config.mode

    @property
    def bounds(self) -> Bounds:
        return self._config.bounds

    @property
    def initial_guess(self) -> FloatArray:
        """Start vector handed to the optimizer ([mu] or [mu, sigma])."""
        return self.mode.initial_guess(self._config.mu_guess, self._config.sigma_guess)

    def fit(self) -> FitResult:
        """Run the fit and return a structured result.

        Non-convergence is reported through ``FitResult.success`` and
        ``FitResult.message`` rather than raised.
        """
        names = ", ".join(self.mode.names)
        self._reporter.action(f"Fitting {names} to {self._measurements.size} distances")
        log(f"P2D fit of {names}: {self._measurements.size} distances")
        log_dict(
            {
                "mode": self.mode.kind,
                "bounds": f"[{self.bounds.lower:g}, {self.bounds.upper:g}]",
                "initial guess": np.array2string(self.initial_guess, precision=6),
            }
        )

        result = self._optimizer.run(self._objective, self.initial_guess, self.bounds, Goal.MINIMIZE)
        fit_result = FitResult(
            params=result.x,
            mode=self.mode,
            negative_log_likelihood=result.fun,
            n_data=int(self._measurements.size),
            nfev=result.nfev,
            nit=result.nit,
            success=result.success,
            message=result.message,
        )

        if fit_result.success:
            self._reporter.success(f"P2D fit converged after {result.nfev} evaluations")
            log(f"Converged: {fit_result.to_dict()}")
        else:
            self._reporter.warning(f"P2D fit did not converge: {result.message}")
            log(f"Fit did not converge after {result.nfev} evaluations", level="warning")
        return fit_result

    def solve(self) -> FloatArray:
        """Fit and return the parameter vector ([mu] or [mu, sigma]).

        Raises
        ------
            NonConvergenceError: If the optimizer exhausts its evaluation budget
        """
        result = self.fit()
        if not result.success:
            reason = f"P2D fit failed due to too many evaluations ({result.nfev})"
            raise NonConvergenceError(
                reason, nfev=result.nfev, max_evaluations=self._optimizer.max_evaluations
            )
        return result.params

    def negative_log_likelihood(self, params: ArrayLike) -> float:
        """Negative log-likelihood of the session data for given estimators.

        Args:
            params: ``[mu]`` or ``[mu, sigma]`` matching the mode (the vector
                returned by :meth:`solve` can be used directly)
        """
        return self._objective(np.atleast_1d(np.asarray(params, dtype=np.float64)))

    def log_likelihood(self, params: ArrayLike) -> float:
        """Log-likelihood of the session data for given estimators."""
        return -self.negative_log_likelihood(params)

    def confidence_interval(self, mu: float, sigma: float) -> ConfidenceInterval:
        """Distances where p2d(r; mu, sigma) falls to half its peak value.

        The searches use the session bounds.

        Raises
        ------
            NonConvergenceError: If any of the three searches exhausts its budget
        """
        solver = ConfidenceIntervalSolver(
            bounds=self.bounds,
            optimizer=self._optimizer,
            config=self._config.interval,
        )
        self._reporter.action(f"Computing interval for mu={mu:g}, sigma={sigma:g}")
        try:
            interval = solver.solve(mu, sigma)
        except NonConvergenceError as exc:
            self._reporter.warning(f"Interval search did not converge: {exc.reason}")
            raise
        log(
            f"Interval [{interval.lower:.6g}, {interval.upper:.6g}] around "
            f"peak {interval.peak:.6g} ({interval.nfev} evaluations)"
        )
        return interval

    def __repr__(self) -> str:
        return (
            f"<P2DFitter {self._measurements.size} distances, mode={self.mode.kind}, "
            f"bounds=[{self.bounds.lower:g}, {self.bounds.upper:g}]>"
        )


__all__ = ["P2DFitter"]
