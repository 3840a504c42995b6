"""Half-maximum confidence interval of the P2D density.

For a known ``(mu, sigma)`` the interval is the pair of distances at which the
density falls to ``level`` (0.5 by default) times its peak value. It is found
with three bounded simplex searches:

1. maximize ``p2d(r)`` starting from ``r = mu`` to locate ``r_peak`` and
   ``L_peak``;
2. minimize the squared difference between the density and
   ``level * L_peak`` starting from ``lower_start_factor * r_peak``;
3. the same from ``upper_start_factor * r_peak``.

Which crossing each local search lands on depends on its start point. With
``split_at_peak`` the two searches are confined to ``[lower, r_peak]`` and
``[r_peak, upper]``, which keeps an expanding simplex from stepping over the
peak. With ``residual = "log"`` the densities are compared as logarithms: far
in the tail the linear difference is constant to machine precision and the
simplex would stop where it started.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from p2dfit.core.constants import DENSITY_PENALTY
from p2dfit.core.density.p2d import log_p2d, p2d
from p2dfit.core.domain.config import IntervalConfig
from p2dfit.core.fitting.optimizer import BoundedSimplexOptimizer, Goal
from p2dfit.core.fitting.parameters import Bounds
from p2dfit.core.shared.exceptions import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from p2dfit.core.shared.typing import FloatArray, Objective


@dataclass(frozen=True)
class ConfidenceInterval:
    """Distances bracketing the density peak at a fraction of its height.

    Attributes
    ----------
        lower: Lower crossing distance
        upper: Upper crossing distance
        peak: Distance of maximal density
        peak_density: Density at ``peak``
        level: Fraction of ``peak_density`` defining the crossings
        nfev: Objective evaluations spent over the three searches
    """

    lower: float
    upper: float
    peak: float
    peak_density: float
    level: float
    nfev: int = 0

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def as_tuple(self) -> tuple[float, float]:
        return self.lower, self.upper

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())


def _crossing_objective(mu: float, sigma: float, target: float, residual: str) -> Objective:
    if residual == "log":
        log_target = float(np.log(target))

        def log_residual(r: FloatArray) -> float:
            # Finite for every r > 0, however deep in the tail; only r = 0 gives -inf
            log_density = float(log_p2d(r[0], mu, sigma))
            if log_density == -np.inf:
                log_density = -DENSITY_PENALTY
            return (log_target - log_density) ** 2

        return log_residual

    def linear_residual(r: FloatArray) -> float:
        return (target - float(p2d(r[0], mu, sigma))) ** 2

    return linear_residual


@dataclass(frozen=True)
class ConfidenceIntervalSolver:
    """Locate the half-maximum crossings of the P2D density.

    Args:
        bounds: Search bounds on the distance (those of the fit)
        optimizer: Optimizer used for all three searches
        config: Interval settings
    """

    bounds: Bounds
    optimizer: BoundedSimplexOptimizer = field(default_factory=BoundedSimplexOptimizer)
    config: IntervalConfig = field(default_factory=IntervalConfig)

    def solve(self, mu: float, sigma: float) -> ConfidenceInterval:
        """Compute the interval for a known (mu, sigma).

        Raises
        ------
            ConfigError: If sigma is not positive
            NonConvergenceError: If any of the three searches exhausts its budget
        """
        if not sigma > 0.0:
            msg = f"sigma must be positive, got {sigma}"
            raise ConfigError(msg)

        def density(r: FloatArray) -> float:
            return float(p2d(r[0], mu, sigma))

        peak = self.optimizer.run(density, [mu], self.bounds, Goal.MAXIMIZE)
        r_peak = float(self.optimizer.ensure_converged(peak)[0])
        peak_density = density(peak.x)

        objective = _crossing_objective(
            mu, sigma, self.config.level * peak_density, self.config.residual
        )
        lower_bounds, upper_bounds = self._side_bounds(r_peak)

        lower = self.optimizer.run(
            objective, [self.config.lower_start_factor * r_peak], lower_bounds
        )
        lower_r = float(self.optimizer.ensure_converged(lower)[0])
        upper = self.optimizer.run(
            objective, [self.config.upper_start_factor * r_peak], upper_bounds
        )
        upper_r = float(self.optimizer.ensure_converged(upper)[0])

        return ConfidenceInterval(
            lower=lower_r,
            upper=upper_r,
            peak=r_peak,
            peak_density=peak_density,
            level=self.config.level,
            nfev=peak.nfev + lower.nfev + upper.nfev,
        )

    def _side_bounds(self, r_peak: float) -> tuple[Bounds, Bounds]:
        if self.config.split_at_peak and self.bounds.lower < r_peak < self.bounds.upper:
            return (
                Bounds(lower=self.bounds.lower, upper=r_peak),
                Bounds(lower=r_peak, upper=self.bounds.upper),
            )
        return self.bounds, self.bounds


__all__ = ["ConfidenceInterval", "ConfidenceIntervalSolver"]
