"""Bounded derivative-free optimization.

:class:`BoundedSimplexOptimizer` wraps a scalar objective with the
bounded<->unbounded mapping of :mod:`p2dfit.core.fitting.transforms` and drives
a :class:`~p2dfit.core.algorithms.simplex.NelderMeadSimplex` search in the
unbounded space. Results are mapped back into the bounded space before they
are returned.

Two entry points are provided:

- :meth:`BoundedSimplexOptimizer.run` always returns an
  :class:`OptimizationResult`; an exhausted evaluation budget is reported
  through ``success=False`` and ``message``.
- :meth:`BoundedSimplexOptimizer.optimize` returns the parameter vector and
  raises :class:`~p2dfit.core.shared.exceptions.NonConvergenceError` instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from p2dfit.core.algorithms.simplex import NelderMeadSimplex
from p2dfit.core.constants import (
    SIMPLEX_ATOL,
    SIMPLEX_INITIAL_STEP,
    SIMPLEX_MAX_EVALUATIONS,
    SIMPLEX_RTOL,
    SIMPLEX_XTOL,
)
from p2dfit.core.fitting.transforms import (
    bounded_to_unbounded,
    nudge_inside,
    unbounded_to_bounded,
)
from p2dfit.core.shared.exceptions import NonConvergenceError

if TYPE_CHECKING:
    from p2dfit.core.domain.config import OptimizerConfig
    from p2dfit.core.fitting.parameters import Bounds
    from p2dfit.core.shared.typing import ArrayLike, FloatArray, Objective


class Goal(str, Enum):
    """Direction of an optimization."""

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


@dataclass(frozen=True)
class OptimizationResult:
    """Result of a bounded optimization.

    Attributes
    ----------
        x: Best parameter vector, in the bounded space
        fun: Objective value at ``x`` (sign as returned by the objective)
        nfev: Number of objective evaluations
        nit: Number of simplex iterations
        success: Whether the search converged within its budget
        message: Human-readable termination reason
    """

    x: FloatArray
    fun: float
    nfev: int
    nit: int
    success: bool
    message: str


@dataclass(frozen=True)
class BoundedSimplexOptimizer:
    """Nelder-Mead search over box-constrained parameters."""

    initial_step: float = SIMPLEX_INITIAL_STEP
    max_evaluations: int = SIMPLEX_MAX_EVALUATIONS
    rtol: float = SIMPLEX_RTOL
    atol: float = SIMPLEX_ATOL
    xtol: float = SIMPLEX_XTOL

    @classmethod
    def from_config(cls, config: OptimizerConfig) -> BoundedSimplexOptimizer:
        """Build an optimizer from its configuration section."""
        return cls(
            initial_step=config.initial_step,
            max_evaluations=config.max_evaluations,
            rtol=config.rtol,
            atol=config.atol,
            xtol=config.xtol,
        )

    def run(
        self,
        objective: Objective,
        initial_guess: ArrayLike,
        bounds: Bounds,
        goal: Goal = Goal.MINIMIZE,
    ) -> OptimizationResult:
        """Optimize ``objective`` within ``bounds``.

        Args:
            objective: Scalar function of the bounded parameter vector
            initial_guess: Start point; clipped into bounds and moved off them
            bounds: Bounds applied to every coordinate
            goal: Minimize or maximize

        Returns
        -------
            OptimizationResult (never raises on an exhausted budget)
        """
        x0 = np.atleast_1d(np.asarray(initial_guess, dtype=np.float64))
        lower, upper = bounds.arrays(x0.size)
        sign = -1.0 if goal is Goal.MAXIMIZE else 1.0

        def unbounded_objective(y: FloatArray) -> float:
            return sign * float(objective(unbounded_to_bounded(y, lower, upper)))

        y0 = bounded_to_unbounded(nudge_inside(x0, lower, upper), lower, upper)
        simplex = NelderMeadSimplex(
            rtol=self.rtol,
            atol=self.atol,
            xtol=self.xtol,
            max_evaluations=self.max_evaluations,
        )
        result = simplex.minimize(unbounded_objective, y0, np.full(x0.size, self.initial_step))

        return OptimizationResult(
            x=unbounded_to_bounded(result.x, lower, upper),
            fun=sign * result.fun,
            nfev=result.nfev,
            nit=result.nit,
            success=result.converged,
            message=result.message,
        )

    def optimize(
        self,
        objective: Objective,
        initial_guess: ArrayLike,
        bounds: Bounds,
        goal: Goal = Goal.MINIMIZE,
    ) -> FloatArray:
        """Optimize and return the parameter vector.

        Raises
        ------
            NonConvergenceError: If the evaluation budget is exhausted
        """
        return self.ensure_converged(self.run(objective, initial_guess, bounds, goal))

    def ensure_converged(self, result: OptimizationResult) -> FloatArray:
        """Return ``result.x``, raising NonConvergenceError for a failed run."""
        if not result.success:
            reason = (
                f"Optimization did not converge within {self.max_evaluations} "
                f"evaluations: {result.message}"
            )
            raise NonConvergenceError(
                reason, nfev=result.nfev, max_evaluations=self.max_evaluations
            )
        return result.x


__all__ = ["BoundedSimplexOptimizer", "Goal", "OptimizationResult"]
