"""Nelder-Mead downhill simplex search.

Derivative-free minimization of a scalar function over an unconstrained
space. The implementation follows the classic formulation (Nelder & Mead,
Comput. J. 7, 308-313, 1965) with the standard coefficients:

*   **Reflection** (rho = 1): mirror the worst vertex through the centroid of
    the others.
*   **Expansion** (chi = 2): if the reflected point is the new best, try going
    twice as far.
*   **Contraction** (gamma = 0.5): outside contraction when the reflected point
    beats the worst vertex, inside contraction otherwise.
*   **Shrink** (sigma = 0.5): pull every vertex halfway towards the best one
    when contraction fails.

Convergence is declared when every vertex value is unchanged, within a
relative or absolute tolerance, between two successive iterations, or when the
simplex has collapsed below ``xtol``. The objective is wrapped in an
:class:`EvaluationCounter` that refuses to evaluate beyond the budget, so at
most ``max_evaluations`` evaluations are ever performed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from p2dfit.core.constants import (
    NELDER_MEAD_CONTRACTION,
    NELDER_MEAD_EXPANSION,
    NELDER_MEAD_REFLECTION,
    NELDER_MEAD_SHRINK,
    SIMPLEX_ATOL,
    SIMPLEX_MAX_EVALUATIONS,
    SIMPLEX_RTOL,
    SIMPLEX_XTOL,
)

if TYPE_CHECKING:
    from p2dfit.core.shared.typing import FloatArray, Objective


class EvaluationBudgetExceeded(Exception):
    """Raised by :class:`EvaluationCounter` when the budget is exhausted."""


@dataclass
class EvaluationCounter:
    """Objective wrapper that counts evaluations and remembers the best point."""

    func: Objective
    max_evaluations: int
    count: int = 0
    best_x: FloatArray | None = field(default=None, repr=False)
    best_value: float = np.inf

    def __call__(self, x: FloatArray) -> float:
        if self.count >= self.max_evaluations:
            msg = f"Maximal evaluation count ({self.max_evaluations}) exceeded"
            raise EvaluationBudgetExceeded(msg)
        self.count += 1
        value = float(self.func(x))
        if value < self.best_value or self.best_x is None:
            self.best_value = value
            self.best_x = np.array(x, copy=True)
        return value


@dataclass(frozen=True, slots=True)
class SimplexResult:
    """Outcome of a simplex search.

    Attributes
    ----------
        x: Best vertex found
        fun: Objective value at ``x``
        nfev: Number of objective evaluations
        nit: Number of iterations
        converged: Whether a convergence criterion was met
        message: Human-readable termination reason
    """

    x: FloatArray
    fun: float
    nfev: int
    nit: int
    converged: bool
    message: str


@dataclass(frozen=True, slots=True)
class NelderMeadSimplex:
    """Nelder-Mead simplex minimizer with a hard evaluation budget."""

    rtol: float = SIMPLEX_RTOL
    atol: float = SIMPLEX_ATOL
    xtol: float = SIMPLEX_XTOL
    max_evaluations: int = SIMPLEX_MAX_EVALUATIONS
    rho: float = NELDER_MEAD_REFLECTION
    chi: float = NELDER_MEAD_EXPANSION
    gamma: float = NELDER_MEAD_CONTRACTION
    sigma: float = NELDER_MEAD_SHRINK

    def minimize(self, func: Objective, x0: FloatArray, steps: FloatArray) -> SimplexResult:
        """Minimize ``func`` starting from ``x0``.

        Args:
            func: Scalar objective on an n-vector
            x0: Start point, shape (n,)
            steps: Initial step per dimension, shape (n,). Vertex i+1 is
                ``x0`` displaced by ``steps[0..i]`` along the first i+1 axes.

        Returns
        -------
            SimplexResult; ``converged`` is False when the evaluation budget
            ran out, in which case ``x`` is the best point evaluated.
        """
        counter = EvaluationCounter(func, self.max_evaluations)
        x0 = np.asarray(x0, dtype=np.float64)
        steps = np.broadcast_to(np.asarray(steps, dtype=np.float64), x0.shape)
        n = x0.size

        vertices = np.tile(x0, (n + 1, 1))
        for i in range(n):
            vertices[i + 1 :, i] += steps[i]

        nit = 0
        try:
            values = np.array([counter(v) for v in vertices])
            while True:
                order = np.argsort(values, kind="stable")
                vertices, values = vertices[order], values[order]
                previous = values.copy()

                vertices, values = self._iterate(counter, vertices, values)
                nit += 1

                order = np.argsort(values, kind="stable")
                vertices, values = vertices[order], values[order]
                if self._converged(previous, values, vertices):
                    return SimplexResult(
                        x=vertices[0].copy(),
                        fun=float(values[0]),
                        nfev=counter.count,
                        nit=nit,
                        converged=True,
                        message="Optimization converged",
                    )
        except EvaluationBudgetExceeded as exc:
            best_x = x0.copy() if counter.best_x is None else counter.best_x
            return SimplexResult(
                x=best_x,
                fun=counter.best_value,
                nfev=counter.count,
                nit=nit,
                converged=False,
                message=str(exc),
            )

    def _iterate(
        self, func: EvaluationCounter, vertices: FloatArray, values: FloatArray
    ) -> tuple[FloatArray, FloatArray]:
        """Perform one Nelder-Mead step on a simplex sorted by value."""
        n = len(vertices) - 1
        best, second_worst, worst = values[0], values[n - 1], values[n]
        centroid = vertices[:n].mean(axis=0)

        x_r = centroid + self.rho * (centroid - vertices[n])
        f_r = func(x_r)

        if best <= f_r < second_worst:
            vertices[n], values[n] = x_r, f_r
        elif f_r < best:
            x_e = centroid + self.chi * (x_r - centroid)
            f_e = func(x_e)
            if f_e < f_r:
                vertices[n], values[n] = x_e, f_e
            else:
                vertices[n], values[n] = x_r, f_r
        else:
            if f_r < worst:
                x_c = centroid + self.gamma * (x_r - centroid)
                f_c = func(x_c)
                accept = f_c <= f_r
            else:
                x_c = centroid - self.gamma * (centroid - vertices[n])
                f_c = func(x_c)
                accept = f_c < worst

            if accept:
                vertices[n], values[n] = x_c, f_c
            else:
                for i in range(1, n + 1):
                    vertices[i] = vertices[0] + self.sigma * (vertices[i] - vertices[0])
                    values[i] = func(vertices[i])
        return vertices, values

    def _converged(self, previous: FloatArray, current: FloatArray, vertices: FloatArray) -> bool:
        diff = np.abs(previous - current)
        scale = np.maximum(np.abs(previous), np.abs(current))
        values_settled = bool(np.all((diff <= self.rtol * scale) | (diff <= self.atol)))
        size = float(np.max(np.linalg.norm(vertices[1:] - vertices[0], axis=1)))
        return values_settled or size <= self.xtol


__all__ = [
    "EvaluationBudgetExceeded",
    "EvaluationCounter",
    "NelderMeadSimplex",
    "SimplexResult",
]
