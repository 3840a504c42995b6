"""Exception taxonomy for p2dfit.

This module defines a small hierarchy of exceptions so callers can tell an
invalid fitting session apart from a fit that ran out of budget. Numeric edge
cases (vanishing densities, Bessel overflow) are absorbed by the numerics and
never surface here.
"""

from __future__ import annotations


class P2DFitError(Exception):
    """Base class for all p2dfit-specific exceptions."""


class ConfigError(P2DFitError, ValueError):
    """Invalid input or configuration (empty data, bad bounds, sigma <= 0)."""


class OptimizationError(P2DFitError):
    """Errors occurring during an optimization run."""


class NonConvergenceError(OptimizationError):
    """An optimization exhausted its evaluation budget before converging.

    Attributes
    ----------
        reason: Human-readable description of the failure
        nfev: Number of objective evaluations performed
        max_evaluations: Evaluation budget that was exhausted
    """

    def __init__(self, reason: str, nfev: int = 0, max_evaluations: int = 0) -> None:
        super().__init__(reason)
        self.reason = reason
        self.nfev = nfev
        self.max_evaluations = max_evaluations


__all__ = [
    "ConfigError",
    "NonConvergenceError",
    "OptimizationError",
    "P2DFitError",
]
