"""P2D likelihood fitting and bounded optimization.

The confidence interval solver lives in :mod:`p2dfit.core.fitting.interval`;
it depends on the configuration models and is imported from there directly.
"""

from p2dfit.core.fitting.likelihood import LikelihoodObjective, negative_log_likelihood
from p2dfit.core.fitting.optimizer import BoundedSimplexOptimizer, Goal, OptimizationResult
from p2dfit.core.fitting.parameters import Bounds, FitMode, FixedSigma, FreeSigma
from p2dfit.core.fitting.results import FitResult
from p2dfit.core.fitting.simulation import sample_p2d
from p2dfit.core.fitting.transforms import bounded_to_unbounded, unbounded_to_bounded

__all__ = [
    "BoundedSimplexOptimizer",
    "Bounds",
    "FitMode",
    "FitResult",
    "FixedSigma",
    "FreeSigma",
    "Goal",
    "LikelihoodObjective",
    "OptimizationResult",
    "bounded_to_unbounded",
    "negative_log_likelihood",
    "sample_p2d",
    "unbounded_to_bounded",
]
