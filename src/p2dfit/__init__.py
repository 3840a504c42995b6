"""p2dfit - Maximum-likelihood fitting of pairwise distance distributions.

Public API:
    - P2DFitter: Fitting session (solve, fit, log-likelihood, interval)
    - FixedSigma, FreeSigma: Fitting modes
    - Bounds: Parameter bounds shared by mu and sigma

Numerics:
    - p2d, log_p2d: P2D probability density
    - bessel_i0, bessel_i0e, log_bessel_i0: Modified Bessel function I0
    - BoundedSimplexOptimizer: Bounded Nelder-Mead optimizer

Configuration:
    - P2DFitConfig, OptimizerConfig, IntervalConfig
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from p2dfit.core.density import bessel_i0, bessel_i0e, log_bessel_i0, log_p2d, p2d  # noqa: E402
from p2dfit.core.domain.config import IntervalConfig, OptimizerConfig, P2DFitConfig  # noqa: E402
from p2dfit.core.fitting import (  # noqa: E402
    BoundedSimplexOptimizer,
    Bounds,
    FitResult,
    FixedSigma,
    FreeSigma,
    Goal,
    sample_p2d,
)
from p2dfit.core.fitting.interval import ConfidenceInterval  # noqa: E402
from p2dfit.core.shared.exceptions import (  # noqa: E402
    ConfigError,
    NonConvergenceError,
    OptimizationError,
    P2DFitError,
)
from p2dfit.services import P2DFitter  # noqa: E402

__all__ = [
    "__version__",
    # Session
    "P2DFitter",
    "FitResult",
    "ConfidenceInterval",
    # Parameters
    "Bounds",
    "FixedSigma",
    "FreeSigma",
    # Numerics
    "BoundedSimplexOptimizer",
    "Goal",
    "bessel_i0",
    "bessel_i0e",
    "log_bessel_i0",
    "log_p2d",
    "p2d",
    "sample_p2d",
    # Configuration
    "IntervalConfig",
    "OptimizerConfig",
    "P2DFitConfig",
    # Errors
    "ConfigError",
    "NonConvergenceError",
    "OptimizationError",
    "P2DFitError",
]
