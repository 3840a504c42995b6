"""Shared foundational utilities for p2dfit."""

from p2dfit.core.shared import reporter, typing
from p2dfit.core.shared.exceptions import (
    ConfigError,
    NonConvergenceError,
    OptimizationError,
    P2DFitError,
)
from p2dfit.core.shared.reporter import LoggingReporter, NullReporter, Reporter

__all__ = [
    "ConfigError",
    "LoggingReporter",
    "NonConvergenceError",
    "NullReporter",
    "OptimizationError",
    "P2DFitError",
    "Reporter",
    "reporter",
    "typing",
]
