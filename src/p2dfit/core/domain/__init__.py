"""Domain configuration models."""

from p2dfit.core.domain.config import IntervalConfig, OptimizerConfig, P2DFitConfig

__all__ = ["IntervalConfig", "OptimizerConfig", "P2DFitConfig"]
