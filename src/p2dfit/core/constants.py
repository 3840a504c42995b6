"""Core constants for p2dfit numerics and optimization.

These constants define the defaults of the simplex optimizer, the Bessel
evaluator and the likelihood objective. Optimizer and interval settings can be
overridden through :class:`p2dfit.core.domain.config.P2DFitConfig`.
"""

import numpy as np

# =============================================================================
# Simplex Optimization Defaults
# =============================================================================

SIMPLEX_INITIAL_STEP = 0.2
"""Initial simplex step per free dimension, in unbounded (mapped) units."""

SIMPLEX_MAX_EVALUATIONS = 500
"""Maximum number of objective evaluations per optimization.

This cap is the only bound on run time; exhausting it is reported as a
non-convergence failure.
"""

SIMPLEX_RTOL = 1e-9
"""Relative tolerance on vertex values between successive iterations."""

SIMPLEX_ATOL = 1e-12
"""Absolute tolerance on vertex values between successive iterations."""

SIMPLEX_XTOL = 1e-10
"""Simplex size (max vertex distance to the best vertex) below which the search stops."""

# Nelder-Mead coefficients
NELDER_MEAD_REFLECTION = 1.0
NELDER_MEAD_EXPANSION = 2.0
NELDER_MEAD_CONTRACTION = 0.5
NELDER_MEAD_SHRINK = 0.5

BOUNDARY_NUDGE = 1e-3
"""Fraction of the bound span used to move a start point off a bound.

A start point lying exactly on a finite bound maps to an infinite unbounded
coordinate, which would freeze the simplex.
"""

# =============================================================================
# Bessel Function Defaults
# =============================================================================

BESSEL_SERIES_CROSSOVER = 20.0
"""Argument above which I0 switches from the power series to the asymptotic expansion.

At x = 20 the series still converges in ~45 terms without cancellation, and the
asymptotic expansion truncated at BESSEL_ASYMPTOTIC_TERMS is accurate to ~1e-16.
"""

BESSEL_SERIES_MAX_TERMS = 80
BESSEL_ASYMPTOTIC_TERMS = 30

# =============================================================================
# Likelihood Defaults
# =============================================================================

DENSITY_PENALTY = float(-np.log(np.nextafter(0.0, 1.0)))
"""Negative log-likelihood term used when a density evaluates to zero.

Equal to -log of the smallest positive double (~744.4), i.e. the cost the term
would have at the smallest representable density.
"""

# =============================================================================
# Session Defaults
# =============================================================================

DEFAULT_MU_GUESS = 0.0
DEFAULT_SIGMA_GUESS = 10.0

HALF_MAXIMUM_LEVEL = 0.5
INTERVAL_LOWER_START_FACTOR = 0.5
INTERVAL_UPPER_START_FACTOR = 4.0
