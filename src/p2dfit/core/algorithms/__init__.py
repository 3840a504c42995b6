"""Numerical search algorithms."""

from p2dfit.core.algorithms.simplex import NelderMeadSimplex, SimplexResult

__all__ = ["NelderMeadSimplex", "SimplexResult"]
