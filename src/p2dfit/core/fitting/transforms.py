r"""Mapping between bounded parameters and unbounded search coordinates.

The simplex search runs in an unconstrained space. Every fit coordinate has
finite bounds ``[lo, hi]`` (see :class:`~p2dfit.core.fitting.parameters.Bounds`)
and is mapped independently through the logistic function:

.. math::

    y = \operatorname{logit}\left(\frac{x - lo}{hi - lo}\right), \qquad
    x = lo + (hi - lo)\,\operatorname{expit}(y)

so that ``y -> -inf`` as ``x -> lo`` and ``y -> +inf`` as ``x -> hi``. The
functions are pure and stateless; the same pair serves every optimization.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy.special import expit, logit

from p2dfit.core.constants import BOUNDARY_NUDGE

if TYPE_CHECKING:
    from p2dfit.core.shared.typing import ArrayLike, FloatArray


def _broadcast(
    values: ArrayLike, lower: ArrayLike, upper: ArrayLike
) -> tuple[FloatArray, FloatArray, FloatArray]:
    v = np.atleast_1d(np.asarray(values, dtype=np.float64))
    lo = np.broadcast_to(np.asarray(lower, dtype=np.float64), v.shape)
    hi = np.broadcast_to(np.asarray(upper, dtype=np.float64), v.shape)
    if not np.all(np.isfinite(lo) & np.isfinite(hi)):
        msg = "Bounded coordinates need finite lower and upper bounds"
        raise ValueError(msg)
    return v, lo, hi


def bounded_to_unbounded(x: ArrayLike, lower: ArrayLike, upper: ArrayLike) -> FloatArray:
    """Map bounded coordinates to the unbounded search space.

    Args:
        x: Bounded coordinates, lower <= x <= upper
        lower: Finite lower bound(s)
        upper: Finite upper bound(s)

    Returns
    -------
        Unbounded coordinates (infinite for x exactly on a bound)
    """
    x, lo, hi = _broadcast(x, lower, upper)
    with np.errstate(divide="ignore"):
        return logit((x - lo) / (hi - lo))


def unbounded_to_bounded(y: ArrayLike, lower: ArrayLike, upper: ArrayLike) -> FloatArray:
    """Map unbounded search coordinates back into the bounded space."""
    y, lo, hi = _broadcast(y, lower, upper)
    return lo + (hi - lo) * expit(y)


def nudge_inside(x: ArrayLike, lower: ArrayLike, upper: ArrayLike) -> FloatArray:
    """Clip coordinates into their bounds and move them off either bound.

    A start point on a bound maps to an infinite unbounded coordinate, so it is
    pulled inside by ``BOUNDARY_NUDGE`` times the bound span.
    """
    x, lo, hi = _broadcast(x, lower, upper)
    x = np.clip(x, lo, hi)
    delta = BOUNDARY_NUDGE * (hi - lo)
    x = np.where(x <= lo, lo + delta, x)
    return np.where(x >= hi, hi - delta, x)


__all__ = ["bounded_to_unbounded", "nudge_inside", "unbounded_to_bounded"]
