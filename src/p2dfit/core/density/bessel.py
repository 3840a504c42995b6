r"""Modified Bessel function of the first kind, order zero.

The P2D density contains :math:`I_0(r\mu/\sigma^2)`, which grows like
:math:`e^x/\sqrt{2\pi x}` and overflows a double for :math:`x \gtrsim 713`.
Three entry points are provided:

- :func:`bessel_i0` returns :math:`I_0(x)` itself (``inf`` only where the true
  value exceeds the double range).
- :func:`bessel_i0e` returns the exponentially scaled :math:`e^{-|x|} I_0(x)`,
  which is finite for every argument.
- :func:`log_bessel_i0` returns :math:`\log I_0(x)`, finite for every finite
  argument. The density model works exclusively with this form.

Evaluation regimes
------------------
For :math:`|x| \le` ``BESSEL_SERIES_CROSSOVER`` the convergent power series

.. math:: I_0(x) = \sum_{k \ge 0} \frac{(x^2/4)^k}{(k!)^2}

is summed until the next term drops below machine precision (all terms are
positive, so the relative error stays below 1e-15). Above the crossover the
asymptotic expansion

.. math:: I_0(x) \sim \frac{e^x}{\sqrt{2\pi x}}
          \sum_{k \ge 0} \frac{((2k-1)!!)^2}{k!\,(8x)^k}

is truncated after ``BESSEL_ASYMPTOTIC_TERMS`` terms. The terms keep
decreasing up to :math:`k \approx 2x`, so the truncation error at the
crossover is ~1e-16 and falls quickly beyond it.

All functions are vectorized; a scalar argument returns a Python float.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from p2dfit.core.constants import (
    BESSEL_ASYMPTOTIC_TERMS,
    BESSEL_SERIES_CROSSOVER,
    BESSEL_SERIES_MAX_TERMS,
)

if TYPE_CHECKING:
    from p2dfit.core.shared.typing import ArrayLike, FloatArray

_EPS = np.finfo(np.float64).eps
_LOG_2PI = np.log(2.0 * np.pi)


def _power_series(x: FloatArray) -> FloatArray:
    """Sum the power series of I0 for small arguments."""
    quarter_x2 = 0.25 * x * x
    term = np.ones_like(x)
    total = np.ones_like(x)
    for k in range(1, BESSEL_SERIES_MAX_TERMS + 1):
        term = term * quarter_x2 / (k * k)
        total = total + term
        if np.all(term <= _EPS * total):
            break
    return total


def _asymptotic_sum(x: FloatArray) -> FloatArray:
    """Sum the bracketed asymptotic series (tends to 1 as x grows)."""
    inv_8x = 1.0 / (8.0 * x)
    term = np.ones_like(x)
    total = np.ones_like(x)
    for k in range(1, BESSEL_ASYMPTOTIC_TERMS + 1):
        term = term * (2 * k - 1) ** 2 * inv_8x / k
        total = total + term
    return total


def _split(x: ArrayLike) -> tuple[FloatArray, np.ndarray, bool]:
    """Return |x| as a float array, the series-regime mask and a scalar flag."""
    scalar = np.ndim(x) == 0
    ax = np.abs(np.atleast_1d(np.asarray(x, dtype=np.float64)))
    return ax, ax <= BESSEL_SERIES_CROSSOVER, scalar


def _finish(values: FloatArray, scalar: bool) -> float | FloatArray:
    return float(values[0]) if scalar else values


def log_bessel_i0(x: ArrayLike) -> float | FloatArray:
    """Natural logarithm of I0(x).

    Args:
        x: Argument(s); I0 is even so the sign is ignored

    Returns
    -------
        log I0(x), finite for every finite x (``inf`` for infinite x)
    """
    ax, small, scalar = _split(x)
    out = np.empty_like(ax)
    out[small] = np.log(_power_series(ax[small]))

    large = ~small & np.isfinite(ax)
    xl = ax[large]
    out[large] = xl - 0.5 * (_LOG_2PI + np.log(xl)) + np.log(_asymptotic_sum(xl))

    rest = ~small & ~np.isfinite(ax)
    out[rest] = ax[rest]  # inf stays inf, nan stays nan
    return _finish(out, scalar)


def bessel_i0e(x: ArrayLike) -> float | FloatArray:
    """Exponentially scaled Bessel function exp(-|x|) * I0(x)."""
    ax, small, scalar = _split(x)
    out = np.empty_like(ax)
    out[small] = np.exp(-ax[small]) * _power_series(ax[small])

    large = ~small
    xl = ax[large]
    with np.errstate(divide="ignore", invalid="ignore"):
        out[large] = _asymptotic_sum(xl) / np.sqrt(2.0 * np.pi * xl)
    out[large & np.isinf(ax)] = 0.0
    return _finish(out, scalar)


def bessel_i0(x: ArrayLike) -> float | FloatArray:
    """Modified Bessel function of the first kind, order zero.

    Args:
        x: Argument(s)

    Returns
    -------
        I0(x); I0(0) == 1. Overflows to ``inf`` beyond x ~ 713.
    """
    ax, small, scalar = _split(x)
    out = np.empty_like(ax)
    out[small] = _power_series(ax[small])

    large = ~small
    log_values = np.atleast_1d(log_bessel_i0(ax[large]))
    with np.errstate(over="ignore"):
        out[large] = np.exp(log_values)
    return _finish(out, scalar)


__all__ = ["bessel_i0", "bessel_i0e", "log_bessel_i0"]
