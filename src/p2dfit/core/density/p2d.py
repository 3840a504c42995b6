r"""Pairwise-distance (P2D) probability density.

The distance between two points whose positions are measured with isotropic
2-D Gaussian error :math:`\sigma`, and whose true separation is :math:`\mu`,
follows

.. math::

    p_{2D}(r; \mu, \sigma) = \frac{r}{\sigma^2}
        \exp\!\left(-\frac{\mu^2 + r^2}{2\sigma^2}\right)
        I_0\!\left(\frac{r\mu}{\sigma^2}\right)

(Churchman et al., Biophys. J. 90, 668-671, 2006). The density is evaluated in
the log domain, folding the growth of :math:`I_0` into the Gaussian factor:

.. math::

    \log p_{2D} = \log r - 2\log\sigma - \frac{(r-\mu)^2}{2\sigma^2}
        + \log\left(e^{-z} I_0(z)\right), \qquad z = r\mu/\sigma^2

so that large :math:`z` never overflows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from p2dfit.core.density.bessel import bessel_i0e

if TYPE_CHECKING:
    from p2dfit.core.shared.typing import ArrayLike, FloatArray


def log_p2d(r: ArrayLike, mu: float, sigma: float) -> float | FloatArray:
    """Log of the P2D density.

    Args:
        r: Distance(s)
        mu: Location parameter (true distance)
        sigma: Scale parameter (localization error)

    Returns
    -------
        log p2d(r); ``-inf`` where the density vanishes (r <= 0 or sigma <= 0)
    """
    scalar = np.ndim(r) == 0
    r_arr = np.atleast_1d(np.asarray(r, dtype=np.float64))
    out = np.full_like(r_arr, -np.inf)

    var = float(sigma) * float(sigma)
    if sigma > 0.0 and 0.0 < var < np.inf:
        valid = r_arr > 0.0
        rv = r_arr[valid]
        z = rv * abs(mu) / var
        with np.errstate(divide="ignore"):
            out[valid] = (
                np.log(rv)
                - np.log(var)
                - (rv - abs(mu)) ** 2 / (2.0 * var)
                + np.log(np.atleast_1d(bessel_i0e(z)))
            )

    return float(out[0]) if scalar else out


def p2d(r: ArrayLike, mu: float, sigma: float) -> float | FloatArray:
    """P2D probability density.

    Returns exactly 0 (never NaN) for r <= 0 and for a degenerate sigma <= 0.

    Examples
    --------
        >>> p2d(0.0, 6.0, 1.5)
        0.0
    """
    log_values = log_p2d(r, mu, sigma)
    return float(np.exp(log_values)) if np.ndim(log_values) == 0 else np.exp(log_values)


__all__ = ["log_p2d", "p2d"]
