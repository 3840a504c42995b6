"""Negative log-likelihood of distance measurements under the P2D model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from p2dfit.core.constants import DENSITY_PENALTY
from p2dfit.core.density.p2d import log_p2d

if TYPE_CHECKING:
    from p2dfit.core.fitting.parameters import FixedSigma, FreeSigma
    from p2dfit.core.shared.typing import ArrayLike, FloatArray


def negative_log_likelihood(
    params: ArrayLike,
    measurements: FloatArray,
    mode: FixedSigma | FreeSigma,
) -> float:
    """Sum of -log p2d(r; mu, sigma) over all measurements.

    Terms whose density vanishes (r = 0, degenerate sigma) contribute
    ``DENSITY_PENALTY`` instead of ``+inf`` so the objective stays finite.

    Args:
        params: ``[mu]`` for FixedSigma, ``[mu, sigma]`` for FreeSigma
        measurements: Observed distances
        mode: Fitting mode supplying sigma when it is fixed

    Returns
    -------
        Negative log-likelihood (finite)
    """
    mu, sigma = mode.split(np.atleast_1d(np.asarray(params, dtype=np.float64)))
    terms = -np.atleast_1d(log_p2d(measurements, mu, sigma))
    terms = np.where(np.isfinite(terms), terms, DENSITY_PENALTY)
    return float(np.sum(terms))


@dataclass(frozen=True)
class LikelihoodObjective:
    """Negative log-likelihood bound to a measurement set and a fitting mode."""

    measurements: FloatArray
    mode: FixedSigma | FreeSigma

    @property
    def n_free(self) -> int:
        return self.mode.n_free

    def __call__(self, params: FloatArray) -> float:
        return negative_log_likelihood(params, self.measurements, self.mode)


__all__ = ["LikelihoodObjective", "negative_log_likelihood"]
