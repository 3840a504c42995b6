"""Simulate distance measurements from the P2D model."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from p2dfit.core.shared.typing import FloatArray


def sample_p2d(
    mu: float,
    sigma: float,
    size: int,
    rng: np.random.Generator | int | None = None,
) -> FloatArray:
    """Draw distances distributed according to p2d(r; mu, sigma).

    The P2D density is the distribution of the length of a 2-D vector whose
    components are Gaussian with standard deviation ``sigma`` around a true
    displacement of length ``mu``; sampling that vector directly avoids any
    rejection step.

    Args:
        mu: True distance
        sigma: Localization error per axis
        size: Number of distances to draw
        rng: Random generator or seed

    Returns
    -------
        Array of ``size`` non-negative distances
    """
    if sigma <= 0:
        msg = f"sigma must be positive, got {sigma}"
        raise ValueError(msg)
    rng = np.random.default_rng(rng)
    displacement = rng.normal(0.0, sigma, size=(size, 2))
    displacement[:, 0] += mu
    return np.hypot(displacement[:, 0], displacement[:, 1])
