"""Parameter space of a P2D fit: bounds and fitting modes.

A fit estimates either ``[mu]`` (sigma fixed) or ``[mu, sigma]`` (sigma free).
The choice is a tagged variant, :class:`FixedSigma` or :class:`FreeSigma`,
which decides the length of the parameter vector handed to the optimizer.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

import numpy as np

from p2dfit.core.shared.typing import FloatArray  # noqa: TC001

MU = "mu"
SIGMA = "sigma"


class Bounds(BaseModel):
    """Box constraint shared by mu and sigma."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    lower: Annotated[float, Field(ge=0.0)] = 0.0
    upper: float

    @model_validator(mode="after")
    def validate_bounds(self) -> Bounds:
        """Validate bound ordering and finiteness."""
        if not np.isfinite(self.upper):
            msg = f"Upper bound must be finite, got {self.upper}"
            raise ValueError(msg)
        if not self.lower < self.upper:
            msg = f"Bounds: lower ({self.lower}) must be < upper ({self.upper})"
            raise ValueError(msg)
        return self

    def contains(self, value: float) -> bool:
        """Check whether a value lies inside the closed interval."""
        return self.lower <= value <= self.upper

    def clip(self, value: float) -> float:
        """Clip a value into the closed interval."""
        return float(min(max(value, self.lower), self.upper))

    def arrays(self, n: int) -> tuple[FloatArray, FloatArray]:
        """Lower and upper bound vectors for an n-parameter problem."""
        return np.full(n, self.lower), np.full(n, self.upper)

    def __repr__(self) -> str:
        return f"<Bounds [{self.lower:.4g}, {self.upper:.4g}]>"


class FixedSigma(BaseModel):
    """Fit mu only; sigma is held at a known value."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["fixed"] = "fixed"
    sigma: Annotated[float, Field(gt=0.0, allow_inf_nan=False)]

    @property
    def n_free(self) -> int:
        return 1

    @property
    def names(self) -> tuple[str, ...]:
        return (MU,)

    def split(self, params: FloatArray) -> tuple[float, float]:
        """Return (mu, sigma) from a parameter vector."""
        _check_length(params, 1)
        return float(params[0]), self.sigma

    def initial_guess(self, mu: float, sigma: float) -> FloatArray:  # noqa: ARG002
        return np.array([mu], dtype=np.float64)


class FreeSigma(BaseModel):
    """Fit both mu and sigma."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["free"] = "free"

    @property
    def n_free(self) -> int:
        return 2

    @property
    def names(self) -> tuple[str, ...]:
        return (MU, SIGMA)

    def split(self, params: FloatArray) -> tuple[float, float]:
        """Return (mu, sigma) from a parameter vector."""
        _check_length(params, 2)
        return float(params[0]), float(params[1])

    def initial_guess(self, mu: float, sigma: float) -> FloatArray:
        return np.array([mu, sigma], dtype=np.float64)


FitMode = Annotated[FixedSigma | FreeSigma, Field(discriminator="kind")]


def _check_length(params: FloatArray, expected: int) -> None:
    if len(params) != expected:
        msg = f"Expected a parameter vector of length {expected}, got {len(params)}"
        raise ValueError(msg)


__all__ = ["MU", "SIGMA", "Bounds", "FitMode", "FixedSigma", "FreeSigma"]
