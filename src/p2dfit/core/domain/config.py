"""Configuration models for P2D fitting sessions."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from p2dfit.core.constants import (
    DEFAULT_MU_GUESS,
    DEFAULT_SIGMA_GUESS,
    HALF_MAXIMUM_LEVEL,
    INTERVAL_LOWER_START_FACTOR,
    INTERVAL_UPPER_START_FACTOR,
    SIMPLEX_ATOL,
    SIMPLEX_INITIAL_STEP,
    SIMPLEX_MAX_EVALUATIONS,
    SIMPLEX_RTOL,
    SIMPLEX_XTOL,
)
from p2dfit.core.fitting.parameters import Bounds, FitMode, FreeSigma

ResidualScale = Literal["log", "linear"]


class OptimizerConfig(BaseModel):
    """Settings of the bounded simplex optimizer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    initial_step: Annotated[float, Field(gt=0)] = Field(
        default=SIMPLEX_INITIAL_STEP,
        description="Initial simplex step per free dimension, in unbounded units.",
    )
    max_evaluations: Annotated[int, Field(gt=0)] = Field(
        default=SIMPLEX_MAX_EVALUATIONS,
        description="Objective evaluations allowed per optimization.",
    )
    rtol: Annotated[float, Field(ge=0)] = Field(
        default=SIMPLEX_RTOL,
        description="Relative tolerance on vertex values between iterations.",
    )
    atol: Annotated[float, Field(ge=0)] = Field(
        default=SIMPLEX_ATOL,
        description="Absolute tolerance on vertex values between iterations.",
    )
    xtol: Annotated[float, Field(ge=0)] = Field(
        default=SIMPLEX_XTOL,
        description="Simplex size below which the search stops.",
    )


class IntervalConfig(BaseModel):
    """Settings of the half-maximum confidence interval search.

    The defaults search each crossing on its own side of the density peak
    and compare densities on a log scale. ``residual = "linear"`` together
    with ``split_at_peak = false`` reproduces the plain squared-difference
    search over the full fit bounds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Annotated[float, Field(gt=0, lt=1)] = Field(
        default=HALF_MAXIMUM_LEVEL,
        description="Fraction of the peak density defining the interval.",
    )
    lower_start_factor: Annotated[float, Field(gt=0, lt=1)] = Field(
        default=INTERVAL_LOWER_START_FACTOR,
        description="Lower crossing search starts at this multiple of the peak location.",
    )
    upper_start_factor: Annotated[float, Field(gt=1)] = Field(
        default=INTERVAL_UPPER_START_FACTOR,
        description="Upper crossing search starts at this multiple of the peak location.",
    )
    residual: ResidualScale = Field(
        default="log",
        description="Compare densities on a log or linear scale.",
    )
    split_at_peak: bool = Field(
        default=True,
        description="Restrict each crossing search to its side of the peak.",
    )


class P2DFitConfig(BaseModel):
    """Top-level configuration of a P2D fitting session.

    Example TOML configuration:
        mu_guess = 0.0
        sigma_guess = 10.0

        [mode]
        kind = "fixed"
        sigma = 2.0

        [bounds]
        upper = 100.0

        [optimizer]
        max_evaluations = 500

        [interval]
        residual = "log"
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: FitMode = Field(default_factory=FreeSigma)
    bounds: Bounds
    mu_guess: float = DEFAULT_MU_GUESS
    sigma_guess: float = DEFAULT_SIGMA_GUESS
    optimizer: OptimizerConfig = Field(default_factory=OptimizerConfig)
    interval: IntervalConfig = Field(default_factory=IntervalConfig)

    @model_validator(mode="after")
    def validate_guesses(self) -> P2DFitConfig:
        """Initial guesses of the free parameters must lie within the bounds."""
        guesses = [("mu_guess", self.mu_guess)]
        if isinstance(self.mode, FreeSigma):
            guesses.append(("sigma_guess", self.sigma_guess))
        for name, value in guesses:
            if not self.bounds.contains(value):
                msg = (
                    f"{name} ({value}) outside bounds "
                    f"[{self.bounds.lower}, {self.bounds.upper}]"
                )
                raise ValueError(msg)
        return self
