"""Fitting result classes."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from p2dfit.core.fitting.parameters import FixedSigma, FreeSigma
from p2dfit.core.shared.typing import FloatArray  # noqa: TC001


@dataclass(frozen=True)
class FitResult:
    """Outcome of a maximum-likelihood P2D fit.

    A failed fit is still a FitResult: ``success`` is False, ``message`` says
    why, and ``params`` holds the best point evaluated before the budget ran
    out. Callers that prefer an exception use ``P2DFitter.solve``.

    Attributes
    ----------
        params: Fitted vector, ``[mu]`` or ``[mu, sigma]``
        mode: Fitting mode used
        negative_log_likelihood: Objective value at ``params``
        n_data: Number of measurements
        nfev: Objective evaluations
        nit: Simplex iterations
        success: Whether the optimizer converged
        message: Optimizer status message
    """

    params: FloatArray
    mode: FixedSigma | FreeSigma
    negative_log_likelihood: float
    n_data: int
    nfev: int
    nit: int
    success: bool
    message: str

    @property
    def mu(self) -> float:
        return float(self.params[0])

    @property
    def sigma(self) -> float:
        """Fitted sigma, or the fixed value for FixedSigma fits."""
        return self.mode.split(self.params)[1]

    @property
    def n_params(self) -> int:
        return self.mode.n_free

    @property
    def log_likelihood(self) -> float:
        return -self.negative_log_likelihood

    @property
    def aic(self) -> float:
        """Akaike Information Criterion: 2k - 2 log L."""
        return 2.0 * self.n_params + 2.0 * self.negative_log_likelihood

    @property
    def bic(self) -> float:
        """Bayesian Information Criterion: k log n - 2 log L."""
        return self.n_params * float(np.log(self.n_data)) + 2.0 * self.negative_log_likelihood

    def to_dict(self) -> dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "mode": self.mode.kind,
            "mu": self.mu,
            "sigma": self.sigma,
            "negative_log_likelihood": self.negative_log_likelihood,
            "aic": self.aic,
            "bic": self.bic,
            "n_data": self.n_data,
            "nfev": self.nfev,
            "nit": self.nit,
            "success": self.success,
            "message": self.message,
        }

    def summary(self) -> str:
        """Get a formatted summary of the fit."""
        sigma_str = "fitted" if isinstance(self.mode, FreeSigma) else "fixed"
        status = "converged" if self.success else "NOT converged"
        lines = [
            "P2D fit:",
            "=" * 48,
            f"  {'mu':10s} = {self.mu:12.6g}",
            f"  {'sigma':10s} = {self.sigma:12.6g} ({sigma_str})",
            f"  {'-log L':10s} = {self.negative_log_likelihood:12.6g}",
            f"  {'AIC':10s} = {self.aic:12.6g}",
            f"  {'BIC':10s} = {self.bic:12.6g}",
            f"  {self.n_data} distances, {self.nfev} evaluations, {status}",
            "=" * 48,
        ]
        return "\n".join(lines)


__all__ = ["FitResult"]
