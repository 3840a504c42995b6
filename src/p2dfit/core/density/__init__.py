"""P2D density model and the Bessel function it depends on."""

from p2dfit.core.density.bessel import bessel_i0, bessel_i0e, log_bessel_i0
from p2dfit.core.density.p2d import log_p2d, p2d

__all__ = [
    "bessel_i0",
    "bessel_i0e",
    "log_bessel_i0",
    "log_p2d",
    "p2d",
]
