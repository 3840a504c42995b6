"""Application service layer for p2dfit.

This module provides the high-level session facade that embedding
applications use without knowing core implementation details.
"""

from p2dfit.services.fit import P2DFitter

__all__ = ["P2DFitter"]
