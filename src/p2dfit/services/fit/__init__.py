"""Fit service exposing P2D fitting sessions."""

from p2dfit.services.fit.service import P2DFitter

__all__ = ["P2DFitter"]
