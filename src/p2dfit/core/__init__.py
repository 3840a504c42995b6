"""Core module for p2dfit - density model, likelihood and optimization."""
