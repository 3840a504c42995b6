"""Console and logging output for p2dfit.

Submodules:
- console: Theme and console instance
- logging: File and console logging utilities
"""

from p2dfit.ui.console import P2DFIT_THEME, VERSION, console
from p2dfit.ui.logging import close_logging, log, log_dict, setup_logging

__all__ = [
    "P2DFIT_THEME",
    "VERSION",
    "close_logging",
    "console",
    "log",
    "log_dict",
    "setup_logging",
]
