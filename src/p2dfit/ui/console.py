"""Console configuration for p2dfit output.

This module provides the console instance used by the rich logging handler.
"""

from rich.console import Console
from rich.theme import Theme

from p2dfit import __version__ as VERSION  # noqa: N812

P2DFIT_THEME = Theme(
    {
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        "key": "cyan",
        "value": "green",
        "number": "green",
    }
)

# Single console instance for the whole package; logs go to stderr
console = Console(theme=P2DFIT_THEME, stderr=True)

__all__ = ["P2DFIT_THEME", "VERSION", "console"]
