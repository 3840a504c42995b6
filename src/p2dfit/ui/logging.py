"""Session logging for p2dfit.

Logging is off until :func:`setup_logging` is called. It can then go to a
file (plain text, or JSON lines when the file name ends in ``.json``) and,
with ``verbose``, to stderr through rich. The helpers :func:`log` and
:func:`log_dict` are no-ops while logging is off, so the fitting code can
call them unconditionally.
"""

from __future__ import annotations

import json
import logging
import platform
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import scipy
from rich.logging import RichHandler

from p2dfit.ui.console import VERSION, console

if TYPE_CHECKING:
    from pathlib import Path

LOGGER_NAME = "p2dfit"
RULE = "━" * 60

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Set by setup_logging, cleared by close_logging
_logger: logging.Logger | None = None


class JSONFormatter(logging.Formatter):
    """Format each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }
        fields = getattr(record, "fields", None)
        if fields is not None:
            payload["fields"] = fields
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    handler.setLevel(level)
    if log_file.suffix == ".json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-7s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
    handler.setLevel(level)
    return handler


def setup_logging(
    log_file: Path | None = None,
    verbose: bool = False,
    level: int = logging.INFO,
) -> None:
    """Start logging fitting sessions.

    Args:
        log_file: Log destination; a ``.json`` suffix selects JSON lines
        verbose: Also log to stderr through rich
        level: Minimum level recorded
    """
    global _logger

    if log_file is None and not verbose:
        _logger = None
        return

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    if log_file is not None:
        logger.addHandler(_file_handler(log_file, level))
    if verbose:
        logger.addHandler(_console_handler(level))
    _logger = logger

    logger.info(RULE)
    logger.info(f"p2dfit v{VERSION} - Session Started")
    logger.info(RULE)
    logger.info(
        f"Python {platform.python_version()} | numpy {np.__version__} | scipy {scipy.__version__}"
    )


def log(message: str, level: str = "info") -> None:
    """Log a message at the named level (unknown names log at INFO)."""
    if _logger is not None:
        _logger.log(_LEVELS.get(level.lower(), logging.INFO), message)


def log_dict(data: dict[str, object], indent: str = "  ") -> None:
    """Log one ``- key: value`` line per entry.

    JSON log files also receive each entry under ``fields``.
    """
    if _logger is None:
        return
    for key, value in data.items():
        _logger.info(f"{indent}- {key}: {value}", extra={"fields": {key: value}})


def close_logging() -> None:
    """Finish the session log and detach all handlers."""
    global _logger

    if _logger is None:
        return

    _logger.info(RULE)
    _logger.info("p2dfit Session Completed")
    for handler in list(_logger.handlers):
        handler.close()
        _logger.removeHandler(handler)
    _logger = None


__all__ = [
    "LOGGER_NAME",
    "JSONFormatter",
    "close_logging",
    "log",
    "log_dict",
    "setup_logging",
]
