"""Status reporting for fitting sessions.

A :class:`~p2dfit.services.fit.service.P2DFitter` announces what it is doing
(starting a fit, converging, running out of evaluations) through a
:class:`Reporter`. Embedding applications pass their own implementation; the
numerical core never writes to a console or a log on its own.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class Reporter(Protocol):
    """Receiver of session status messages."""

    def action(self, message: str) -> None:
        """A step is starting (e.g. 'Fitting mu, sigma to 120 distances')."""
        ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None:
        """Something went wrong without raising, such as a non-converged fit."""
        ...

    def success(self, message: str) -> None: ...


class NullReporter:
    """Reporter that drops every message; the session default."""

    def action(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass


class LoggingReporter:
    """Forward session messages to a standard-library logger.

    Actions and successes are logged at INFO with a ``[ACTION]`` or
    ``[SUCCESS]`` tag; warnings at WARNING.

    Example:
        >>> fitter = P2DFitter(distances, FreeSigma(), 100.0, reporter=LoggingReporter())
    """

    def __init__(self, logger_name: str = "p2dfit") -> None:
        self._logger = logging.getLogger(logger_name)

    def _emit(self, level: int, tag: str | None, message: str) -> None:
        if tag is None:
            self._logger.log(level, message)
        else:
            self._logger.log(level, "[%s] %s", tag, message)

    def action(self, message: str) -> None:
        self._emit(logging.INFO, "ACTION", message)

    def info(self, message: str) -> None:
        self._emit(logging.INFO, None, message)

    def warning(self, message: str) -> None:
        self._emit(logging.WARNING, None, message)

    def success(self, message: str) -> None:
        self._emit(logging.INFO, "SUCCESS", message)


__all__ = ["LoggingReporter", "NullReporter", "Reporter"]
