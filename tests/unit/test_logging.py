"""Test logging setup and the reporter implementations."""

import json
import logging

import pytest

from p2dfit import FixedSigma, P2DFitter
from p2dfit.core.shared.reporter import LoggingReporter, NullReporter, Reporter
from p2dfit.ui.logging import JSONFormatter, close_logging, log, log_dict, setup_logging


class TestReporters:
    """Tests for the Reporter implementations."""

    def test_implementations_satisfy_protocol(self):
        """Both shipped reporters satisfy the protocol."""
        assert isinstance(NullReporter(), Reporter)
        assert isinstance(LoggingReporter(), Reporter)

    def test_null_reporter_is_silent(self):
        """NullReporter methods return None."""
        reporter = NullReporter()
        assert reporter.action("test") is None
        assert reporter.info("test") is None
        assert reporter.warning("test") is None
        assert reporter.success("test") is None

    def test_logging_reporter_levels(self, caplog):
        """LoggingReporter maps messages to logging levels."""
        reporter = LoggingReporter("p2dfit.test")
        with caplog.at_level(logging.INFO, logger="p2dfit.test"):
            reporter.action("Fitting mu")
            reporter.info("Plain info")
            reporter.warning("Fit did not converge")
            reporter.success("Done")

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.INFO, logging.INFO, logging.WARNING, logging.INFO]
        assert "[ACTION] Fitting mu" in caplog.text
        assert "[SUCCESS] Done" in caplog.text


@pytest.mark.usefixtures("clean_logging")
class TestSessionLogging:
    """Tests for the file/console logging utilities."""

    def test_disabled_by_default(self, tmp_path):
        """Without a file or verbose flag nothing is logged."""
        setup_logging()
        log("ignored")
        log_dict({"key": "value"})
        assert list(tmp_path.iterdir()) == []

    def test_text_log_file(self, tmp_path):
        """Messages and key-value pairs are written to the log file."""
        log_file = tmp_path / "logs" / "p2dfit.log"
        setup_logging(log_file=log_file)
        log("Fitting started")
        log_dict({"mode": "free"})
        log("Something odd", level="warning")
        close_logging()

        content = log_file.read_text()
        assert "Session Started" in content
        assert "Fitting started" in content
        assert "- mode: free" in content
        assert "WARN" in content
        assert "Session Completed" in content

    def test_json_log_file(self, tmp_path):
        """A .json log file receives one JSON object per line."""
        log_file = tmp_path / "p2dfit.json"
        setup_logging(log_file=log_file)
        log("json message")
        close_logging()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        messages = [record["message"] for record in records]
        assert "json message" in messages
        assert all(record["logger"] == "p2dfit" for record in records)

    def test_fit_is_logged(self, tmp_path, small_distances):
        """A fitting session writes its progress to the log."""
        log_file = tmp_path / "fit.log"
        setup_logging(log_file=log_file)
        P2DFitter(small_distances, FixedSigma(sigma=2.0), upper_bound=100.0).fit()
        close_logging()

        content = log_file.read_text()
        assert "P2D fit of mu" in content
        assert "initial guess" in content
        assert "Converged" in content

    def test_verbose_console(self, capsys):
        """Verbose mode logs to stderr through rich."""
        setup_logging(verbose=True)
        log("to the console")
        close_logging()
        assert "to the console" in capsys.readouterr().err


class TestJSONFormatter:
    """Tests for the JSON formatter."""

    def test_format(self):
        """Records become JSON objects with the standard fields."""
        record = logging.LogRecord("p2dfit", logging.INFO, __file__, 10, "hello %s", ("x",), None)
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "hello x"
        assert data["level"] == "INFO"
        assert data["line"] == 10
