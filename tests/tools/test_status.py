"""
Tests for status reporting and the resolution memo.
"""

import logging

from dockerkit.core.interfaces import InstallationStatus
from dockerkit.tools.status import LoggingStatusReporter, ResolutionMemo


class TestLoggingStatusReporter:
    """Test LoggingStatusReporter."""

    def test_records_last_status(self):
        reporter = LoggingStatusReporter()

        reporter.set_installation_status("docker-language-server", InstallationStatus.DOWNLOADING)
        reporter.set_installation_status("docker-language-server", InstallationStatus.NONE)

        assert reporter.last_status["docker-language-server"] is InstallationStatus.NONE

    def test_failure_logged_as_error(self, caplog):
        reporter = LoggingStatusReporter()

        with caplog.at_level(logging.INFO, logger="dockerkit.tools.status"):
            reporter.set_installation_status(
                "docker-language-server", InstallationStatus.FAILED, "no release found"
            )

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert "docker-language-server: failed (no release found)" in record.getMessage()


class TestResolutionMemo:
    """Test ResolutionMemo."""

    def test_mark_and_clear(self):
        memo = ResolutionMemo()
        memo.mark_resolved("a")
        memo.mark_resolved("b")

        memo.clear("a")
        assert not memo.is_resolved("a")
        assert memo.is_resolved("b")

        memo.clear()
        assert not memo.is_resolved("b")
