"""Tests for logging helpers."""

import logging

import pytest

from audio_enhancement.logging_utils import TRACE_LEVEL, get_logger


@pytest.mark.unit
class TestLoggingUtils:
    """Test cases for the TRACE level."""

    def test_trace_level_registered(self) -> None:
        get_logger("audio_enhancement.test")
        assert logging.getLevelName(TRACE_LEVEL) == "TRACE"

    def test_trace_messages_emitted_when_enabled(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        logger = get_logger("audio_enhancement.test.trace")

        with caplog.at_level(TRACE_LEVEL, logger="audio_enhancement.test.trace"):
            logger.trace("stage timing")  # type: ignore[attr-defined]

        assert [record.levelname for record in caplog.records] == ["TRACE"]

    def test_trace_suppressed_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = get_logger("audio_enhancement.test.quiet")

        with caplog.at_level(logging.DEBUG, logger="audio_enhancement.test.quiet"):
            logger.trace("hidden")  # type: ignore[attr-defined]

        assert caplog.records == []
