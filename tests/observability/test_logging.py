"""
Test suite for logging configuration and structured log helpers.

System role: Verification of observability utilities
"""

import logging

import pytest

from ragdesk.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from ragdesk.observability.logger import configure_logging


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSafeLogValue:
    """Test suite for safe_log_value()."""

    def test_safe_log_value_should_summarize_collections(self) -> None:
        assert safe_log_value([1, 2, 3]) == "list(3 items)"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"

    def test_safe_log_value_should_truncate_long_strings(self) -> None:
        result = safe_log_value("x" * 20, max_length=5)
        assert result == "xxxxx... (truncated, 20 total)"

    def test_safe_log_value_should_survive_broken_str(self) -> None:
        class Broken:
            def __str__(self) -> str:
                raise RuntimeError("no")

        assert safe_log_value(Broken()) == "<unable to log: RuntimeError>"


class TestLogWithContext:
    """Test suite for log_with_context() and log_exception_with_context()."""

    def test_log_with_context_should_attach_extra_and_rename_reserved_keys(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        # Arrange
        logger = logging.getLogger("ragdesk.tests.context")

        # Act
        with caplog.at_level(logging.INFO, logger="ragdesk.tests.context"):
            log_with_context(logger, logging.INFO, "stage done", filename="a.pdf", chunks=[1, 2])

        # Assert
        record = caplog.records[-1]
        assert record.ctx_filename == "a.pdf"
        assert record.chunks == "list(2 items)"

    def test_log_exception_with_context_should_include_error_fields(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        # Arrange
        logger = logging.getLogger("ragdesk.tests.errors")
        error = ValueError("bad page")

        # Act
        with caplog.at_level(logging.ERROR, logger="ragdesk.tests.errors"):
            log_exception_with_context(logger, "ingest failed", error, state="received")

        # Assert
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_type == "ValueError"
        assert record.error_msg == "bad page"
        assert record.state == "received"
        assert record.exc_info[1] is error


class TestConfigureLogging:
    """Test suite for configure_logging()."""

    def test_configure_logging_should_install_single_handler(self, restore_root_logger) -> None:
        configure_logging("debug")
        configure_logging("DEBUG")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert logging.getLogger("botocore").level == logging.WARNING

    def test_configure_logging_should_fall_back_to_info_for_unknown_level(
        self, restore_root_logger
    ) -> None:
        configure_logging("chatty")
        assert restore_root_logger.level == logging.INFO
