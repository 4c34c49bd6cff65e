"""Tests for logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from linehint.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_loggers():
    """Undo configure_logging side effects between tests."""
    yield
    for name in ("linehint", "pygls"):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_default_configuration(self) -> None:
        """Default configuration sets INFO level with one handler."""
        configure_logging()
        logger = logging.getLogger("linehint")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_case_insensitive_level(self) -> None:
        """Log level is case insensitive."""
        configure_logging(level="warning")
        assert logging.getLogger("linehint").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Unknown level names fall back to INFO."""
        configure_logging(level="chatty")
        assert logging.getLogger("linehint").level == logging.INFO

    def test_pygls_limited_to_warnings(self) -> None:
        """pygls only logs warnings unless debugging."""
        configure_logging(level="INFO")
        assert logging.getLogger("pygls").level == logging.WARNING

        configure_logging(level="DEBUG")
        assert logging.getLogger("pygls").level == logging.DEBUG

    def test_never_writes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Log records go to stderr, keeping stdout for the transport."""
        configure_logging()
        get_logger("test").info("hello stderr")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hello stderr" in captured.err

    def test_file_handler(self, tmp_path: Path) -> None:
        """Can configure logging to file."""
        log_file = tmp_path / "test.log"
        configure_logging(log_file=log_file)
        logger = logging.getLogger("linehint")

        logger.info("test message")
        for handler in logger.handlers:
            handler.flush()

        assert "test message" in log_file.read_text()

    def test_clears_existing_handlers(self) -> None:
        """Calling configure_logging twice does not stack handlers."""
        configure_logging()
        configure_logging()
        assert len(logging.getLogger("linehint").handlers) == 1


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_namespaced_logger(self) -> None:
        """get_logger returns logger with linehint prefix."""
        assert get_logger("display").name == "linehint.display"

    def test_nested_namespace(self) -> None:
        """Can create nested logger names."""
        assert get_logger("lsp.timer").name == "linehint.lsp.timer"
