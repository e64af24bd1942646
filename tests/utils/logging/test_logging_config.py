# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode loguru setup, stdlib interception and third-party suppression

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog
from loguru import logger

from album_archiver.utils.logging.config import (
    InterceptHandler,
    LoggingMode,
    configure_logging,
    detect_logging_mode,
    get_logging_status,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore root, loguru and structlog state after each test."""
    yield
    for logger_name in ["", "httpx", "httpcore", "asyncio", "PIL", "feedparser", "py.warnings"]:
        stdlib_logger = logging.getLogger(logger_name)
        stdlib_logger.handlers.clear()
        stdlib_logger.setLevel(logging.NOTSET)
    logging.getLogger().setLevel(logging.WARNING)
    logging.captureWarnings(False)
    logger.remove()
    structlog.reset_defaults()


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_env_production(self):
        with patch.dict(os.environ, {"ALBUM_ARCHIVER_LOG_MODE": "production"}):
            assert detect_logging_mode() == LoggingMode.PRODUCTION

    def test_detect_mode_from_env_is_case_insensitive(self):
        with patch.dict(os.environ, {"ALBUM_ARCHIVER_LOG_MODE": "Interactive"}):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_env_invalid(self):
        """Invalid values fall back to TTY detection."""
        with (
            patch.dict(os.environ, {"ALBUM_ARCHIVER_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def test_configure_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")

        assert Path("logs").is_dir()
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("PIL").level == logging.WARNING
        assert logging.getLogger("py.warnings").level == logging.ERROR

    def test_configure_custom_log_level(self):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert any(isinstance(handler, InterceptHandler) for handler in root_logger.handlers)

    def test_structlog_events_reach_log_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        log_file = tmp_path / "custom.log"

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO", log_file=str(log_file))
        structlog.get_logger("album_archiver.test").info("Album archived", album_id="abc123")
        logger.complete()

        contents = log_file.read_text()
        assert "event='Album archived'" in contents
        assert "album_id='abc123'" in contents

    def test_production_mode_writes_json_to_stdout(self, capsys):
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")
        structlog.get_logger("album_archiver.test").warning("Page download failed", page_index=1)

        out = capsys.readouterr().out
        assert '"level"' in out
        assert "Page download failed" in out


class TestGetLoggingStatus:
    """Test logging status reporting."""

    def test_get_status_interactive_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("logs").mkdir()

        with patch(
            "album_archiver.utils.logging.config.detect_logging_mode", return_value=LoggingMode.INTERACTIVE
        ):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.INTERACTIVE
        assert status["log_directory"] is not None
        assert status["log_files"]["main"].endswith("album-archiver.log")
        assert "feedparser" in status["third_party_suppressed"]

    def test_get_status_production_mode(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with patch(
            "album_archiver.utils.logging.config.detect_logging_mode", return_value=LoggingMode.PRODUCTION
        ):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_directory"] is None
        assert status["log_files"] == {"main": None, "json": None, "errors": None}
