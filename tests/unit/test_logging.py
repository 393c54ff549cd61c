"""Tests for logging module."""
from __future__ import annotations

import logging
from pathlib import Path

from loguru import logger

from stats_engine.config import Settings
from stats_engine.logging import (
    FAIL,
    SUCCESS,
    WARN,
    InterceptHandler,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_creates_directory(self, tmp_path: Path) -> None:
        """setup_logging should create log directory if it doesn't exist."""
        log_dir = tmp_path / "nested" / "logs"
        setup_logging(log_dir=str(log_dir))

        assert log_dir.exists()

    def test_setup_logging_accepts_path_object(self, tmp_path: Path) -> None:
        """setup_logging should accept a Path as well as a string."""
        log_dir = tmp_path / "logs"
        setup_logging(level="DEBUG", log_dir=log_dir)

        assert log_dir.exists()

    def test_setup_logging_all_parameters(self, tmp_path: Path) -> None:
        """setup_logging should accept all custom parameters."""
        log_dir = tmp_path / "logs"
        setup_logging(
            level="WARNING",
            log_dir=str(log_dir),
            rotation="500 MB",
            retention="14 days",
            serialize=False,
        )

        assert log_dir.exists()

    def test_defaults_come_from_settings(self, test_settings: Settings) -> None:
        """Without arguments the LOG_DIR setting is used."""
        setup_logging()

        assert test_settings.log_dir_obj.exists()

    def test_stdlib_logging_is_intercepted(self, tmp_path: Path) -> None:
        """Stdlib logging should be routed through the intercept handler."""
        setup_logging(log_dir=str(tmp_path / "logs"))

        root_handlers = logging.getLogger().handlers
        assert any(isinstance(h, InterceptHandler) for h in root_handlers)

    def test_messages_reach_loguru(self, tmp_path: Path) -> None:
        """Messages logged through get_logger should reach loguru sinks."""
        setup_logging(log_dir=str(tmp_path / "logs"))
        captured: list[str] = []
        sink_id = logger.add(lambda message: captured.append(str(message)), level="INFO")
        try:
            get_logger("stats_engine.test").info("Aggregated {} players", 3)
        finally:
            logger.remove(sink_id)

        assert any("Aggregated 3 players" in line for line in captured)

    def test_stdlib_records_are_forwarded(self, tmp_path: Path) -> None:
        """Records sent to a stdlib logger should arrive in loguru."""
        setup_logging(log_dir=str(tmp_path / "logs"))
        captured: list[str] = []
        sink_id = logger.add(lambda message: captured.append(str(message)), level="INFO")
        try:
            logging.getLogger("third.party").warning("upstream slow")
        finally:
            logger.remove(sink_id)

        assert any("upstream slow" in line for line in captured)


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger_returns_logger(self) -> None:
        """get_logger should return a logger instance."""
        log = get_logger(__name__)

        assert log is not None

    def test_get_logger_can_log_with_formatting(self, tmp_path: Path) -> None:
        """Logger should support message formatting."""
        setup_logging(log_dir=str(tmp_path / "logs"))
        log = get_logger("test")

        # Should not raise
        log.info("Evaluating goal {}", 7)


class TestLoggerExports:
    """Tests for module exports."""

    def test_logger_is_exported(self) -> None:
        """Base logger should be exported."""
        from stats_engine.logging import logger as exported_logger

        assert exported_logger is logger

    def test_status_tags(self) -> None:
        """Status tags should carry their label text."""
        assert "SUCCESS" in SUCCESS
        assert "FAIL" in FAIL
        assert "WARN" in WARN

    def test_all_exports_available(self) -> None:
        """All expected exports should be available."""
        from stats_engine.logging import __all__

        assert "setup_logging" in __all__
        assert "get_logger" in __all__
        assert "logger" in __all__
