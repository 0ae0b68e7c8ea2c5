"""
Unit tests for logger_module.py.

Tests cover:
- Helpers logging through the "distmatrix" package logger
- Opt-in handler setup on the package logger only
- Log level configuration and idempotency
"""

import logging
from unittest.mock import patch, MagicMock

import distmatrix.config.logger_module as logger_module
from .logger_module import (
    PACKAGE_LOGGER,
    configure_logging,
    get_logger,
    log_debug,
    log_error,
    log_info,
    log_warning,
)


class PackageLoggerStateMixin:
    """Restores the package logger and the configured flag around each test."""

    def setup_method(self):
        logger = logging.getLogger(PACKAGE_LOGGER)
        self._saved_handlers = list(logger.handlers)
        self._saved_level = logger.level
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger_module._logging_configured = False

    def teardown_method(self):
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in logger.handlers:
            handler.close()
        logger.handlers[:] = self._saved_handlers
        logger.setLevel(self._saved_level)
        logger_module._logging_configured = False


class TestHelpers(PackageLoggerStateMixin):
    """Test cases for the log_* helpers."""

    def test_get_logger_is_package_logger(self):
        assert get_logger() is logging.getLogger("distmatrix")

    def test_helpers_log_through_package_logger(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=PACKAGE_LOGGER):
            log_debug("Dispatching 1x2 call")
            log_info("Requesting 1x2 distances")
            log_warning("Quota budget exhausted")
            log_error("Call 1/1 failed")

        assert [(r.name, r.levelno, r.getMessage()) for r in caplog.records] == [
            ("distmatrix", logging.DEBUG, "Dispatching 1x2 call"),
            ("distmatrix", logging.INFO, "Requesting 1x2 distances"),
            ("distmatrix", logging.WARNING, "Quota budget exhausted"),
            ("distmatrix", logging.ERROR, "Call 1/1 failed"),
        ]

    def test_package_level_filters_helpers(self, caplog):
        with caplog.at_level(logging.WARNING, logger=PACKAGE_LOGGER):
            log_info("Requesting 1x2 distances")
            log_warning("Quota budget exhausted")

        assert [r.getMessage() for r in caplog.records] == ["Quota budget exhausted"]

    @patch('logging.getLogger')
    def test_helpers_call_correct_levels(self, mock_get_logger):
        mock_logger = MagicMock()
        mock_get_logger.return_value = mock_logger

        log_debug("debug message")
        log_info("info message")
        log_warning("warning message")
        log_error("error message")

        mock_get_logger.assert_called_with("distmatrix")
        mock_logger.debug.assert_called_once_with("debug message")
        mock_logger.info.assert_called_once_with("info message")
        mock_logger.warning.assert_called_once_with("warning message")
        mock_logger.error.assert_called_once_with("error message")

    def test_module_loggers_are_children(self, caplog):
        """Modules using getLogger(__name__) share the package logger's settings."""
        with caplog.at_level(logging.DEBUG, logger=PACKAGE_LOGGER):
            logging.getLogger("distmatrix.config.config_module").debug("Configuration key missing")

        assert caplog.records[0].name == "distmatrix.config.config_module"


class TestConfigureLogging(PackageLoggerStateMixin):
    """Test cases for the configure_logging opt-in."""

    def test_console_only_by_default(self):
        root_handlers = list(logging.getLogger().handlers)

        configure_logging()

        logger = get_logger()
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert type(logger.handlers[0]) is logging.StreamHandler
        assert logger.handlers[0].level == logging.INFO
        assert logging.getLogger().handlers == root_handlers

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "distmatrix.log"

        configure_logging(log_level="DEBUG", log_file=str(log_file))
        log_debug("Dispatching 1x2 call")
        log_error("Call 1/1 failed")
        for handler in get_logger().handlers:
            handler.flush()

        file_handlers = [h for h in get_logger().handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG

        log_content = log_file.read_text()
        assert "DEBUG" in log_content and "Dispatching 1x2 call" in log_content
        assert "ERROR" in log_content and "Call 1/1 failed" in log_content

    def test_console_output(self, capsys):
        configure_logging()
        log_info("Requesting 1x2 distances")

        assert "distmatrix - INFO - Requesting 1x2 distances" in capsys.readouterr().err

    def test_level_respected(self, tmp_path):
        log_file = tmp_path / "test.log"
        configure_logging(log_level="WARNING", log_file=str(log_file))

        log_debug("Debug message")
        log_info("Info message")
        log_warning("Warning message")
        for handler in get_logger().handlers:
            handler.flush()

        log_content = log_file.read_text()
        assert "Debug message" not in log_content
        assert "Info message" not in log_content
        assert "Warning message" in log_content

    def test_invalid_level_falls_back_to_info(self):
        configure_logging(log_level="INVALID")
        assert get_logger().level == logging.INFO

    def test_idempotency(self, tmp_path):
        """Repeated calls do not add handlers."""
        log_file = tmp_path / "test.log"

        configure_logging(log_file=str(log_file))
        configure_logging(log_file=str(log_file))
        configure_logging(log_level="DEBUG", log_file=str(log_file))

        assert len(get_logger().handlers) == 2
        assert get_logger().level == logging.INFO
