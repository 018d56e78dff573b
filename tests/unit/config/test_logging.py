"""Tests for logging configuration."""

import logging
from logging.handlers import RotatingFileHandler

import pytest
import structlog

import fountainkit.config as config_module
from fountainkit.config import FountainKitSettings, configure_logging, get_logger


@pytest.fixture(autouse=True)
def clean_logging():
    """Reset logging configuration before and after each test."""
    structlog.reset_defaults()
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)

    yield

    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)


class TestConfigureLogging:
    """Handlers and levels set up from settings."""

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR"])
    def test_root_level(self, level):
        """Test that the root logger follows the configured level."""
        configure_logging(FountainKitSettings(log_level=level))
        assert logging.getLogger().level == getattr(logging, level)

    @pytest.mark.parametrize("log_format", ["console", "json", "structured"])
    def test_formats_install_one_console_handler(self, log_format):
        """Every format writes to a single stderr handler."""
        configure_logging(FountainKitSettings(log_format=log_format))
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

    def test_log_file_handler(self, tmp_path):
        """A log file gets a rotating handler and its directory is created."""
        log_file = tmp_path / "logs" / "fountainkit.log"
        configure_logging(FountainKitSettings(log_file=log_file))
        file_handlers = [
            h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert log_file.parent.is_dir()

    def test_invalid_level_rejected(self):
        """Levels that bypassed validation still fail loudly."""
        settings = FountainKitSettings.model_construct(
            log_level="LOUD", log_format="console", log_file=None, debug=False
        )
        with pytest.raises(ValueError, match="Invalid log level 'LOUD'"):
            configure_logging(settings)


class TestGetLogger:
    """Lazily configured, cached loggers."""

    def test_logger_is_cached(self):
        """Test that the same name returns the same logger."""
        first = get_logger("fountainkit.test")
        assert get_logger("fountainkit.test") is first

    def test_first_logger_configures_logging(self):
        """Requesting a logger configures logging once."""
        config_module.reset_settings()
        assert config_module._logging_initialized is False
        get_logger("fountainkit.lazy")
        assert config_module._logging_initialized is True

    def test_logger_emits_through_stdlib(self):
        """Events reach stdlib logging handlers."""
        records: list[logging.LogRecord] = []

        class Collect(logging.Handler):
            def emit(self, record):
                records.append(record)

        configure_logging(FountainKitSettings(log_level="INFO"))
        stdlib_logger = logging.getLogger("fountainkit.emit")
        handler = Collect()
        stdlib_logger.addHandler(handler)
        try:
            structlog.get_logger("fountainkit.emit").info(
                "Parsed fountain content", elements=3
            )
        finally:
            stdlib_logger.removeHandler(handler)
        assert [r.name for r in records] == ["fountainkit.emit"]
