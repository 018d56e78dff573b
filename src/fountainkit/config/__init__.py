"""Settings and logging for fountainkit."""

from __future__ import annotations

from typing import Any

from fountainkit.config import settings as _settings_module
from fountainkit.config.logging import configure_logging
from fountainkit.config.logging import get_logger as _structlog_logger
from fountainkit.config.settings import (
    FountainKitSettings,
    clear_settings_cache,
    get_settings,
    get_settings_for_cli,
    set_settings,
)

__all__ = [
    "FountainKitSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
    "get_settings",
    "get_settings_for_cli",
    "reset_settings",
    "set_settings",
]

# Set on the first get_logger() call
_logging_initialized = False
_loggers: dict[str, Any] = {}


def get_logger(name: str) -> Any:
    """Logger for module ``name``, configuring logging on first use.

    Modules create their logger at import time, so configuration is
    deferred until a logger is first requested and then follows the
    settings current at that moment. Loggers are cached per name.
    """
    global _logging_initialized
    logger = _loggers.get(name)
    if logger is None:
        if not _logging_initialized:
            configure_logging(get_settings())
            _logging_initialized = True
        logger = _loggers[name] = _structlog_logger(name)
    return logger


def reset_settings() -> None:
    """Forget the global settings and cached loggers.

    The next :func:`get_settings` call reloads from the environment and
    config files; the next :func:`get_logger` call reconfigures logging.
    """
    global _logging_initialized
    _settings_module.reset_settings()
    _logging_initialized = False
    _loggers.clear()
