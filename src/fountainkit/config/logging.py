"""structlog setup on top of stdlib logging."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    CallsiteParameter,
    CallsiteParameterAdder,
    TimeStamper,
    add_log_level,
    dict_tracebacks,
    format_exc_info,
)
from structlog.stdlib import (
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
    render_to_log_kwargs,
)

from fountainkit.config.settings import FountainKitSettings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def _renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "structured":
        return structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "logger", "event"],
            drop_missing=True,
        )
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _resolve_level(name: str) -> int:
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        valid = sorted(n for n in logging.getLevelNamesMapping() if n != "NOTSET")
        raise ValueError(
            f"Invalid log level '{name}'. Valid levels are: {', '.join(valid)}"
        )
    return level


def _handlers(settings: FountainKitSettings, level: int) -> list[logging.Handler]:
    """stderr handler, plus a rotating file handler when ``log_file`` is set."""
    formatter = ProcessorFormatter(
        processor=_renderer(settings.log_format),
        foreign_pre_chain=[TimeStamper(fmt="iso"), add_log_level, add_logger_name],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=str(log_path),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    return handlers


def _processors(settings: FountainKitSettings) -> list[Any]:
    processors: list[Any] = [
        merge_contextvars,
        filter_by_level,
        TimeStamper(fmt="iso"),
        add_log_level,
        dict_tracebacks,
    ]
    if settings.debug:
        processors.append(
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.LINENO,
                    CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    processors.append(format_exc_info)

    # Console output under pytest still goes through the stdlib formatter,
    # otherwise caplog never sees the records
    in_pytest = "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ
    if settings.log_format != "console" or in_pytest:
        processors.extend([render_to_log_kwargs, ProcessorFormatter.wrap_for_formatter])
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return processors


def configure_logging(settings: FountainKitSettings) -> None:
    """Route fountainkit logging according to ``settings``.

    Parser, outline and browser events are emitted through structlog and
    rendered by stdlib handlers, so third-party log records share the same
    format and destination.

    Args:
        settings: Settings holding ``log_level``, ``log_format``,
            ``log_file`` and ``debug``

    Raises:
        ValueError: If ``log_level`` is not a stdlib level name
    """
    level = _resolve_level(settings.log_level)

    logging.basicConfig(level=level, handlers=_handlers(settings, level), force=True)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=_processors(settings),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Return the structlog logger called ``name``."""
    return structlog.get_logger(name)
