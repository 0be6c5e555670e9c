"""
Logging utilities for selector-ingest.

Loggers are thin wrappers over ``logging.Logger`` that take keyword context
(``logger.info("Scan complete", rows=10)`` logs ``Scan complete | rows=10``)
and configure their handlers from the ``logging`` section of the active
configuration the first time they are used.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Union
from ..config.settings import get_default_config, LogLevel


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name of each record."""

    RESET = "\033[0m"
    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        # records are shared with the file handler, which must stay uncolored
        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = plain


def render_context(message: str, context: Dict[str, object]) -> str:
    """Append ``key=value`` pairs to ``message``, separated by ' | '."""
    if not context:
        return message
    pairs = " | ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} | {pairs}"


class IngestLogger:
    """Logger wrapper that renders keyword context as 'key=value' pairs."""

    def __init__(self, name: str, config=None):
        self.name = name
        self.logger = logging.getLogger(name)
        self._config = config
        self._configured = False

    @property
    def config(self):
        return self._config or get_default_config()

    def reset(self):
        """Re-read the logging settings on the next call."""
        self._configured = False

    def _configure(self):
        settings = self.config.logging
        self.logger.setLevel(getattr(logging, settings.level.upper()))

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        # stderr keeps records written to stdout free of log lines
        if settings.console_logging:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(ColoredFormatter(settings.format_string))
            self.logger.addHandler(console)

        if settings.file_logging and settings.log_file:
            log_file = Path(settings.log_file)
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(settings.format_string))
            self.logger.addHandler(file_handler)

        self.logger.propagate = False
        self._configured = True

    def log(self, level: int, message: str, **context):
        if not self._configured:
            self._configure()
        if self.logger.isEnabledFor(level):
            self.logger.log(level, render_context(message, context))

    def debug(self, message: str, **context):
        self.log(logging.DEBUG, message, **context)

    def info(self, message: str, **context):
        self.log(logging.INFO, message, **context)

    def warning(self, message: str, **context):
        self.log(logging.WARNING, message, **context)


_loggers: Dict[str, IngestLogger] = {}

def get_logger(name: str = "selector_ingest") -> IngestLogger:
    """Return the shared logger registered under ``name``, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = IngestLogger(name)
    return _loggers[name]


def setup_logging(
    level: Optional[Union[str, LogLevel]] = None,
    console: Optional[bool] = None,
    file_path: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Change the logging section of the default configuration.

    Every registered logger picks the new settings up on its next call.

    Args:
        level: Logging level name or ``LogLevel``
        console: Enable or disable the stderr handler
        file_path: Also write records to this file
        format_string: ``logging.Formatter`` format string
    """
    settings = get_default_config().logging

    if level is not None:
        settings.level = LogLevel(level.upper()) if isinstance(level, str) else level
    if console is not None:
        settings.console_logging = console
    if file_path is not None:
        settings.file_logging = True
        settings.log_file = Path(file_path)
    if format_string is not None:
        settings.format_string = format_string

    for logger in _loggers.values():
        logger.reset()
