"""Logging configuration for the seal codec."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime

from seal_codec.config import get_settings

DEFAULT_LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - [%(component)s] - [%(name)s] - "
    "[%(module)s.%(funcName)s:%(lineno)d] - %(message)s"
)

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}

LOG_OFF_LEVEL = "OFF"  # Special string to turn off logging


class ComponentNameFilter(logging.Filter):
    """Filter to inject the component name into log records."""

    def __init__(self, component: str) -> None:
        super().__init__()
        self.component = component

    def filter(self, record: logging.LogRecord) -> bool:
        record.component = self.component
        return True


class SealCodecJSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", "unknown"),
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(
    component: str = "seal-codec",
    log_level: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Configure root logging for command line use.

    Library code only creates module loggers; applications embedding the
    codec are expected to configure logging themselves.

    Args:
        component: Name injected into every record
        log_level: Level name or OFF; defaults to the configured level
        log_format: 'text', 'json' or a format string; defaults to the configured format
    """
    settings = get_settings()
    level_name = (log_level or settings.log_level).upper()
    format_name = log_format or settings.log_format

    root_logger = logging.getLogger()

    # Remove any existing handlers to prevent duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if level_name == LOG_OFF_LEVEL:
        root_logger.setLevel(logging.CRITICAL + 1)
        return

    root_logger.setLevel(LOG_LEVELS.get(level_name, logging.INFO))

    console_handler = logging.StreamHandler(sys.stderr)
    if format_name.lower() == "json":
        formatter: logging.Formatter = SealCodecJSONFormatter()
    elif format_name.lower() == "text":
        formatter = logging.Formatter(DEFAULT_LOG_FORMAT)
    else:
        formatter = logging.Formatter(format_name)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(ComponentNameFilter(component))
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)
