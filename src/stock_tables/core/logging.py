"""
Logging configuration and utilities.

All pipeline loggers live under the ``stock_tables`` namespace. Handlers are
attached to that namespace only, so embedding applications keep control of the
root logger.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACE = "stock_tables"

# Chatty dependencies that log every HTTP request at DEBUG
LIBRARY_LOGGERS = ("yfinance", "urllib3", "peewee")

SIMPLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
DETAILED_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name}")
    return level


def _console_handler(config: dict) -> logging.Handler:
    if config.get("colors", True) and sys.stderr.isatty():
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt="%H:%M:%S"))

    handler.setLevel(_level(config.get("level", "INFO")))
    return handler


def _file_handler(config: dict) -> logging.Handler:
    log_path = Path(config.get("path") or "stock_tables.log")
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_path,
        maxBytes=config.get("max_size_mb", 10) * 1024 * 1024,
        backupCount=config.get("backup_count", 3),
        encoding="utf-8",
    )
    handler.setLevel(_level(config.get("level", "DEBUG")))
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(config: Optional[dict] = None) -> logging.Logger:
    """
    Configure the ``stock_tables`` logger from a logging config section.

    Calling it again replaces the handlers installed by the previous call.
    """
    config = config or {}
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(logging.DEBUG)  # Handlers do the filtering
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_config = config.get("console", {})
    if console_config.get("enabled", True):
        logger.addHandler(_console_handler(console_config))

    file_config = config.get("file", {})
    if file_config.get("enabled", False):
        logger.addHandler(_file_handler(file_config))

    # Component-specific levels, e.g. {"data.provider": "DEBUG"}
    for component, level in config.get("components", {}).items():
        logging.getLogger(f"{LOGGER_NAMESPACE}.{component}").setLevel(_level(level))

    library_level = _level(config.get("library_level", "WARNING"))
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a pipeline component, e.g. ``get_logger("pipeline")``."""
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
