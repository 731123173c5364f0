"""
Stock Tables

Fetch daily stock prices, compute simple daily returns and render them as a
static formatted table and an interactive browsable table.
"""

__version__ = "1.0.0"

from stock_tables.core.config import AppConfig, ConfigLoader
from stock_tables.core.logging import get_logger, setup_logging

__all__ = [
    "__version__",
    "AppConfig",
    "ConfigLoader",
    "get_logger",
    "setup_logging",
]
