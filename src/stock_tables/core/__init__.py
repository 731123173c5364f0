"""Core utilities and infrastructure."""

from stock_tables.core.config import (
    AppConfig,
    ConfigLoader,
    InteractiveTableConfig,
    StaticTableConfig,
)
from stock_tables.core.logging import get_logger, setup_logging
from stock_tables.core.exceptions import (
    StockTablesError,
    DataError,
    DataNotFoundError,
    DataValidationError,
    ConfigError,
    ValidationError,
    RenderError,
    PipelineError,
)

__all__ = [
    "AppConfig",
    "ConfigLoader",
    "InteractiveTableConfig",
    "StaticTableConfig",
    "get_logger",
    "setup_logging",
    "StockTablesError",
    "DataError",
    "DataNotFoundError",
    "DataValidationError",
    "ConfigError",
    "ValidationError",
    "RenderError",
    "PipelineError",
]
