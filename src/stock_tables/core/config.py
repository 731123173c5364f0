"""
Configuration management for the stock tables pipeline.
"""

import os
import re
from datetime import date
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stock_tables.core.exceptions import ConfigError

DEFAULT_SYMBOLS = ["AAPL", "AMZN", "GOOG", "MSFT", "NVDA"]
DEFAULT_START_DATE = date(2023, 1, 1)


class DataConfig(BaseModel):
    """Which symbols to fetch and which dates to keep."""

    symbols: list[str] = Field(default_factory=list)
    universe: str = "default"
    start_date: Optional[date] = None
    window_start: date = date(2024, 1, 2)
    window_end: date = date(2024, 1, 31)

    @model_validator(mode="after")
    def _check_window(self) -> "DataConfig":
        if self.window_start > self.window_end:
            raise ValueError("window_start must not be after window_end")
        # Unset start follows the window back when it is earlier than the default
        if self.start_date is None:
            self.start_date = min(DEFAULT_START_DATE, self.window_start)
        elif self.start_date > self.window_end:
            raise ValueError("start_date must not be after window_end")
        return self


class StaticTableConfig(BaseModel):
    """Static (great_tables) table configuration."""

    title: str = "Daily stock returns"
    date_style: str = "wday_month_day_year"
    currency: str = "USD"
    percent_decimals: int = 2
    color_domain: tuple[float, float] = (-0.05, 0.05)
    palette: list[str] = Field(default_factory=lambda: ["red", "white", "green"])
    source_note: str = "Source: Yahoo Finance via yfinance"
    footnote: Optional[str] = "Returns are daily changes in the adjusted close."
    columns: list[str] = Field(
        default_factory=lambda: ["symbol", "date", "adjusted", "returns", "volume"]
    )

    @model_validator(mode="after")
    def _check_domain(self) -> "StaticTableConfig":
        low, high = self.color_domain
        if low >= high:
            raise ValueError("color_domain must be an increasing pair")
        if len(self.palette) < 2:
            raise ValueError("palette needs at least two colors")
        return self


class InteractiveTableConfig(BaseModel):
    """Interactive (reactable) table configuration."""

    title: str = "Daily stock returns"
    group_by: Optional[str] = "symbol"
    sortable: bool = True
    resizable: bool = True
    bordered: bool = True
    striped: bool = True
    highlight: bool = True
    filterable: bool = True
    searchable: bool = True
    pagination: bool = True
    page_size: int = Field(default=10, ge=1)
    currency: str = "USD"
    percent_decimals: int = 2
    details: bool = True
    footers: bool = True
    theme: Optional[str] = None
    columns: list[str] = Field(
        default_factory=lambda: ["symbol", "date", "adjusted", "returns", "volume"]
    )


class ConsoleLoggingConfig(BaseModel):
    """Console logging configuration."""

    enabled: bool = True
    level: str = "INFO"
    colors: bool = True


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    level: str = "DEBUG"
    path: str = ""
    max_size_mb: int = 10
    backup_count: int = 3


class LoggingConfig(BaseModel):
    """Logging configuration."""

    console: ConsoleLoggingConfig = Field(default_factory=ConsoleLoggingConfig)
    file: FileLoggingConfig = Field(default_factory=FileLoggingConfig)
    components: dict[str, str] = Field(default_factory=dict)
    library_level: str = "WARNING"


class AppConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STOCK_TABLES_",
        env_nested_delimiter="__",
    )

    version: str = "1.0"
    data: DataConfig = Field(default_factory=DataConfig)
    static_table: StaticTableConfig = Field(default_factory=StaticTableConfig)
    interactive_table: InteractiveTableConfig = Field(default_factory=InteractiveTableConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Load and merge configuration from multiple sources.

    Precedence (highest to lowest):
    1. CLI arguments
    2. Config file
    3. Environment variables
    4. Default values
    """

    DEFAULT_CONFIG_PATHS = [
        Path("config.yaml"),
        Path("config.yml"),
        Path.home() / ".stock-tables" / "config.yaml",
    ]

    def __init__(
        self,
        config_path: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
    ):
        self.config_path = Path(config_path) if config_path is not None else None
        self.cli_overrides = cli_overrides or {}

    def load(self) -> AppConfig:
        """Load and merge configuration from all sources."""
        file_config = self._load_file_config()
        file_config = self._resolve_variables(file_config)
        merged = self._merge(file_config, self.cli_overrides)

        try:
            return AppConfig(**merged)
        except PydanticValidationError as e:
            raise ConfigError(str(e)) from e

    def _load_file_config(self) -> dict[str, Any]:
        """Load configuration from file."""
        config_path = self.config_path

        if config_path is None:
            for path in self.DEFAULT_CONFIG_PATHS:
                if path.exists():
                    config_path = path
                    break
        elif not config_path.exists():
            raise ConfigError(f"config file not found: {config_path}")

        if config_path is None:
            return {}

        try:
            with open(config_path, "r") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigError(f"top level of {config_path} must be a mapping")
        return loaded

    @classmethod
    def _merge(cls, base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge overrides into base. None values are skipped."""
        result = dict(base)
        for key, value in overrides.items():
            if value is None:
                continue
            if isinstance(value, dict):
                current = result.get(key)
                merged = cls._merge(current if isinstance(current, dict) else {}, value)
                if merged or key in result:
                    result[key] = merged
            else:
                result[key] = value
        return result

    def _resolve_variables(
        self, config: dict[str, Any], root: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Resolve ${variable} references in config."""
        if root is None:
            root = config

        result = {}

        for key, value in config.items():
            if isinstance(value, dict):
                result[key] = self._resolve_variables(value, root)
            elif isinstance(value, str):
                result[key] = self._resolve_string(value, root)
            elif isinstance(value, list):
                result[key] = [
                    self._resolve_string(v, root) if isinstance(v, str) else v for v in value
                ]
            else:
                result[key] = value

        return result

    def _resolve_string(self, value: str, root: dict[str, Any]) -> str:
        """Resolve variables in a string."""

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)

            if var_name in os.environ:
                return os.environ[var_name]

            if var_name == "HOME":
                return str(Path.home())

            # Config reference (e.g., data.window_start)
            parts = var_name.split(".")
            current: Any = root
            for part in parts:
                if isinstance(current, dict) and part in current:
                    current = current[part]
                else:
                    return match.group(0)  # Keep original if not found

            return str(current) if not isinstance(current, dict) else match.group(0)

        return re.sub(r"\$\{([^}]+)\}", replace_var, value)

