"""
Exception hierarchy for the stock tables pipeline.
"""

from typing import Any, Optional


class StockTablesError(Exception):
    """Base exception for all stock tables errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class DataError(StockTablesError):
    """Data loading or validation error."""

    pass


class DataNotFoundError(DataError):
    """Requested data does not exist."""

    def __init__(self, ticker: str, data_type: str = "price", **kwargs: Any):
        message = f"No {data_type} data found for {ticker}"
        super().__init__(message, code="DATA_NOT_FOUND", **kwargs)
        self.ticker = ticker
        self.data_type = data_type


class DataValidationError(DataError):
    """Data failed validation checks."""

    def __init__(self, message: str, issues: Optional[list[str]] = None, **kwargs: Any):
        super().__init__(message, code="DATA_VALIDATION_FAILED", **kwargs)
        self.issues = issues or []


class ConfigError(StockTablesError):
    """Configuration error."""

    def __init__(self, message: str, key: Optional[str] = None, **kwargs: Any):
        full_message = f"Configuration error" + (f" for '{key}'" if key else "") + f": {message}"
        super().__init__(full_message, code="CONFIG_ERROR", **kwargs)
        self.key = key


class ValidationError(StockTablesError):
    """Input validation error."""

    def __init__(self, message: str, field: Optional[str] = None, **kwargs: Any):
        full_message = f"Validation error" + (f" for '{field}'" if field else "") + f": {message}"
        super().__init__(full_message, code="VALIDATION_ERROR", **kwargs)
        self.field = field


class RenderError(StockTablesError):
    """Table rendering error."""

    def __init__(self, renderer: str, message: str, **kwargs: Any):
        full_message = f"Renderer '{renderer}': {message}"
        super().__init__(full_message, code="RENDER_ERROR", **kwargs)
        self.renderer = renderer


class PipelineError(StockTablesError):
    """Pipeline execution error."""

    def __init__(
        self,
        message: str,
        stage: str,
        ticker: Optional[str] = None,
        **kwargs: Any,
    ):
        full_message = f"Pipeline error at {stage}"
        if ticker:
            full_message += f" for {ticker}"
        full_message += f": {message}"
        super().__init__(full_message, code="PIPELINE_ERROR", **kwargs)
        self.stage = stage
        self.ticker = ticker
