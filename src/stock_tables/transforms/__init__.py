"""Return computation and filtering."""

from stock_tables.transforms.returns import (
    build_table,
    compute_returns,
    filter_window,
    to_long_frame,
)

__all__ = [
    "build_table",
    "compute_returns",
    "filter_window",
    "to_long_frame",
]
