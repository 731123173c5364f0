"""
Column footer summaries for the interactive table.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np
import pandas as pd

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"


def is_numeric_column(values: Iterable) -> bool:
    """True for numeric (non-boolean) columns."""
    series = values if isinstance(values, pd.Series) else pd.Series(list(values))
    if pd.api.types.is_bool_dtype(series):
        return False
    if pd.api.types.is_numeric_dtype(series):
        return True
    # Object columns holding numbers and missing values (None)
    non_null = series.dropna()
    return (
        len(non_null) > 0
        and non_null.map(lambda v: isinstance(v, (int, float, np.number)) and not isinstance(v, bool)).all()
    )


def format_compact(value: float) -> str:
    """Format a number with a magnitude suffix (1.2K, 3.4M)."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "NA"
    magnitude = abs(value)
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "K")):
        if magnitude >= threshold:
            return f"{value / threshold:.1f}{suffix}"
    if magnitude < 1:
        return f"{value:.4f}"
    return f"{value:.2f}"


def sparkline(values: Iterable[float], width: int = 20) -> str:
    """
    Render values as a Unicode block sparkline.

    Longer series are averaged into ``width`` buckets. A flat series renders
    as a row of mid-height blocks.
    """
    data = np.asarray([v for v in values if v is not None], dtype=float)
    data = data[~np.isnan(data)]
    if data.size == 0:
        return ""

    if data.size > width:
        data = np.array([chunk.mean() for chunk in np.array_split(data, width)])

    low, high = data.min(), data.max()
    if high == low:
        return SPARK_BLOCKS[len(SPARK_BLOCKS) // 2] * data.size

    scaled = (data - low) / (high - low) * (len(SPARK_BLOCKS) - 1)
    return "".join(SPARK_BLOCKS[int(round(s))] for s in scaled)


def column_footer(values: Iterable, width: int = 20) -> Optional[str]:
    """
    Footer text for a column: sparkline plus mean for numeric columns.

    Non-numeric columns have no footer (None).
    """
    series = values if isinstance(values, pd.Series) else pd.Series(list(values))
    if not is_numeric_column(series):
        return None

    numbers = pd.to_numeric(series, errors="coerce").dropna()
    if numbers.empty:
        return "no data"

    return f"{sparkline(numbers, width)} mean {format_compact(float(numbers.mean()))}"


def column_footers(
    frame: pd.DataFrame,
    width: int = 20,
    order_by: Optional[list[str]] = None,
) -> dict[str, str]:
    """
    Footers for every numeric column of a frame.

    ``order_by`` sorts the rows before the sparklines are drawn, e.g.
    ["symbol", "date"] so one symbol's series is not interleaved with another's.
    """
    if order_by:
        frame = frame.sort_values(order_by, kind="stable")
    footers = {}
    for name in frame.columns:
        footer = column_footer(frame[name], width)
        if footer is not None:
            footers[name] = footer
    return footers
