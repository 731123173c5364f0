"""
Daily return computation and date-window filtering.
"""

from __future__ import annotations

from typing import Mapping, Optional, Union

import pandas as pd

from stock_tables.core.exceptions import DataValidationError, ValidationError
from stock_tables.core.logging import get_logger
from stock_tables.data.models import PRICE_COLUMNS, TABLE_COLUMNS, PriceData, StockTable
from stock_tables.data.provider import DateLike, to_date

logger = get_logger("transforms.returns")

PriceInput = Union[Mapping[str, PriceData], pd.DataFrame]


def to_long_frame(prices: Mapping[str, PriceData]) -> pd.DataFrame:
    """
    Stack per-symbol price frames into one long frame.

    Columns: symbol, date, open, high, low, close, volume, adjusted.
    Symbols keep their mapping order; dates ascend within each symbol.
    """
    frames = []
    for symbol, price_data in prices.items():
        frame = price_data.data[PRICE_COLUMNS].sort_index().reset_index()
        frame = frame.rename(columns={frame.columns[0]: "date"})
        frame.insert(0, "symbol", symbol)
        frames.append(frame)

    if not frames:
        return pd.DataFrame(columns=["symbol", "date", *PRICE_COLUMNS])

    return pd.concat(frames, ignore_index=True)


def compute_returns(prices: PriceInput) -> pd.DataFrame:
    """
    Add a ``returns`` column with the daily change of the adjusted close.

    For each symbol, ``returns[i] = (adjusted[i] - adjusted[i-1]) / adjusted[i-1]``
    and the first row is NaN. Gaps are not filled.

    Args:
        prices: Mapping of symbol to PriceData, or a long frame with
            symbol, date and adjusted columns.

    Returns:
        Long frame grouped by symbol (first-appearance order), date ascending.
    """
    if isinstance(prices, pd.DataFrame):
        frame = prices.copy()
    else:
        frame = to_long_frame(prices)

    missing = [c for c in ("symbol", "date", "adjusted") if c not in frame.columns]
    if missing:
        raise DataValidationError("Cannot compute returns", issues=missing)

    frame["date"] = pd.to_datetime(frame["date"])

    # Stable ordering: symbols by first appearance, then date
    order = {symbol: i for i, symbol in enumerate(pd.unique(frame["symbol"]))}
    frame = (
        frame.assign(_group=frame["symbol"].map(order))
        .sort_values(["_group", "date"], kind="stable")
        .drop(columns="_group")
        .reset_index(drop=True)
    )

    adjusted = frame["adjusted"].astype(float)
    previous = adjusted.groupby(frame["symbol"], sort=False).shift(1)
    frame["returns"] = (adjusted - previous) / previous

    logger.debug(f"Computed returns for {len(order)} symbols, {len(frame)} rows")
    return frame


def filter_window(
    data: Union[pd.DataFrame, StockTable],
    start: DateLike,
    end: DateLike,
) -> pd.DataFrame:
    """
    Keep rows whose date lies in the closed interval [start, end].

    The result is sorted by (date, symbol) with a fresh index. Filtering an
    already-filtered frame to the same window returns an identical frame.
    """
    frame = data.frame() if isinstance(data, StockTable) else data.copy()
    start_day = pd.Timestamp(to_date(start))
    end_day = pd.Timestamp(to_date(end))
    if start_day > end_day:
        raise ValidationError(f"window start {start_day.date()} is after end {end_day.date()}", field="window")

    days = pd.to_datetime(frame["date"]).dt.normalize()
    mask = (days >= start_day) & (days <= end_day)

    return (
        frame.loc[mask]
        .sort_values(["date", "symbol"], kind="stable")
        .reset_index(drop=True)
    )


def build_table(
    returns: pd.DataFrame,
    start: DateLike,
    end: DateLike,
    columns: Optional[list[str]] = None,
) -> StockTable:
    """Filter a returns frame to a window and wrap it as a StockTable."""
    filtered = filter_window(returns, start, end)
    columns = columns or [c for c in TABLE_COLUMNS if c in filtered.columns]
    table = StockTable(
        data=filtered[columns],
        window_start=to_date(start),
        window_end=to_date(end),
    )
    logger.info(
        f"Kept {len(table)} of {len(returns)} rows between {table.window_start} and {table.window_end}"
    )
    return table
