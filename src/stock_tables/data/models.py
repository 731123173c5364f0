"""
Data models for the stock tables pipeline.
"""

import hashlib
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator, Optional

import pandas as pd

PRICE_COLUMNS = ["open", "high", "low", "close", "volume", "adjusted"]
TABLE_COLUMNS = ["symbol", "date", *PRICE_COLUMNS, "returns"]


@dataclass(frozen=True)
class PriceRecord:
    """Single daily price row for one symbol."""

    symbol: str
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int
    adjusted: float
    returns: Optional[float] = None


@dataclass
class PriceData:
    """Daily prices for one symbol, indexed by date."""

    symbol: str
    data: pd.DataFrame  # Columns: open, high, low, close, volume, adjusted

    def __post_init__(self) -> None:
        """Ensure datetime index, ascending order and the adjusted column."""
        if not isinstance(self.data.index, pd.DatetimeIndex):
            self.data.index = pd.to_datetime(self.data.index)

        self.data = self.data.sort_index()
        self.data.index.name = "date"

        column_map = {
            "Open": "open",
            "High": "high",
            "Low": "low",
            "Close": "close",
            "Volume": "volume",
            "Adj Close": "adjusted",
            "adj_close": "adjusted",
        }
        self.data = self.data.rename(columns=column_map)

        if "adjusted" not in self.data.columns:
            self.data["adjusted"] = self.data["close"]

    def __len__(self) -> int:
        return len(self.data)

    @property
    def start_date(self) -> datetime:
        """Get first date in data."""
        return self.data.index[0].to_pydatetime()

    @property
    def end_date(self) -> datetime:
        """Get last date in data."""
        return self.data.index[-1].to_pydatetime()

    @property
    def adjusted(self) -> pd.Series:
        """Get adjusted close prices."""
        return self.data["adjusted"]


@dataclass(frozen=True, eq=False)
class StockTable:
    """
    Filtered long-format table handed to the renderers.

    Rows are sorted by (date, symbol). The wrapped frame is never handed out
    directly; ``frame()`` returns a copy so renderers cannot alter it.
    """

    data: pd.DataFrame
    window_start: Optional[date] = None
    window_end: Optional[date] = None

    def __len__(self) -> int:
        return len(self.data)

    def frame(self) -> pd.DataFrame:
        """Return a copy of the underlying frame."""
        return self.data.copy()

    @property
    def is_empty(self) -> bool:
        return self.data.empty

    @property
    def symbols(self) -> list[str]:
        """Symbols present, in sorted order."""
        return sorted(self.data["symbol"].unique().tolist())

    @property
    def start_date(self) -> Optional[date]:
        """Earliest date present in the table."""
        if self.is_empty:
            return None
        return pd.Timestamp(self.data["date"].min()).date()

    @property
    def end_date(self) -> Optional[date]:
        """Latest date present in the table."""
        if self.is_empty:
            return None
        return pd.Timestamp(self.data["date"].max()).date()

    def records(self) -> Iterator[PriceRecord]:
        """Iterate rows as PriceRecord objects with their return."""
        for row in self.data.itertuples(index=False):
            ret = row.returns
            yield PriceRecord(
                symbol=row.symbol,
                date=pd.Timestamp(row.date).date(),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
                volume=int(row.volume),
                adjusted=float(row.adjusted),
                returns=None if pd.isna(ret) else float(ret),
            )

    def fingerprint(self) -> str:
        """SHA-256 of the table contents, stable for identical tables."""
        payload = self.data.to_csv(index=False, float_format="%.10g")
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()

