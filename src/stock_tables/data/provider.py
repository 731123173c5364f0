"""
Price fetcher backed by Yahoo Finance.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

import pandas as pd
import yfinance as yf

from stock_tables.core.exceptions import DataError, DataNotFoundError, DataValidationError
from stock_tables.core.logging import get_logger
from stock_tables.data.models import PRICE_COLUMNS, PriceData

logger = get_logger("data.provider")

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


class PriceFetcher:
    """
    Fetch daily price history for symbols from yfinance.

    One blocking request per symbol; failures are raised, never retried.
    """

    def __init__(self, interval: str = "1d"):
        self.interval = interval

    def fetch(
        self,
        symbol: str,
        start_date: DateLike,
        end_date: Optional[DateLike] = None,
    ) -> PriceData:
        """
        Get daily prices for a symbol.

        Args:
            symbol: Stock ticker symbol
            start_date: First date to request
            end_date: Last date to request (default: today)

        Returns:
            PriceData object

        Raises:
            DataError: If the request fails
            DataNotFoundError: If no data is returned
        """
        symbol = symbol.upper()
        start = to_date(start_date)
        end = to_date(end_date) if end_date is not None else date.today()

        logger.info(f"Fetching prices for {symbol} from {start} to {end}")

        try:
            df = yf.Ticker(symbol).history(
                start=start.isoformat(),
                end=(end + timedelta(days=1)).isoformat(),  # yfinance end is exclusive
                interval=self.interval,
                auto_adjust=False,
                actions=False,
            )
        except Exception as e:
            raise DataError(f"Failed to fetch prices for {symbol}: {e}") from e

        if df is None or len(df) == 0:
            raise DataNotFoundError(symbol, "price")

        df = self._normalize_columns(df, symbol)
        logger.debug(f"Fetched {len(df)} rows for {symbol}")

        return PriceData(symbol=symbol, data=df)

    def fetch_many(
        self,
        symbols: Iterable[str],
        start_date: DateLike,
        end_date: Optional[DateLike] = None,
    ) -> dict[str, PriceData]:
        """Fetch each symbol in order. The first failure propagates."""
        return {
            symbol.upper(): self.fetch(symbol, start_date, end_date)
            for symbol in symbols
        }

    @staticmethod
    def _normalize_columns(df: pd.DataFrame, symbol: str) -> pd.DataFrame:
        """Normalize column names and drop timezone info."""
        df = df.copy()
        df.columns = [str(c).lower().replace(" ", "_") for c in df.columns]
        df = df.rename(columns={"adj_close": "adjusted"})

        missing = [c for c in ("open", "high", "low", "close") if c not in df.columns]
        if missing:
            raise DataValidationError(
                f"Price data for {symbol} is missing columns",
                issues=missing,
            )

        if "adjusted" not in df.columns:
            df["adjusted"] = df["close"]
        if "volume" not in df.columns:
            df["volume"] = 0

        if isinstance(df.index, pd.DatetimeIndex) and df.index.tz is not None:
            df.index = df.index.tz_localize(None)

        return df[PRICE_COLUMNS]
