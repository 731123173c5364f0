from __future__ import annotations

from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from stock_tables.data import provider as provider_module
from stock_tables.data.models import PriceData
from stock_tables.transforms.returns import build_table, compute_returns


def make_history(
    adjusted: list[float],
    start: str = "2021-01-01",
    volume: int = 1_500_000,
    tz: str | None = "America/New_York",
) -> pd.DataFrame:
    """yfinance-shaped daily history over consecutive business days."""
    index = pd.bdate_range(start, periods=len(adjusted), tz=tz)
    adj = np.asarray(adjusted, dtype=float)
    return pd.DataFrame(
        {
            "Open": adj * 0.99,
            "High": adj * 1.01,
            "Low": adj * 0.98,
            "Close": adj + 0.5,
            "Adj Close": adj,
            "Volume": [volume + i for i in range(len(adjusted))],
        },
        index=pd.DatetimeIndex(index, name="Date"),
    )


def make_price_data(symbol: str, adjusted: list[float], start: str = "2021-01-01") -> PriceData:
    history = make_history(adjusted, start=start, tz=None)
    frame = history.rename(columns={"Adj Close": "adjusted"})
    frame.columns = [c.lower() for c in frame.columns]
    return PriceData(symbol=symbol, data=frame)


class FakeTicker:
    """Stands in for yfinance.Ticker and records history() calls."""

    histories: dict[str, pd.DataFrame] = {}
    calls: list[tuple[str, dict]] = []

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol

    def history(self, **kwargs) -> pd.DataFrame:
        FakeTicker.calls.append((self.symbol, kwargs))
        history = FakeTicker.histories.get(self.symbol)
        if isinstance(history, Exception):
            raise history
        return history if history is not None else pd.DataFrame()


@pytest.fixture
def fake_yfinance(monkeypatch):
    FakeTicker.histories = {}
    FakeTicker.calls = []
    monkeypatch.setattr(provider_module, "yf", SimpleNamespace(Ticker=FakeTicker))
    return FakeTicker


@pytest.fixture
def january_prices() -> dict[str, PriceData]:
    """Two symbols, every business day of January 2021."""
    days = len(pd.bdate_range("2021-01-01", "2021-01-29"))
    aapl = [100.0 + i for i in range(days)]
    msft = [200.0 - 2 * i for i in range(days)]
    return {
        "MSFT": make_price_data("MSFT", msft),
        "AAPL": make_price_data("AAPL", aapl),
    }


@pytest.fixture
def stock_table(january_prices):
    returns = compute_returns(january_prices)
    return build_table(returns, "2021-01-11", "2021-01-15")
