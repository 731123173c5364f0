"""Data layer for stock tables."""

from stock_tables.data.models import (
    PriceRecord,
    PriceData,
    StockTable,
)
from stock_tables.data.provider import PriceFetcher
from stock_tables.data.universe import SymbolUniverse, normalize_symbols

__all__ = [
    "PriceRecord",
    "PriceData",
    "StockTable",
    "PriceFetcher",
    "SymbolUniverse",
    "normalize_symbols",
]
