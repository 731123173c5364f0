"""
Symbol lists for the pipeline.
"""

from typing import Iterable, Union

from stock_tables.core.config import DEFAULT_SYMBOLS
from stock_tables.core.exceptions import ValidationError
from stock_tables.core.logging import get_logger

logger = get_logger("data.universe")


def normalize_symbols(symbols: Union[str, Iterable[str]]) -> list[str]:
    """
    Clean a symbol list.

    Accepts an iterable or a comma separated string. Symbols are stripped and
    upper-cased; blanks are dropped and duplicates removed, keeping the first
    occurrence.
    """
    if isinstance(symbols, str):
        symbols = symbols.split(",")

    cleaned: list[str] = []
    for symbol in symbols:
        if not isinstance(symbol, str):
            raise ValidationError(f"symbol must be a string, got {symbol!r}", field="symbols")
        value = symbol.strip().upper()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


class SymbolUniverse:
    """
    Named, static symbol lists.

    Ships with a ``default`` list; further lists can be registered at runtime.
    """

    BUILTIN = {
        "default": DEFAULT_SYMBOLS,
        "faang": ["META", "AAPL", "AMZN", "NFLX", "GOOG"],
    }

    def __init__(self) -> None:
        self._custom_universes: dict[str, list[str]] = {}

    @property
    def names(self) -> list[str]:
        return sorted({*self.BUILTIN, *self._custom_universes})

    def get_symbols(self, name: str = "default") -> list[str]:
        """Get the symbols of a named list."""
        key = name.lower()
        if key in self._custom_universes:
            return list(self._custom_universes[key])
        if key in self.BUILTIN:
            return list(self.BUILTIN[key])
        raise ValidationError(f"unknown symbol list '{name}'", field="universe")

    def register(self, name: str, symbols: Union[str, Iterable[str]]) -> list[str]:
        """Register a custom symbol list and return its cleaned symbols."""
        cleaned = normalize_symbols(symbols)
        if not cleaned:
            raise ValidationError("symbol list is empty", field="symbols")

        self._custom_universes[name.lower()] = cleaned
        logger.debug(f"Registered symbol list {name}: {', '.join(cleaned)}")
        return list(cleaned)
