"""
Base class for table renderers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from stock_tables.data.models import StockTable


class TableRenderer(ABC):
    """
    Turns a StockTable into a rendered artifact.

    ``document`` builds the artifact once; ``to_html`` and ``write`` turn that
    same artifact into a string or a file, so the pipeline can check the
    table it was built from before anything reaches disk.
    """

    name: str = "table"

    @abstractmethod
    def build(self, table: StockTable) -> Any:
        """Build the library table object."""
        pass

    def document(self, table: StockTable) -> Any:
        """Build the artifact that is rendered and saved."""
        return self.build(table)

    @abstractmethod
    def to_html(self, document: Any) -> str:
        """Render a built document as HTML."""
        pass

    def write(self, document: Any, path: str | Path) -> Path:
        """Write a built document to a file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_html(document), encoding="utf-8")
        return path

    def render(self, table: StockTable) -> str:
        """Render the table as HTML."""
        return self.to_html(self.document(table))

    def save(self, table: StockTable, path: str | Path) -> Path:
        """Render and write the HTML to a file."""
        return self.write(self.document(table), path)


COLUMN_LABELS = {
    "symbol": "Symbol",
    "date": "Date",
    "open": "Open",
    "high": "High",
    "low": "Low",
    "close": "Close",
    "volume": "Volume",
    "adjusted": "Adjusted",
    "returns": "Returns",
}
