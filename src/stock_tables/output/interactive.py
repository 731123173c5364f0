"""
Interactive HTML table rendered with reactable.

Rows are grouped by symbol and can be sorted, filtered, searched and paged
in the browser. Each row expands into a one-sentence description and numeric
columns carry a sparkline footer.
"""

from __future__ import annotations

import math
from datetime import date
from pathlib import Path
from typing import Any, Optional

import pandas as pd
from htmltools import HTMLDocument, tags
from reactable import ColFormat, Column, Reactable, Theme

from stock_tables.core.config import InteractiveTableConfig
from stock_tables.core.exceptions import RenderError
from stock_tables.core.logging import get_logger
from stock_tables.data.models import StockTable
from stock_tables.output.base import COLUMN_LABELS, TableRenderer
from stock_tables.output.summary import column_footers
from stock_tables.output.theme import get_theme

logger = get_logger("output.interactive")


def describe_row(symbol: str, day: date, adjusted: float, returns: Optional[float]) -> str:
    """One-sentence description of a table row."""
    when = f"{day:%B} {day.day}, {day.year}"
    opening = f"On {when}, {symbol} closed at an adjusted price of ${adjusted:,.2f}"
    if returns is None or (isinstance(returns, float) and math.isnan(returns)):
        return f"{opening}, with no prior trading day to compute a return."
    return f"{opening}, a daily return of {returns * 100:.2f}%."


class RowDetails:
    """Expandable row content, looked up by row index."""

    def __init__(self, sentences: list[str]):
        self.sentences = sentences

    def __call__(self, row: Any) -> str:
        # reactable passes the row index (or an object carrying it)
        index = getattr(row, "row_index", row)
        return self.sentences[index]


class InteractiveTableRenderer(TableRenderer):
    """Browsable reactable table."""

    name = "interactive"

    def __init__(
        self,
        config: Optional[InteractiveTableConfig] = None,
        theme: Optional[Theme] = None,
    ):
        self.config = config or InteractiveTableConfig()
        self.theme = theme if theme is not None else get_theme(self.config.theme)

    def _prepare(self, table: StockTable) -> pd.DataFrame:
        frame = table.frame()
        columns = [c for c in self.config.columns if c in frame.columns]
        frame = frame[columns].copy()
        if "date" in frame.columns:
            frame["date"] = pd.to_datetime(frame["date"]).dt.strftime("%Y-%m-%d")
        return frame

    def row_details(self, table: StockTable) -> RowDetails:
        """Detail sentences in table row order."""
        return RowDetails([
            describe_row(r.symbol, r.date, r.adjusted, r.returns)
            for r in table.records()
        ])

    def footers(self, frame: pd.DataFrame) -> dict[str, str]:
        """Column footers, with each sparkline running through one symbol at a time."""
        order = [c for c in ("symbol", "date") if c in frame.columns]
        return column_footers(frame, order_by=order)

    def _columns(self, frame: pd.DataFrame, footers: dict[str, str]) -> list[Column]:
        cfg = self.config
        formats = {
            "adjusted": {"format": ColFormat(currency=cfg.currency, separators=True)},
            "returns": {"format": ColFormat(percent=True, digits=cfg.percent_decimals)},
            "volume": {
                "aggregate": "sum",
                "format": ColFormat(separators=True, digits=0),
            },
        }

        columns = []
        for name in frame.columns:
            options = dict(formats.get(name, {}))
            if cfg.footers and name in footers:
                options["footer"] = footers[name]
            columns.append(Column(id=name, name=COLUMN_LABELS.get(name, name), **options))
        return columns

    def build(self, table: StockTable) -> Reactable:
        """Build the reactable widget."""
        cfg = self.config
        frame = self._prepare(table)
        footers = self.footers(frame) if cfg.footers else {}

        if "returns" in frame.columns:
            # Missing returns serialize as null
            frame["returns"] = frame["returns"].astype(object).where(frame["returns"].notna(), None)

        options: dict[str, Any] = {}
        if cfg.group_by and cfg.group_by in frame.columns:
            options["group_by"] = cfg.group_by
        if cfg.details:
            options["details"] = self.row_details(table)
        if self.theme is not None:
            options["theme"] = self.theme

        return Reactable(
            frame,
            columns=self._columns(frame, footers),
            sortable=cfg.sortable,
            resizable=cfg.resizable,
            bordered=cfg.bordered,
            striped=cfg.striped,
            highlight=cfg.highlight,
            filterable=cfg.filterable,
            searchable=cfg.searchable,
            pagination=cfg.pagination,
            default_page_size=cfg.page_size,
            **options,
        )

    def document(self, table: StockTable) -> HTMLDocument:
        """Standalone page holding the title and the widget."""
        logger.info(f"Rendering interactive table ({len(table)} rows)")
        try:
            widget = self.build(table)
        except (ValueError, TypeError, KeyError) as e:
            raise RenderError(self.name, str(e)) from e
        return HTMLDocument(tags.h2(self.config.title), widget)

    def to_html(self, document: HTMLDocument) -> str:
        return document.render()["html"]

    def write(self, document: HTMLDocument, path: str | Path) -> Path:
        """Write the document with its JavaScript dependencies next to it."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Writing interactive table to {path}")
        document.save_html(str(path))
        return path
