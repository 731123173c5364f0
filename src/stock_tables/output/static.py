"""
Static HTML table rendered with great_tables.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
from great_tables import GT

from stock_tables.core.config import StaticTableConfig
from stock_tables.core.exceptions import RenderError
from stock_tables.core.logging import get_logger
from stock_tables.data.models import StockTable
from stock_tables.output.base import COLUMN_LABELS, TableRenderer

logger = get_logger("output.static")


def table_id(table: StockTable) -> str:
    """HTML id derived from the table contents, stable across renders."""
    return f"stock-table-{table.fingerprint()[:10]}"


def date_range_subtitle(table: StockTable) -> str:
    """Subtitle naming the first and last date in the table."""
    if table.is_empty:
        return "No trading days in range"
    start, end = table.start_date, table.end_date
    return f"{start:%B} {start.day}, {start.year} to {end:%B} {end.day}, {end.year}"


class StaticTableRenderer(TableRenderer):
    """
    Read-only formatted table.

    Dates, currency, percentages and suffixed volumes are formatted by
    great_tables; returns are colored on a diverging red/white/green scale.
    """

    name = "static"

    def __init__(self, config: Optional[StaticTableConfig] = None):
        self.config = config or StaticTableConfig()

    def _prepare(self, table: StockTable) -> pd.DataFrame:
        frame = table.frame()
        columns = [c for c in self.config.columns if c in frame.columns]
        frame = frame[columns].copy()
        if "date" in frame.columns:
            frame["date"] = pd.to_datetime(frame["date"]).dt.date
        return frame

    def build(self, table: StockTable) -> GT:
        """Build the great_tables object."""
        cfg = self.config
        frame = self._prepare(table)
        columns = set(frame.columns)

        gt = GT(frame, id=table_id(table)).tab_header(
            title=cfg.title, subtitle=date_range_subtitle(table)
        )

        if "date" in columns:
            gt = gt.fmt_date(columns="date", date_style=cfg.date_style)
        if "adjusted" in columns:
            gt = gt.fmt_currency(columns="adjusted", currency=cfg.currency)
        if "returns" in columns:
            gt = (
                gt.fmt_percent(columns="returns", decimals=cfg.percent_decimals)
                .sub_missing(columns="returns", missing_text="")
                .data_color(
                    columns="returns",
                    palette=list(cfg.palette),
                    domain=list(cfg.color_domain),
                    na_color="#FFFFFF",
                )
            )
        if "volume" in columns:
            gt = gt.fmt_number(columns="volume", compact=True, decimals=1)

        gt = gt.cols_label(**{c: COLUMN_LABELS.get(c, c) for c in frame.columns})

        gt = gt.tab_source_note(source_note=cfg.source_note)
        if cfg.footnote:
            gt = gt.tab_source_note(source_note=cfg.footnote)

        return gt

    def document(self, table: StockTable) -> GT:
        logger.info(f"Rendering static table ({len(table)} rows)")
        try:
            return self.build(table)
        except (ValueError, TypeError, KeyError) as e:
            raise RenderError(self.name, str(e)) from e

    def to_html(self, document: GT) -> str:
        """Render the table as an HTML fragment."""
        try:
            return document.as_raw_html()
        except (ValueError, TypeError, KeyError) as e:
            raise RenderError(self.name, str(e)) from e
