"""Table renderers."""

from stock_tables.output.base import TableRenderer
from stock_tables.output.interactive import InteractiveTableRenderer, describe_row
from stock_tables.output.static import StaticTableRenderer
from stock_tables.output.summary import column_footer
from stock_tables.output.theme import get_theme

__all__ = [
    "TableRenderer",
    "InteractiveTableRenderer",
    "StaticTableRenderer",
    "column_footer",
    "describe_row",
    "get_theme",
]
