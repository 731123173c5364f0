"""
End-to-end pipeline: fetch -> returns -> window -> render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional

from stock_tables.core.config import AppConfig, InteractiveTableConfig, StaticTableConfig
from stock_tables.core.exceptions import PipelineError
from stock_tables.core.logging import get_logger
from stock_tables.data.models import StockTable
from stock_tables.data.provider import DateLike, PriceFetcher
from stock_tables.data.universe import SymbolUniverse, normalize_symbols
from stock_tables.output.base import TableRenderer
from stock_tables.output.interactive import InteractiveTableRenderer
from stock_tables.output.static import StaticTableRenderer
from stock_tables.transforms.returns import build_table, compute_returns

logger = get_logger("pipeline")


@dataclass
class RenderedTables:
    """Both rendered tables and the fingerprint of the table they were built from."""

    static_html: str
    interactive_html: str
    fingerprint: str
    observed: dict[str, str] = field(default_factory=dict)
    renderers: dict[str, TableRenderer] = field(default_factory=dict)
    documents: dict[str, Any] = field(default_factory=dict)
    paths: dict[str, Path] = field(default_factory=dict)


def resolve_symbols(config: AppConfig, universe: Optional[SymbolUniverse] = None) -> list[str]:
    """Explicit symbols win over the named symbol list."""
    if config.data.symbols:
        return normalize_symbols(config.data.symbols)
    universe = universe or SymbolUniverse()
    return universe.get_symbols(config.data.universe)


def build_stock_table(
    symbols: Iterable[str],
    start_date: DateLike,
    window_start: DateLike,
    window_end: DateLike,
    fetcher: Optional[PriceFetcher] = None,
) -> StockTable:
    """Fetch prices, compute returns and keep the requested window."""
    symbols = normalize_symbols(symbols)
    fetcher = fetcher or PriceFetcher()

    logger.info(f"Fetching {len(symbols)} symbols: {', '.join(symbols)}")
    prices = fetcher.fetch_many(symbols, start_date, window_end)

    returns = compute_returns(prices)
    logger.info(f"Computed daily returns over {len(returns)} rows")

    return build_table(returns, window_start, window_end)


def render_tables(
    table: StockTable,
    static_config: Optional[StaticTableConfig] = None,
    interactive_config: Optional[InteractiveTableConfig] = None,
) -> RenderedTables:
    """
    Render the same table with both renderers.

    Raises PipelineError if a renderer changed the table it was given.
    """
    fingerprint = table.fingerprint()
    observed: dict[str, str] = {}
    html: dict[str, str] = {}
    documents: dict[str, Any] = {}

    renderers: dict[str, TableRenderer] = {
        renderer.name: renderer
        for renderer in (
            StaticTableRenderer(static_config),
            InteractiveTableRenderer(interactive_config),
        )
    }
    for name, renderer in renderers.items():
        documents[name] = renderer.document(table)
        html[name] = renderer.to_html(documents[name])
        observed[name] = table.fingerprint()

    if set(observed.values()) != {fingerprint}:
        changed = sorted(name for name, seen in observed.items() if seen != fingerprint)
        raise PipelineError(
            f"table changed while rendering ({', '.join(changed)})", stage="render"
        )

    return RenderedTables(
        static_html=html["static"],
        interactive_html=html["interactive"],
        fingerprint=fingerprint,
        observed=observed,
        renderers=renderers,
        documents=documents,
    )


def save_tables(rendered: RenderedTables, output_dir: str | Path) -> dict[str, Path]:
    """
    Write static.html and interactive.html into output_dir.

    The documents written are the ones built and checked by render_tables.
    """
    output_dir = Path(output_dir)
    return {
        name: renderer.write(rendered.documents[name], output_dir / f"{name}.html")
        for name, renderer in rendered.renderers.items()
    }


def run(
    config: AppConfig,
    output_dir: Optional[str | Path] = None,
    fetcher: Optional[PriceFetcher] = None,
) -> RenderedTables:
    """Run the whole pipeline from configuration."""
    data = config.data
    table = build_stock_table(
        resolve_symbols(config),
        data.start_date,
        data.window_start,
        data.window_end,
        fetcher=fetcher,
    )

    rendered = render_tables(table, config.static_table, config.interactive_table)

    if output_dir is not None:
        rendered.paths = save_tables(rendered, output_dir)
        logger.info(f"Saved tables to {output_dir}")

    return rendered
