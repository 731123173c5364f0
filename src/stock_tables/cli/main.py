"""
Command line interface for the stock tables pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stock_tables.core.config import AppConfig, ConfigLoader
from stock_tables.core.exceptions import StockTablesError
from stock_tables.core.logging import setup_logging

app = typer.Typer(
    name="stock-tables",
    help="Fetch daily stock prices, compute returns and render them as tables",
)
console = Console()


def _load_config(
    config_path: Optional[Path],
    symbols: Optional[str],
    universe: Optional[str],
    start: Optional[str],
    window_start: Optional[str],
    window_end: Optional[str],
    theme: Optional[str] = None,
    verbose: bool = False,
) -> AppConfig:
    """Load configuration with CLI overrides applied."""
    from stock_tables.data.universe import normalize_symbols

    overrides: dict[str, Any] = {
        "data": {
            "symbols": normalize_symbols(symbols) if symbols else None,
            "universe": universe,
            "start_date": start,
            "window_start": window_start,
            "window_end": window_end,
        },
        "interactive_table": {"theme": theme},
    }
    if verbose:
        overrides["logging"] = {"console": {"level": "DEBUG"}}

    config = ConfigLoader(config_path, cli_overrides=overrides).load()
    setup_logging(config.logging.model_dump())
    return config


@app.command()
def render(
    symbols: Optional[str] = typer.Option(None, "--symbols", "-s", help="Comma-separated symbols"),
    universe: Optional[str] = typer.Option(None, "--universe", "-u", help="Named symbol list"),
    start: Optional[str] = typer.Option(None, "--start", help="First date to fetch (YYYY-MM-DD)"),
    window_start: Optional[str] = typer.Option(None, "--window-start", help="First date shown (YYYY-MM-DD)"),
    window_end: Optional[str] = typer.Option(None, "--window-end", help="Last date shown (YYYY-MM-DD)"),
    output_dir: Path = typer.Option(Path("output"), "--output-dir", "-o", help="Directory for the HTML files"),
    theme: Optional[str] = typer.Option(None, "--theme", "-t", help="Interactive table theme: light, dark"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Render the static and interactive tables to HTML files."""
    from stock_tables.pipeline import run

    try:
        config = _load_config(
            config_path, symbols, universe, start, window_start, window_end, theme, verbose
        )
        console.print(
            f"[bold blue]Rendering {config.data.window_start} to {config.data.window_end}...[/bold blue]"
        )
        rendered = run(config, output_dir=output_dir)
    except StockTablesError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    for name, path in rendered.paths.items():
        console.print(f"[green]{name} table saved to {path}[/green]")


@app.command()
def symbols(
    universe: str = typer.Option("default", "--universe", "-u", help="Named symbol list"),
) -> None:
    """Print the symbols of a named list."""
    from stock_tables.data.universe import SymbolUniverse

    try:
        listed = SymbolUniverse().get_symbols(universe)
    except StockTablesError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(", ".join(listed))


@app.command()
def show(
    symbols: Optional[str] = typer.Option(None, "--symbols", "-s", help="Comma-separated symbols"),
    universe: Optional[str] = typer.Option(None, "--universe", "-u", help="Named symbol list"),
    start: Optional[str] = typer.Option(None, "--start", help="First date to fetch (YYYY-MM-DD)"),
    window_start: Optional[str] = typer.Option(None, "--window-start", help="First date shown (YYYY-MM-DD)"),
    window_end: Optional[str] = typer.Option(None, "--window-end", help="Last date shown (YYYY-MM-DD)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
) -> None:
    """Print the filtered returns table to the console."""
    from stock_tables.pipeline import build_stock_table, resolve_symbols

    try:
        config = _load_config(config_path, symbols, universe, start, window_start, window_end)
        data = config.data
        table = build_stock_table(
            resolve_symbols(config), data.start_date, data.window_start, data.window_end
        )
    except StockTablesError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    _display_table(table)


def _display_table(table) -> None:
    """Display a StockTable as a rich table."""
    out = Table(title=f"Daily returns {table.start_date} to {table.end_date}")
    out.add_column("Date", style="dim")
    out.add_column("Symbol", style="cyan")
    out.add_column("Adjusted", justify="right")
    out.add_column("Return", justify="right")
    out.add_column("Volume", justify="right")

    for record in table.records():
        if record.returns is None:
            ret = "-"
        else:
            color = "green" if record.returns >= 0 else "red"
            ret = f"[{color}]{record.returns * 100:.2f}%[/{color}]"
        out.add_row(
            str(record.date),
            record.symbol,
            f"${record.adjusted:,.2f}",
            ret,
            f"{record.volume:,}",
        )

    console.print(out)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
