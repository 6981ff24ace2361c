from __future__ import annotations

import asyncio
from typing import Optional

import typer

from src.cli.display import DisplayManager
from src.config import load_config
from src.data_collection.pairs import COMMON_PAIRS, search_pairs
from src.data_collection.quote_client import QuoteClient
from src.data_collection.watchlist import Watchlist
from src.utils.errors import ConfigurationError, UpstreamError, ValidationError


app = typer.Typer(add_completion=False, help="Forex Sage quote CLI")
display = DisplayManager()

_config_path = "config.yaml"


def _build_client() -> QuoteClient:
    cfg = load_config(_config_path)
    return QuoteClient.from_config(cfg)


@app.callback()
def main(
    config: str = typer.Option("config.yaml", "--config", "-c", help="Path to config.yaml"),
):
    """Current prices and daily history for forex pairs."""
    global _config_path
    _config_path = config


@app.command("pairs")
def pairs(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Filter by symbol or name"),
):
    """List the tracked currency pairs."""
    matches = search_pairs(search or "", COMMON_PAIRS)
    if not matches:
        typer.secho(f"No pairs match '{search}'", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    display.show_pairs(matches)


@app.command("price")
def price(symbol: str = typer.Argument(..., help="Currency pair, e.g., EUR/USD")):
    """Show the current price of a pair."""
    try:
        client = _build_client()
    except ConfigurationError as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    quote = asyncio.run(client.get_current_price(symbol))
    display.show_quote(quote)
    if not quote.has_price:
        raise typer.Exit(code=1)


@app.command("history")
def history(
    symbol: str = typer.Argument(..., help="Currency pair, e.g., EUR/USD"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Most recent bars to show"),
):
    """Show the most recent daily bars of a pair."""
    try:
        client = _build_client()
    except ConfigurationError as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    try:
        points = asyncio.run(client.get_historical_series(symbol))
    except ValidationError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=2)
    except UpstreamError as e:
        display.show_error(str(e), title="API Error")
        raise typer.Exit(code=1)

    display.show_series(symbol, points[-limit:], synthetic=client.is_synthetic)


@app.command("watchlist")
def watchlist():
    """Refresh current prices for every pair in the watchlist."""
    try:
        client = _build_client()
    except ConfigurationError as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    wl = Watchlist()
    quotes = asyncio.run(wl.refresh(client))
    display.show_watchlist(wl.pairs, quotes)


if __name__ == "__main__":
    app()
