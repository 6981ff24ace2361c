"""
Rich display helpers for the forex CLI
"""

from typing import Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.data_collection.models import ForexPair, PricePoint, PriceQuote
from src.data_collection.series import price_range


class DisplayManager:
    """Renders pairs, quotes and series as Rich tables"""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(width=100)

    def show_pairs(self, pairs: Sequence[ForexPair]) -> None:
        table = Table(title="Currency Pairs", box=box.ROUNDED)
        table.add_column("Symbol", style="bold cyan")
        table.add_column("Name")
        table.add_column("Description", style="dim")
        table.add_column("Fav", justify="center")
        for pair in pairs:
            table.add_row(pair.symbol, pair.name, pair.description, "★" if pair.is_favorite else "")
        self.console.print(table)

    def show_quote(self, quote: PriceQuote) -> None:
        """Display one current price with change and data-quality labels"""
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Metric", style="bold", width=15)
        table.add_column("Value", width=40)

        table.add_row("Pair", quote.symbol)
        table.add_row("Price", self._format_price(quote.price))
        table.add_row("Change", self._format_change(quote))
        if quote.last_updated is not None:
            table.add_row("Updated", quote.last_updated.strftime("%Y-%m-%d %H:%M:%S UTC"))
        if quote.is_synthetic:
            table.add_row("Data", "[yellow]generated placeholder[/yellow]")
        elif quote.source is not None:
            table.add_row("Data", quote.source.value)

        border = "red" if not quote.has_price else ("yellow" if quote.error else "blue")
        self.console.print(Panel(table, title=quote.symbol, border_style=border))
        if quote.error and quote.has_price:
            self.show_warning(quote.error)
        elif quote.error:
            self.show_error(quote.error)

    def show_series(self, symbol: str, points: Sequence[PricePoint], synthetic: bool = False) -> None:
        title = f"{symbol} daily" + (" (generated placeholder)" if synthetic else "")
        table = Table(title=title, box=box.SIMPLE_HEAVY)
        for column in ("Date", "Open", "High", "Low", "Close", "Volume"):
            table.add_column(column, justify="right" if column != "Date" else "left")
        for p in points:
            table.add_row(
                p.timestamp.strftime("%Y-%m-%d"),
                f"{p.open:.4f}",
                f"{p.high:.4f}",
                f"{p.low:.4f}",
                f"{p.close:.4f}",
                f"{p.volume:,.0f}",
            )
        self.console.print(table)
        if points:
            low, high = price_range(points, padding=0)
            self.console.print(f"[dim]{len(points)} bars, range {low:.4f} - {high:.4f}[/dim]")

    def show_watchlist(self, pairs: List[ForexPair], quotes: Dict[str, PriceQuote]) -> None:
        table = Table(title="Watchlist", box=box.ROUNDED)
        table.add_column("Symbol", style="bold cyan")
        table.add_column("Name")
        table.add_column("Price", justify="right")
        table.add_column("Status", style="dim")
        for pair in pairs:
            quote = quotes.get(pair.symbol)
            price = self._format_price(quote.price if quote else None)
            status = ""
            if quote is not None:
                status = "generated" if quote.is_synthetic else (quote.error or "")
            table.add_row(pair.symbol, pair.name, price, status)
        self.console.print(table)

    def show_error(self, message: str, title: str = "Error") -> None:
        self.console.print(Panel(f"[red]{message}[/red]", title=title, border_style="red"))

    def show_warning(self, message: str, title: str = "Warning") -> None:
        self.console.print(Panel(f"[yellow]{message}[/yellow]", title=title, border_style="yellow"))

    @staticmethod
    def _format_price(price: Optional[float]) -> str:
        return f"{price:.4f}" if price is not None else "Loading..."

    @staticmethod
    def _format_change(quote: PriceQuote) -> str:
        if quote.change is None or quote.change_percent is None:
            return "[dim]n/a[/dim]"
        color = "green" if quote.change >= 0 else "red"
        return f"[{color}]{quote.change:+.5f} ({quote.change_percent:+.2f}%)[/{color}]"
