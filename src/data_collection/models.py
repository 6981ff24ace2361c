"""
Data models for forex quotes and price history.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class DataSource(Enum):
    """Where the currently displayed data came from."""
    ALPHA_VANTAGE = "alpha_vantage"
    CACHE = "cache"
    SNAPSHOT = "snapshot"
    SYNTHETIC = "synthetic"


@dataclass(frozen=True)
class PricePoint:
    """
    One OHLCV observation.

    ``low <= open, close <= high`` is expected but not enforced for upstream
    data.
    """
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PricePoint":
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=float(data.get("volume", 0.0)),
        )


@dataclass
class ForexPair:
    """A currency pair in the forex market, e.g. EUR/USD."""
    symbol: str
    name: str
    description: str = ""
    is_favorite: bool = False

    @property
    def base(self) -> str:
        return self.symbol.split("/")[0]

    @property
    def quote(self) -> str:
        return self.symbol.split("/")[-1]

    def __str__(self) -> str:
        return f"{self.symbol} ({self.name})"


@dataclass(frozen=True)
class PriceQuote:
    """Immutable copy of the session state after one current-price request."""
    symbol: str
    price: Optional[float]
    change: Optional[float]
    change_percent: Optional[float]
    last_updated: Optional[datetime]
    error: Optional[str]
    is_synthetic: bool
    source: Optional[DataSource] = None

    @property
    def has_price(self) -> bool:
        return self.price is not None


@dataclass
class QuoteSession:
    """
    Observable state of the quote client, read by the presentation layer.

    Only the fetch operations mutate it.
    """
    symbol: Optional[str] = None
    current_price: Optional[float] = None
    price_change: Optional[float] = None
    price_change_percent: Optional[float] = None
    last_updated: Optional[datetime] = None
    error: Optional[str] = None
    is_synthetic: bool = False
    source: Optional[DataSource] = None

    def snapshot(self) -> PriceQuote:
        return PriceQuote(
            symbol=self.symbol or "",
            price=self.current_price,
            change=self.price_change,
            change_percent=self.price_change_percent,
            last_updated=self.last_updated,
            error=self.error,
            is_synthetic=self.is_synthetic,
            source=self.source,
        )
