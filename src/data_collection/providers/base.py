"""Provider base class for the upstream quote API."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict


class QuoteProvider(ABC):
    """Abstract quote provider: current rate and compact daily series.

    Implementations return the decoded JSON object untouched; interpreting
    advisory and error fields is left to the caller. They raise
    ``TransportError``, ``ServerError`` or ``ResponseDecodeError`` for failures
    below the payload level.
    """

    NAME: str = "base"

    @abstractmethod
    async def get_exchange_rate(self, base: str, quote: str) -> Dict[str, Any]:
        """Fetch the real-time exchange rate payload for base/quote."""

    @abstractmethod
    async def get_daily_series(self, base: str, quote: str) -> Dict[str, Any]:
        """Fetch the compact daily OHLC payload for base/quote."""
