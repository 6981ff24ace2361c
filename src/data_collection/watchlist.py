"""User watchlist of currency pairs."""
from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from src.data_collection.models import ForexPair, PriceQuote
from src.data_collection.pairs import COMMON_PAIRS, compact_symbol, search_pairs
from src.data_collection.quote_client import QuoteClient
from src.utils.logging import get_logger


logger = get_logger(__name__)


class Watchlist:
    """Ordered list of pairs; starts with the common pairs."""

    def __init__(self, pairs: Optional[Iterable[ForexPair]] = None):
        source = COMMON_PAIRS if pairs is None else pairs
        # copies, so favorites never leak into the shared catalog
        self._pairs: List[ForexPair] = [replace(p) for p in source]

    @property
    def pairs(self) -> List[ForexPair]:
        return list(self._pairs)

    @property
    def symbols(self) -> List[str]:
        return [p.symbol for p in self._pairs]

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, symbol: str) -> bool:
        return self._index(symbol) is not None

    def add(self, pair: ForexPair) -> bool:
        """Append ``pair``; returns False if it is already listed."""
        if pair.symbol in self:
            return False
        self._pairs.append(replace(pair))
        return True

    def remove(self, symbol: str) -> bool:
        index = self._index(symbol)
        if index is None:
            return False
        del self._pairs[index]
        return True

    def toggle_favorite(self, symbol: str) -> bool:
        """Flip the favorite flag and return its new value."""
        index = self._index(symbol)
        if index is None:
            raise KeyError(symbol)
        pair = self._pairs[index]
        pair.is_favorite = not pair.is_favorite
        return pair.is_favorite

    def favorites(self) -> List[ForexPair]:
        return [p for p in self._pairs if p.is_favorite]

    def search(self, text: str) -> List[ForexPair]:
        return search_pairs(text, self._pairs)

    async def refresh(self, client: QuoteClient) -> Dict[str, PriceQuote]:
        """Fetch current prices for every listed pair concurrently."""
        symbols = self.symbols
        quotes = await asyncio.gather(*(client.get_current_price(s) for s in symbols))
        failed = sum(1 for q in quotes if not q.has_price)
        if failed:
            logger.warning(f"Watchlist refresh: {failed}/{len(symbols)} pairs without a price")
        return dict(zip(symbols, quotes))

    def _index(self, symbol: str) -> Optional[int]:
        target = compact_symbol(symbol)
        for i, pair in enumerate(self._pairs):
            if compact_symbol(pair.symbol) == target:
                return i
        return None
