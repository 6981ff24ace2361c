"""Catalog of tracked currency pairs and symbol helpers."""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from src.data_collection.models import ForexPair
from src.utils.errors import ValidationError


COMMON_PAIRS: Tuple[ForexPair, ...] = (
    ForexPair("EUR/USD", "Euro/US Dollar", "The most traded currency pair"),
    ForexPair("GBP/USD", "British Pound/US Dollar", "Known as 'Cable'"),
    ForexPair("USD/JPY", "US Dollar/Japanese Yen", "Known as 'Ninja'"),
    ForexPair("USD/CHF", "US Dollar/Swiss Franc", "Known as 'Swissy'"),
    ForexPair("AUD/USD", "Australian Dollar/US Dollar", "Known as 'Aussie'"),
    ForexPair("USD/CAD", "US Dollar/Canadian Dollar", "Known as 'Loonie'"),
    ForexPair("NZD/USD", "New Zealand Dollar/US Dollar", "Known as 'Kiwi'"),
    ForexPair("EUR/GBP", "Euro/British Pound", "Known as 'Chunnel'"),
    ForexPair("EUR/JPY", "Euro/Japanese Yen", "Popular cross pair"),
    ForexPair("GBP/JPY", "British Pound/Japanese Yen", "Known as 'Dragon'"),
)

COMMON_SYMBOLS: Tuple[str, ...] = tuple(p.symbol for p in COMMON_PAIRS)


def compact_symbol(symbol: str) -> str:
    """'EUR/USD' -> 'EURUSD' (the upstream API's form)."""
    return symbol.replace("/", "").strip().upper()


def split_symbol(symbol: str) -> Tuple[str, str]:
    """Split a pair symbol into its 3-letter base and quote currencies.

    Raises:
        ValidationError: when the symbol is not two distinct ISO-style codes
    """
    compact = compact_symbol(symbol or "")
    if len(compact) != 6 or not compact.isalpha():
        raise ValidationError(f"Invalid currency pair: {symbol!r}")
    base, quote = compact[:3], compact[3:]
    if base == quote:
        raise ValidationError("Base and quote currencies cannot be the same")
    return base, quote


def find_pair(symbol: str, pairs: Iterable[ForexPair] = COMMON_PAIRS) -> Optional[ForexPair]:
    target = compact_symbol(symbol)
    for pair in pairs:
        if compact_symbol(pair.symbol) == target:
            return pair
    return None


def search_pairs(text: str, pairs: Iterable[ForexPair] = COMMON_PAIRS) -> List[ForexPair]:
    """Case-insensitive match on symbol or name; blank text returns everything."""
    needle = (text or "").strip().lower()
    if not needle:
        return list(pairs)
    return [
        p for p in pairs
        if needle in p.symbol.lower()
        or needle in compact_symbol(p.symbol).lower()
        or needle in p.name.lower()
    ]
