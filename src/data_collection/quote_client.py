"""
Quote client: cached current rates and daily history with graceful degradation.

Every request resolves to one of: a fresh cache hit, a single upstream call,
a stale cache entry, or synthetic placeholder data. Nothing is retried.
"""
from __future__ import annotations

import random
import threading
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Set, Tuple

from src.cache import CacheEntry, TimedCache, utcnow
from src.data_collection.models import DataSource, PricePoint, PriceQuote, QuoteSession
from src.data_collection.pairs import COMMON_SYMBOLS, split_symbol
from src.data_collection.providers import get_provider
from src.data_collection.providers.alpha_vantage import (
    classify_payload,
    parse_daily_series,
    parse_exchange_rate,
)
from src.data_collection.providers.base import QuoteProvider
from src.data_collection.snapshot_store import SnapshotStore
from src.data_collection.synthetic import synthesize_price, synthesize_series
from src.utils.errors import (
    RateLimitError,
    ResponseDecodeError,
    ServerError,
    StorageError,
    TransportError,
    UpstreamError,
    UpstreamNoteError,
    ValidationError,
)
from src.utils.logging import get_logger


logger = get_logger(__name__)

CURRENT_PRICE_TTL = 300  # 5 minutes
HISTORICAL_TTL = 3600  # 1 hour

CACHED_DATA_NOTICE = "Using cached data (API rate limit reached)"
GENERATED_DATA_NOTICE = "Using generated data (API rate limit reached)"

Series = Tuple[PricePoint, ...]


class QuoteClient:
    """
    Fetches current prices and daily series for currency pairs.

    One instance is shared by every pair in the process. The caches and the
    session state are guarded by locks so concurrent tasks and threads see
    consistent values; in-flight requests are not de-duplicated.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        store: Optional[SnapshotStore] = None,
        current_price_ttl: float = CURRENT_PRICE_TTL,
        historical_ttl: float = HISTORICAL_TTL,
        tracked_symbols: Iterable[str] = COMMON_SYMBOLS,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._provider = provider
        self._store = store
        self._rng = rng or random.Random()
        self._price_cache: TimedCache[float] = TimedCache(current_price_ttl, clock)
        self._series_cache: TimedCache[Series] = TimedCache(historical_ttl, clock)
        self._synthetic_prices: Set[str] = set()
        self._synthetic_series: Set[str] = set()
        self._snapshot_prices: Set[str] = set()
        self._session = QuoteSession()
        self._session_lock = threading.Lock()
        self._load_snapshots(tracked_symbols)

    @classmethod
    def from_config(
        cls,
        cfg,
        provider: Optional[QuoteProvider] = None,
        store: Optional[SnapshotStore] = None,
    ) -> "QuoteClient":
        """Build a client from ``Config`` (``api.provider`` + SQLite snapshot)."""
        return cls(
            provider=provider or get_provider(cfg.get("api.provider", "alpha_vantage"), cfg),
            store=store if store is not None else SnapshotStore(),
            current_price_ttl=cfg.current_price_ttl,
            historical_ttl=cfg.historical_ttl,
        )

    # Observable state ------------------------------------------------

    @property
    def session(self) -> QuoteSession:
        """Copy of the session state."""
        with self._session_lock:
            return replace(self._session)

    @property
    def current_price(self) -> Optional[float]:
        return self.session.current_price

    @property
    def price_change(self) -> Optional[float]:
        return self.session.price_change

    @property
    def price_change_percent(self) -> Optional[float]:
        return self.session.price_change_percent

    @property
    def last_updated(self) -> Optional[datetime]:
        return self.session.last_updated

    @property
    def error(self) -> Optional[str]:
        return self.session.error

    @property
    def is_synthetic(self) -> bool:
        return self.session.is_synthetic

    def cached_price(self, symbol: str) -> Optional[CacheEntry[float]]:
        return self._price_cache.get(symbol)

    def cached_series(self, symbol: str) -> Optional[CacheEntry[Series]]:
        return self._series_cache.get(symbol)

    # Current price ---------------------------------------------------

    async def get_current_price(self, symbol: str) -> PriceQuote:
        """
        Refresh the session with the current price of ``symbol``.

        Upstream problems never raise: they are recorded in ``error`` and the
        returned quote, keeping the previously displayed price.
        """
        cached = self._price_cache.get_fresh(symbol)
        if cached is not None:
            logger.debug(f"Using cached current price for {symbol}", extra={"symbol": symbol})
            return self._apply(
                symbol,
                current_price=cached.value,
                last_updated=cached.fetched_at,
                error=None,
                is_synthetic=symbol in self._synthetic_prices,
                source=self._price_source(symbol),
            )

        try:
            base, quote = split_symbol(symbol)
        except ValidationError as e:
            return self._record_error(symbol, str(e))

        previous = self._price_cache.get(symbol)
        try:
            payload = await self._provider.get_exchange_rate(base, quote)
            classify_payload(payload)
            price = parse_exchange_rate(payload)
        except TransportError as e:
            return self._record_error(symbol, f"Network error: {e}")
        except ServerError as e:
            return self._record_error(symbol, f"Server error: {e.status_code}")
        except (ResponseDecodeError, ValidationError) as e:
            return self._record_error(symbol, str(e))
        except RateLimitError as e:
            return self._serve_rate_limited_price(symbol, str(e))
        except UpstreamNoteError as e:
            return self._record_error(symbol, f"API Note: {e}")
        except UpstreamError as e:
            return self._record_error(symbol, f"API Error: {e}")

        change = change_percent = None
        if previous is not None and previous.value:
            change = price - previous.value
            change_percent = change / previous.value * 100

        logger.info(f"Fetched current price for {symbol}: {price}", extra={"symbol": symbol})
        entry = self._store_price(symbol, price, synthetic=False)
        return self._apply(
            symbol,
            current_price=price,
            price_change=change,
            price_change_percent=change_percent,
            last_updated=entry.fetched_at,
            error=None,
            is_synthetic=False,
            source=DataSource.ALPHA_VANTAGE,
        )

    def _serve_rate_limited_price(self, symbol: str, note: str) -> PriceQuote:
        logger.warning(f"API note for {symbol}: {note}", extra={"symbol": symbol})
        stale = self._price_cache.get(symbol)
        if stale is not None:
            logger.info(f"Using expired cached price for {symbol} due to rate limit")
            return self._apply(
                symbol,
                current_price=stale.value,
                last_updated=stale.fetched_at,
                error=CACHED_DATA_NOTICE,
                is_synthetic=symbol in self._synthetic_prices,
                source=self._price_source(symbol),
            )

        price = synthesize_price(self._base_price(symbol), self._rng)
        logger.info(f"Generated placeholder price for {symbol}: {price}")
        entry = self._store_price(symbol, price, synthetic=True)
        return self._apply(
            symbol,
            current_price=price,
            last_updated=entry.fetched_at,
            error=GENERATED_DATA_NOTICE,
            is_synthetic=True,
            source=DataSource.SYNTHETIC,
        )

    def _store_price(self, symbol: str, price: float, synthetic: bool) -> CacheEntry[float]:
        entry = self._price_cache.set(symbol, price)
        self._snapshot_prices.discard(symbol)
        if synthetic:
            self._synthetic_prices.add(symbol)
        else:
            self._synthetic_prices.discard(symbol)
        if self._store is not None:
            try:
                self._store.save_price(symbol, price)
            except StorageError as e:
                logger.warning(f"Could not persist price for {symbol}: {e}")
        return entry

    # Historical series -----------------------------------------------

    async def get_historical_series(self, symbol: str) -> List[PricePoint]:
        """
        Return daily bars for ``symbol``, oldest first.

        Throttling, transport and decoding failures resolve to a synthetic
        series. Raises:
            ValidationError: unusable symbol
            UpstreamError: the API answered with an explicit error message
        """
        cached = self._series_cache.get_fresh(symbol)
        if cached is not None:
            logger.debug(f"Returning cached data for {symbol}", extra={"symbol": symbol})
            self._set_synthetic(symbol in self._synthetic_series)
            return list(cached.value)

        base, quote = split_symbol(symbol)
        logger.info(f"Fetching historical data for {symbol}", extra={"symbol": symbol})

        try:
            payload = await self._provider.get_daily_series(base, quote)
            classify_payload(payload)
            points = parse_daily_series(payload)
        except RateLimitError as e:
            logger.warning(f"Rate limit reached for {symbol}, generating placeholder data: {e}")
            return self._generate_series(symbol)
        except UpstreamNoteError as e:
            logger.warning(f"API note for historical data of {symbol}: {e}")
            return self._generate_series(symbol)
        except UpstreamError as e:
            logger.error(f"API error for historical data of {symbol}: {e}")
            raise
        except Exception as e:
            logger.warning(
                f"Error fetching historical data for {symbol}, generating placeholder data: {e}",
                exc_info=True,
            )
            return self._generate_series(symbol)

        logger.info(f"Parsed {len(points)} historical data points for {symbol}")
        if not points:
            logger.warning(f"No data points were parsed successfully for {symbol}")
            return points

        self._store_series(symbol, points, synthetic=False)
        self._set_synthetic(False)
        return points

    def _generate_series(self, symbol: str) -> List[PricePoint]:
        points = synthesize_series(self._base_price(symbol), self._rng)
        self._store_series(symbol, points, synthetic=True)
        self._set_synthetic(True)
        return points

    def _store_series(self, symbol: str, points: List[PricePoint], synthetic: bool) -> None:
        self._series_cache.set(symbol, tuple(points))
        if synthetic:
            self._synthetic_series.add(symbol)
        else:
            self._synthetic_series.discard(symbol)
        if self._store is not None:
            try:
                self._store.save_series(symbol, points)
            except StorageError as e:
                logger.warning(f"Could not persist series for {symbol}: {e}")

    # Shared ------------------------------------------------------------

    def _base_price(self, symbol: str) -> float:
        entry = self._price_cache.get(symbol)
        return entry.value if entry is not None else 1.0

    def _price_source(self, symbol: str) -> DataSource:
        return DataSource.SNAPSHOT if symbol in self._snapshot_prices else DataSource.CACHE

    def _load_snapshots(self, symbols: Iterable[str]) -> None:
        if self._store is None:
            return
        for symbol in symbols:
            points = self._store.load_series(symbol)
            if points:
                self._series_cache.set(symbol, tuple(points))

            price = self._store.load_price(symbol)
            if price is not None and price > 0:
                self._price_cache.set(symbol, price)
                self._snapshot_prices.add(symbol)
        logger.debug(
            f"Loaded snapshots: {len(self._series_cache)} series, {len(self._price_cache)} prices"
        )

    def _apply(self, symbol: str, **changes) -> PriceQuote:
        """Point the session at ``symbol`` and apply ``changes`` atomically."""
        with self._session_lock:
            session = self._session
            if session.symbol != symbol:
                session.symbol = symbol
                session.price_change = None
                session.price_change_percent = None
            for name, value in changes.items():
                setattr(session, name, value)
            return session.snapshot()

    def _record_error(self, symbol: str, message: str) -> PriceQuote:
        """
        Set ``error`` without touching the displayed price.

        Errors for a symbol other than the session's are only returned, so the
        session never pairs one symbol's price with another's error.
        """
        logger.warning(f"Current price for {symbol} unavailable: {message}", extra={"symbol": symbol})
        with self._session_lock:
            if self._session.symbol in (None, symbol):
                self._session.symbol = symbol
                self._session.error = message
                return self._session.snapshot()
        return PriceQuote(
            symbol=symbol,
            price=None,
            change=None,
            change_percent=None,
            last_updated=None,
            error=message,
            is_synthetic=False,
        )

    def _set_synthetic(self, value: bool) -> None:
        with self._session_lock:
            self._session.is_synthetic = value
